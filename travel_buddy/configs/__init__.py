from travel_buddy.configs.settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
]
