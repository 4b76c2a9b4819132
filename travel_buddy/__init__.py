from travel_buddy.main import app

__all__ = ["app"]
