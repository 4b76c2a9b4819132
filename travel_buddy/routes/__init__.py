from travel_buddy.routes.ai import get_ai_client_state
from travel_buddy.routes.ai import router as ai_router

__all__ = [
    "ai_router",
    "get_ai_client_state",
]
