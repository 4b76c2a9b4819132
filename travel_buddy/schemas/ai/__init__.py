# travel_buddy/schemas/ai/__init__.py

from travel_buddy.schemas.ai.itinerary import (
    Activity,
    ActivityTime,
    DayPlan,
    EstimatedCosts,
    GenerationRequest,
    GroundingSource,
    ItineraryResponse,
    TravelInputs,
    TravelStyle,
    itinerary_response_schema,
)
from travel_buddy.schemas.ai.settings import (
    ApiKeyStatus,
    ApiKeyUpdate,
    ConnectionTestResponse,
    TravelStylesResponse,
)

__all__ = [
    "Activity",
    "ActivityTime",
    "ApiKeyStatus",
    "ApiKeyUpdate",
    "ConnectionTestResponse",
    "DayPlan",
    "EstimatedCosts",
    "GenerationRequest",
    "GroundingSource",
    "ItineraryResponse",
    "TravelInputs",
    "TravelStyle",
    "TravelStylesResponse",
    "itinerary_response_schema",
]
