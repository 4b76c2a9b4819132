# travel_buddy/schemas/ai/itinerary.py

"""
Schemas for AI-powered itinerary generation requests and responses.

The pydantic models describe the itinerary contract on the Python side and
validate whatever Gemini returns. ``itinerary_response_schema`` describes the
same contract to Gemini as a structured output schema; both must list the
same fields under the same camelCase wire names.
"""

from enum import StrEnum
from math import isfinite
from re import sub

from google.genai.types import GenerateContentConfig, Schema, Type
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from travel_buddy.configs.settings import (
    MAX_DESTINATION_LENGTH,
    MAX_TRIP_DAYS,
    MIN_TRIP_DAYS,
)

# Relative tolerance when comparing the cost total against its parts
COST_TOTAL_TOLERANCE = 0.01


class CamelModel(BaseModel):
    """Base model serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TravelStyle(StrEnum):
    """Travel style labels offered to the traveler."""

    HEALING = "힐링/휴양"
    SIGHTSEEING = "관광/명소"
    GOURMET = "미식/맛집"
    SHOPPING = "쇼핑/도시"
    ACTIVITY = "액티비티/운동"


class ActivityTime(StrEnum):
    """Part of the day an activity is scheduled for."""

    MORNING = "오전"
    AFTERNOON = "오후"
    EVENING = "저녁"


# --- Request Models ---


class TravelInputs(CamelModel):
    """
    Traveler supplied inputs for itinerary generation.

    Validation Rules:
        - Destination: non-empty after trimming, at most 100 characters
        - Days: 1-14 inclusive
        - Style: one of ``TravelStyle``

    Example:
        >>> TravelInputs(destination="제주도", days=3, style="힐링/휴양")
    """

    destination: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESTINATION_LENGTH,
        description="Where the traveler wants to go",
        examples=["제주도"],
    )
    days: int = Field(
        3,
        ge=MIN_TRIP_DAYS,
        le=MAX_TRIP_DAYS,
        description="The duration of the trip in days",
        examples=[3],
    )
    style: TravelStyle = Field(
        TravelStyle.HEALING,
        description="Preferred travel style",
        examples=[TravelStyle.HEALING],
    )

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        """Trim the destination and strip characters that could break the prompt."""
        sanitized = sub(r"[<>\"'`]", "", v.strip())
        if not sanitized:
            msg = "Destination cannot be empty"
            raise ValueError(msg)
        return sanitized


class GenerationRequest(BaseModel):
    """A fully built ``generate_content`` call, ready to send to Gemini."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: str = Field(..., description="Gemini model identifier")
    contents: str = Field(..., description="Prompt text")
    config: GenerateContentConfig = Field(..., description="Generation configuration")


# --- Response Models ---


class Activity(CamelModel):
    """A single scheduled stop within a day."""

    time: ActivityTime
    place: str
    description: str
    transport_info: str = Field(..., description="Transport mode and travel time")
    address: str = Field(..., description="Street address of the place")
    map_url: str = Field(..., description="Map link for the place")


class DayPlan(CamelModel):
    """Plan for one day of the trip."""

    day: int = Field(..., ge=1)
    theme: str
    activities: list[Activity] = Field(..., min_length=1)
    local_tip: str
    efficiency_note: str
    indoor_alternative: str = Field(..., description="Plan B for bad weather")


class EstimatedCosts(CamelModel):
    """Estimated trip budget broken down by category."""

    food: int = Field(..., ge=0)
    transport: int = Field(..., ge=0)
    activities: int = Field(..., ge=0)
    accommodation: int = Field(..., ge=0)
    total: int = Field(..., ge=0)
    currency: str

    @field_validator("food", "transport", "activities", "accommodation", "total", mode="before")
    @classmethod
    def round_amount(cls, v: object) -> object:
        """Money values are whole, non-negative units; fractional amounts are rounded."""
        if isinstance(v, bool):
            msg = "Amount must be a number, not a boolean"
            raise ValueError(msg)
        if isinstance(v, float):
            if not isfinite(v):
                msg = "Amount must be a finite number"
                raise ValueError(msg)
            if v < 0:
                msg = "Amount must not be negative"
                raise ValueError(msg)
            return round(v)
        return v

    @property
    def parts_sum(self) -> int:
        return self.food + self.transport + self.activities + self.accommodation

    @property
    def is_consistent(self) -> bool:
        """Whether ``total`` matches the sum of the categories within tolerance."""
        tolerance = max(1, self.parts_sum * COST_TOTAL_TOLERANCE)
        return abs(self.total - self.parts_sum) <= tolerance


class GroundingSource(CamelModel):
    """A web page Gemini consulted while grounding the answer."""

    title: str
    uri: str


class ItineraryResponse(CamelModel):
    """Validated itinerary handed to the presentation layer."""

    destination: str
    duration: str
    itinerary: list[DayPlan] = Field(..., min_length=1)
    estimated_costs: EstimatedCosts
    packing_items: list[str]
    real_time_highlights: str | None = Field(
        None,
        description="Current weather, news and festivals at the destination",
    )
    sources: list[GroundingSource] | None = Field(
        None,
        description="Web sources used for grounding, de-duplicated by uri",
    )


# --- Gemini structured output schema ---


def _string() -> Schema:
    return Schema(type=Type.STRING)


def _integer() -> Schema:
    return Schema(type=Type.INTEGER)


def activity_schema() -> Schema:
    return Schema(
        type=Type.OBJECT,
        properties={
            "time": Schema(type=Type.STRING, enum=[t.value for t in ActivityTime]),
            "place": _string(),
            "description": _string(),
            "transportInfo": _string(),
            "address": _string(),
            "mapUrl": _string(),
        },
        required=["time", "place", "description", "transportInfo", "address", "mapUrl"],
    )


def day_plan_schema() -> Schema:
    return Schema(
        type=Type.OBJECT,
        properties={
            "day": _integer(),
            "theme": _string(),
            "activities": Schema(type=Type.ARRAY, items=activity_schema(), min_items=1),
            "localTip": _string(),
            "efficiencyNote": _string(),
            "indoorAlternative": _string(),
        },
        required=["day", "theme", "activities", "localTip", "efficiencyNote", "indoorAlternative"],
    )


def estimated_costs_schema() -> Schema:
    return Schema(
        type=Type.OBJECT,
        properties={
            "food": _integer(),
            "transport": _integer(),
            "activities": _integer(),
            "accommodation": _integer(),
            "total": _integer(),
            "currency": _string(),
        },
        required=["food", "transport", "activities", "accommodation", "total", "currency"],
    )


def itinerary_response_schema(days: int, packing_items: int) -> Schema:
    """
    Build the structured output schema sent with every itinerary request.

    Args:
        days: Number of day plans the itinerary must contain.
        packing_items: Number of packing items the response must list.

    Returns:
        The Gemini ``Schema`` for ``ItineraryResponse`` without ``sources``.
    """
    return Schema(
        type=Type.OBJECT,
        properties={
            "destination": _string(),
            "duration": _string(),
            "packingItems": Schema(
                type=Type.ARRAY,
                items=_string(),
                min_items=packing_items,
                max_items=packing_items,
            ),
            "realTimeHighlights": _string(),
            "itinerary": Schema(
                type=Type.ARRAY,
                items=day_plan_schema(),
                min_items=days,
                max_items=days,
            ),
            "estimatedCosts": estimated_costs_schema(),
        },
        required=[
            "destination",
            "duration",
            "itinerary",
            "estimatedCosts",
            "packingItems",
            "realTimeHighlights",
        ],
    )
