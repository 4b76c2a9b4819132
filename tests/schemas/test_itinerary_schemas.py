# tests/schemas/test_itinerary_schemas.py
"""Tests for travel_buddy/schemas/ai/itinerary.py module."""

from typing import Any

import pytest
from google.genai.types import Type
from pydantic import BaseModel, ValidationError

from travel_buddy.schemas.ai.itinerary import (
    Activity,
    ActivityTime,
    DayPlan,
    EstimatedCosts,
    ItineraryResponse,
    TravelInputs,
    TravelStyle,
    activity_schema,
    day_plan_schema,
    estimated_costs_schema,
    itinerary_response_schema,
)


def aliases(model: type[BaseModel], *, required_only: bool = False) -> set[str]:
    return {
        field.alias or name
        for name, field in model.model_fields.items()
        if field.is_required() or not required_only
    }


class TestTravelInputs:
    """Tests for traveler input validation."""

    def test_defaults(self) -> None:
        inputs = TravelInputs(destination="제주도")
        assert inputs.days == 3
        assert inputs.style is TravelStyle.HEALING

    @pytest.mark.parametrize("days", [1, 14])
    def test_day_bounds_accepted(self, days: int) -> None:
        assert TravelInputs(destination="도쿄", days=days).days == days

    @pytest.mark.parametrize("days", [0, 15, -1])
    def test_day_bounds_rejected(self, days: int) -> None:
        with pytest.raises(ValidationError):
            TravelInputs(destination="도쿄", days=days)

    @pytest.mark.parametrize("destination", ["", "   "])
    def test_empty_destination_rejected(self, destination: str) -> None:
        with pytest.raises(ValidationError):
            TravelInputs(destination=destination)

    def test_destination_trimmed_and_sanitized(self) -> None:
        inputs = TravelInputs(destination='  <파리> "여행"  ')
        assert inputs.destination == "파리 여행"

    def test_unknown_style_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TravelInputs(destination="파리", style="우주여행")

    def test_style_accepts_label(self) -> None:
        inputs = TravelInputs(destination="파리", style="미식/맛집")
        assert inputs.style is TravelStyle.GOURMET


class TestResponseModels:
    """Tests for the itinerary response models."""

    def test_camel_case_round_trip(self, itinerary_payload: dict[str, Any]) -> None:
        result = ItineraryResponse.model_validate(itinerary_payload)

        first = result.itinerary[0].activities[0]
        assert first.time is ActivityTime.MORNING
        assert first.transport_info == "버스 30분"
        assert first.map_url.startswith("https://map.naver.com/")

        dumped = result.model_dump(by_alias=True, exclude={"sources"})
        assert dumped == {**itinerary_payload}

    def test_activity_requires_every_field(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            Activity.model_validate({"time": "오전", "place": "성산일출봉"})

        missing = {err["loc"][0] for err in exc_info.value.errors()}
        assert missing == {"description", "transportInfo", "address", "mapUrl"}

    def test_activity_time_is_enumerated(self, itinerary_payload: dict[str, Any]) -> None:
        activity = {**itinerary_payload["itinerary"][0]["activities"][0], "time": "새벽"}
        with pytest.raises(ValidationError):
            Activity.model_validate(activity)

    def test_day_plan_requires_activities(self, itinerary_payload: dict[str, Any]) -> None:
        day = {**itinerary_payload["itinerary"][0], "activities": []}
        with pytest.raises(ValidationError):
            DayPlan.model_validate(day)

    def test_costs_round_fractional_amounts(self) -> None:
        costs = EstimatedCosts.model_validate(
            {
                "food": 1000.0,
                "transport": 499.6,
                "activities": 0,
                "accommodation": 2000,
                "total": 3500,
                "currency": "KRW",
            },
        )
        assert costs.food == 1000
        assert costs.transport == 500
        assert costs.parts_sum == 3500
        assert costs.is_consistent

    def test_costs_inconsistent_total(self) -> None:
        costs = EstimatedCosts(
            food=100000,
            transport=100000,
            activities=100000,
            accommodation=100000,
            total=900000,
            currency="KRW",
        )
        assert not costs.is_consistent

    def test_costs_reject_negative_amounts(self) -> None:
        with pytest.raises(ValidationError):
            EstimatedCosts(
                food=-1,
                transport=0,
                activities=0,
                accommodation=0,
                total=0,
                currency="KRW",
            )

    @pytest.mark.parametrize("amount", [-0.4, True, float("inf"), float("nan")])
    def test_costs_reject_non_amounts(self, amount: object) -> None:
        with pytest.raises(ValidationError):
            EstimatedCosts.model_validate(
                {
                    "food": amount,
                    "transport": 0,
                    "activities": 0,
                    "accommodation": 0,
                    "total": 0,
                    "currency": "KRW",
                },
            )

    def test_optional_fields_default_to_none(self, itinerary_payload: dict[str, Any]) -> None:
        itinerary_payload.pop("realTimeHighlights")
        result = ItineraryResponse.model_validate(itinerary_payload)
        assert result.real_time_highlights is None
        assert result.sources is None


class TestGeminiSchema:
    """The Gemini output schema must describe the same contract as the models."""

    def test_activity_schema_requires_all_fields(self) -> None:
        schema = activity_schema()
        assert set(schema.required) == aliases(Activity)
        assert set(schema.properties) == aliases(Activity)

    def test_activity_time_enum(self) -> None:
        time = activity_schema().properties["time"]
        assert time.type == Type.STRING
        assert time.enum == ["오전", "오후", "저녁"]

    def test_day_plan_schema_matches_model(self) -> None:
        schema = day_plan_schema()
        assert set(schema.required) == aliases(DayPlan)
        assert schema.properties["activities"].items.required == activity_schema().required

    def test_costs_schema_matches_model(self) -> None:
        schema = estimated_costs_schema()
        assert set(schema.required) == aliases(EstimatedCosts)

    def test_response_schema_matches_model(self) -> None:
        schema = itinerary_response_schema(days=4, packing_items=3)

        assert set(schema.properties) == aliases(ItineraryResponse) - {"sources"}
        assert set(schema.required) == set(schema.properties)
        assert schema.properties["itinerary"].min_items == 4
        assert schema.properties["itinerary"].max_items == 4
        assert schema.properties["packingItems"].min_items == 3
        assert schema.properties["packingItems"].max_items == 3
