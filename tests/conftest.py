# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os
from tempfile import mkdtemp

# Must happen before travel_buddy is imported anywhere
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "test"
os.environ["USER_KEY_STORE"] = os.path.join(mkdtemp(prefix="travel_buddy_"), "storage.json")
os.environ.pop("GEMINI_API_KEY", None)
os.environ.pop("API_KEY", None)

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai.types import (
    Candidate,
    Content,
    GenerateContentResponse,
    GroundingChunk,
    GroundingChunkWeb,
    GroundingMetadata,
    Part,
)
from pytest_mock.plugin import MockerFixture

from travel_buddy.clients.credentials import ManualStorageSource

PayloadFactory = Callable[..., dict[str, Any]]


def _activity(time: str, place: str) -> dict[str, str]:
    return {
        "time": time,
        "place": place,
        "description": f"{place} 방문",
        "transportInfo": "버스 30분",
        "address": "제주특별자치도 제주시 첨단로 1",
        "mapUrl": f"https://map.naver.com/p/search/{place}",
    }


def _day(day: int) -> dict[str, Any]:
    return {
        "day": day,
        "theme": f"{day}일차 힐링 코스",
        "activities": [
            _activity("오전", "사려니숲길"),
            _activity("오후", "협재해수욕장"),
            _activity("저녁", "동문시장"),
        ],
        "localTip": "오전에는 관광객이 적습니다.",
        "efficiencyNote": "동선을 서쪽에서 동쪽으로 잡으세요.",
        "indoorAlternative": "비가 오면 제주도립미술관을 방문하세요.",
    }


@pytest.fixture
def payload_factory() -> PayloadFactory:
    """Build schema-valid itinerary payloads."""

    def factory(days: int = 3, destination: str = "제주도", **overrides: Any) -> dict[str, Any]:
        payload = {
            "destination": destination,
            "duration": f"{days - 1}박 {days}일" if days > 1 else "당일치기",
            "itinerary": [_day(day) for day in range(1, days + 1)],
            "estimatedCosts": {
                "food": 150000,
                "transport": 80000,
                "activities": 50000,
                "accommodation": 240000,
                "total": 520000,
                "currency": "KRW",
            },
            "packingItems": ["우산", "선크림", "편한 운동화"],
            "realTimeHighlights": "현재 기온 18도, 맑음. 유채꽃 축제가 진행 중입니다.",
        }
        payload.update(overrides)
        return payload

    return factory


@pytest.fixture
def itinerary_payload(payload_factory: PayloadFactory) -> dict[str, Any]:
    return payload_factory()


@pytest.fixture
def web_chunk() -> Callable[..., GroundingChunk]:
    """Build a grounding chunk pointing at a web page."""

    def factory(uri: str, title: str | None = None) -> GroundingChunk:
        return GroundingChunk(web=GroundingChunkWeb(uri=uri, title=title))

    return factory


@pytest.fixture
def make_response() -> Callable[..., GenerateContentResponse]:
    """Build a Gemini response carrying text and optional grounding chunks."""

    def factory(
        text: str | None,
        chunks: list[GroundingChunk] | None = None,
    ) -> GenerateContentResponse:
        parts = [Part(text=text)] if text is not None else []
        metadata = GroundingMetadata(grounding_chunks=chunks) if chunks is not None else None
        return GenerateContentResponse(
            candidates=[
                Candidate(
                    content=Content(role="model", parts=parts),
                    grounding_metadata=metadata,
                ),
            ],
        )

    return factory


@pytest.fixture
def key_store(tmp_path: Path) -> ManualStorageSource:
    return ManualStorageSource(tmp_path / "storage.json")


@pytest.fixture
def mock_genai(mocker: MockerFixture) -> MagicMock:
    """Patch the google-genai Client; returns the mocked ``Client`` class."""
    mock_client = mocker.patch("travel_buddy.clients.ai_client.Client")
    mock_client.return_value.aio = AsyncMock()
    return mock_client
