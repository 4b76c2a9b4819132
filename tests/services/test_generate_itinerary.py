# tests/services/test_generate_itinerary.py
"""Tests for the single-call itinerary generation flow."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest
from google.genai.types import GenerateContentResponse, GroundingChunk

from travel_buddy.clients.ai_client import AiClient
from travel_buddy.clients.credentials import CredentialResolver, EnvironmentSource
from travel_buddy.errors import AiNetworkError, EmptyResponseError, MalformedResponseError
from travel_buddy.schemas.ai.itinerary import TravelInputs
from travel_buddy.services.itinerary import generate_itinerary

ResponseFactory = Callable[..., GenerateContentResponse]


@pytest.fixture
def ai_client() -> AiClient:
    client = AiClient(resolver=CredentialResolver([EnvironmentSource()]), model="gemini-test")
    client.generate = AsyncMock()
    return client


@pytest.fixture
def jeju() -> TravelInputs:
    return TravelInputs(destination="제주도", days=3, style="힐링/휴양")


@pytest.mark.asyncio
async def test_generate_itinerary_success(
    ai_client: AiClient,
    jeju: TravelInputs,
    itinerary_payload: dict[str, Any],
    make_response: ResponseFactory,
    web_chunk: Callable[..., GroundingChunk],
) -> None:
    raw = f"```json\n{json.dumps(itinerary_payload, ensure_ascii=False)}\n```"
    chunks = [
        web_chunk("https://visitjeju.net", "비짓제주"),
        web_chunk("https://weather.example", "날씨"),
        web_chunk("https://visitjeju.net", "중복"),
    ]
    ai_client.generate.return_value = make_response(raw, chunks)

    result = await generate_itinerary(jeju, ai_client)

    assert [plan.day for plan in result.itinerary] == [1, 2, 3]
    assert [s.title for s in result.sources] == ["비짓제주", "날씨"]

    ai_client.generate.assert_awaited_once()
    request = ai_client.generate.await_args.args[0]
    assert request.model == "gemini-test"
    assert "제주도" in request.contents


@pytest.mark.asyncio
async def test_generate_itinerary_without_grounding(
    ai_client: AiClient,
    jeju: TravelInputs,
    itinerary_payload: dict[str, Any],
    make_response: ResponseFactory,
) -> None:
    ai_client.generate.return_value = make_response(json.dumps(itinerary_payload))

    result = await generate_itinerary(jeju, ai_client)

    assert result.sources is None


@pytest.mark.asyncio
async def test_generate_itinerary_empty_text(
    ai_client: AiClient,
    jeju: TravelInputs,
    make_response: ResponseFactory,
) -> None:
    ai_client.generate.return_value = make_response(None)

    with pytest.raises(EmptyResponseError):
        await generate_itinerary(jeju, ai_client)


@pytest.mark.asyncio
async def test_generate_itinerary_wrong_day_count(
    ai_client: AiClient,
    payload_factory: Callable[..., dict[str, Any]],
    make_response: ResponseFactory,
) -> None:
    ai_client.generate.return_value = make_response(json.dumps(payload_factory(days=2)))

    with pytest.raises(MalformedResponseError):
        await generate_itinerary(TravelInputs(destination="제주도", days=3), ai_client)


@pytest.mark.asyncio
async def test_generate_itinerary_backend_error_not_retried(
    ai_client: AiClient,
    jeju: TravelInputs,
) -> None:
    ai_client.generate.side_effect = AiNetworkError()

    with pytest.raises(AiNetworkError):
        await generate_itinerary(jeju, ai_client)

    ai_client.generate.assert_awaited_once()
