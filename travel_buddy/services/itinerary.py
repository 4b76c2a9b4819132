# travel_buddy/services/itinerary.py

"""
Itinerary request/response contract.

``build_request`` turns traveler inputs into a grounded, schema-constrained
Gemini call; ``parse_response`` turns whatever Gemini sent back into a
validated ``ItineraryResponse``. ``generate_itinerary`` runs both around a
single backend call. Nothing here retries or keeps state between calls.
"""

from collections.abc import Sequence
from logging import getLogger
from re import compile as re_compile
from time import perf_counter

from google.genai.types import (
    GenerateContentConfig,
    GenerateContentResponse,
    GoogleSearch,
    GroundingChunk,
    Tool,
)
from pydantic import ValidationError

from travel_buddy.clients.ai_client import AiClient
from travel_buddy.configs.settings import (
    DEFAULT_SOURCE_TITLE,
    MAX_TRIP_DAYS,
    MIN_TRIP_DAYS,
    PACKING_ITEMS_COUNT,
    settings,
)
from travel_buddy.errors import EmptyResponseError, InvalidTravelInputError, MalformedResponseError
from travel_buddy.schemas.ai.itinerary import (
    GenerationRequest,
    GroundingSource,
    ItineraryResponse,
    TravelInputs,
    itinerary_response_schema,
)
from travel_buddy.utils.helpers import file_logger, time_taken

logger = file_logger(getLogger(__name__))

SYSTEM_INSTRUCTION = "당신은 지능형 여행 일정 생성기 '트래블 버디'입니다."

FENCE_OPEN = re_compile(r"^```[\w-]*\s*")
FENCE_CLOSE = re_compile(r"\s*```$")


def prompt(inputs: TravelInputs) -> str:
    """
    Create the itinerary prompt.

    Args:
        inputs: The traveler's destination, trip length and style.

    Returns:
        A formatted prompt string for the AI model.
    """
    language = settings.OUTPUT_LANGUAGE
    currency = settings.OUTPUT_CURRENCY

    return f"""다음 목적지와 조건에 맞는 완벽한 여행 계획을 JSON 형식으로 작성해 주세요.
반드시 구글 검색 도구를 사용하여 해당 지역의 현재 날씨와 최신 축제 정보를 확인하세요.

- 목적지: {inputs.destination}
- 기간: {inputs.days}일
- 선호 스타일: {inputs.style}

[필수 데이터 요구사항]
1. realTimeHighlights: 현재 기온, 날씨 상태, 오늘 기준 진행 중인 축제나 이벤트를 반드시 포함하세요.
2. itinerary: 정확히 {inputs.days}일치 일정을 작성하고 day 값은 1부터 {inputs.days}까지 순서대로 매기세요.
3. activities: 각 장소의 정확한 '도로명 주소'(address)와 '{settings.MAP_SERVICE} URL'(mapUrl)을 검색해서 넣으세요.
4. packingItems: 현재 현지 날씨에 꼭 필요한 아이템 {PACKING_ITEMS_COUNT}가지를 선정하세요.
5. 모든 비용은 {currency} 기준 정수로 작성하고, total은 food, transport, activities, accommodation의 합계여야 합니다.
6. 응답은 반드시 {language}로 작성되어야 합니다."""


def build_request(inputs: TravelInputs, model: str | None = None) -> GenerationRequest:
    """
    Build the Gemini call for an itinerary.

    Args:
        inputs: The traveler's destination, trip length and style.
        model: Gemini model to use, defaults to ``settings.GEMINI_MODEL``.

    Returns:
        The request with prompt, Google Search tool and output schema.

    Raises:
        InvalidTravelInputError: If the destination is empty or the day
            count is outside 1-14.
    """
    if not inputs.destination or not inputs.destination.strip():
        msg = "Destination cannot be empty"
        raise InvalidTravelInputError(detail=msg)
    if not MIN_TRIP_DAYS <= inputs.days <= MAX_TRIP_DAYS:
        msg = f"Trip length must be between {MIN_TRIP_DAYS} and {MAX_TRIP_DAYS} days"
        raise InvalidTravelInputError(detail=msg)

    config = GenerateContentConfig(
        system_instruction=SYSTEM_INSTRUCTION,
        tools=[Tool(google_search=GoogleSearch())],
        response_mime_type="application/json",
        response_schema=itinerary_response_schema(inputs.days, PACKING_ITEMS_COUNT),
    )
    return GenerationRequest(
        model=model or settings.GEMINI_MODEL,
        contents=prompt(inputs),
        config=config,
    )


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```) if present."""
    text = FENCE_OPEN.sub("", text.strip(), count=1)
    return FENCE_CLOSE.sub("", text, count=1).strip()


def grounding_chunks(response: GenerateContentResponse) -> list[GroundingChunk] | None:
    """Return the grounding chunks of the first candidate, if any."""
    if not response.candidates:
        return None
    metadata = response.candidates[0].grounding_metadata
    if metadata is None:
        return None
    return metadata.grounding_chunks


def extract_sources(chunks: Sequence[GroundingChunk] | None) -> list[GroundingSource] | None:
    """
    Turn grounding chunks into sources, one per distinct uri.

    Chunks without a web reference are skipped. The first chunk seen for a
    uri decides its title, and sources keep first-seen order.

    Args:
        chunks: Grounding chunks from the Gemini response.

    Returns:
        The de-duplicated sources, or None when there were no chunks at all.
    """
    if chunks is None:
        return None

    sources: dict[str, GroundingSource] = {}
    for chunk in chunks:
        web = chunk.web
        if web is None or not web.uri or web.uri in sources:
            continue
        sources[web.uri] = GroundingSource(title=web.title or DEFAULT_SOURCE_TITLE, uri=web.uri)
    return list(sources.values())


def contract_violations(result: ItineraryResponse, expected_days: int | None = None) -> list[str]:
    """
    List the ways a parsed itinerary breaks the itinerary contract.

    Args:
        result: The parsed itinerary.
        expected_days: Requested trip length, if known.

    Returns:
        Human readable problems; empty when the itinerary is sound.
    """
    problems = []
    days = [plan.day for plan in result.itinerary]
    if days != list(range(1, len(days) + 1)):
        problems.append(f"itinerary: day values must run 1..{len(days)} in order, got {days}")
    if expected_days is not None and len(days) != expected_days:
        problems.append(f"itinerary: expected {expected_days} days, got {len(days)}")
    if len(result.packing_items) != PACKING_ITEMS_COUNT:
        problems.append(
            f"packingItems: expected {PACKING_ITEMS_COUNT} items, got {len(result.packing_items)}",
        )
    return problems


def parse_response(
    raw: str | None,
    chunks: Sequence[GroundingChunk] | None = None,
    expected_days: int | None = None,
) -> ItineraryResponse:
    """
    Validate Gemini's itinerary text and attach grounding sources.

    Args:
        raw: The response text, optionally wrapped in a code fence.
        chunks: Grounding chunks from the same response.
        expected_days: Requested trip length, checked when given.

    Returns:
        The validated itinerary.

    Raises:
        EmptyResponseError: If there is no text.
        MalformedResponseError: If the text is not valid JSON, misses a
            required field or breaks the itinerary contract.
    """
    if raw is None or not raw.strip():
        raise EmptyResponseError

    try:
        result = ItineraryResponse.model_validate_json(strip_code_fence(raw))
    except ValidationError as e:
        errors = [f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()]
        detail = (
            "AI response is not valid JSON"
            if any(err["type"] == "json_invalid" for err in e.errors())
            else "AI response does not match the itinerary schema"
        )
        logger.warning(f"{detail}: {errors}")
        raise MalformedResponseError(detail=detail, errors=errors) from e

    if problems := contract_violations(result, expected_days):
        if settings.STRICT_CONTRACT_VALIDATION:
            logger.warning(f"AI response breaks the itinerary contract: {problems}")
            raise MalformedResponseError(
                detail="AI response breaks the itinerary contract",
                errors=problems,
            )
        logger.warning(f"Accepting itinerary with contract problems: {problems}")

    costs = result.estimated_costs
    if not costs.is_consistent:
        logger.warning(f"Cost total {costs.total} does not match the sum of parts {costs.parts_sum}")

    result.sources = extract_sources(chunks)
    return result


async def generate_itinerary(inputs: TravelInputs, ai_client: AiClient) -> ItineraryResponse:
    """
    Generate an itinerary with a single Gemini call.

    Args:
        inputs: The traveler's destination, trip length and style.
        ai_client: The AI client to use for itinerary generation.

    Returns:
        The validated itinerary with its grounding sources.
    """
    request = build_request(inputs, model=ai_client.model)

    logger.info(f"Generating {inputs.days}-day '{inputs.style}' itinerary for {inputs.destination}")
    start_time = perf_counter()

    response = await ai_client.generate(request)
    result = parse_response(response.text, grounding_chunks(response), expected_days=inputs.days)

    logger.info(
        f"Itinerary for {inputs.destination} generated in {time_taken(start_time)} "
        f"with {len(result.sources or [])} sources",
    )
    return result
