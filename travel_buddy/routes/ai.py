from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import ORJSONResponse

from travel_buddy.clients.ai_client import AiClient
from travel_buddy.clients.credentials import ExternalBridgeSource, ManualStorageSource
from travel_buddy.configs.settings import GENERATION_ERROR_MESSAGE
from travel_buddy.errors import AiError
from travel_buddy.schemas.ai.itinerary import ItineraryResponse, TravelInputs, TravelStyle
from travel_buddy.schemas.ai.settings import (
    ApiKeyStatus,
    ApiKeyUpdate,
    ConnectionTestResponse,
    TravelStylesResponse,
)
from travel_buddy.services.itinerary import generate_itinerary
from travel_buddy.utils.helpers import file_logger, host

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/ai", tags=["ai"])


def get_ai_client_state(request: Request) -> AiClient:
    return request.app.state.ai_client


AiDep = Annotated[AiClient, Depends(get_ai_client_state)]


def get_key_store(ai_client: AiDep) -> ManualStorageSource:
    """Return the key store the AI client's resolver reads from."""
    store = ai_client.resolver.source(ManualStorageSource)
    return store if isinstance(store, ManualStorageSource) else ManualStorageSource()


KeyStoreDep = Annotated[ManualStorageSource, Depends(get_key_store)]


def key_status(ai_client: AiClient, key_store: ManualStorageSource) -> ApiKeyStatus:
    bridge = ai_client.resolver.source(ExternalBridgeSource)
    return ApiKeyStatus(
        has_manual_key=key_store.has_key,
        bridge_key_selected=isinstance(bridge, ExternalBridgeSource) and bridge.key_selected,
    )


@router.post(
    "/itinerary",
    summary="Generate an itinerary",
    response_model=ItineraryResponse,
    response_class=ORJSONResponse,
)
async def itinerary(
    request: Request,
    inputs: TravelInputs,
    ai_client: AiDep,
) -> ORJSONResponse:
    """
    Generate a grounded multi-day itinerary.

    Any failure is reported with a single localized message; the request is
    not retried.
    """
    try:
        result = await generate_itinerary(inputs, ai_client)
    except AiError as e:
        logger.warning(f"Itinerary generation failed for ip {host(request)}: {e.detail}")
        raise AiError(detail=GENERATION_ERROR_MESSAGE, status_code=e.status_code) from e

    return ORJSONResponse(result.model_dump(mode="json", by_alias=True))


@router.get(
    "/styles",
    summary="List travel styles",
    response_model=TravelStylesResponse,
    response_class=ORJSONResponse,
)
async def styles() -> ORJSONResponse:
    """List the travel style labels accepted by the itinerary endpoint."""
    response = TravelStylesResponse(styles=[style.value for style in TravelStyle])
    return ORJSONResponse(response.model_dump(by_alias=True))


@router.get(
    "/settings/key",
    summary="API key status",
    response_model=ApiKeyStatus,
    response_class=ORJSONResponse,
)
async def get_api_key_status(ai_client: AiDep, key_store: KeyStoreDep) -> ORJSONResponse:
    """Report which credential sources hold a key. The key itself is never returned."""
    return ORJSONResponse(key_status(ai_client, key_store).model_dump(by_alias=True))


@router.put(
    "/settings/key",
    summary="Save a manual API key",
    response_model=ApiKeyStatus,
    response_class=ORJSONResponse,
)
async def save_api_key(
    request: Request,
    update: ApiKeyUpdate,
    ai_client: AiDep,
    key_store: KeyStoreDep,
) -> ORJSONResponse:
    """Save a manually entered key; an empty key removes the saved one."""
    key_store.save_key(update.api_key)
    logger.info(f"Manual API key updated from ip {host(request)}")
    return ORJSONResponse(key_status(ai_client, key_store).model_dump(by_alias=True))


@router.delete(
    "/settings/key",
    summary="Remove the manual API key",
    response_model=ApiKeyStatus,
    response_class=ORJSONResponse,
)
async def delete_api_key(ai_client: AiDep, key_store: KeyStoreDep) -> ORJSONResponse:
    key_store.clear_key()
    return ORJSONResponse(key_status(ai_client, key_store).model_dump(by_alias=True))


@router.post(
    "/connection-test",
    summary="Test the Gemini connection",
    response_model=ConnectionTestResponse,
    response_class=ORJSONResponse,
)
async def connection_test(ai_client: AiDep) -> ORJSONResponse:
    """Send a tiny prompt to Gemini and report whether it answered."""
    connected = await ai_client.test_connection()
    return ORJSONResponse(ConnectionTestResponse(connected=connected).model_dump())
