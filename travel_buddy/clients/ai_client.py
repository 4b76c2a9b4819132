# travel_buddy/clients/ai_client.py

from logging import getLogger
from typing import NoReturn

from google.genai import Client
from google.genai.client import AsyncClient
from google.genai.errors import APIError
from google.genai.types import GenerateContentConfig, GenerateContentResponse
from httpx import TransportError

from travel_buddy.clients.credentials import CredentialResolver, default_resolver
from travel_buddy.configs.settings import (
    CONNECTION_TEST_MAX_TOKENS,
    CONNECTION_TEST_PROMPT,
    settings,
)
from travel_buddy.errors import (
    AiAuthenticationError,
    AiBackendError,
    AiError,
    AiNetworkError,
    AiQuotaExceededError,
)
from travel_buddy.schemas.ai.itinerary import GenerationRequest
from travel_buddy.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))

# Network-related exceptions that should be caught and converted
NETWORK_EXCEPTIONS = (
    TransportError,
    ConnectionError,
    OSError,
)

AUTH_STATUS_CODES = frozenset({401, 403})
QUOTA_STATUS_CODE = 429


class AiClient:
    """
    Async client for Google's Gemini API.

    A fresh ``google-genai`` client is opened for every call from a freshly
    resolved API key and closed right after, so a key saved or removed at
    runtime takes effect on the next call. Calls are never retried.

    Attributes:
        model: The Gemini model used for itinerary generation.
        test_model: The Gemini model used for the connection test.
    """

    def __init__(
        self,
        resolver: CredentialResolver | None = None,
        model: str | None = None,
        test_model: str | None = None,
    ) -> None:
        self._resolver = resolver or default_resolver()
        self._model = model or settings.GEMINI_MODEL
        self._test_model = test_model or settings.GEMINI_TEST_MODEL

        logger.info(f"AiClient initialized with model: {self._model}")

    @property
    def model(self) -> str:
        return self._model

    @property
    def test_model(self) -> str:
        return self._test_model

    @property
    def resolver(self) -> CredentialResolver:
        return self._resolver

    def _open(self) -> AsyncClient:
        api_key = self._resolver.resolve()
        # google-genai falls back to GOOGLE_API_KEY when given no key, which
        # would bypass the resolver; it refuses to start without one anyway.
        if not api_key:
            msg = "Authentication failed: no Gemini API key configured"
            raise AiAuthenticationError(detail=msg)
        try:
            return Client(api_key=api_key).aio
        except ValueError as e:
            logger.exception("Failed to initialize Gemini client, missing or invalid API key?")
            detail = f"Authentication failed: {e}"
            raise AiAuthenticationError(detail=detail) from e

    async def generate(self, request: GenerationRequest) -> GenerateContentResponse:
        """
        Send one ``generate_content`` call to Gemini.

        Args:
            request: The model, prompt and configuration to send.

        Returns:
            The raw Gemini response, text and grounding metadata untouched.

        Raises:
            AiAuthenticationError: If the key is missing or rejected.
            AiQuotaExceededError: If the quota is exhausted.
            AiNetworkError: If Gemini cannot be reached.
            AiBackendError: For any other backend failure.
        """
        client = self._open()
        try:
            return await client.models.generate_content(
                model=request.model,
                contents=request.contents,
                config=request.config,
            )
        except AiError:
            raise
        except NETWORK_EXCEPTIONS as e:
            error_msg = str(e)
            logger.exception(f"AI network error: {error_msg}")
            detail = f"AI service temporarily unavailable: {error_msg}"
            raise AiNetworkError(detail=detail) from e
        except Exception as e:
            self._handle_exception(e)
        finally:
            await self._close(client)

    async def test_connection(self) -> bool:
        """
        Check that Gemini answers with the configured key.

        Returns:
            True if a non-empty reply came back, False on any error.
        """
        request = GenerationRequest(
            model=self._test_model,
            contents=CONNECTION_TEST_PROMPT,
            config=GenerateContentConfig(max_output_tokens=CONNECTION_TEST_MAX_TOKENS),
        )
        try:
            response = await self.generate(request)
            connected = bool(response.text)
        except Exception:
            logger.exception("Connection test failed")
            return False

        logger.info(f"Connection test finished, connected: {connected}")
        return connected

    def _handle_exception(self, e: Exception) -> NoReturn:
        """Map backend exceptions to specific AiError."""
        error_msg = str(e)
        lowered = error_msg.lower()
        code = e.code if isinstance(e, APIError) else None
        logger.exception(f"AI Error: {error_msg}")

        if code in AUTH_STATUS_CODES or "unauthenticated" in lowered or "api key" in lowered:
            detail = f"Authentication failed: {error_msg}"
            raise AiAuthenticationError(detail=detail) from e
        if code == QUOTA_STATUS_CODE or "quota" in lowered or "resource_exhausted" in lowered:
            detail = f"Quota exceeded: {error_msg}"
            raise AiQuotaExceededError(detail=detail) from e
        if "connection" in lowered:
            detail = f"Network error: {error_msg}"
            raise AiNetworkError(detail=detail) from e
        detail = f"AI backend error: {error_msg}"
        raise AiBackendError(detail=detail) from e

    async def _close(self, client: AsyncClient) -> None:
        try:
            await client.aclose()
        except Exception:
            logger.exception("Failed to close AI client")
