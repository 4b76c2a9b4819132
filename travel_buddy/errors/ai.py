from collections.abc import Awaitable, Callable
from logging import getLogger

from fastapi.responses import ORJSONResponse
from starlette.requests import Request
from starlette.status import (
    HTTP_401_UNAUTHORIZED,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_429_TOO_MANY_REQUESTS,
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from travel_buddy.errors.base import BaseAppError, create_exception_handler
from travel_buddy.utils.helpers import file_logger

logger = file_logger(getLogger(__name__))


class AiError(BaseAppError):
    """Base exception for AI client errors."""

    def __init__(
        self,
        detail: str = "AI client error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail=detail, status_code=status_code)


# --- Backend (transport / service) errors ---


class AiBackendError(AiError):
    """The Gemini backend could not be reached or rejected the call."""

    def __init__(
        self,
        detail: str = "AI backend unavailable",
        status_code: int = HTTP_503_SERVICE_UNAVAILABLE,
    ) -> None:
        super().__init__(detail, status_code)


class AiAuthenticationError(AiBackendError):
    """Authentication failed."""

    def __init__(self, detail: str = "AI authentication failed") -> None:
        super().__init__(detail, HTTP_401_UNAUTHORIZED)


class AiQuotaExceededError(AiBackendError):
    """Quota exceeded."""

    def __init__(self, detail: str = "AI quota exceeded") -> None:
        super().__init__(detail, HTTP_429_TOO_MANY_REQUESTS)


class AiNetworkError(AiBackendError):
    """Network connectivity issues."""

    def __init__(self, detail: str = "AI network error") -> None:
        super().__init__(detail, HTTP_503_SERVICE_UNAVAILABLE)


# --- Itinerary contract errors ---


class ItineraryContractError(AiError):
    """Raised when a request or response breaks the itinerary contract."""

    def __init__(
        self,
        detail: str = "AI itinerary generation failed",
        status_code: int = HTTP_502_BAD_GATEWAY,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidTravelInputError(ItineraryContractError):
    """Destination is empty or the day count is out of range."""

    def __init__(self, detail: str = "Invalid travel input") -> None:
        super().__init__(detail, HTTP_422_UNPROCESSABLE_CONTENT)


class EmptyResponseError(ItineraryContractError):
    """The backend returned no text."""

    def __init__(self, detail: str = "Empty response from Gemini API") -> None:
        super().__init__(detail)


class MalformedResponseError(ItineraryContractError):
    """
    The backend text does not satisfy the itinerary schema.

    Attributes:
        errors: Field level problems found while validating the payload.
    """

    def __init__(
        self,
        detail: str = "Invalid AI response",
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(detail)
        self.errors = errors or []


ai_exception_handler: Callable[[Request, Exception], Awaitable[ORJSONResponse]] = (
    create_exception_handler(logger)
)
