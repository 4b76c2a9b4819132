from travel_buddy.errors.ai import (
    AiAuthenticationError,
    AiBackendError,
    AiError,
    AiNetworkError,
    AiQuotaExceededError,
    EmptyResponseError,
    InvalidTravelInputError,
    ItineraryContractError,
    MalformedResponseError,
    ai_exception_handler,
)
from travel_buddy.errors.base import BaseAppError, create_exception_handler
from travel_buddy.errors.validation import validation_exception_handler

__all__ = [
    "AiAuthenticationError",
    "AiBackendError",
    "AiError",
    "AiNetworkError",
    "AiQuotaExceededError",
    "BaseAppError",
    "EmptyResponseError",
    "InvalidTravelInputError",
    "ItineraryContractError",
    "MalformedResponseError",
    "ai_exception_handler",
    "create_exception_handler",
    "validation_exception_handler",
]
