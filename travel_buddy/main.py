# travel_buddy/main.py

"""Travel Buddy Backend - grounded travel itineraries generated with Gemini."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from travel_buddy.errors import AiError, ai_exception_handler, validation_exception_handler
from travel_buddy.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from travel_buddy.routes import ai_router
from travel_buddy.schemas import HealthCheckResponse
from travel_buddy.utils.helpers import today_str

app = FastAPI(
    title="Travel Buddy Backend",
    description="Real-time, search grounded travel itineraries",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.include_router(ai_router)

errors = [
    (AiError, ai_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    operation_id="health_check",
)
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint.

    Returns
    -------
    ORJSONResponse
        Version, status, server time and AI client / credential status.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "2025-01-01 10:00:00",
         "services": {"ai_client": "initialized", "api_key": "configured"}}
    """
    ai_client = getattr(request.app.state, "ai_client", None)
    services = {
        "ai_client": "initialized" if ai_client else "not_initialized",
        "api_key": "configured" if ai_client and ai_client.resolver.configured else "missing",
    }

    response = HealthCheckResponse(
        version=app.version,
        status="ok",
        timestamp=today_str(),
        services=services,
    )
    return ORJSONResponse(response.model_dump())
