from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response model for the health check endpoint."""

    version: str = Field(..., description="API version")
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Server time of the check")
    services: dict[str, str] = Field(..., description="Status of dependent services")


__all__ = ["HealthCheckResponse"]
