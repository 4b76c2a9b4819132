from pydantic import Field

from travel_buddy.schemas.ai.itinerary import CamelModel


class ApiKeyUpdate(CamelModel):
    """Manually entered Gemini API key. An empty key clears the stored one."""

    api_key: str = Field(
        "",
        max_length=256,
        description="Gemini API key to keep in the local key store",
    )


class ApiKeyStatus(CamelModel):
    """Which credential sources currently hold a key."""

    has_manual_key: bool = Field(..., description="A key is saved in the local key store")
    bridge_key_selected: bool = Field(
        ...,
        description="The host bridge reports a selected key",
    )


class ConnectionTestResponse(CamelModel):
    connected: bool = Field(..., description="Gemini answered the connection test")


class TravelStylesResponse(CamelModel):
    styles: list[str] = Field(..., description="Available travel style labels")
