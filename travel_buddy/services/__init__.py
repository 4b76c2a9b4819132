from travel_buddy.services.itinerary import (
    build_request,
    extract_sources,
    generate_itinerary,
    parse_response,
    strip_code_fence,
)

__all__ = [
    "build_request",
    "extract_sources",
    "generate_itinerary",
    "parse_response",
    "strip_code_fence",
]
