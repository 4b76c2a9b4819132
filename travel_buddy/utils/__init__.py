"""Utility helper functions."""

from travel_buddy.utils.helpers import file_logger, host, redact_secrets, time_taken, today_str

__all__ = [
    "file_logger",
    "host",
    "redact_secrets",
    "time_taken",
    "today_str",
]
