"""Open traffic data (xROAD) integration."""

from .client import (
    XRoadClient,
    XRoadAPIError,
    describe_error,
    format_date_time,
    time_code,
    bbox_around,
)

__all__ = [
    "XRoadClient",
    "XRoadAPIError",
    "describe_error",
    "format_date_time",
    "time_code",
    "bbox_around",
]
