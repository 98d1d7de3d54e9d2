"""Core utilities for the school-route safety toolkit."""

from .utils import (
    round_half_up,
    clamp,
    haversine_distance,
    load_gpx_route,
    calculate_route_length,
)
from .config import Config

__all__ = [
    "round_half_up",
    "clamp",
    "haversine_distance",
    "load_gpx_route",
    "calculate_route_length",
    "Config",
]
