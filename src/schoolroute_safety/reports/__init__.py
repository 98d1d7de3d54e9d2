"""Hazard reports, route geofencing and the hazard quiz."""

from .models import (
    DangerReport,
    load_reports_csv,
    filter_reports,
    report_statistics,
)
from .geofence import route_buffer, hazards_near_route, attach_reports_to_segments
from .quiz import HazardQuiz

__all__ = [
    "DangerReport",
    "load_reports_csv",
    "filter_reports",
    "report_statistics",
    "route_buffer",
    "hazards_near_route",
    "attach_reports_to_segments",
    "HazardQuiz",
]
