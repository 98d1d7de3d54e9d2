"""Route safety scoring for school commute routes."""

from .models import (
    RoadType,
    RestrictionType,
    ReportType,
    Severity,
    InfrastructureType,
    TimeOfDay,
    DangerLevel,
    Restriction,
    SegmentReport,
    Infrastructure,
    RouteSegment,
    SegmentFactors,
    SegmentScore,
    SafetyScore,
)
from .criteria import ScoringCriteria
from .scorer import InvalidInputError, RouteSafetyScorer, calculate_route_safety_score
from .segments import load_segments, split_route

__all__ = [
    "RoadType",
    "RestrictionType",
    "ReportType",
    "Severity",
    "InfrastructureType",
    "TimeOfDay",
    "DangerLevel",
    "Restriction",
    "SegmentReport",
    "Infrastructure",
    "RouteSegment",
    "SegmentFactors",
    "SegmentScore",
    "SafetyScore",
    "ScoringCriteria",
    "InvalidInputError",
    "RouteSafetyScorer",
    "calculate_route_safety_score",
    "load_segments",
    "split_route",
]
