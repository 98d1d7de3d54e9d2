"""School-route safety toolkit - score commute routes and track reported hazards."""

__version__ = "0.1.0"

# Expose main classes for programmatic use
from .core import Config
from .safety import (
    RouteSegment,
    SafetyScore,
    ScoringCriteria,
    RouteSafetyScorer,
    InvalidInputError,
    calculate_route_safety_score,
)
from .reports import DangerReport, HazardQuiz
from .xroad import XRoadClient, XRoadAPIError
from .gamification import GamificationLedger

__all__ = [
    "__version__",
    "Config",
    "RouteSegment",
    "SafetyScore",
    "ScoringCriteria",
    "RouteSafetyScorer",
    "InvalidInputError",
    "calculate_route_safety_score",
    "DangerReport",
    "HazardQuiz",
    "XRoadClient",
    "XRoadAPIError",
    "GamificationLedger",
]
