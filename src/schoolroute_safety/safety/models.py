"""Data models for route safety scoring."""

from dataclasses import dataclass, field
from enum import Enum
from math import isfinite
from typing import Any, Dict, List, Optional, Tuple


class RoadType(str, Enum):
    """Road class of a segment. Unknown roads are represented by None."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    RESIDENTIAL = "residential"
    FOOTWAY = "footway"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["RoadType"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class RestrictionType(str, Enum):
    ROAD_CLOSURE = "roadClosure"
    LANE_RESTRICTION = "laneRestriction"
    SPEED_RESTRICTION = "speedRestriction"
    CONSTRUCTION_WORK = "constructionWork"
    TEMPORARY_EVENT = "temporaryEvent"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "RestrictionType":
        """Restrictions without a type are treated as temporary events."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.TEMPORARY_EVENT
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class ReportType(str, Enum):
    TRAFFIC = "traffic"
    CRIME = "crime"
    INFRASTRUCTURE = "infrastructure"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ReportType":
        """Reports without a type count as 'other'."""
        if isinstance(value, cls):
            return value
        if not value:
            return cls.OTHER
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Severity":
        """Anything that is not exactly high or medium is low."""
        if isinstance(value, cls):
            return value
        if value == "high":
            return cls.HIGH
        if value == "medium":
            return cls.MEDIUM
        return cls.LOW


class InfrastructureType(str, Enum):
    TRAFFIC_LIGHT = "trafficLight"
    CROSSWALK = "crosswalk"
    GUARDRAIL = "guardrail"
    SIDEWALK = "sidewalk"
    SCHOOL_ZONE = "schoolZone"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "InfrastructureType":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class TimeOfDay(str, Enum):
    MORNING = "morning"      # 7:00-9:00
    NOON = "noon"            # 11:00-13:00
    AFTERNOON = "afternoon"  # 14:00-16:00
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TimeOfDay":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.MORNING
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    @property
    def is_commute(self) -> bool:
        """True for the school commute windows (to school and home)."""
        return self in (TimeOfDay.MORNING, TimeOfDay.AFTERNOON)


class DangerLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass
class Restriction:
    """A traffic regulation event affecting a segment."""

    type: RestrictionType

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Restriction":
        return cls(type=RestrictionType.parse(data.get("type")))


@dataclass
class SegmentReport:
    """A user hazard report as seen by the scorer."""

    type: ReportType
    severity: Severity

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SegmentReport":
        return cls(
            type=ReportType.parse(data.get("type")),
            severity=Severity.parse(data.get("severity")),
        )


@dataclass
class Infrastructure:
    """A physical safety feature present on a segment."""

    type: InfrastructureType

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Infrastructure":
        return cls(type=InfrastructureType.parse(data.get("type")))


def _position(segment_id: str, position) -> Tuple[float, float]:
    """(lon, lat) of a GeoJSON position; a third (altitude) value is dropped."""
    if len(position) < 2:
        raise ValueError(
            f"Segment {segment_id}: position needs longitude and latitude, got {position}"
        )
    return float(position[0]), float(position[1])


def _traffic_volume(segment_id: str, volume) -> Optional[float]:
    if volume is None:
        return None
    volume = float(volume)
    if not isfinite(volume):
        raise ValueError(
            f"Segment {segment_id}: traffic volume must be a finite number, got {volume}"
        )
    return volume


@dataclass
class RouteSegment:
    """A contiguous portion of a walking route, the unit of scoring."""

    id: str
    coordinates: List[Tuple[float, float]]  # [(lon, lat), ...]
    road_type: Optional[RoadType] = None
    traffic_volume: Optional[float] = None  # vehicles per unit time
    restrictions: List[Restriction] = field(default_factory=list)
    danger_reports: List[SegmentReport] = field(default_factory=list)
    infrastructures: List[Infrastructure] = field(default_factory=list)

    def __repr__(self) -> str:
        road = self.road_type.value if self.road_type else "unknown"
        return (
            f"RouteSegment(id={self.id}, road={road}, "
            f"volume={self.traffic_volume}, reports={len(self.danger_reports)})"
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouteSegment":
        """
        Build a segment from the camelCase shape used by the data collaborators.

        Unknown enum strings are mapped to their documented defaults rather
        than rejected.

        Args:
            data: Dict with id, coordinates and optional roadType,
                trafficVolume, restrictions, dangerReports, infrastructures

        Returns:
            RouteSegment instance

        Raises:
            ValueError: If the id is missing, a position has fewer than two
                values or the traffic volume is not a finite number
        """
        if data.get("id") in (None, ""):
            raise ValueError(f"Route segment without id: {data}")

        segment_id = str(data["id"])
        return cls(
            id=segment_id,
            coordinates=[
                _position(segment_id, p) for p in data.get("coordinates") or []
            ],
            road_type=RoadType.parse(data.get("roadType")),
            traffic_volume=_traffic_volume(segment_id, data.get("trafficVolume")),
            restrictions=[
                Restriction.from_dict(r) for r in data.get("restrictions") or []
            ],
            danger_reports=[
                SegmentReport.from_dict(r) for r in data.get("dangerReports") or []
            ],
            infrastructures=[
                Infrastructure.from_dict(i)
                for i in data.get("infrastructures") or []
            ],
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "coordinates": [list(c) for c in self.coordinates],
            "restrictions": [{"type": r.type.value} for r in self.restrictions],
            "dangerReports": [
                {"type": r.type.value, "severity": r.severity.value}
                for r in self.danger_reports
            ],
            "infrastructures": [{"type": i.type.value} for i in self.infrastructures],
        }
        if self.road_type is not None:
            data["roadType"] = self.road_type.value
        if self.traffic_volume is not None:
            data["trafficVolume"] = self.traffic_volume
        return data

    def length_km(self) -> float:
        """Calculate approximate length of the segment in kilometers."""
        from ..core.utils import calculate_route_length

        if len(self.coordinates) < 2:
            return 0.0
        return calculate_route_length(self.coordinates)


@dataclass
class SegmentFactors:
    """The four sub-scores behind a segment score, each in [0, 100]."""

    traffic_volume: int
    restrictions: int
    user_reports: int
    infrastructure: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "trafficVolume": self.traffic_volume,
            "restrictions": self.restrictions,
            "userReports": self.user_reports,
            "infrastructure": self.infrastructure,
        }


@dataclass
class SegmentScore:
    segment_id: str
    score: int
    factors: SegmentFactors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "segmentId": self.segment_id,
            "score": self.score,
            "factors": self.factors.to_dict(),
        }


@dataclass
class SafetyScore:
    """Result of scoring a whole route."""

    overall_score: int
    danger_level: DangerLevel
    segment_scores: List[SegmentScore]
    recommendations: List[str]

    def __repr__(self) -> str:
        return (
            f"SafetyScore(overall={self.overall_score}, "
            f"level={self.danger_level.value}, "
            f"segments={len(self.segment_scores)})"
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "dangerLevel": self.danger_level.value,
            "segmentScores": [s.to_dict() for s in self.segment_scores],
            "recommendations": list(self.recommendations),
        }
