"""Safety scoring criteria configuration management."""

from pathlib import Path
from typing import Dict, Optional
import yaml

from .models import (
    DangerLevel,
    InfrastructureType,
    ReportType,
    RestrictionType,
    RoadType,
    Severity,
    TimeOfDay,
)


class ScoringCriteria:
    """Parse and manage route safety scoring constants."""

    # Default criteria (used if no config file provided)
    DEFAULT_WEIGHTS = {
        'traffic_volume': 0.4,
        'restrictions': 0.2,
        'user_reports': 0.3,
        'infrastructure': 0.1,
    }

    DEFAULT_DANGER_THRESHOLDS = {
        'high': 70,
        'medium': 40,
    }

    DEFAULT_TIME_FACTORS = {
        'morning': 1.2,
        'noon': 0.8,
        'afternoon': 1.1,
    }

    DEFAULT_ROAD_TYPE_FACTORS = {
        'primary': 1.5,
        'secondary': 1.2,
        'residential': 0.8,
        'footway': 0.3,
    }

    # Used when a segment carries no traffic volume
    DEFAULT_TRAFFIC_BASELINES = {
        'primary': 75,
        'secondary': 60,
        'residential': 30,
        'other': 20,
    }

    DEFAULT_TRAFFIC = {
        'volume_divisor': 20,
        'volume_cap': 100,
    }

    DEFAULT_RESTRICTION_DANGER = {
        'roadClosure': 100,
        'constructionWork': 80,
        'laneRestriction': 70,
        'temporaryEvent': 60,
        'speedRestriction': 50,
        'unknown': 50,
    }

    DEFAULT_REPORT_TYPE_DANGER = {
        'crime': 90,
        'traffic': 80,
        'infrastructure': 70,
        'other': 50,
        'unknown': 50,
    }

    DEFAULT_SEVERITY_MULTIPLIERS = {
        'high': 1.5,
        'medium': 1.0,
        'low': 0.7,
    }

    DEFAULT_INFRASTRUCTURE = {
        'no_data_score': 50,
        'base_score': 70,
    }

    DEFAULT_INFRASTRUCTURE_CREDITS = {
        'trafficLight': 30,
        'crosswalk': 20,
        'sidewalk': 25,
        'guardrail': 15,
        'schoolZone': 35,
        'unknown': 0,
    }

    DEFAULT_RECOMMENDATIONS = {
        'high_traffic_factor': 70,
        'poor_infrastructure_factor': 60,
    }

    # YAML sections, each overriding the attribute of the same name
    SECTIONS = (
        'weights',
        'danger_thresholds',
        'time_factors',
        'road_type_factors',
        'traffic_baselines',
        'traffic',
        'restriction_danger',
        'report_type_danger',
        'severity_multipliers',
        'infrastructure',
        'infrastructure_credits',
        'recommendations',
    )

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize scoring criteria.

        Args:
            config_file: Path to YAML config file. If None, uses defaults.
        """
        self.weights = self.DEFAULT_WEIGHTS.copy()
        self.danger_thresholds = self.DEFAULT_DANGER_THRESHOLDS.copy()
        self.time_factors = self.DEFAULT_TIME_FACTORS.copy()
        self.road_type_factors = self.DEFAULT_ROAD_TYPE_FACTORS.copy()
        self.traffic_baselines = self.DEFAULT_TRAFFIC_BASELINES.copy()
        self.traffic = self.DEFAULT_TRAFFIC.copy()
        self.restriction_danger = self.DEFAULT_RESTRICTION_DANGER.copy()
        self.report_type_danger = self.DEFAULT_REPORT_TYPE_DANGER.copy()
        self.severity_multipliers = self.DEFAULT_SEVERITY_MULTIPLIERS.copy()
        self.infrastructure = self.DEFAULT_INFRASTRUCTURE.copy()
        self.infrastructure_credits = self.DEFAULT_INFRASTRUCTURE_CREDITS.copy()
        self.recommendations = self.DEFAULT_RECOMMENDATIONS.copy()

        if config_file:
            self._load_config(config_file)

    @classmethod
    def from_yaml(cls, yaml_path: Optional[str]) -> 'ScoringCriteria':
        """
        Load criteria from YAML file, falling back to defaults.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            ScoringCriteria instance
        """
        if not yaml_path:
            return cls()

        yaml_file = Path(yaml_path)

        if not yaml_file.exists():
            print(f"⚠️  Criteria file not found: {yaml_path}")
            print(f"   Using default scoring criteria")
            return cls()

        try:
            return cls(config_file=yaml_path)
        except (ValueError, TypeError) as e:
            print(f"⚠️  Error loading criteria file: {e}")
            print(f"   Using default scoring criteria")
            return cls()

    def _load_config(self, config_file: str):
        """Load configuration from YAML file."""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        try:
            with open(config_path, encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")

        if not isinstance(config, dict):
            raise ValueError("Criteria file must contain a mapping at top level")

        for section in self.SECTIONS:
            if section not in config:
                continue
            values = config[section]
            if not isinstance(values, dict):
                raise ValueError(f"Section '{section}' must be a mapping")
            getattr(self, section).update(values)

    def get_weight(self, factor: str) -> float:
        """Get aggregation weight for a sub-score."""
        return self.weights.get(factor, 0.0)

    def get_time_factor(self, time_of_day: TimeOfDay) -> float:
        """Get traffic multiplier for a time of day (1.0 if unknown)."""
        return self.time_factors.get(time_of_day.value, 1.0)

    def get_road_type_factor(self, road_type: Optional[RoadType]) -> Optional[float]:
        """Get traffic multiplier for a road type, or None when not applicable."""
        if road_type is None:
            return None
        return self.road_type_factors.get(road_type.value)

    def get_traffic_baseline(self, road_type: Optional[RoadType]) -> float:
        """Get the fallback traffic score for segments without a volume."""
        if road_type is not None and road_type.value in self.traffic_baselines:
            return self.traffic_baselines[road_type.value]
        return self.traffic_baselines.get('other', 20)

    def get_restriction_danger(self, restriction_type: RestrictionType) -> float:
        return self.restriction_danger.get(
            restriction_type.value,
            self.restriction_danger.get('unknown', 50)
        )

    def get_report_danger(self, report_type: ReportType) -> float:
        return self.report_type_danger.get(
            report_type.value,
            self.report_type_danger.get('unknown', 50)
        )

    def get_severity_multiplier(self, severity: Severity) -> float:
        return self.severity_multipliers.get(severity.value, 1.0)

    def get_infrastructure_credit(self, infra_type: InfrastructureType) -> float:
        """Get the score reduction for one piece of safety infrastructure."""
        return self.infrastructure_credits.get(infra_type.value, 0)

    def get_danger_level(self, score: float) -> DangerLevel:
        """Classify an overall score into a danger tier."""
        if score >= self.danger_thresholds['high']:
            return DangerLevel.HIGH
        elif score >= self.danger_thresholds['medium']:
            return DangerLevel.MEDIUM
        return DangerLevel.LOW
