"""Configuration management for the school-route safety toolkit."""

import configparser
from pathlib import Path
from typing import Dict, Optional


class Config:
    """Parse and manage service settings (traffic API, quiz, gamification)."""

    # Default traffic API settings (JARTIC open traffic geoserver)
    DEFAULT_XROAD = {
        "base_url": "https://api.jartic-open-traffic.org/geoserver",
        "timeout": 30,
    }

    # Default hazard quiz settings
    DEFAULT_QUIZ = {
        "buffer_meters": 50,
        "points_per_correct": 10,
    }

    # Default gamification settings
    DEFAULT_GAMIFICATION = {
        "points_per_level": 100,
    }

    # Default segmentation of GPX routes
    DEFAULT_SEGMENTS = {
        "segment_length_m": 200,
    }

    INT_KEYS = {
        "timeout", "buffer_meters", "points_per_correct",
        "points_per_level", "segment_length_m",
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to an INI file. If None, uses defaults.
        """
        self.xroad = self.DEFAULT_XROAD.copy()
        self.quiz = self.DEFAULT_QUIZ.copy()
        self.gamification = self.DEFAULT_GAMIFICATION.copy()
        self.segments = self.DEFAULT_SEGMENTS.copy()

        if config_file:
            self._load_config(config_file)

    def _load_config(self, config_file: str):
        """Load configuration from INI file."""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_file}")

        parser = configparser.ConfigParser()
        parser.read(config_path, encoding="utf-8")

        sections = {
            "xroad": self.xroad,
            "quiz": self.quiz,
            "gamification": self.gamification,
            "segments": self.segments,
        }
        for name, target in sections.items():
            if name not in parser:
                continue
            for key, value in parser[name].items():
                if key in self.INT_KEYS:
                    try:
                        target[key] = int(value)
                    except ValueError:
                        raise ValueError(
                            f"Invalid integer for [{name}] {key}: {value}"
                        )
                else:
                    target[key] = value.strip()

    def get_xroad_settings(self) -> Dict:
        """Get traffic API client settings."""
        return self.xroad

    def get_quiz_buffer(self) -> int:
        """Get the hazard quiz buffer distance in meters."""
        return self.quiz["buffer_meters"]

    def get_points_per_correct(self) -> int:
        return self.quiz["points_per_correct"]

    def get_points_per_level(self) -> int:
        return self.gamification["points_per_level"]

    def get_segment_length(self) -> int:
        """Get the segment length used when splitting GPX routes."""
        return self.segments["segment_length_m"]
