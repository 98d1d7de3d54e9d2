"""Engagement layer: points, levels, badges, missions and leaderboard."""

from .ledger import (
    Badge,
    Mission,
    MissionProgress,
    UserPoints,
    LeaderboardEntry,
    GamificationLedger,
)

__all__ = [
    "Badge",
    "Mission",
    "MissionProgress",
    "UserPoints",
    "LeaderboardEntry",
    "GamificationLedger",
]
