"""Points, levels, badges, missions and leaderboard bookkeeping."""

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple


@dataclass
class Badge:
    id: int
    name: str
    threshold: Optional[int] = None  # points needed; None = mission reward only
    icon: Optional[str] = None


@dataclass
class Mission:
    id: int
    title: str
    target_value: int = 1
    reward_points: int = 0
    reward_badge_id: Optional[int] = None
    period: Optional[str] = None  # daily / weekly
    description: Optional[str] = None


@dataclass
class MissionProgress:
    progress: int = 0
    completed: bool = False


@dataclass
class UserPoints:
    user_id: str
    points: int = 0
    level: int = 1
    display_name: Optional[str] = None


@dataclass
class LeaderboardEntry:
    rank: int
    user_id: str
    points: int
    level: int
    display_name: Optional[str] = None


class GamificationLedger:
    """In-memory store of user points, badges and mission progress."""

    def __init__(
        self,
        badges: Optional[List[Badge]] = None,
        missions: Optional[List[Mission]] = None,
        points_per_level: int = 100
    ):
        """
        Initialize ledger.

        Args:
            badges: Badge definitions
            missions: Mission definitions
            points_per_level: Points needed to gain one level
        """
        if points_per_level <= 0:
            raise ValueError(f"points_per_level must be positive: {points_per_level}")

        self.badges: Dict[int, Badge] = {b.id: b for b in badges or []}
        self.missions: Dict[int, Mission] = {m.id: m for m in missions or []}
        self.points_per_level = points_per_level
        self.users: Dict[str, UserPoints] = {}
        self.user_badges: Dict[str, Set[int]] = {}
        self.mission_progress: Dict[Tuple[str, int], MissionProgress] = {}

    def level_for(self, points: int) -> int:
        return points // self.points_per_level + 1

    def get_user(self, user_id: str) -> UserPoints:
        """Get (or create) the points record of a user."""
        if user_id not in self.users:
            self.users[user_id] = UserPoints(user_id=user_id)
        return self.users[user_id]

    def add_points(self, user_id: str, delta: int) -> UserPoints:
        """
        Add points to a user and recompute their level.

        Points never drop below zero.

        Returns:
            The updated UserPoints record
        """
        user = self.get_user(user_id)
        user.points = max(user.points + delta, 0)
        user.level = self.level_for(user.points)
        return user

    def owned_badges(self, user_id: str) -> Set[int]:
        return self.user_badges.setdefault(user_id, set())

    def check_badges(self, user_id: str) -> List[Badge]:
        """
        Award every threshold badge the user now qualifies for.

        Returns:
            Badges newly awarded by this call
        """
        points = self.get_user(user_id).points
        owned = self.owned_badges(user_id)

        to_give = [
            badge for badge in self.badges.values()
            if badge.threshold is not None
            and points >= badge.threshold
            and badge.id not in owned
        ]
        owned.update(b.id for b in to_give)
        return to_give

    def update_mission_progress(
        self,
        user_id: str,
        mission_id: int,
        step: int = 1
    ) -> MissionProgress:
        """
        Advance a mission and pay its rewards when it completes.

        Progress is capped at the mission target. Rewards are paid once,
        on the call that completes the mission.

        Raises:
            KeyError: If the mission is unknown
        """
        mission = self.missions[mission_id]
        key = (user_id, mission_id)
        state = self.mission_progress.setdefault(key, MissionProgress())

        if state.completed:
            return state

        state.progress = min(state.progress + step, mission.target_value)
        if state.progress >= mission.target_value:
            state.completed = True

            if mission.reward_points:
                self.add_points(user_id, mission.reward_points)
            if mission.reward_badge_id is not None:
                self.owned_badges(user_id).add(mission.reward_badge_id)

        return state

    def set_display_name(self, user_id: str, name: str):
        self.get_user(user_id).display_name = name

    def leaderboard(self, limit: int = 50) -> List[LeaderboardEntry]:
        """
        Users ranked by points, highest first.

        Ties share order of first registration (stable sort), ranks are
        consecutive.
        """
        ranked = sorted(self.users.values(), key=lambda u: u.points, reverse=True)
        return [
            LeaderboardEntry(
                rank=index,
                user_id=user.user_id,
                points=user.points,
                level=user.level,
                display_name=user.display_name,
            )
            for index, user in enumerate(ranked[:limit], start=1)
        ]

    def rank_of(self, user_id: str) -> Optional[int]:
        """Rank of a user over all users, or None if unknown."""
        if user_id not in self.users:
            return None
        for entry in self.leaderboard(limit=len(self.users)):
            if entry.user_id == user_id:
                return entry.rank
        return None

    def save(self, path: str):
        """
        Write user points, owned badges and mission progress to a JSON file.

        Badge and mission definitions are not stored; they come from the
        ledger that loads the file.
        """
        data = {
            "users": [asdict(user) for user in self.users.values()],
            "badges": {
                user_id: sorted(owned)
                for user_id, owned in self.user_badges.items()
            },
            "missions": [
                {
                    "user_id": user_id,
                    "mission_id": mission_id,
                    "progress": state.progress,
                    "completed": state.completed,
                }
                for (user_id, mission_id), state in self.mission_progress.items()
            ],
        }

        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def load(self, path: str):
        """
        Restore state written by save(), replacing the current users.

        Levels are recomputed with this ledger's points_per_level.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a saved ledger
        """
        with open(path, encoding="utf-8") as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in ledger file: {e}")

        if not isinstance(data, dict):
            raise ValueError(f"Ledger file must contain a JSON object: {path}")

        try:
            users = [UserPoints(**record) for record in data.get("users", [])]
            badges = {
                str(user_id): set(int(b) for b in owned)
                for user_id, owned in data.get("badges", {}).items()
            }
            progress = {
                (str(m["user_id"]), int(m["mission_id"])): MissionProgress(
                    progress=int(m["progress"]),
                    completed=bool(m["completed"]),
                )
                for m in data.get("missions", [])
            }
        except (TypeError, KeyError) as e:
            raise ValueError(f"Malformed ledger file {path}: {e}")

        for user in users:
            user.level = self.level_for(user.points)
        self.users = {user.user_id: user for user in users}
        self.user_badges = badges
        self.mission_progress = progress
