"""Hazard quiz: guess the type of each hazard reported along a route."""

import random
from typing import List, Optional, Sequence, Tuple

from .geofence import hazards_near_route
from .models import DANGER_TYPES, DangerReport


class HazardQuiz:
    """Quiz over the hazard reports near a walking route."""

    CHOICES = DANGER_TYPES

    def __init__(
        self,
        route: Sequence[Tuple[float, float]],
        reports: Sequence[DangerReport],
        buffer_m: float = 50,
        points_per_correct: int = 10,
        seed: Optional[int] = None
    ):
        """
        Initialize quiz.

        Args:
            route: Walking route as (lon, lat) tuples
            reports: All known hazard reports
            buffer_m: Distance from the route within which hazards are asked
            points_per_correct: Points for each correct answer
            seed: Random seed for the question order
        """
        self.points_per_correct = points_per_correct
        self.questions: List[DangerReport] = hazards_near_route(
            route, reports, buffer_m
        )
        random.Random(seed).shuffle(self.questions)

        self.index = 0
        self.score = 0
        self.correct_count = 0

    def __len__(self) -> int:
        return len(self.questions)

    @property
    def is_empty(self) -> bool:
        return not self.questions

    @property
    def finished(self) -> bool:
        return self.index >= len(self.questions)

    @property
    def current(self) -> Optional[DangerReport]:
        """The hazard being asked, or None once the quiz is over."""
        if self.finished:
            return None
        return self.questions[self.index]

    @property
    def progress(self) -> float:
        """Share of questions answered, 0.0 to 1.0."""
        if self.is_empty:
            return 1.0
        return self.index / len(self.questions)

    def answer(self, choice: str) -> bool:
        """
        Answer the current question and move to the next one.

        Args:
            choice: Guessed danger type

        Returns:
            True if the guess matches the reported danger type

        Raises:
            ValueError: If the quiz is already finished
        """
        if self.finished:
            raise ValueError("The quiz is already finished")

        correct = self.questions[self.index].danger_type == choice
        if correct:
            self.score += self.points_per_correct
            self.correct_count += 1

        self.index += 1
        return correct
