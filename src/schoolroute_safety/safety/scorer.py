"""Route safety scoring for school commute routes.

Each segment of a walking route receives a 0-100 danger score (higher is
more dangerous) combining four sub-scores: traffic volume, traffic
restrictions, user hazard reports and safety infrastructure. The route's
overall score is the mean of its segment scores.
"""

from typing import Optional, Sequence, Union

from .criteria import ScoringCriteria
from .models import (
    DangerLevel,
    RouteSegment,
    SafetyScore,
    SegmentFactors,
    SegmentScore,
    TimeOfDay,
)
from .recommendations import generate_safety_recommendations
from ..core.utils import clamp, round_half_up


class InvalidInputError(ValueError):
    """Raised when a route cannot be scored (e.g. it has no segments)."""


class RouteSafetyScorer:
    """Score route segments against a set of scoring criteria."""

    def __init__(self, criteria: Optional[ScoringCriteria] = None):
        """
        Initialize scorer.

        Args:
            criteria: ScoringCriteria configuration (uses defaults if None)
        """
        self.criteria = criteria or ScoringCriteria()

    def danger_level_for(self, score: float) -> DangerLevel:
        """Danger tier of an overall score (high >= 70, medium >= 40, else low)."""
        return self.criteria.get_danger_level(score)

    def calculate_traffic_score(
        self,
        segment: RouteSegment,
        time_of_day: TimeOfDay
    ) -> int:
        """
        Traffic sub-score from the measured volume or a road-type baseline.

        With a volume, it is normalised (2000 vehicles saturate at 100) and
        scaled by the road-type and time-of-day factors. Without one, the
        road-type baseline is scaled by the time-of-day factor only.
        """
        time_factor = self.criteria.get_time_factor(time_of_day)

        if segment.traffic_volume is not None:
            score = min(
                segment.traffic_volume / self.criteria.traffic['volume_divisor'],
                self.criteria.traffic['volume_cap']
            )

            road_factor = self.criteria.get_road_type_factor(segment.road_type)
            if road_factor:
                score *= road_factor

            score *= time_factor
            return clamp(round_half_up(score))

        baseline = self.criteria.get_traffic_baseline(segment.road_type)
        return clamp(round_half_up(baseline * time_factor))

    def calculate_restriction_score(self, segment: RouteSegment) -> int:
        """Danger of the most severe restriction on the segment (0 if none)."""
        if not segment.restrictions:
            return 0

        return clamp(round_half_up(max(
            self.criteria.get_restriction_danger(r.type)
            for r in segment.restrictions
        )))

    def calculate_user_report_score(self, segment: RouteSegment) -> int:
        """
        Severity-weighted average of the hazard reports on the segment.

        The weighted sum is divided by the number of reports, not by the sum
        of the multipliers, so high-severity reports can push it past 100
        before the cap.
        """
        if not segment.danger_reports:
            return 0

        weighted_sum = sum(
            self.criteria.get_report_danger(report.type)
            * self.criteria.get_severity_multiplier(report.severity)
            for report in segment.danger_reports
        )
        return clamp(round_half_up(weighted_sum / len(segment.danger_reports)))

    def calculate_infrastructure_score(self, segment: RouteSegment) -> int:
        """Base score minus a credit per safety feature (50 when nothing is known)."""
        settings = self.criteria.infrastructure

        if not segment.infrastructures:
            return clamp(round_half_up(settings['no_data_score']))

        score = settings['base_score']
        for infra in segment.infrastructures:
            score -= self.criteria.get_infrastructure_credit(infra.type)

        return clamp(round_half_up(score))

    def score_segment(
        self,
        segment: RouteSegment,
        time_of_day: Union[TimeOfDay, str] = TimeOfDay.MORNING
    ) -> SegmentScore:
        """
        Compute the weighted danger score of one segment.

        Args:
            segment: Route segment with its collaborator data attached
            time_of_day: Commute window used to weight traffic

        Returns:
            SegmentScore with the four sub-scores retained
        """
        time_of_day = TimeOfDay.parse(time_of_day)

        factors = SegmentFactors(
            traffic_volume=self.calculate_traffic_score(segment, time_of_day),
            restrictions=self.calculate_restriction_score(segment),
            user_reports=self.calculate_user_report_score(segment),
            infrastructure=self.calculate_infrastructure_score(segment),
        )

        weighted = (
            factors.traffic_volume * self.criteria.get_weight('traffic_volume')
            + factors.restrictions * self.criteria.get_weight('restrictions')
            + factors.user_reports * self.criteria.get_weight('user_reports')
            + factors.infrastructure * self.criteria.get_weight('infrastructure')
        )

        return SegmentScore(
            segment_id=segment.id,
            score=clamp(round_half_up(weighted)),
            factors=factors,
        )

    def score_route(
        self,
        segments: Sequence[RouteSegment],
        time_of_day: Union[TimeOfDay, str] = TimeOfDay.MORNING
    ) -> SafetyScore:
        """
        Score a whole route.

        Args:
            segments: Route segments in travel order
            time_of_day: 'morning', 'noon' or 'afternoon'; any other value
                disables the time-of-day traffic factor

        Returns:
            SafetyScore with per-segment scores in input order

        Raises:
            InvalidInputError: If segments is empty
        """
        if not segments:
            raise InvalidInputError("Cannot score a route without segments")

        time_of_day = TimeOfDay.parse(time_of_day)

        segment_scores = [
            self.score_segment(segment, time_of_day) for segment in segments
        ]

        overall = round_half_up(
            sum(s.score for s in segment_scores) / len(segment_scores)
        )

        return SafetyScore(
            overall_score=overall,
            danger_level=self.danger_level_for(overall),
            segment_scores=segment_scores,
            recommendations=generate_safety_recommendations(
                segment_scores, time_of_day, self.criteria
            ),
        )


def calculate_route_safety_score(
    segments: Sequence[RouteSegment],
    time_of_day: Union[TimeOfDay, str] = TimeOfDay.MORNING,
    criteria: Optional[ScoringCriteria] = None
) -> SafetyScore:
    """Score a route with the given (or default) criteria."""
    return RouteSafetyScorer(criteria).score_route(segments, time_of_day)
