"""Safety recommendations derived from segment scores."""

from typing import List, Sequence

from .criteria import ScoringCriteria
from .models import SegmentScore, TimeOfDay


ALTERNATE_ROUTE_MESSAGE = (
    "通学路内に{count}箇所の高リスクエリアがあります。"
    "可能であれば代替ルートの検討をお勧めします。"
)
HIGH_TRAFFIC_MESSAGE = (
    "交通量が多いエリアでは特に注意が必要です。"
    "特に{period}は交通量が増加します。"
)
RESTRICTION_MESSAGE = (
    "通行規制や工事情報を定期的に確認してください。"
    "迂回路が必要になる場合があります。"
)
CROSSING_MESSAGE = "横断歩道や信号機のある安全な場所で道路を横断してください。"
GENERAL_SAFETY_MESSAGE = "常に周囲の状況に注意し、交通ルールを守って通行してください。"
GROUP_COMMUTE_MESSAGE = "可能であれば集団登下校を利用してください。"

TRAFFIC_PERIOD_LABELS = {
    TimeOfDay.MORNING: "朝の登校時",
    TimeOfDay.AFTERNOON: "下校時",
}
DEFAULT_TRAFFIC_PERIOD = "昼間"


def generate_safety_recommendations(
    segment_scores: Sequence[SegmentScore],
    time_of_day: TimeOfDay,
    criteria: ScoringCriteria
) -> List[str]:
    """
    Build the recommendation list for a scored route.

    Each rule is checked independently, in a fixed order; the general
    safety message is always included.

    Args:
        segment_scores: Scores of every segment of the route
        time_of_day: Commute window the route was scored for
        criteria: Thresholds used to trigger the rules

    Returns:
        List of recommendation strings
    """
    recommendations = []
    high_threshold = criteria.danger_thresholds['high']
    triggers = criteria.recommendations

    dangerous = [s for s in segment_scores if s.score >= high_threshold]
    if dangerous:
        recommendations.append(ALTERNATE_ROUTE_MESSAGE.format(count=len(dangerous)))

    if any(s.factors.traffic_volume >= triggers['high_traffic_factor']
           for s in segment_scores):
        period = TRAFFIC_PERIOD_LABELS.get(time_of_day, DEFAULT_TRAFFIC_PERIOD)
        recommendations.append(HIGH_TRAFFIC_MESSAGE.format(period=period))

    if any(s.factors.restrictions > 0 for s in segment_scores):
        recommendations.append(RESTRICTION_MESSAGE)

    if any(s.factors.infrastructure >= triggers['poor_infrastructure_factor']
           for s in segment_scores):
        recommendations.append(CROSSING_MESSAGE)

    recommendations.append(GENERAL_SAFETY_MESSAGE)

    if time_of_day.is_commute:
        recommendations.append(GROUP_COMMUTE_MESSAGE)

    return recommendations
