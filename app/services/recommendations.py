"""
Best-Practice Recommendations

Rule-based improvement suggestions for a proposal. Each rule is an
independent predicate -> suggestions pair evaluated in fixed order;
when no rule fires, a generic fallback set is returned so the list is
never empty.
"""
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional, Tuple

from app.domain.constants import (
    LOW_SCORE_THRESHOLD,
    MIN_PROJECTS,
    MIN_TEAM_MEMBERS,
    Priority,
)
from app.services.history_service import HistoricalSet


@dataclass(frozen=True)
class Recommendation:
    """A single prioritized improvement action."""
    category: str
    suggestion: str
    priority: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


STRENGTHEN_TRACK_RECORD = Recommendation(
    category="Track record",
    suggestion="Add more past-performance examples to make the proposal more persuasive",
    priority=Priority.HIGH.value,
)
SHOWCASE_TEAM = Recommendation(
    category="Team showcase",
    suggestion="Add key team member profiles to highlight professional expertise",
    priority=Priority.MEDIUM.value,
)
ADD_CASE_STUDIES = Recommendation(
    category="Case studies",
    suggestion="Add at least 3 relevant project case studies to build trust",
    priority=Priority.HIGH.value,
)
ADD_DIFFERENTIATION = Recommendation(
    category="Differentiation",
    suggestion="Add awards or certifications to establish a professional image",
    priority=Priority.LOW.value,
)
LEVERAGE_RELATIONSHIP = Recommendation(
    category="Client relationship",
    suggestion="Build on your previous work with this client and stress continuity and trust",
    priority=Priority.HIGH.value,
)
NEW_CLIENT_STRATEGY = Recommendation(
    category="New client",
    suggestion="For a first engagement, emphasize innovative solutions and fast delivery",
    priority=Priority.MEDIUM.value,
)

GENERIC_RECOMMENDATIONS: Tuple[Recommendation, ...] = (
    Recommendation(
        category="Content quality",
        suggestion="Use AI content improvement to polish the proposal text",
        priority=Priority.MEDIUM.value,
    ),
    Recommendation(
        category="Format compliance",
        suggestion="Make sure the proposal follows the template format to avoid losing points",
        priority=Priority.MEDIUM.value,
    ),
    Recommendation(
        category="Pricing strategy",
        suggestion="Price competitively using previously won proposals as a reference",
        priority=Priority.MEDIUM.value,
    ),
)


Rule = Callable[[HistoricalSet, int], Optional[Recommendation]]


def low_score_rule(history: HistoricalSet, success_rate: int) -> Optional[Recommendation]:
    if success_rate < LOW_SCORE_THRESHOLD:
        return STRENGTHEN_TRACK_RECORD
    return None


def small_team_rule(history: HistoricalSet, success_rate: int) -> Optional[Recommendation]:
    if history.company.team_member_count < MIN_TEAM_MEMBERS:
        return SHOWCASE_TEAM
    return None


def few_projects_rule(history: HistoricalSet, success_rate: int) -> Optional[Recommendation]:
    if history.company.project_count < MIN_PROJECTS:
        return ADD_CASE_STUDIES
    return None


def no_awards_rule(history: HistoricalSet, success_rate: int) -> Optional[Recommendation]:
    if history.company.award_count == 0:
        return ADD_DIFFERENTIATION
    return None


def client_history_rule(history: HistoricalSet, success_rate: int) -> Optional[Recommendation]:
    """Existing relationship only if the company has won for this client before."""
    if not history.client_name:
        return None
    if history.has_won_with_client:
        return LEVERAGE_RELATIONSHIP
    return NEW_CLIENT_STRATEGY


RULES: Tuple[Rule, ...] = (
    low_score_rule,
    small_team_rule,
    few_projects_rule,
    no_awards_rule,
    client_history_rule,
)


def generate_recommendations(
    history: HistoricalSet,
    success_rate: int,
    rules: Tuple[Rule, ...] = RULES
) -> List[Recommendation]:
    """
    Evaluate every rule in order and collect what fires.

    Args:
        history: Historical set for the proposal
        success_rate: Final score; only the low-score rule reads it
        rules: Rule sequence (defaults to RULES)

    Returns:
        Ordered recommendations, never empty
    """
    recommendations = [
        recommendation
        for recommendation in (rule(history, success_rate) for rule in rules)
        if recommendation is not None
    ]
    if not recommendations:
        recommendations.extend(GENERIC_RECOMMENDATIONS)
    return recommendations
