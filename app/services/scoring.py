"""
Win-Probability Scoring

Pure functions over a HistoricalSet:
- Completeness Scorer: company profile -> 0-100
- Weighted Win-Rate Combiner: base/client/recent rates + completeness bonus
- Confidence Classifier: total proposal volume -> low/medium/high
- Factor Explainer: impact-tagged breakdown for display

No I/O happens here; every rule is testable without a database.
"""
import math
from dataclasses import dataclass, asdict
from typing import List, Dict, Optional, Tuple

from app.domain.constants import (
    BASE_RATE_THRESHOLDS,
    BASE_RATE_WEIGHT,
    CLIENT_RATE_THRESHOLDS,
    CLIENT_RATE_WEIGHT,
    COMPLETENESS_BONUS_FACTOR,
    COMPLETENESS_CATEGORY_POINTS,
    COMPLETENESS_NEGATIVE_BELOW,
    COMPLETENESS_POSITIVE_MIN,
    FACTOR_LABELS,
    HIGH_CONFIDENCE_MIN_PROPOSALS,
    MAX_SUCCESS_RATE,
    MEDIUM_CONFIDENCE_MIN_PROPOSALS,
    MIN_SUCCESS_RATE,
    NO_HISTORY_FLOOR,
    RECENT_RATE_THRESHOLDS,
    RECENT_RATE_WEIGHT,
    ConfidenceLevel,
    Impact,
)
from app.services.history_service import CompanySnapshot, HistoricalSet, OutcomeTally


@dataclass(frozen=True)
class RateInput:
    """A 0-100 win rate and whether it may take part in the weighted mean."""
    value: float = 0.0
    available: bool = False

    @classmethod
    def from_tally(cls, tally: Optional[OutcomeTally]) -> "RateInput":
        """
        A rate is available only when its slice has data and the rate is
        above zero, so an observed 0% rate counts as no data.
        """
        if tally is None or tally.is_empty:
            return cls()
        rate = tally.win_rate
        return cls(value=rate, available=rate > 0)


@dataclass(frozen=True)
class Factor:
    """One line of the score breakdown."""
    factor: str
    value: str
    impact: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


# ===================== COMPLETENESS =====================

def completeness_checks(company: CompanySnapshot) -> Dict[str, bool]:
    """The four equally-weighted profile categories."""
    return {
        "company": company.has_identity,
        "team": company.team_member_count > 0,
        "projects": company.project_count > 0,
        "awards": company.award_count > 0,
    }


def completeness_score(company: CompanySnapshot) -> int:
    """25 points per satisfied category, no partial credit."""
    return sum(
        COMPLETENESS_CATEGORY_POINTS
        for satisfied in completeness_checks(company).values()
        if satisfied
    )


def completeness_bonus(score: int) -> float:
    return score * COMPLETENESS_BONUS_FACTOR


# ===================== COMBINER =====================

def history_rates(history: HistoricalSet) -> Tuple[RateInput, RateInput, RateInput]:
    """(base, client, recent) rate inputs for a historical set."""
    return (
        RateInput.from_tally(history.overall),
        RateInput.from_tally(history.client),
        RateInput.from_tally(history.recent),
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def combine_win_rates(
    base: RateInput,
    client: RateInput,
    recent: RateInput,
    completeness: int
) -> int:
    """
    Combine the available win rates into a single success percentage.

    Weighted mean of available rates (normalized by the weights used),
    plus the completeness bonus. With no available rate, a flat floor
    plus the bonus is used instead. Clamped to [0, 100], rounded.
    """
    weighted = [
        (rate.value, weight)
        for rate, weight in (
            (base, BASE_RATE_WEIGHT),
            (client, CLIENT_RATE_WEIGHT),
            (recent, RECENT_RATE_WEIGHT),
        )
        if rate.available
    ]

    bonus = completeness_bonus(completeness)
    if weighted:
        total_weight = sum(weight for _, weight in weighted)
        estimate = sum(value * weight for value, weight in weighted) / total_weight + bonus
    else:
        estimate = NO_HISTORY_FLOOR + bonus

    estimate = min(max(estimate, MIN_SUCCESS_RATE), MAX_SUCCESS_RATE)
    return _round_half_up(estimate)


def score_history(history: HistoricalSet) -> int:
    """Final success rate for a historical set."""
    base, client, recent = history_rates(history)
    return combine_win_rates(base, client, recent, completeness_score(history.company))


# ===================== CONFIDENCE =====================

def classify_confidence(total_proposals: int) -> str:
    """Confidence from total proposal volume, regardless of status."""
    if total_proposals >= HIGH_CONFIDENCE_MIN_PROPOSALS:
        return ConfidenceLevel.HIGH.value
    if total_proposals >= MEDIUM_CONFIDENCE_MIN_PROPOSALS:
        return ConfidenceLevel.MEDIUM.value
    return ConfidenceLevel.LOW.value


# ===================== FACTORS =====================

def _rate_impact(rate: float, thresholds: Tuple[float, float]) -> str:
    positive_above, negative_below = thresholds
    if rate > positive_above:
        return Impact.POSITIVE.value
    if rate < negative_below:
        return Impact.NEGATIVE.value
    return Impact.NEUTRAL.value


def _completeness_impact(score: int) -> str:
    if score >= COMPLETENESS_POSITIVE_MIN:
        return Impact.POSITIVE.value
    if score < COMPLETENESS_NEGATIVE_BELOW:
        return Impact.NEGATIVE.value
    return Impact.NEUTRAL.value


def _format_rate(rate: float) -> str:
    return f"{rate:.1f}%"


def explain_factors(history: HistoricalSet, completeness: int) -> List[Factor]:
    """
    Impact-tagged breakdown in fixed order:
    overall rate, client rate, completeness, recent rate.

    Completeness is always present. Overall and client appear only when
    their rate was available to the combiner; recent appears whenever the
    recent slice had data, even at 0%.
    """
    base, client, _ = history_rates(history)
    factors: List[Factor] = []

    if base.available:
        factors.append(Factor(
            factor=FACTOR_LABELS["base"],
            value=_format_rate(base.value),
            impact=_rate_impact(base.value, BASE_RATE_THRESHOLDS),
        ))

    if client.available:
        factors.append(Factor(
            factor=FACTOR_LABELS["client"],
            value=_format_rate(client.value),
            impact=_rate_impact(client.value, CLIENT_RATE_THRESHOLDS),
        ))

    factors.append(Factor(
        factor=FACTOR_LABELS["completeness"],
        value=f"{completeness}%",
        impact=_completeness_impact(completeness),
    ))

    if not history.recent.is_empty:
        recent_rate = history.recent.win_rate
        factors.append(Factor(
            factor=FACTOR_LABELS["recent"],
            value=_format_rate(recent_rate),
            impact=_rate_impact(recent_rate, RECENT_RATE_THRESHOLDS),
        ))

    return factors
