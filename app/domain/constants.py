"""
Centralized Constants for Bid Analytics

SINGLE SOURCE OF TRUTH for proposal statuses and the tunable surface of the
win-probability engine (weights, thresholds, labels).
No duplication - all modules should import from here.
"""

from typing import Dict, FrozenSet
from enum import Enum


# =============================================================================
# SHARED ENUMS
# =============================================================================

class ProposalStatus(str, Enum):
    """Lifecycle status of a proposal."""
    DRAFT = "draft"
    IN_PROGRESS = "in_progress"
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    WON = "won"
    LOST = "lost"


class ConfidenceLevel(str, Enum):
    """Reliability label for a win-probability estimate."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Impact(str, Enum):
    """Direction a factor pushes the estimate."""
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class Priority(str, Enum):
    """Priority of an improvement suggestion."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Statuses counted as a resolved outcome
RESOLVED_STATUSES: FrozenSet[str] = frozenset({
    ProposalStatus.SUBMITTED.value,
    ProposalStatus.WON.value,
    ProposalStatus.LOST.value,
})


# =============================================================================
# WIN-RATE COMBINER
# =============================================================================
# Weights do not sum to 1.0; the mean is normalized by the weights actually used.

BASE_RATE_WEIGHT: float = 0.3
CLIENT_RATE_WEIGHT: float = 0.3
RECENT_RATE_WEIGHT: float = 0.2

# completeness (0-100) * factor => at most 10 extra points
COMPLETENESS_BONUS_FACTOR: float = 0.10

# Used instead of a weighted mean when no historical rate is available
NO_HISTORY_FLOOR: float = 20.0

MIN_SUCCESS_RATE: int = 0
MAX_SUCCESS_RATE: int = 100

RECENCY_WINDOW_MONTHS: int = 3


# =============================================================================
# COMPLETENESS SCORER
# =============================================================================

COMPLETENESS_CATEGORY_POINTS: int = 25

# Company identity fields that must all be non-empty
IDENTITY_FIELDS = ("company_name", "tax_id", "address")


# =============================================================================
# CONFIDENCE CLASSIFIER
# =============================================================================

HIGH_CONFIDENCE_MIN_PROPOSALS: int = 20
MEDIUM_CONFIDENCE_MIN_PROPOSALS: int = 10


# =============================================================================
# FACTOR EXPLAINER
# =============================================================================
# (positive_above, negative_below) - strict comparisons

BASE_RATE_THRESHOLDS = (40.0, 20.0)
CLIENT_RATE_THRESHOLDS = (50.0, 30.0)
RECENT_RATE_THRESHOLDS = (40.0, 20.0)

# Completeness uses >= for positive
COMPLETENESS_POSITIVE_MIN: int = 75
COMPLETENESS_NEGATIVE_BELOW: int = 50

FACTOR_LABELS: Dict[str, str] = {
    "base": "Overall historical win rate",
    "client": "Track record with this client",
    "completeness": "Company profile completeness",
    "recent": "Recent performance trend",
}


# =============================================================================
# RECOMMENDATION GENERATOR
# =============================================================================

LOW_SCORE_THRESHOLD: int = 30
MIN_TEAM_MEMBERS: int = 3
MIN_PROJECTS: int = 3

COMPLETENESS_ITEM_LABELS: Dict[str, str] = {
    "company": "Company basic information",
    "team": "Team members",
    "projects": "Project track record",
    "awards": "Awards and certifications",
}
