"""
Analytics Service

Business logic for proposal analytics, including:
- Win-probability report for a single proposal
- Confidence labelling and factor breakdown
- Best-practice recommendations
- Company profile completeness report
"""
import logging
from typing import Optional, List, Dict, Any
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.domain.constants import COMPLETENESS_ITEM_LABELS, ConfidenceLevel
from app.domain.exceptions import ComputationFailure, ProposalNotFoundError
from app.services.history_service import HistoricalSet, HistoryService
from app.services.recommendations import Recommendation, generate_recommendations
from app.services.scoring import (
    Factor,
    classify_confidence,
    completeness_checks,
    completeness_score,
    explain_factors,
    score_history,
)

logger = logging.getLogger(__name__)

ANALYSIS_FAILED = "analysis_failed"


@dataclass
class DataPoints:
    """Volumes the estimate was built from."""
    total_proposals: int = 0
    won_proposals: int = 0
    submitted_proposals: int = 0
    recent_proposals: int = 0

    @classmethod
    def from_history(cls, history: HistoricalSet) -> "DataPoints":
        return cls(
            total_proposals=history.total_proposals,
            won_proposals=history.overall.won,
            submitted_proposals=history.overall.resolved,
            recent_proposals=history.recent.resolved,
        )

    def to_dict(self) -> Dict[str, int]:
        return {
            "total_proposals": self.total_proposals,
            "won_proposals": self.won_proposals,
            "submitted_proposals": self.submitted_proposals,
            "recent_proposals": self.recent_proposals,
        }


@dataclass
class ScoreReport:
    """Win-probability report for one proposal."""
    success_rate: int
    confidence_level: str
    generated_at: datetime
    factors: List[Factor] = field(default_factory=list)
    data_points: DataPoints = field(default_factory=DataPoints)
    best_practices: List[Recommendation] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_degraded(self) -> bool:
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "success_rate": self.success_rate,
            "confidence_level": self.confidence_level,
            "factors": [f.to_dict() for f in self.factors],
            "data_points": self.data_points.to_dict(),
            "best_practices": [r.to_dict() for r in self.best_practices],
            "generated_at": self.generated_at.isoformat(),
        }
        if self.error:
            result["error"] = self.error
        return result


def build_report(history: HistoricalSet, generated_at: datetime) -> ScoreReport:
    """Compose scoring, confidence, factors and recommendations."""
    completeness = completeness_score(history.company)
    success_rate = score_history(history)
    return ScoreReport(
        success_rate=success_rate,
        confidence_level=classify_confidence(history.total_proposals),
        generated_at=generated_at,
        factors=explain_factors(history, completeness),
        data_points=DataPoints.from_history(history),
        best_practices=generate_recommendations(history, success_rate),
    )


def degraded_report(generated_at: datetime) -> ScoreReport:
    """Zero-confidence report used when analysis fails."""
    return ScoreReport(
        success_rate=0,
        confidence_level=ConfidenceLevel.LOW.value,
        generated_at=generated_at,
        error=ANALYSIS_FAILED,
    )


class AnalyticsService:
    """
    Service for proposal analytics and insights.

    Provides:
    - Proposal win-probability report (advisory; degrades instead of failing)
    - Company profile completeness report
    """

    def __init__(self, history_service=None):
        """
        Initialize with dependencies.

        Args:
            history_service: HistoryService instance
        """
        self.history = history_service

    def _get_history(self) -> HistoryService:
        """Lazy load history service."""
        if not self.history:
            self.history = HistoryService()
        return self.history

    def get_proposal_report(
        self,
        proposal_id: str,
        company_id: str,
        now: Optional[datetime] = None
    ) -> ScoreReport:
        """
        Build the win-probability report for a proposal.

        Args:
            proposal_id: Target proposal
            company_id: Caller's company
            now: Reference time for the recency window and timestamp

        Returns:
            ScoreReport (degraded on unexpected failures)

        Raises:
            ProposalNotFoundError: Proposal missing or owned by another company
        """
        now = now or datetime.now(timezone.utc)
        try:
            history = self._get_history().load(proposal_id, company_id, now=now)
            report = build_report(history, generated_at=now)
        except ProposalNotFoundError:
            raise
        except Exception as e:
            logger.error(f"Analysis failed for proposal {proposal_id}: {e}")
            return degraded_report(generated_at=now)

        logger.info(
            f"Scored proposal {proposal_id}: {report.success_rate}% "
            f"({report.confidence_level} confidence, {len(report.best_practices)} suggestions)"
        )
        return report

    def get_completeness_report(self, company_id: str) -> Dict[str, Any]:
        """
        Get company profile completeness.

        Returns:
            {
                "overall": int,            # 0-100
                "company": {"completed": bool, "missing_fields": [...]},
                "team_members": {"completed": bool, "count": int},
                "projects": {"completed": bool, "count": int},
                "awards": {"completed": bool, "count": int},
                "incomplete_items": [{"key", "label", "priority"}]
            }

        Raises:
            ComputationFailure: If the profile cannot be read
        """
        try:
            company = self._get_history().get_company_snapshot(company_id)
        except Exception as e:
            raise ComputationFailure(f"Could not read profile for company {company_id}: {e}") from e

        checks = completeness_checks(company)
        incomplete_items = [
            {"key": key, "label": COMPLETENESS_ITEM_LABELS[key], "priority": priority}
            for priority, (key, satisfied) in enumerate(checks.items(), start=1)
            if not satisfied
        ]

        return {
            "overall": completeness_score(company),
            "company": {
                "completed": checks["company"],
                "missing_fields": list(company.missing_identity_fields),
            },
            "team_members": {"completed": checks["team"], "count": company.team_member_count},
            "projects": {"completed": checks["projects"], "count": company.project_count},
            "awards": {"completed": checks["awards"], "count": company.award_count},
            "incomplete_items": incomplete_items,
        }


# Singleton
_analytics_service: Optional[AnalyticsService] = None


def get_analytics_service() -> AnalyticsService:
    """Get singleton AnalyticsService instance."""
    global _analytics_service
    if _analytics_service is None:
        _analytics_service = AnalyticsService()
    return _analytics_service
