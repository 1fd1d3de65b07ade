"""
History Service

Aggregates the historical record needed to score a proposal:
- Company-wide resolved proposals (base rate)
- Resolved proposals for the same client (client-affinity rate)
- Resolved proposals updated in the trailing window (recency rate)
- Total proposal volume (confidence)
- Company profile snapshot (completeness)

The reads are independent and are fanned out on a thread pool;
the resulting HistoricalSet is immutable and request-scoped.
"""
import calendar
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from app.config import settings
from app.domain.constants import (
    IDENTITY_FIELDS,
    RECENCY_WINDOW_MONTHS,
    RESOLVED_STATUSES,
    ProposalStatus,
)
from app.domain.exceptions import ProposalNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutcomeTally:
    """Resolved vs. won counts for one slice of proposal history."""
    resolved: int = 0
    won: int = 0

    @property
    def is_empty(self) -> bool:
        return self.resolved == 0

    @property
    def win_rate(self) -> float:
        return self.won / self.resolved * 100 if self.resolved else 0.0

    @classmethod
    def from_status_counts(cls, counts: Dict[str, int]) -> "OutcomeTally":
        """Build from a status -> count mapping; unresolved statuses are ignored."""
        resolved = sum(n for status, n in counts.items() if status in RESOLVED_STATUSES)
        return cls(resolved=resolved, won=counts.get(ProposalStatus.WON.value, 0))


@dataclass(frozen=True)
class CompanySnapshot:
    """Company identity fields and owned-collection counts."""
    company_name: str = ""
    tax_id: str = ""
    address: str = ""
    team_member_count: int = 0
    project_count: int = 0
    award_count: int = 0

    @property
    def missing_identity_fields(self) -> tuple:
        return tuple(
            name for name in IDENTITY_FIELDS
            if not str(getattr(self, name) or "").strip()
        )

    @property
    def has_identity(self) -> bool:
        return not self.missing_identity_fields

    @classmethod
    def from_profile(cls, profile: Dict[str, Any]) -> "CompanySnapshot":
        return cls(
            company_name=profile.get("company_name") or "",
            tax_id=profile.get("tax_id") or "",
            address=profile.get("address") or "",
            team_member_count=int(profile.get("team_member_count") or 0),
            project_count=int(profile.get("project_count") or 0),
            award_count=int(profile.get("award_count") or 0),
        )


@dataclass(frozen=True)
class HistoricalSet:
    """Everything the scoring functions need, fetched once per request."""
    overall: OutcomeTally
    client: Optional[OutcomeTally]
    recent: OutcomeTally
    total_proposals: int
    company: CompanySnapshot
    client_name: Optional[str] = None

    @property
    def has_won_with_client(self) -> bool:
        return self.client is not None and self.client.won > 0


def subtract_months(moment: datetime, months: int) -> datetime:
    """Same instant `months` calendar months earlier, day clamped to month length."""
    month_index = moment.year * 12 + (moment.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


class HistoryService:
    """
    Historical Record Aggregator.

    Resolves the target proposal (company-scoped), then fans out the
    independent history reads and joins them into a HistoricalSet.
    """

    def __init__(self, proposal_repo=None, company_repo=None, max_workers: int = None):
        """
        Initialize with dependencies.

        Args:
            proposal_repo: ProposalRepository instance
            company_repo: CompanyRepository instance
            max_workers: Thread pool size for the fan-out
        """
        self.proposal_repo = proposal_repo
        self.company_repo = company_repo
        self.max_workers = max_workers or settings.ANALYTICS_FETCH_WORKERS

    def _get_proposal_repo(self):
        """Lazy load proposal repository."""
        if not self.proposal_repo:
            from app.infra.mongodb.repositories import get_proposal_repo
            self.proposal_repo = get_proposal_repo()
        return self.proposal_repo

    def _get_company_repo(self):
        """Lazy load company repository."""
        if not self.company_repo:
            from app.infra.mongodb.repositories import get_company_repo
            self.company_repo = get_company_repo()
        return self.company_repo

    def get_company_snapshot(self, company_id: str) -> CompanySnapshot:
        return CompanySnapshot.from_profile(self._get_company_repo().get_profile_counts(company_id))

    def load(
        self,
        proposal_id: str,
        company_id: str,
        now: Optional[datetime] = None
    ) -> HistoricalSet:
        """
        Load the historical set for a proposal.

        Args:
            proposal_id: Target proposal
            company_id: Caller's company (pre-validated)
            now: Reference time for the recency window (defaults to UTC now)

        Returns:
            HistoricalSet

        Raises:
            ProposalNotFoundError: Proposal missing or owned by another company
        """
        proposals = self._get_proposal_repo()
        proposal = proposals.get_for_company(proposal_id, company_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        # Blank client names skip client affinity; others are matched verbatim
        client_name = proposal.get("client_name") or None
        if client_name is not None and not str(client_name).strip():
            client_name = None
        since = subtract_months(now or datetime.now(timezone.utc), RECENCY_WINDOW_MONTHS)
        # Resolved here so worker threads never race on the lazy singletons
        companies = self._get_company_repo()

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            total_future = executor.submit(proposals.count_for_company, company_id)
            overall_future = executor.submit(proposals.count_by_status, company_id)
            recent_future = executor.submit(
                proposals.count_by_status, company_id, updated_since=since
            )
            client_future = None
            if client_name:
                client_future = executor.submit(
                    proposals.count_by_status, company_id, client_name=client_name
                )
            company_future = executor.submit(companies.get_profile_counts, company_id)

            history = HistoricalSet(
                overall=OutcomeTally.from_status_counts(overall_future.result()),
                client=(
                    OutcomeTally.from_status_counts(client_future.result())
                    if client_future else None
                ),
                recent=OutcomeTally.from_status_counts(recent_future.result()),
                total_proposals=total_future.result(),
                company=CompanySnapshot.from_profile(company_future.result()),
                client_name=client_name,
            )

        logger.debug(
            f"Loaded history for proposal {proposal_id}: "
            f"{history.overall.resolved} resolved, {history.total_proposals} total"
        )
        return history
