"""
Shared fixtures for the analytics test suite.

In-memory repositories stand in for MongoDB so every rule runs
without a database.
"""
import sys
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

# Add parent directory to path to enable imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.domain.constants import RESOLVED_STATUSES
from app.services.history_service import (
    CompanySnapshot,
    HistoricalSet,
    HistoryService,
    OutcomeTally,
)

NOW = datetime(2026, 6, 15, 12, 0, tzinfo=timezone.utc)
RECENT = datetime(2026, 5, 1, tzinfo=timezone.utc)
OLD = datetime(2025, 1, 10, tzinfo=timezone.utc)


class FakeProposalRepo:
    """ProposalRepository over a list of dicts."""

    def __init__(self, proposals: List[Dict[str, Any]]):
        self.proposals = proposals
        self.calls: List[str] = []

    def _company(self, company_id: str) -> List[Dict[str, Any]]:
        return [p for p in self.proposals if p["company_id"] == company_id]

    def get_for_company(self, proposal_id: str, company_id: str) -> Optional[Dict[str, Any]]:
        self.calls.append("get_for_company")
        for p in self._company(company_id):
            if p["proposal_id"] == proposal_id:
                return dict(p)
        return None

    def count_for_company(self, company_id: str) -> int:
        self.calls.append("count_for_company")
        return len(self._company(company_id))

    def count_by_status(
        self,
        company_id: str,
        client_name: Optional[str] = None,
        updated_since: Optional[datetime] = None
    ) -> Dict[str, int]:
        self.calls.append("count_by_status")
        rows = [p for p in self._company(company_id) if p["status"] in RESOLVED_STATUSES]
        if client_name:
            rows = [p for p in rows if p.get("client_name") == client_name]
        if updated_since:
            rows = [p for p in rows if p["updated_at"] >= updated_since]
        return dict(Counter(p["status"] for p in rows))


class FakeCompanyRepo:
    """CompanyRepository returning fixed profiles."""

    def __init__(self, profiles: Dict[str, Dict[str, Any]]):
        self.profiles = profiles

    def get_profile_counts(self, company_id: str) -> Dict[str, Any]:
        return dict(self.profiles.get(company_id, {}))


def make_proposal(
    proposal_id: str,
    status: str,
    company_id: str = "cmp_acme",
    client_name: Optional[str] = None,
    updated_at: datetime = OLD,
) -> Dict[str, Any]:
    return {
        "proposal_id": proposal_id,
        "company_id": company_id,
        "client_name": client_name,
        "status": status,
        "updated_at": updated_at,
        "title": f"Proposal {proposal_id}",
        "estimated_amount": 100000,
    }


FULL_PROFILE = {
    "company_name": "Acme Engineering",
    "tax_id": "12345678",
    "address": "1 Main Street",
    "team_member_count": 5,
    "project_count": 4,
    "award_count": 2,
}

EMPTY_PROFILE: Dict[str, Any] = {}


def make_history(
    overall: OutcomeTally = OutcomeTally(),
    client: Optional[OutcomeTally] = None,
    recent: OutcomeTally = OutcomeTally(),
    total_proposals: int = 0,
    company: CompanySnapshot = CompanySnapshot(),
    client_name: Optional[str] = None,
) -> HistoricalSet:
    return HistoricalSet(
        overall=overall,
        client=client,
        recent=recent,
        total_proposals=total_proposals,
        company=company,
        client_name=client_name,
    )


@pytest.fixture
def full_company() -> CompanySnapshot:
    return CompanySnapshot.from_profile(FULL_PROFILE)


@pytest.fixture
def acme_proposals() -> List[Dict[str, Any]]:
    """Two wins and a loss with Client A, a loss with Client B, one pending submission."""
    return [
        make_proposal("p1", "won", client_name="Client A", updated_at=RECENT),
        make_proposal("p2", "won", client_name="Client A"),
        make_proposal("p3", "lost", client_name="Client B", updated_at=RECENT),
        make_proposal("p4", "submitted", client_name="Client C"),
        make_proposal("target", "draft", client_name="Client A", updated_at=RECENT),
        make_proposal("foreign", "draft", company_id="cmp_other", client_name="Client A"),
        make_proposal("x1", "won", company_id="cmp_other", client_name="Client A"),
    ]


@pytest.fixture
def history_service(acme_proposals) -> HistoryService:
    return HistoryService(
        proposal_repo=FakeProposalRepo(acme_proposals),
        company_repo=FakeCompanyRepo({"cmp_acme": FULL_PROFILE}),
        max_workers=2,
    )
