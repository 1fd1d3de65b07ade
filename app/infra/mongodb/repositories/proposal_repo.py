"""
Proposal Repository

Read access to the proposals collection for win-rate analytics.
All queries are scoped to a single company.
"""
import logging
from typing import Optional, Dict, Any
from datetime import datetime

from app.domain.constants import RESOLVED_STATUSES
from app.infra.mongodb.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class ProposalRepository(BaseRepository[Dict[str, Any]]):
    """Repository for bid proposals."""

    collection_name = "proposals"

    def get_for_company(self, proposal_id: str, company_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a proposal only if it belongs to the given company.

        A missing proposal and a proposal owned by another company
        both return None.
        """
        return self.find_one(self.scoped(company_id, {"proposal_id": proposal_id}))

    def count_for_company(self, company_id: str) -> int:
        """Count every proposal of a company regardless of status."""
        return self.count(self.scoped(company_id))

    def count_by_status(
        self,
        company_id: str,
        client_name: Optional[str] = None,
        updated_since: Optional[datetime] = None
    ) -> Dict[str, int]:
        """
        Count resolved proposals grouped by status.

        Args:
            company_id: Owning company
            client_name: Only proposals for this client
            updated_since: Only proposals updated at or after this time

        Returns:
            Mapping of status -> count
        """
        match: Dict[str, Any] = self.scoped(
            company_id, {"status": {"$in": sorted(RESOLVED_STATUSES)}}
        )
        if client_name:
            match["client_name"] = client_name
        if updated_since:
            match["updated_at"] = {"$gte": updated_since}

        pipeline = [
            {"$match": match},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]
        return {row["_id"]: row["count"] for row in self.aggregate(pipeline)}


# Singleton
_proposal_repo: Optional[ProposalRepository] = None


def get_proposal_repo() -> ProposalRepository:
    """Get singleton ProposalRepository instance."""
    global _proposal_repo
    if _proposal_repo is None:
        _proposal_repo = ProposalRepository()
    return _proposal_repo
