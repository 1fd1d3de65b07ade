"""
Company Repository

Reads the company profile and the sizes of its owned collections
(team members, projects, awards) used by completeness scoring.
"""
import logging
from typing import Optional, Dict, Any

from app.domain.constants import IDENTITY_FIELDS
from app.infra.mongodb.base_repository import BaseRepository
from app.infra.mongodb.connection import get_database

logger = logging.getLogger(__name__)


class CompanyRepository(BaseRepository[Dict[str, Any]]):
    """
    Repository for companies.

    Team members, projects and awards live in their own collections
    keyed by company_id; only their counts are read here.
    """

    collection_name = "companies"

    def __init__(self):
        super().__init__()
        self.db = get_database()

    def get_by_company_id(self, company_id: str) -> Optional[Dict[str, Any]]:
        """Get company by company_id."""
        return self.find_one({"company_id": company_id})

    def count_active_team_members(self, company_id: str) -> int:
        # Team members are soft-deleted via is_active
        return self.db["team_members"].count_documents(
            self.scoped(company_id, {"is_active": True})
        )

    def count_projects(self, company_id: str) -> int:
        return self.db["projects"].count_documents(self.scoped(company_id))

    def count_awards(self, company_id: str) -> int:
        return self.db["awards"].count_documents(self.scoped(company_id))

    def get_profile_counts(self, company_id: str) -> Dict[str, Any]:
        """
        Get identity fields and owned-collection counts for a company.

        A missing company yields empty identity fields and zero counts.

        Returns:
            {"company_name", "tax_id", "address",
             "team_member_count", "project_count", "award_count"}
        """
        company = self.get_by_company_id(company_id) or {}
        profile = {field: company.get(field) or "" for field in IDENTITY_FIELDS}
        profile.update({
            "team_member_count": self.count_active_team_members(company_id),
            "project_count": self.count_projects(company_id),
            "award_count": self.count_awards(company_id),
        })
        return profile


# Singleton
_company_repo: Optional[CompanyRepository] = None


def get_company_repo() -> CompanyRepository:
    """Get singleton CompanyRepository instance."""
    global _company_repo
    if _company_repo is None:
        _company_repo = CompanyRepository()
    return _company_repo
