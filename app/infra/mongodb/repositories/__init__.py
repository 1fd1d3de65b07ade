"""
MongoDB Repositories - Domain-specific data access.

Repository Pattern Implementation:
- ProposalRepository - Proposal history for win-rate analytics
- CompanyRepository - Company identity and profile collection counts
- UserRepository - API-key authentication and company scoping
"""

# Proposal repository
from app.infra.mongodb.repositories.proposal_repo import (
    ProposalRepository,
    get_proposal_repo,
)

# Company profile repository
from app.infra.mongodb.repositories.company_repo import (
    CompanyRepository,
    get_company_repo,
)

# Multi-tenant repositories
from app.infra.mongodb.repositories.tenant_repo import (
    UserRepository,
    UserRole,
    get_user_repo,
)

__all__ = [
    # Proposals
    "ProposalRepository",
    "get_proposal_repo",
    # Companies
    "CompanyRepository",
    "get_company_repo",
    # Multi-tenant
    "UserRepository",
    "UserRole",
    "get_user_repo",
]
