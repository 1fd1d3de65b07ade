"""
Multi-Tenant Auth Middleware

Roles:
- super_admin: Platform admin (env var ADMIN_API_KEY, no company)
- admin: Company admin
- member: Regular user

All authenticated requests return user context with company_id for query scoping.
"""
import logging
from typing import Optional
from fastapi import Depends, HTTPException, Security, status
from fastapi.security import APIKeyHeader
from app.config import settings

logger = logging.getLogger(__name__)

api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def get_master_key() -> str:
    return settings.ADMIN_API_KEY or "dev-key"


async def verify_key(api_key: Optional[str] = Security(api_key_header)) -> dict:
    """
    Verify API key and return user context.

    Returns dict with: role, name, user_id, company_id
    """
    if not api_key:
        raise HTTPException(status.HTTP_401_UNAUTHORIZED, "API key required")

    # Super Admin check (platform-wide)
    if api_key == get_master_key():
        return {
            "role": "super_admin",
            "name": "Super Admin",
            "user_id": None,
            "company_id": None,  # Super admin has no company scope
        }

    from app.infra.mongodb.repositories import get_user_repo, UserRole
    user = get_user_repo().get_by_api_key(api_key)

    if user:
        try:
            role = UserRole(user.get("role", "member"))
        except ValueError:
            logger.warning(f"User {user.get('user_id')} has unknown role: {user.get('role')}")
            raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid API key")
        return {
            "role": role.value,
            "name": user.get("name", "User"),
            "user_id": user.get("user_id"),
            "company_id": user.get("company_id"),
        }

    raise HTTPException(status.HTTP_403_FORBIDDEN, "Invalid API key")


async def verify_company_user(user: dict = Depends(verify_key)) -> dict:
    """Authenticated user that is associated with a company."""
    if not user.get("company_id"):
        raise HTTPException(status.HTTP_403_FORBIDDEN, "User is not associated with a company")
    return user
