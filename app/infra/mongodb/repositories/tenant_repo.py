"""
Tenant Repositories

User lookup for API-key authentication. Each user is associated with
at most one company; analytics requests are scoped to that company.

Roles:
- super_admin: Platform admin (from env var, no company)
- admin: Company admin
- member: Regular user
"""
import logging
import hashlib
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from enum import Enum

from app.infra.mongodb.base_repository import BaseRepository

logger = logging.getLogger(__name__)


class UserRole(str, Enum):
    """User roles."""
    SUPER_ADMIN = "super_admin"  # Platform admin
    ADMIN = "admin"             # Company admin
    MEMBER = "member"           # Regular user


class UserRepository(BaseRepository[Dict[str, Any]]):
    """Repository for API-key users."""

    collection_name = "users"

    @staticmethod
    def hash_key(key: str) -> str:
        """Hash API key for lookup; raw keys are never stored."""
        return hashlib.sha256(key.encode()).hexdigest()

    def get_by_api_key(self, api_key: str) -> Optional[Dict[str, Any]]:
        """Authenticate an active user by API key."""
        user = self.find_one({"api_key_hash": self.hash_key(api_key), "is_active": True})
        if user:
            self.collection.update_one(
                {"user_id": user["user_id"]},
                {"$set": {"last_login": datetime.now(timezone.utc)}}
            )
        return user


# Singleton instance
_user_repo: Optional[UserRepository] = None


def get_user_repo() -> UserRepository:
    """Get singleton UserRepository."""
    global _user_repo
    if _user_repo is None:
        _user_repo = UserRepository()
    return _user_repo
