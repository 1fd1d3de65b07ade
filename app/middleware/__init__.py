"""
Middleware modules for authentication and company scoping
"""

from app.middleware.auth import (
    verify_key,
    verify_company_user,
    api_key_header,
)

__all__ = [
    "verify_key",
    "verify_company_user",
    "api_key_header",
]
