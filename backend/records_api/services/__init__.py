"""
Service layer for business logic.
"""
from records_api.services.auth_service import AuthService

__all__ = [
    "AuthService",
]
