"""
Dependencies for dependency injection in routes.
"""
from records_api.dependencies.auth import CurrentAccount, get_current_account
from records_api.dependencies.persistence import get_app_settings, get_persistence

__all__ = [
    "CurrentAccount",
    "get_current_account",
    "get_app_settings",
    "get_persistence",
]
