"""
Core module - Security, logging and exception types.
"""
from records_api.core.security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
)
from records_api.core.logging import configure_logging

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_token",
    "configure_logging",
]
