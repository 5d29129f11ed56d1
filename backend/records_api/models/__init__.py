"""
Pydantic models for database documents.
"""
from records_api.models.user import Account
from records_api.models.record import Record, RecordStatus

__all__ = [
    "Account",
    "Record",
    "RecordStatus",
]
