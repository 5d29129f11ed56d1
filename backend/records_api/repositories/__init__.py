"""
Repositories - data access over the persistence client.
"""
from records_api.repositories.account_repository import AccountRepository
from records_api.repositories.record_repository import RecordRepository

__all__ = ["AccountRepository", "RecordRepository"]
