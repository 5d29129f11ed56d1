"""
Database module - MongoDB connection management and database definitions.
"""
from records_api.database.connections import ConnectionState, PersistenceClient
from records_api.database.databases import records_db
from records_api.database.registry import create_indexes

__all__ = [
    "ConnectionState",
    "PersistenceClient",
    "create_indexes",
    "records_db",
]
