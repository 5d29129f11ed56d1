"""
Database definitions and collection constants.
"""
from records_api.database.databases import records_db

__all__ = ["records_db"]
