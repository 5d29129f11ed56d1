"""
API Routers module.
"""
from records_api.routers import auth, health, records, stats

__all__ = ["auth", "health", "records", "stats"]
