"""
Application-scoped resources exposed as dependencies.
"""
from fastapi import Request

from records_api.config import Settings
from records_api.database.connections import PersistenceClient


def get_persistence(request: Request) -> PersistenceClient:
    """The PersistenceClient created by the app lifespan."""
    return request.app.state.persistence


def get_app_settings(request: Request) -> Settings:
    """The Settings the app was created with."""
    return request.app.state.settings
