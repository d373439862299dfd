"""FastAPI dependency utilities."""

from fastapi import Request

from app.config import Settings
from app.infrastructure.database import get_db
from app.infrastructure.storage import DocumentStorage


def get_storage(request: Request) -> DocumentStorage:
    """Return the storage directory handle attached to the application."""

    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""

    return request.app.state.settings


__all__ = ["get_app_settings", "get_db", "get_storage"]
