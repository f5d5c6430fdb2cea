"""
Dependencies that hand the process-wide DB gateway to route handlers.
"""

from __future__ import annotations

from fastapi import Depends, Request

from core.db import Database

from .repository import UserRepository


def get_database(request: Request) -> Database:
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database is not configured on the application.")
    return database


def get_user_repository(database: Database = Depends(get_database)) -> UserRepository:
    return UserRepository(database)
