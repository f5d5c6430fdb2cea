"""
Users business logic.

Every operation returns a tagged result (Found / NotFound / StoreFailure)
so the router can map outcomes to status codes in one place.
"""

from __future__ import annotations

import logging

from fastapi import status

from core import errors
from core.db import STORE_ERRORS
from core.responses import Found, NotFound, Result, StoreFailure

from . import schemas
from .repository import UserRepository

logger = logging.getLogger(__name__)


async def create_user(repo: UserRepository, payload: schemas.UserWriteRequest) -> Result:
    try:
        row = await repo.create_user(name=payload.name, email=payload.email)
    except STORE_ERRORS as exc:
        return errors.classify_store_error(exc)

    if row is None:
        return StoreFailure(
            errors.STORE_ERROR,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to create user.",
        )
    logger.info("Created user id=%s", row.get("id"))
    return Found([row])


async def list_users(repo: UserRepository) -> Result:
    try:
        rows = await repo.list_users()
    except STORE_ERRORS as exc:
        return errors.classify_store_error(exc)
    return Found(rows)


async def get_user(repo: UserRepository, user_id: int) -> Result:
    try:
        row = await repo.get_user_by_id(user_id)
    except STORE_ERRORS as exc:
        return errors.classify_store_error(exc)

    if row is None:
        return NotFound()
    return Found([row])


async def update_user(repo: UserRepository, user_id: int, payload: schemas.UserWriteRequest) -> Result:
    try:
        row = await repo.update_user(user_id, name=payload.name, email=payload.email)
    except STORE_ERRORS as exc:
        return errors.classify_store_error(exc)

    if row is None:
        return NotFound()
    logger.info("Updated user id=%s", user_id)
    # Single object, not a list.
    return Found(row)


async def delete_user(repo: UserRepository, user_id: int) -> Result:
    try:
        row = await repo.delete_user(user_id)
    except STORE_ERRORS as exc:
        return errors.classify_store_error(exc)

    if row is None:
        return NotFound()
    logger.info("Deleted user id=%s", user_id)
    return Found()
