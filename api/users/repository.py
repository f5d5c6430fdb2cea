"""
Users persistence (raw SQL).

Each method issues exactly one statement. Driver errors propagate to the
service layer, which classifies them.
"""

from __future__ import annotations

from typing import Any

from core.db import Database


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database

    async def create_user(self, *, name: str, email: str) -> dict[str, Any] | None:
        return await self.database.fetch_one(
            """
            INSERT INTO users (name, email)
            VALUES ($1, $2)
            RETURNING *
            """,
            name,
            email,
        )

    async def list_users(self) -> list[dict[str, Any]]:
        return await self.database.fetch_all(
            """
            SELECT *
            FROM users
            """
        )

    async def get_user_by_id(self, user_id: int) -> dict[str, Any] | None:
        return await self.database.fetch_one(
            """
            SELECT *
            FROM users
            WHERE id = $1
            """,
            user_id,
        )

    async def update_user(self, user_id: int, *, name: str, email: str) -> dict[str, Any] | None:
        """
        Overwrite name and email. Returns None when no row matched.
        """
        return await self.database.fetch_one(
            """
            UPDATE users
            SET name = $1,
                email = $2,
                updated_at = now()
            WHERE id = $3
            RETURNING *
            """,
            name,
            email,
            user_id,
        )

    async def delete_user(self, user_id: int) -> dict[str, Any] | None:
        """
        Hard delete; dependent todos go with it (ON DELETE CASCADE).
        Returns the deleted id, or None when not found.
        """
        return await self.database.fetch_one(
            """
            DELETE FROM users
            WHERE id = $1
            RETURNING id
            """,
            user_id,
        )
