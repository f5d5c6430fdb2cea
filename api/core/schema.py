"""
Idempotent table bootstrap, run once on startup.

`users` must exist before `todos` because of the foreign key. Deleting a user
cascades to its todos at the database level; no endpoint touches `todos`.
"""

from __future__ import annotations

import logging

from .db import Database

logger = logging.getLogger(__name__)

USERS_DDL = """
CREATE TABLE IF NOT EXISTS users (
    id SERIAL PRIMARY KEY,
    name VARCHAR(100) NOT NULL,
    email VARCHAR(150) UNIQUE NOT NULL,
    age INT,
    phone VARCHAR(15),
    address TEXT,
    created_at TIMESTAMP DEFAULT NOW(),
    updated_at TIMESTAMP DEFAULT NOW()
)
"""

TODOS_DDL = """
CREATE TABLE IF NOT EXISTS todos (
    id SERIAL PRIMARY KEY,
    user_id INT REFERENCES users(id) ON DELETE CASCADE,
    title VARCHAR(200) NOT NULL,
    description TEXT,
    completed BOOLEAN DEFAULT false,
    due_date DATE,
    created_at TIMESTAMP DEFAULT NOW(),
    updated_at TIMESTAMP DEFAULT NOW()
)
"""

STATEMENTS = (USERS_DDL, TODOS_DDL)


async def init_schema(database: Database) -> None:
    for statement in STATEMENTS:
        await database.execute(statement)
    logger.info("Schema ready (users, todos)")
