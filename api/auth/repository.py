"""
Auth persistence helpers.
"""

from __future__ import annotations

from core import db


async def get_user_by_uuid(user_uuid: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT user_uuid, user_name, avatar_url
        FROM users
        WHERE user_uuid = $1
          AND is_delete = false
        """,
        user_uuid,
    )
