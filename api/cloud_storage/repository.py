"""
Cloud storage persistence (raw SQL).
"""

from __future__ import annotations

import logging

from core import db

logger = logging.getLogger(__name__)


async def user_owns_file(*, file_uuid: str, user_uuid: str) -> bool:
    row = await db.fetch_one(
        """
        SELECT id
        FROM cloud_storage_user_files
        WHERE file_uuid = $1
          AND user_uuid = $2
          AND is_delete = false
        LIMIT 1
        """,
        file_uuid,
        user_uuid,
    )
    return row is not None


async def get_file_conversion_info(file_uuid: str) -> dict | None:
    return await db.fetch_one(
        """
        SELECT file_url, convert_step, task_uuid, region
        FROM cloud_storage_files
        WHERE file_uuid = $1
          AND is_delete = false
        LIMIT 1
        """,
        file_uuid,
    )


async def update_convert_step(file_uuid: str, convert_step: str) -> bool:
    """
    Returns False when no live row matched (e.g. the file was deleted meanwhile).
    """
    tag = await db.execute(
        """
        UPDATE cloud_storage_files
        SET convert_step = $2,
            updated_at = now()
        WHERE file_uuid = $1
          AND is_delete = false
        """,
        file_uuid,
        convert_step,
    )
    if tag == "UPDATE 0":
        logger.warning("convert_step_not_updated file_uuid=%s convert_step=%s", file_uuid, convert_step)
        return False
    return True


async def start_conversion(file_uuid: str, *, task_uuid: str, convert_step: str) -> None:
    await db.execute(
        """
        UPDATE cloud_storage_files
        SET task_uuid = $2,
            convert_step = $3,
            updated_at = now()
        WHERE file_uuid = $1
          AND is_delete = false
        """,
        file_uuid,
        task_uuid,
        convert_step,
    )
