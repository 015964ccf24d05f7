"""
Auth business logic.
"""

from __future__ import annotations

import logging

from core.errors import ControllerError
from core.responses import ErrorCode, Status

from . import repository, security

logger = logging.getLogger(__name__)


def _need_login_again() -> ControllerError:
    return ControllerError(ErrorCode.NeedLoginAgain, status=Status.AuthFailed)


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        payload = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        logger.info("access_token_rejected reason=%s", exc)
        raise _need_login_again() from exc

    user_uuid = str(payload.get("userUUID") or payload.get("sub")).strip()
    user_row = await repository.get_user_by_uuid(user_uuid)
    if user_row is None:
        logger.info("access_token_user_missing user_uuid=%s", user_uuid)
        raise _need_login_again()

    return {
        "user_uuid": str(user_row["user_uuid"]),
        "user_name": str(user_row.get("user_name") or ""),
        "login_source": str(payload.get("loginSource") or ""),
    }
