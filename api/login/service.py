"""
Login state business logic.
"""

from __future__ import annotations

import logging

from core.errors import ControllerError
from core.responses import ErrorCode

from . import repository

logger = logging.getLogger(__name__)

# Provider error strings -> internal codes. Anything else is a generic failure.
FAILED_REASON_CODES: dict[str, ErrorCode] = {
    "application_suspended": ErrorCode.LoginGithubSuspended,
    "redirect_uri_mismatch": ErrorCode.LoginGithubURLMismatch,
    "access_denied": ErrorCode.LoginGithubAccessDenied,
}

EMPTY_USER_INFO = {"name": "", "avatar": "", "userUUID": "", "token": ""}


def failed_reason_code(reason: str) -> ErrorCode:
    return FAILED_REASON_CODES.get(reason, ErrorCode.CurrentProcessFailed)


async def assert_has_auth_uuid(auth_uuid: str) -> None:
    if not await repository.has_auth_uuid(auth_uuid):
        logger.info("auth_uuid_verification_failed auth_uuid=%s", auth_uuid)
        raise ControllerError(ErrorCode.ParamsCheckFailed)


async def set_auth_uuid(auth_uuid: str) -> dict:
    if not await repository.register_auth_uuid(auth_uuid):
        logger.info("auth_uuid_already_registered auth_uuid=%s", auth_uuid)
        raise ControllerError(ErrorCode.ParamsCheckFailed)
    return {}


async def process(auth_uuid: str) -> dict:
    """
    Report the OAuth outcome for `auth_uuid`.

    Until the callback lands, an empty user info is returned and the client
    keeps polling.
    """
    await assert_has_auth_uuid(auth_uuid)

    failed_reason = await repository.get_failed_reason(auth_uuid)
    if failed_reason is not None:
        logger.info("login_failed auth_uuid=%s reason=%s", auth_uuid, failed_reason)
        raise ControllerError(failed_reason_code(failed_reason))

    user_info = await repository.get_user_info(auth_uuid)
    if user_info is None:
        return dict(EMPTY_USER_INFO)

    return user_info
