"""
Login state persistence.

The OAuth callback writes its outcome into the cache under the auth UUID the
browser registered before it was redirected to the provider:

    auth:uuid:<uuid>      registered, value ""
    auth:failed:<uuid>    provider error string (e.g. "access_denied")
    auth:userInfo:<uuid>  JSON {"name", "avatar", "userUUID", "token"}
"""

from __future__ import annotations

import json
import os

from core import cache


def auth_uuid_key(auth_uuid: str) -> str:
    return f"auth:uuid:{auth_uuid}"


def auth_failed_key(auth_uuid: str) -> str:
    return f"auth:failed:{auth_uuid}"


def auth_user_info_key(auth_uuid: str) -> str:
    return f"auth:userInfo:{auth_uuid}"


def auth_uuid_ttl_s() -> int:
    raw = os.environ.get("AUTH_UUID_TTL_S", "").strip()
    try:
        return int(raw) if raw else 60 * 60
    except ValueError:
        return 60 * 60


async def register_auth_uuid(auth_uuid: str) -> bool:
    """
    Returns False when the auth UUID was already registered.
    """
    return await cache.set(
        auth_uuid_key(auth_uuid),
        "",
        ttl_s=auth_uuid_ttl_s(),
        only_if_absent=True,
    )


async def has_auth_uuid(auth_uuid: str) -> bool:
    return await cache.exists(auth_uuid_key(auth_uuid))


async def get_failed_reason(auth_uuid: str) -> str | None:
    return await cache.get(auth_failed_key(auth_uuid))


async def get_user_info(auth_uuid: str) -> dict | None:
    raw = await cache.get(auth_user_info_key(auth_uuid))
    if raw is None:
        return None
    return json.loads(raw)
