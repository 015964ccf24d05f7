"""
Auth security helpers.
"""

from __future__ import annotations

import os
import time
from typing import Any

import jwt


class AuthSecurityError(RuntimeError):
    pass


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return os.environ.get("JWT_SECRET", "dev-change-this-secret").strip() or "dev-change-this-secret"


def jwt_algorithm() -> str:
    return os.environ.get("JWT_ALG", "HS256").strip() or "HS256"


def access_token_expire_days() -> int:
    return _env_int("ACCESS_TOKEN_EXPIRE_DAYS", 29)


def now_epoch_s() -> int:
    return int(time.time())


def build_access_token(*, user_uuid: str, login_source: str) -> str:
    issued_at = now_epoch_s()
    expires_at = issued_at + (access_token_expire_days() * 24 * 60 * 60)

    payload = {
        "sub": user_uuid,
        "userUUID": user_uuid,
        "loginSource": login_source,
        "type": "access",
        "iat": issued_at,
        "exp": expires_at,
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        payload = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    # Tokens issued by the OAuth callback carry no "type" claim.
    token_type = payload.get("type")
    if token_type is not None and str(token_type).strip().lower() != "access":
        raise AuthSecurityError("Token is not an access token.")

    user_uuid = str(payload.get("userUUID") or payload.get("sub") or "").strip()
    if not user_uuid:
        raise AuthSecurityError("Access token has no subject.")

    return payload
