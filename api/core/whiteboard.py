"""
Whiteboard conversion service HTTP client.

Used endpoints (relative to WHITEBOARD_BASE_URL):
- POST /services/conversion/tasks          -> {"uuid": "...", "type": "...", "status": "..."}
- GET  /services/conversion/tasks/{uuid}   -> {"uuid": "...", "status": "Waiting|Converting|Finished|Fail", ...}

Both require `token` (SDK token) and `region` headers.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import os
import time
import uuid
from typing import Any
from urllib.parse import quote, urlencode

import httpx

DEFAULT_BASE_URL = "https://api.netless.link/v5"
SDK_TOKEN_PREFIX = "NETLESSSDK_"


class WhiteboardError(RuntimeError):
    pass


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def whiteboard_base_url() -> str:
    return (os.environ.get("WHITEBOARD_BASE_URL", DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL).rstrip("/")


def whiteboard_timeout_s() -> float:
    return _env_float("WHITEBOARD_TIMEOUT_S", 15.0)


def _format_token_fields(fields: dict[str, str]) -> str:
    return urlencode(sorted(fields.items()), quote_via=quote)


def create_sdk_token(access_key: str, secret_access_key: str, *, lifespan_ms: int = 0) -> str:
    """
    Build an admin ("role": "0") SDK token signed with the secret access key.
    """
    if not access_key or not secret_access_key:
        raise WhiteboardError("Whiteboard access key pair is not configured.")

    fields: dict[str, str] = {"role": "0", "ak": access_key, "nonce": str(uuid.uuid1())}
    if lifespan_ms > 0:
        fields["expireAt"] = str(int(time.time() * 1000) + lifespan_ms)

    information = _format_token_fields(fields)
    fields["sig"] = hmac.new(
        secret_access_key.encode("utf-8"),
        information.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()

    encoded = base64.urlsafe_b64encode(_format_token_fields(fields).encode("utf-8")).decode("ascii")
    return SDK_TOKEN_PREFIX + encoded.rstrip("=")


def sdk_token() -> str:
    static = os.environ.get("WHITEBOARD_SDK_TOKEN", "").strip()
    if static:
        return static
    return create_sdk_token(
        os.environ.get("WHITEBOARD_ACCESS_KEY", "").strip(),
        os.environ.get("WHITEBOARD_SECRET_ACCESS_KEY", "").strip(),
        lifespan_ms=60 * 60 * 1000,
    )


def _client(**kwargs: Any) -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=whiteboard_timeout_s(), **kwargs)


def _headers(region: str) -> dict[str, str]:
    return {"token": sdk_token(), "region": region}


async def query_conversion_task(region: str, task_uuid: str, resource_type: str) -> dict[str, Any]:
    """
    Fetch the current state of a conversion task.
    """
    if not task_uuid:
        raise WhiteboardError("Conversion task uuid is empty.")

    async with _client(base_url=whiteboard_base_url()) as client:
        resp = await client.get(
            f"/services/conversion/tasks/{task_uuid}",
            params={"type": resource_type},
            headers=_headers(region),
        )

    if resp.status_code != 200:
        raise WhiteboardError(f"Query conversion task failed: {resp.status_code} {resp.text[:500]}")

    data: dict[str, Any] = resp.json()
    if not isinstance(data.get("status"), str):
        raise WhiteboardError("Conversion service returned no task status.")
    return data


async def create_conversion_task(region: str, resource: str, resource_type: str) -> dict[str, Any]:
    payload: dict[str, Any] = {"resource": resource, "type": resource_type}
    if resource_type == "static":
        payload["scale"] = 1.2
        payload["outputFormat"] = "png"
    else:
        payload["preview"] = True

    async with _client(base_url=whiteboard_base_url()) as client:
        resp = await client.post(
            "/services/conversion/tasks",
            json=payload,
            headers=_headers(region),
        )

    if resp.status_code not in (200, 201):
        raise WhiteboardError(f"Create conversion task failed: {resp.status_code} {resp.text[:500]}")

    data: dict[str, Any] = resp.json()
    if not data.get("uuid"):
        raise WhiteboardError("Conversion service returned no task uuid.")
    return data


async def head_object(url: str) -> httpx.Response:
    """
    HEAD an object in storage. The caller decides what a status code means.
    """
    async with _client(follow_redirects=True) as client:
        return await client.head(url)
