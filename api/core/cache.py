"""
Key-value cache client (Redis over the Upstash REST protocol).

Every call POSTs one Redis command as a JSON array:

    POST $CACHE_REST_URL
    Authorization: Bearer $CACHE_REST_TOKEN
    ["SET", "auth:uuid:...", "", "EX", 3600, "NX"]

and the reply is either {"result": ...} or {"error": "..."}.
"""

from __future__ import annotations

import os
from typing import Any

import httpx


class CacheError(RuntimeError):
    pass


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def cache_rest_url() -> str:
    url = os.environ.get("CACHE_REST_URL", "").strip()
    if not url:
        raise CacheError("CACHE_REST_URL is not set.")
    return url.rstrip("/")


def cache_rest_token() -> str:
    return os.environ.get("CACHE_REST_TOKEN", "").strip()


def _client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=_env_float("CACHE_TIMEOUT_S", 10.0))


async def command(*args: Any) -> Any:
    """
    Run a single Redis command and return its `result`.
    """
    if not args:
        raise CacheError("Empty cache command.")

    headers = {"Content-Type": "application/json"}
    token = cache_rest_token()
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        async with _client() as client:
            resp = await client.post(cache_rest_url(), headers=headers, json=list(args))
    except httpx.HTTPError as exc:
        raise CacheError(f"Cache request failed: {exc}") from exc

    if resp.status_code != 200:
        raise CacheError(f"Cache {args[0]} failed: {resp.status_code} {resp.text[:300]}")

    data: dict[str, Any] = resp.json()
    if data.get("error"):
        raise CacheError(f"Cache {args[0]} failed: {data['error']}")
    return data.get("result")


async def get(key: str) -> str | None:
    result = await command("GET", key)
    return None if result is None else str(result)


async def exists(key: str) -> bool:
    return int(await command("EXISTS", key) or 0) > 0


async def set(
    key: str,
    value: str,
    *,
    ttl_s: int | None = None,
    only_if_absent: bool = False,
) -> bool:
    """
    SET a key. Returns False when `only_if_absent` was requested and the key
    already existed.
    """
    args: list[Any] = ["SET", key, value]
    if ttl_s is not None:
        args.extend(["EX", int(ttl_s)])
    if only_if_absent:
        args.append("NX")
    return await command(*args) == "OK"
