"""
Pydantic schemas for login endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.types import UUIDv4


class AuthUUIDRequest(BaseModel):
    auth_uuid: UUIDv4 = Field(..., alias="authUUID")
