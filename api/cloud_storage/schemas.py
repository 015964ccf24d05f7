"""
Pydantic schemas for cloud storage conversion endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from core.types import UUIDv4


class FileConvertRequest(BaseModel):
    file_uuid: UUIDv4 = Field(..., alias="fileUUID")
