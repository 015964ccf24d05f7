"""
Login API endpoints. None of these require authentication.
"""

from __future__ import annotations

from fastapi import APIRouter

from core.responses import ok

from . import schemas, service

router = APIRouter(prefix="/login")


@router.post("/set-auth-uuid")
async def set_auth_uuid(request: schemas.AuthUUIDRequest) -> dict:
    return ok(await service.set_auth_uuid(request.auth_uuid))


@router.post("/process")
async def login_process(request: schemas.AuthUUIDRequest) -> dict:
    return ok(await service.process(request.auth_uuid))
