"""
Cloud storage conversion API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from auth import dependencies as auth_dependencies
from core.responses import ok

from . import schemas, service

router = APIRouter(prefix="/cloud-storage")


@router.post("/convert/start")
async def convert_start(
    request: schemas.FileConvertRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    data = await service.start_conversion(
        file_uuid=request.file_uuid,
        user_uuid=current_user["user_uuid"],
    )
    return ok(data)


@router.post("/convert/finish")
async def convert_finish(
    request: schemas.FileConvertRequest,
    current_user: dict = Depends(auth_dependencies.get_current_user),
) -> dict:
    """
    Poll the conversion task of a file until it is done.
    """
    data = await service.finish_conversion(
        file_uuid=request.file_uuid,
        user_uuid=current_user["user_uuid"],
    )
    return ok(data)
