"""
Cloud storage conversion business logic.

`finish_conversion` is polled by the browser until the file leaves the
converting state. Terminal outcomes reported by the conversion service are
persisted so later polls are answered from the database alone.
"""

from __future__ import annotations

import logging

from core import whiteboard
from core.errors import ControllerError
from core.responses import ErrorCode

from . import conversion, repository
from .conversion import ConversionStatus, FileConvertStep, Region

logger = logging.getLogger(__name__)


async def _load_owned_file(*, file_uuid: str, user_uuid: str) -> dict:
    if not await repository.user_owns_file(file_uuid=file_uuid, user_uuid=user_uuid):
        raise ControllerError(ErrorCode.FileNotFound)

    file_info = await repository.get_file_conversion_info(file_uuid)
    if file_info is None:
        raise ControllerError(ErrorCode.FileNotFound)
    return file_info


def _assert_region_supported(region: str | None, *, file_uuid: str) -> str:
    if not region or region == Region.NONE.value:
        raise RuntimeError(f"unsupported current file conversion (file_uuid={file_uuid})")
    return region


async def query_conversion_status(resource: str, task_uuid: str, region: str) -> ConversionStatus:
    if conversion.is_courseware(resource):
        resp = await whiteboard.head_object(conversion.courseware_result_url(resource))
        if resp.status_code == 404:
            return "Converting"
        if resp.status_code >= 400:
            raise whiteboard.WhiteboardError(
                f"Courseware result lookup failed: {resp.status_code} {resource}"
            )
        return "Finished" if resp.headers.get("x-oss-meta-success") == "true" else "Fail"

    result = await whiteboard.query_conversion_task(region, task_uuid, conversion.determine_type(resource))
    return result["status"]


async def finish_conversion(*, file_uuid: str, user_uuid: str) -> dict:
    file_info = await _load_owned_file(file_uuid=file_uuid, user_uuid=user_uuid)
    convert_step = file_info.get("convert_step")

    if conversion.is_convert_done(convert_step):
        raise ControllerError(ErrorCode.FileIsConverted)

    if conversion.is_convert_failed(convert_step):
        raise ControllerError(ErrorCode.FileConvertFailed)

    region = _assert_region_supported(file_info.get("region"), file_uuid=file_uuid)

    status = await query_conversion_status(
        str(file_info["file_url"]),
        str(file_info.get("task_uuid") or ""),
        region,
    )

    if status == "Finished":
        await repository.update_convert_step(file_uuid, FileConvertStep.Done.value)
        logger.info("convert_finished file_uuid=%s", file_uuid)
        return {}

    if status == "Fail":
        await repository.update_convert_step(file_uuid, FileConvertStep.Failed.value)
        logger.info("convert_failed file_uuid=%s", file_uuid)
        raise ControllerError(ErrorCode.FileConvertFailed)

    if status == "Waiting":
        raise ControllerError(ErrorCode.FileIsConvertWaiting)

    raise ControllerError(ErrorCode.FileIsConverting)


async def start_conversion(*, file_uuid: str, user_uuid: str) -> dict:
    file_info = await _load_owned_file(file_uuid=file_uuid, user_uuid=user_uuid)
    convert_step = file_info.get("convert_step")

    if conversion.is_convert_done(convert_step):
        raise ControllerError(ErrorCode.FileIsConverted)

    if conversion.is_converting(convert_step):
        raise ControllerError(ErrorCode.FileIsConverting)

    region = _assert_region_supported(file_info.get("region"), file_uuid=file_uuid)
    resource = str(file_info["file_url"])
    resource_type = conversion.determine_type(resource)

    # Courseware is converted by the storage pipeline; there is no remote task.
    task_uuid = ""
    if not conversion.is_courseware(resource):
        task = await whiteboard.create_conversion_task(region, resource, resource_type)
        task_uuid = str(task["uuid"])

    await repository.start_conversion(
        file_uuid,
        task_uuid=task_uuid,
        convert_step=FileConvertStep.Converting.value,
    )
    logger.info(
        "convert_started file_uuid=%s task_uuid=%s type=%s region=%s",
        file_uuid,
        task_uuid,
        resource_type,
        region,
    )
    return {"taskUUID": task_uuid, "resourceType": resource_type}
