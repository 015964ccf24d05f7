"""
Conversion rules that don't touch the database or the network.
"""

from __future__ import annotations

from enum import Enum
from pathlib import PurePosixPath
from typing import Literal
from urllib.parse import urlsplit, urlunsplit

ResourceType = Literal["static", "dynamic"]
ConversionStatus = Literal["Waiting", "Converting", "Finished", "Fail"]

COURSEWARE_EXTENSIONS = {".ice", ".vf"}


class FileConvertStep(str, Enum):
    None_ = "None"
    Converting = "Converting"
    Done = "Done"
    Failed = "Failed"


class Region(str, Enum):
    CN_HZ = "cn-hz"
    US_SV = "us-sv"
    SG = "sg"
    IN_MUM = "in-mum"
    GB_LON = "gb-lon"
    NONE = "none"


def _extension(resource: str) -> str:
    # Query strings on signed URLs must not leak into the extension.
    # Case-sensitive: ".PPTX" files were converted as static.
    return PurePosixPath(urlsplit(resource).path).suffix


def determine_type(resource: str) -> ResourceType:
    return "dynamic" if _extension(resource) == ".pptx" else "static"


def is_courseware(resource: str) -> bool:
    return _extension(resource) in COURSEWARE_EXTENSIONS


def is_convert_done(step: str | None) -> bool:
    return step == FileConvertStep.Done.value


def is_convert_failed(step: str | None) -> bool:
    return step == FileConvertStep.Failed.value


def is_converting(step: str | None) -> bool:
    return step == FileConvertStep.Converting.value


def courseware_result_url(resource: str) -> str:
    """
    The storage pipeline writes a `result` object next to the courseware file:

        https://host/dir/name.ice -> https://host/dir/result
    """
    parts = urlsplit(resource)
    path = parts.path
    directory = path[: len(path) - len(PurePosixPath(path).name)]
    return urlunsplit((parts.scheme, parts.netloc, f"{directory}result", "", ""))
