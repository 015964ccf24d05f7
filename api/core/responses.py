"""
Response envelope shared by every business endpoint.

Clients always receive HTTP 200 and branch on `status`:

    {"status": 0, "data": {...}}
    {"status": 1, "code": 700003}
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class Status(IntEnum):
    NoLogin = -1
    Success = 0
    Failed = 1
    Process = 2
    AuthFailed = 3


class ErrorCode(IntEnum):
    ParamsCheckFailed = 100000
    ServerFail = 100001
    CurrentProcessFailed = 100002
    NotPermission = 100003
    NeedLoginAgain = 100004

    FileNotFound = 700003
    FileIsConverted = 700007
    FileConvertFailed = 700008
    FileIsConverting = 700009
    FileIsConvertWaiting = 700010

    LoginGithubSuspended = 800000
    LoginGithubURLMismatch = 800001
    LoginGithubAccessDenied = 800002


def ok(data: dict[str, Any] | None = None) -> dict[str, Any]:
    return {"status": int(Status.Success), "data": data if data is not None else {}}


def failed(code: ErrorCode, *, status: Status = Status.Failed) -> dict[str, Any]:
    return {"status": int(status), "code": int(code)}
