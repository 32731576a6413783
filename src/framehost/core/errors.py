"""Error handling module for framehost.

This module defines error codes, exception classes, and the error detail model.

Exceptions are raised inside the runtime and converted to result values at
the public method table, so the bridge only ever inspects return values:

    DispatchResult(
        status="error",
        error=ErrorDetail(code="INVALID_INSTANCE_ID", message='invalid instance id "x"'),
    )

Usage:
    from framehost.core.errors import InvalidInstanceIdError

    raise InvalidInstanceIdError("instance-1")
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel

if TYPE_CHECKING:
    from framehost.core.result import DispatchResult


class ErrorCode(str, Enum):
    """Error codes."""

    INVALID_INSTANCE_ID = "INVALID_INSTANCE_ID"
    METHOD_NOT_SUPPORTED = "METHOD_NOT_SUPPORTED"
    FRAMEWORK_NOT_FOUND = "FRAMEWORK_NOT_FOUND"
    UNKNOWN_METHOD = "UNKNOWN_METHOD"


class ErrorDetail(BaseModel):
    """Error detail containing code, message and the offending instance id."""

    code: str
    message: str
    instance_id: str | None = None

    model_config = {"frozen": True}


class FrameHostError(Exception):
    """Base exception for framehost.

    Attributes:
        code: The error code from ErrorCode enum
        message: Human-readable error message
        instance_id: Instance the failing call referenced, if any
    """

    def __init__(
        self, code: ErrorCode, message: str, instance_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.instance_id = instance_id
        super().__init__(message)

    def to_detail(self) -> ErrorDetail:
        """Convert exception to ErrorDetail model."""
        return ErrorDetail(
            code=self.code.value, message=self.message, instance_id=self.instance_id
        )

    def to_result(self) -> DispatchResult:
        """Convert exception to an error DispatchResult."""
        from framehost.core.result import DispatchResult

        return DispatchResult.failure(self.to_detail())


class InvalidInstanceIdError(FrameHostError):
    """Duplicate create, or a call referencing an unknown instance id."""

    def __init__(self, instance_id: str) -> None:
        super().__init__(
            ErrorCode.INVALID_INSTANCE_ID,
            f'invalid instance id "{instance_id}"',
            instance_id,
        )


class MethodNotSupportedError(FrameHostError):
    """The framework owning an instance does not implement the called method."""

    def __init__(self, framework: str, method: str, instance_id: str | None = None) -> None:
        self.framework = framework
        self.method = method
        super().__init__(
            ErrorCode.METHOD_NOT_SUPPORTED,
            f'framework "{framework}" does not support "{method}"',
            instance_id,
        )


class FrameworkNotFoundError(FrameHostError):
    """Neither the declared nor the default framework is registered."""

    def __init__(self, framework: str, instance_id: str | None = None) -> None:
        self.framework = framework
        super().__init__(
            ErrorCode.FRAMEWORK_NOT_FOUND,
            f'framework "{framework}" is not registered',
            instance_id,
        )


class UnknownMethodError(FrameHostError):
    """The method table has no entry under this name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(ErrorCode.UNKNOWN_METHOD, f'unknown method "{name}"')
