"""Dispatch result values returned by every public runtime method."""

from enum import Enum
from typing import Any

from pydantic import BaseModel

from framehost.core.errors import ErrorDetail


class DispatchStatus(str, Enum):
    """Dispatch status values."""

    OK = "ok"
    ERROR = "error"


class DispatchResult(BaseModel):
    """Tagged success/error value.

    ``value`` holds whatever the framework returned, untouched. Framework
    failures reported as return values stay inside an OK result; only errors
    detected by the runtime itself (unknown id, missing handler) produce an
    ERROR result.
    """

    status: DispatchStatus
    value: Any = None
    error: ErrorDetail | None = None

    model_config = {"frozen": True}

    @classmethod
    def success(cls, value: Any = None) -> "DispatchResult":
        return cls(status=DispatchStatus.OK, value=value)

    @classmethod
    def failure(cls, error: ErrorDetail) -> "DispatchResult":
        return cls(status=DispatchStatus.ERROR, error=error)

    @property
    def is_success(self) -> bool:
        """Check if the runtime dispatched the call."""
        return self.status == DispatchStatus.OK

    @property
    def is_error(self) -> bool:
        return self.status == DispatchStatus.ERROR
