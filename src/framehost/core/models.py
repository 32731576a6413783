"""Core data models shared by the runtime, frameworks and services."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from framehost.core.interfaces.framework import Framework


class HostConfig(BaseModel):
    """Startup configuration handed to ``init`` and to every framework.

    ``document``, ``element`` and ``comment`` are the virtual-DOM classes the
    host provides; ``send_tasks`` is the bridge callback frameworks use to
    push render tasks back to the native side. ``environment`` is the
    process-wide environment snapshot copied into each instance config.
    """

    frameworks: dict[str, Framework] = Field(default_factory=dict)
    document: Any = None
    element: Any = None
    comment: Any = None
    send_tasks: Callable[..., Any] | None = None
    environment: dict[str, Any] = Field(default_factory=dict)

    model_config = {"arbitrary_types_allowed": True}


class InstanceRecord(BaseModel):
    """Metadata for one live instance.

    ``descriptor`` keeps the whole parsed bundle header, so services can read
    keys beyond ``framework`` and ``version``.
    """

    framework: str
    bundle_version: str | None = None
    created_at: datetime
    descriptor: dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


@dataclass(frozen=True)
class ServiceContext:
    """Context passed to service lifecycle hooks."""

    info: InstanceRecord
    runtime: HostConfig
