"""Service lifecycle hook interface.

Services observe every instance's lifecycle without frameworks knowing they
exist. All three hooks are optional; ``Service.supports`` decides which ones
the runtime calls.
"""

from __future__ import annotations

from abc import ABC
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from framehost.core.models import ServiceContext


class ServiceHook(StrEnum):
    """Lifecycle hooks a service may implement."""

    CREATE = "create"
    REFRESH = "refresh"
    DESTROY = "destroy"


class Service(ABC):
    """Base class for services.

    Override any of ``create``, ``refresh`` or ``destroy``. Hooks left at the
    base definition are reported as unsupported and skipped.
    """

    def create(
        self, instance_id: str, ctx: ServiceContext, config: dict[str, Any]
    ) -> Mapping[str, Any] | None:
        """Called before the framework creates the instance.

        Returns:
            Objects to expose to the framework as service objects, or None
        """
        return None

    def refresh(self, instance_id: str, ctx: ServiceContext) -> None:
        """Called after the framework refreshed the instance."""

    def destroy(self, instance_id: str, ctx: ServiceContext) -> None:
        """Called after the framework destroyed the instance, before its record is dropped."""

    def supports(self, hook: ServiceHook) -> bool:
        return getattr(type(self), hook.value) is not getattr(Service, hook.value)


class CallbackService(Service):
    """Service assembled from plain callables.

    Example:
        CallbackService(create=lambda id, ctx, config: {"clock": Clock()})
    """

    def __init__(
        self,
        create: Callable[[str, ServiceContext, dict[str, Any]], Mapping[str, Any] | None] | None = None,
        refresh: Callable[[str, ServiceContext], None] | None = None,
        destroy: Callable[[str, ServiceContext], None] | None = None,
    ) -> None:
        self._hooks: dict[ServiceHook, Callable[..., Any] | None] = {
            ServiceHook.CREATE: create,
            ServiceHook.REFRESH: refresh,
            ServiceHook.DESTROY: destroy,
        }

    def create(
        self, instance_id: str, ctx: ServiceContext, config: dict[str, Any]
    ) -> Mapping[str, Any] | None:
        hook = self._hooks[ServiceHook.CREATE]
        return hook(instance_id, ctx, config) if hook else None

    def refresh(self, instance_id: str, ctx: ServiceContext) -> None:
        hook = self._hooks[ServiceHook.REFRESH]
        if hook:
            hook(instance_id, ctx)

    def destroy(self, instance_id: str, ctx: ServiceContext) -> None:
        hook = self._hooks[ServiceHook.DESTROY]
        if hook:
            hook(instance_id, ctx)

    def supports(self, hook: ServiceHook) -> bool:
        return self._hooks[hook] is not None
