"""Framework (rendering backend) interface.

A framework is the pluggable implementation an instance is bound to. Only
``init`` and ``create_instance`` are required; every other handler is an
optional capability. ``Framework.supports`` is the single place that decides
whether a capability is present:

- the fan-out generator skips frameworks that do not support a method
- the instance router reports METHOD_NOT_SUPPORTED for them

Implementations: provided by the host (one per UI framework).
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from framehost.core.errors import MethodNotSupportedError

if TYPE_CHECKING:
    from framehost.core.models import HostConfig


class FrameworkMethod(StrEnum):
    """Framework methods by their external (bridge) name."""

    CREATE_INSTANCE = "createInstance"
    DESTROY_INSTANCE = "destroyInstance"
    REFRESH_INSTANCE = "refreshInstance"
    RECEIVE_TASKS = "receiveTasks"
    GET_ROOT = "getRoot"
    REGISTER_COMPONENTS = "registerComponents"
    REGISTER_MODULES = "registerModules"
    REGISTER_METHODS = "registerMethods"

    @property
    def handler(self) -> str:
        """Python attribute implementing this method (``getRoot`` -> ``get_root``)."""
        return re.sub(r"(?<!^)(?=[A-Z])", "_", self.value).lower()


# Registration-time methods broadcast to every framework
FANOUT_METHODS: tuple[FrameworkMethod, ...] = (
    FrameworkMethod.REGISTER_COMPONENTS,
    FrameworkMethod.REGISTER_MODULES,
    FrameworkMethod.REGISTER_METHODS,
)

# Per-instance methods routed to the owning framework
INSTANCE_METHODS: tuple[FrameworkMethod, ...] = (
    FrameworkMethod.DESTROY_INSTANCE,
    FrameworkMethod.REFRESH_INSTANCE,
    FrameworkMethod.RECEIVE_TASKS,
    FrameworkMethod.GET_ROOT,
)


class Framework(ABC):
    """Interface for rendering-framework backends.

    Subclasses override the optional handlers they implement. The base
    handlers raise MethodNotSupportedError and are never called by the
    runtime, which checks ``supports`` first.
    """

    @abstractmethod
    def init(self, config: HostConfig) -> None:
        """Initialize the framework once at runtime startup.

        Args:
            config: Host configuration (virtual-DOM classes, task bridge, environment)
        """
        ...

    @abstractmethod
    def create_instance(
        self,
        instance_id: str,
        code: str,
        config: dict[str, Any],
        data: Any,
        service_objects: Mapping[str, Any],
    ) -> Any:
        """Create an instance from bundle code.

        Args:
            instance_id: Instance identifier
            code: Bundle source text
            config: Private configuration snapshot for this instance
            data: Initial data supplied by the host
            service_objects: Objects contributed by service create hooks

        Returns:
            Framework-defined result, returned to the bridge unchanged
        """
        ...

    def destroy_instance(self, instance_id: str, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.DESTROY_INSTANCE, instance_id)

    def refresh_instance(self, instance_id: str, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.REFRESH_INSTANCE, instance_id)

    def receive_tasks(self, instance_id: str, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.RECEIVE_TASKS, instance_id)

    def get_root(self, instance_id: str, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.GET_ROOT, instance_id)

    def register_components(self, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.REGISTER_COMPONENTS)

    def register_modules(self, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.REGISTER_MODULES)

    def register_methods(self, *args: Any) -> Any:
        raise MethodNotSupportedError(type(self).__name__, FrameworkMethod.REGISTER_METHODS)

    def supports(self, method: FrameworkMethod) -> bool:
        """Check whether this framework implements ``method``.

        A handler counts as implemented when the subclass overrides the base
        definition. Required methods are always supported.
        """
        impl = getattr(type(self), method.handler, None)
        if impl is None:
            return False
        return impl is not getattr(Framework, method.handler)

    def call(self, method: FrameworkMethod, *args: Any, **kwargs: Any) -> Any:
        """Invoke the handler for ``method``."""
        return getattr(self, method.handler)(*args, **kwargs)
