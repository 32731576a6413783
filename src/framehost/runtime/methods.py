"""Public method table and the generators that fill it.

Three kinds of entry points:
- fan-out (gen_init): registration calls broadcast to every framework
- instance-routed (gen_instance): calls delegated to the framework owning an id
- legacy alias (adapt_instance): an old bridge name forwarding to a routed method

Every entry point returns a DispatchResult. Runtime errors (unknown id,
missing handler) become error results; exceptions raised by frameworks or
services propagate unchanged.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from framehost.core.errors import (
    FrameHostError,
    FrameworkNotFoundError,
    InvalidInstanceIdError,
    MethodNotSupportedError,
)
from framehost.core.interfaces.element import ElementRegistry
from framehost.core.interfaces.framework import Framework, FrameworkMethod
from framehost.core.models import InstanceRecord, ServiceContext
from framehost.core.result import DispatchResult
from framehost.logging_schema import LogEvent
from framehost.metrics import DISPATCH_TOTAL

if TYPE_CHECKING:
    from framehost.runtime.host import HostRuntime

logger = logging.getLogger(__name__)

EntryPoint = Callable[..., DispatchResult]


class MethodTable(Mapping[str, EntryPoint]):
    """Read-only mapping from external method name to entry point."""

    def __init__(self, methods: Mapping[str, EntryPoint]) -> None:
        self._methods = dict(methods)

    def __getitem__(self, name: str) -> EntryPoint:
        return self._methods[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._methods)

    def __len__(self) -> int:
        return len(self._methods)

    def __repr__(self) -> str:
        return f"MethodTable({list(self._methods)})"


def entry_point(name: str) -> Callable[[Callable[..., DispatchResult]], EntryPoint]:
    """Convert FrameHostError into an error result and count the call."""

    def decorator(func: Callable[..., DispatchResult]) -> EntryPoint:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> DispatchResult:
            try:
                result = func(*args, **kwargs)
            except FrameHostError as e:
                if isinstance(e, InvalidInstanceIdError):
                    logger.warning(
                        "Invalid instance id",
                        extra={
                            "event": LogEvent.INVALID_INSTANCE_ID,
                            "method": name,
                            "instance_id": e.instance_id,
                        },
                    )
                result = e.to_result()
            DISPATCH_TOTAL.labels(method=name, result=result.status.value).inc()
            return result

        wrapper.__name__ = name
        wrapper.__qualname__ = name
        return wrapper

    return decorator


def check_component_methods(components: Any, elements: ElementRegistry) -> None:
    """Register component methods declared in a registerComponents payload.

    An entry is forwarded only when ``type`` is a non-empty string and
    ``methods`` is a list of method names; anything else is skipped, as is a
    payload that is not a list.
    """
    if not _is_list(components):
        return
    for component in components:
        if not isinstance(component, Mapping):
            continue
        type_name = component.get("type")
        methods = component.get("methods")
        if not isinstance(type_name, str) or not type_name or not _is_list(methods):
            continue
        names = [m for m in methods if isinstance(m, str)]
        if names:
            elements.register_element(type_name, names)


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _resolve(runtime: HostRuntime, instance_id: str) -> tuple[InstanceRecord, Framework]:
    record = runtime.instances.require(instance_id)
    framework = runtime.frameworks.get(record.framework)
    if framework is None:
        raise FrameworkNotFoundError(record.framework, instance_id)
    return record, framework


def _delegate(
    framework_name: str,
    framework: Framework,
    method: FrameworkMethod,
    instance_id: str,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> Any:
    if not framework.supports(method):
        logger.warning(
            "Framework does not support method",
            extra={
                "event": LogEvent.METHOD_NOT_SUPPORTED,
                "framework": framework_name,
                "method": method.value,
                "instance_id": instance_id,
            },
        )
        raise MethodNotSupportedError(framework_name, method, instance_id)
    return framework.call(method, instance_id, *args, **kwargs)


def gen_init(runtime: HostRuntime, method: FrameworkMethod) -> EntryPoint:
    """Build a fan-out entry point for a registration method."""

    @entry_point(method.value)
    def fan_out(*args: Any, **kwargs: Any) -> DispatchResult:
        if method is FrameworkMethod.REGISTER_COMPONENTS and args:
            check_component_methods(args[0], runtime.elements)
        for framework in runtime.frameworks.values():
            if framework.supports(method):
                framework.call(method, *args, **kwargs)
        return DispatchResult.success()

    return fan_out


def gen_instance(runtime: HostRuntime, method: FrameworkMethod) -> EntryPoint:
    """Build an entry point routed by instance id.

    Refresh and destroy run service hooks after the framework call, whatever
    its outcome. Destroy then drops the instance record unconditionally.
    """

    @entry_point(method.value)
    def route(instance_id: str, *args: Any, **kwargs: Any) -> DispatchResult:
        record, framework = _resolve(runtime, instance_id)
        ctx = ServiceContext(info=record, runtime=runtime.config)

        try:
            result = _delegate(record.framework, framework, method, instance_id, args, kwargs)
        finally:
            if method is FrameworkMethod.REFRESH_INSTANCE:
                runtime.services.run_refresh(instance_id, ctx)
                logger.debug(
                    "Instance refreshed",
                    extra={"event": LogEvent.INSTANCE_REFRESHED, "instance_id": instance_id},
                )
            elif method is FrameworkMethod.DESTROY_INSTANCE:
                try:
                    runtime.services.run_destroy(instance_id, ctx)
                finally:
                    runtime.instances.remove(instance_id)
                    logger.info(
                        "Instance destroyed",
                        extra={
                            "event": LogEvent.INSTANCE_DESTROYED,
                            "instance_id": instance_id,
                            "framework": record.framework,
                        },
                    )

        return DispatchResult.success(result)

    return route


def adapt_instance(runtime: HostRuntime, method: FrameworkMethod, native_name: str) -> EntryPoint:
    """Build a deprecated alias that forwards to ``method`` without lifecycle hooks."""

    @entry_point(native_name)
    def legacy(instance_id: str, *args: Any, **kwargs: Any) -> DispatchResult:
        logger.debug(
            "Legacy method called",
            extra={
                "event": LogEvent.LEGACY_METHOD_CALLED,
                "method": native_name,
                "target": method.value,
                "instance_id": instance_id,
            },
        )
        record, framework = _resolve(runtime, instance_id)
        return DispatchResult.success(
            _delegate(record.framework, framework, method, instance_id, args, kwargs)
        )

    return legacy
