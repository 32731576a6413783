"""Runtime startup and instance creation.

HostRuntime holds everything a method table closes over: the framework set
(fixed at startup), the instance registry, services and the element-type
registry. Several runtimes can live in one process.
"""

import copy
import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from framehost.config import FrameHostConfig, get_config
from framehost.core.errors import FrameworkNotFoundError, InvalidInstanceIdError, UnknownMethodError
from framehost.core.interfaces.element import ElementRegistry
from framehost.core.interfaces.framework import FANOUT_METHODS, INSTANCE_METHODS, Framework, FrameworkMethod
from framehost.core.models import HostConfig, InstanceRecord, ServiceContext
from framehost.core.result import DispatchResult
from framehost.logging import setup_logging
from framehost.logging_schema import LogEvent
from framehost.metrics import FRAMEWORK_FALLBACK_TOTAL, INSTANCES_CREATED_TOTAL
from framehost.runtime.elements import ElementTypeRegistry
from framehost.runtime.instances import InstanceRegistry
from framehost.runtime.methods import (
    EntryPoint,
    MethodTable,
    adapt_instance,
    entry_point,
    gen_init,
    gen_instance,
)
from framehost.runtime.services import ServiceRegistry
from framehost.runtime.version import BundleDescriptor

logger = logging.getLogger(__name__)

# Deprecated bridge name -> current method
LEGACY_ALIASES: dict[str, FrameworkMethod] = {
    "callJS": FrameworkMethod.RECEIVE_TASKS,
}


class HostRuntime:
    """Dispatch runtime for one host.

    Args:
        config: Frameworks, virtual-DOM classes, task bridge and environment
        services: Service registry (default: empty)
        elements: Element-type registry (default: in-memory ElementTypeRegistry)
        settings: Runtime settings (default: cached environment config)
    """

    def __init__(
        self,
        config: HostConfig,
        services: ServiceRegistry | None = None,
        elements: ElementRegistry | None = None,
        settings: FrameHostConfig | None = None,
    ) -> None:
        self.config = config
        self.settings = settings or get_config()
        self.frameworks: dict[str, Framework] = dict(config.frameworks)
        self.instances = InstanceRegistry()
        self.services = services if services is not None else ServiceRegistry()
        self.elements = elements if elements is not None else ElementTypeRegistry()

        for name, framework in self.frameworks.items():
            framework.init(config)
            logger.debug(
                "Framework initialized",
                extra={"event": LogEvent.FRAMEWORK_INITIALIZED, "framework": name},
            )

        self.methods = self._build_methods()
        logger.info(
            "Runtime initialized",
            extra={
                "event": LogEvent.RUNTIME_INITIALIZED,
                "frameworks": list(self.frameworks),
                "methods": list(self.methods),
            },
        )

    def _build_methods(self) -> MethodTable:
        methods: dict[str, EntryPoint] = {
            FrameworkMethod.CREATE_INSTANCE.value: entry_point(
                FrameworkMethod.CREATE_INSTANCE.value
            )(self._create_instance),
        }
        for method in FANOUT_METHODS:
            methods[method.value] = gen_init(self, method)
        for method in INSTANCE_METHODS:
            methods[method.value] = gen_instance(self, method)
        if self.settings.runtime.legacy_aliases:
            for native_name, method in LEGACY_ALIASES.items():
                methods[native_name] = adapt_instance(self, method, native_name)
        return MethodTable(methods)

    def _resolve_framework(self, instance_id: str, descriptor: BundleDescriptor) -> str:
        if descriptor.framework in self.frameworks:
            return descriptor.framework  # type: ignore[return-value]

        default = self.settings.runtime.default_framework
        FRAMEWORK_FALLBACK_TOTAL.inc()
        if descriptor.framework is not None:
            logger.info(
                "Bundle framework not registered, using default",
                extra={
                    "event": LogEvent.FRAMEWORK_FALLBACK,
                    "instance_id": instance_id,
                    "declared": descriptor.framework,
                    "framework": default,
                },
            )
        if default not in self.frameworks:
            raise FrameworkNotFoundError(default, instance_id)
        return default

    def _create_instance(
        self,
        instance_id: str,
        code: str,
        config: Mapping[str, Any] | None = None,
        data: Any = None,
    ) -> DispatchResult:
        if instance_id in self.instances:
            raise InvalidInstanceIdError(instance_id)

        descriptor = BundleDescriptor.from_code(code)
        framework_name = self._resolve_framework(instance_id, descriptor)
        record = InstanceRecord(
            framework=framework_name,
            bundle_version=descriptor.version,
            created_at=datetime.now(UTC),
            descriptor=descriptor.raw,
        )
        self.instances.insert(instance_id, record)

        # Private copy: later changes to the caller's config must not leak in
        instance_config = dict(copy.deepcopy(config)) if config else {}
        instance_config["bundleVersion"] = record.bundle_version
        instance_config["env"] = copy.deepcopy(self.config.environment)

        ctx = ServiceContext(info=record, runtime=self.config)
        service_objects = self.services.run_create(instance_id, ctx, instance_config)

        INSTANCES_CREATED_TOTAL.labels(framework=framework_name).inc()
        logger.info(
            "Instance created",
            extra={
                "event": LogEvent.INSTANCE_CREATED,
                "instance_id": instance_id,
                "framework": framework_name,
                "bundle_version": record.bundle_version,
                "services": list(service_objects),
            },
        )

        framework = self.frameworks[framework_name]
        return DispatchResult.success(
            framework.create_instance(instance_id, code, instance_config, data, service_objects)
        )

    def call(self, name: str, *args: Any, **kwargs: Any) -> DispatchResult:
        """Dispatch by external method name."""
        method = self.methods.get(name)
        if method is None:
            return UnknownMethodError(name).to_result()
        return method(*args, **kwargs)


def init(
    config: HostConfig,
    services: ServiceRegistry | None = None,
    elements: ElementRegistry | None = None,
    settings: FrameHostConfig | None = None,
    configure_logging: bool = False,
) -> MethodTable:
    """Initialize every framework and return the public method table.

    Args:
        config: Frameworks, virtual-DOM classes, task bridge and environment
        services: Service registry shared with the host
        elements: Element-type registry receiving component methods
        settings: Runtime settings (default: cached environment config)
        configure_logging: Install the framehost log handler from settings

    Returns:
        createInstance, registerComponents, registerModules, registerMethods,
        destroyInstance, refreshInstance, receiveTasks, getRoot and callJS
    """
    settings = settings or get_config()
    if configure_logging:
        setup_logging(settings.logging)
    return HostRuntime(config, services=services, elements=elements, settings=settings).methods
