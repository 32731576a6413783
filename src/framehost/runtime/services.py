"""Ordered registry of services and lifecycle hook invocation."""

import logging
from collections.abc import Iterator
from typing import Any

from framehost.core.interfaces.service import Service, ServiceHook
from framehost.core.models import ServiceContext
from framehost.logging_schema import LogEvent

logger = logging.getLogger(__name__)


class ServiceRegistry:
    """Named services, kept in registration order.

    Hooks always run in registration order. A name can be registered once;
    re-registering it is rejected until the service is unregistered.
    """

    def __init__(self) -> None:
        self._services: dict[str, Service] = {}

    def register(self, name: str, service: Service) -> bool:
        """Register a service.

        Returns:
            True if registered, False if the name was already taken
        """
        if name in self._services:
            logger.warning(
                "Service already registered",
                extra={"event": LogEvent.SERVICE_REJECTED, "service": name},
            )
            return False
        self._services[name] = service
        logger.debug(
            "Service registered",
            extra={"event": LogEvent.SERVICE_REGISTERED, "service": name},
        )
        return True

    def unregister(self, name: str) -> Service | None:
        service = self._services.pop(name, None)
        if service is not None:
            logger.debug(
                "Service unregistered",
                extra={"event": LogEvent.SERVICE_UNREGISTERED, "service": name},
            )
        return service

    def get(self, name: str) -> Service | None:
        return self._services.get(name)

    def names(self) -> list[str]:
        return list(self._services)

    def __iter__(self) -> Iterator[Service]:
        # Snapshot, so a hook may (un)register services while hooks run
        return iter(list(self._services.values()))

    def __len__(self) -> int:
        return len(self._services)

    # =========================================================================
    # Hook invocation
    # =========================================================================

    def run_create(
        self, instance_id: str, ctx: ServiceContext, config: dict[str, Any]
    ) -> dict[str, Any]:
        """Run create hooks and merge their results.

        Later services overwrite keys contributed by earlier ones.
        """
        service_objects: dict[str, Any] = {}
        for service in self:
            if not service.supports(ServiceHook.CREATE):
                continue
            result = service.create(instance_id, ctx, config)
            if result:
                service_objects.update(result)
        return service_objects

    def run_refresh(self, instance_id: str, ctx: ServiceContext) -> None:
        for service in self:
            if service.supports(ServiceHook.REFRESH):
                service.refresh(instance_id, ctx)

    def run_destroy(self, instance_id: str, ctx: ServiceContext) -> None:
        for service in self:
            if service.supports(ServiceHook.DESTROY):
                service.destroy(instance_id, ctx)
