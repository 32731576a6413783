"""Fixtures for runtime unit tests."""

from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import pytest

from framehost.config import FrameHostConfig, LoggingConfig, RuntimeSettings
from framehost.core.interfaces.element import ElementRegistry
from framehost.core.interfaces.framework import Framework
from framehost.core.models import HostConfig
from framehost.runtime.host import HostRuntime
from framehost.runtime.services import ServiceRegistry


class RecordingFramework(Framework):
    """Framework implementing every handler and recording calls."""

    def __init__(self, name: str, calls: list[tuple[str, Any]] | None = None) -> None:
        self.name = name
        self.calls = calls if calls is not None else []
        self.init_config: HostConfig | None = None
        self.created: dict[str, dict[str, Any]] = {}

    def _record(self, method: str, *args: Any) -> str:
        self.calls.append((f"{self.name}.{method}", args))
        return f"{self.name}:{method}"

    def init(self, config: HostConfig) -> None:
        self.init_config = config

    def create_instance(self, instance_id, code, config, data, service_objects):
        self.created[instance_id] = {
            "code": code,
            "config": config,
            "data": data,
            "service_objects": dict(service_objects),
        }
        return self._record("create_instance", instance_id)

    def destroy_instance(self, instance_id, *args):
        return self._record("destroy_instance", instance_id, *args)

    def refresh_instance(self, instance_id, *args):
        return self._record("refresh_instance", instance_id, *args)

    def receive_tasks(self, instance_id, *args):
        return self._record("receive_tasks", instance_id, *args)

    def get_root(self, instance_id, *args):
        return self._record("get_root", instance_id, *args)

    def register_components(self, *args):
        return self._record("register_components", *args)

    def register_modules(self, *args):
        return self._record("register_modules", *args)

    def register_methods(self, *args):
        return self._record("register_methods", *args)


class MinimalFramework(Framework):
    """Framework implementing only the required methods."""

    def __init__(self) -> None:
        self.created: list[str] = []

    def init(self, config: HostConfig) -> None:
        pass

    def create_instance(self, instance_id, code, config, data, service_objects):
        self.created.append(instance_id)
        return None


class FailingFramework(RecordingFramework):
    """Framework whose destroy and refresh raise."""

    def destroy_instance(self, instance_id, *args):
        self._record("destroy_instance", instance_id)
        raise RuntimeError("destroy failed")

    def refresh_instance(self, instance_id, *args):
        self._record("refresh_instance", instance_id)
        raise RuntimeError("refresh failed")


@pytest.fixture
def calls() -> list[tuple[str, Any]]:
    """Shared call log across frameworks and services."""
    return []


@pytest.fixture
def weex(calls: list[tuple[str, Any]]) -> RecordingFramework:
    return RecordingFramework("Weex", calls)


@pytest.fixture
def rax(calls: list[tuple[str, Any]]) -> RecordingFramework:
    return RecordingFramework("Rax", calls)


@pytest.fixture
def settings() -> FrameHostConfig:
    """Settings independent of the process environment."""
    return FrameHostConfig(
        logging=LoggingConfig(),
        runtime=RuntimeSettings(default_framework="Weex", legacy_aliases=True),
    )


@pytest.fixture
def host_config(weex: RecordingFramework, rax: RecordingFramework) -> HostConfig:
    return HostConfig(
        frameworks={"Weex": weex, "Rax": rax},
        send_tasks=MagicMock(),
        environment={"platform": "iOS", "osVersion": "17.0"},
    )


@pytest.fixture
def services() -> ServiceRegistry:
    return ServiceRegistry()


@pytest.fixture
def mock_elements() -> MagicMock:
    """Mock element-type registry."""
    return MagicMock(spec=ElementRegistry)


@pytest.fixture
def runtime(
    host_config: HostConfig,
    services: ServiceRegistry,
    mock_elements: MagicMock,
    settings: FrameHostConfig,
) -> HostRuntime:
    return HostRuntime(host_config, services=services, elements=mock_elements, settings=settings)


@pytest.fixture
def minimal() -> MinimalFramework:
    return MinimalFramework()


@pytest.fixture
def failing(calls: list[tuple[str, Any]]) -> FailingFramework:
    return FailingFramework("Weex", calls)


@pytest.fixture
def make_runtime(
    services: ServiceRegistry,
    mock_elements: MagicMock,
    settings: FrameHostConfig,
) -> Callable[..., HostRuntime]:
    """Build a runtime over an arbitrary framework set."""

    def factory(frameworks: dict[str, Framework], **kwargs: Any) -> HostRuntime:
        return HostRuntime(
            HostConfig(frameworks=frameworks, **kwargs),
            services=services,
            elements=mock_elements,
            settings=settings,
        )

    return factory
