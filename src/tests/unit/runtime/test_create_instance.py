"""Tests for createInstance."""

import logging
from collections.abc import Callable
from typing import Any

import pytest

from framehost.core.errors import ErrorCode
from framehost.core.interfaces.framework import Framework
from framehost.core.interfaces.service import CallbackService
from framehost.core.result import DispatchStatus
from framehost.logging_schema import LogEvent
from framehost.runtime.host import HostRuntime
from framehost.runtime.services import ServiceRegistry

RAX_BUNDLE = '// {"framework":"Rax","version":"1.0"}\nexport default {}\n'
PLAIN_BUNDLE = "define('@weex-component/app', function () {})\n"


class TestFrameworkSelection:
    """Tests for binding instances to frameworks."""

    def test_header_selects_registered_framework(self, runtime: HostRuntime, rax, weex) -> None:
        result = runtime.methods["createInstance"]("1", RAX_BUNDLE, {}, None)

        assert result.status == DispatchStatus.OK
        record = runtime.instances.get("1")
        assert record.framework == "Rax"
        assert record.bundle_version == "1.0"
        assert "1" in rax.created
        assert "1" not in weex.created

    def test_unregistered_framework_falls_back(self, make_runtime, weex) -> None:
        runtime = make_runtime({"Weex": weex})

        runtime.methods["createInstance"]("1", RAX_BUNDLE)

        record = runtime.instances.get("1")
        assert record.framework == "Weex"
        assert record.bundle_version == "1.0"
        assert record.descriptor["framework"] == "Rax"

    @pytest.mark.parametrize(
        "code",
        [PLAIN_BUNDLE, "// {framework: Rax}\ncode\n"],
    )
    def test_no_or_invalid_header_uses_default(self, runtime: HostRuntime, weex, code: str) -> None:
        runtime.methods["createInstance"]("1", code)

        record = runtime.instances.get("1")
        assert record.framework == "Weex"
        assert record.bundle_version is None
        assert weex.created["1"]["config"]["bundleVersion"] is None

    def test_missing_default_framework(self, make_runtime, rax) -> None:
        """Without the default framework, an undeclared bundle is rejected before insert."""
        runtime = make_runtime({"Rax": rax})

        result = runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        assert result.is_error
        assert result.error.code == ErrorCode.FRAMEWORK_NOT_FOUND.value
        assert "1" not in runtime.instances


class TestDuplicateCreate:
    """Tests for duplicate instance ids."""

    def test_second_create_rejected(self, runtime: HostRuntime, weex, rax) -> None:
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE)
        first = runtime.instances.get("1")

        result = runtime.methods["createInstance"]("1", RAX_BUNDLE)

        assert result.is_error
        assert result.error.code == "INVALID_INSTANCE_ID"
        assert result.error.instance_id == "1"
        assert result.error.message == 'invalid instance id "1"'
        assert runtime.instances.get("1") is first
        assert "1" not in rax.created

    def test_rejected_create_calls_no_service(self, runtime: HostRuntime, services: ServiceRegistry) -> None:
        created: list[str] = []
        services.register("svc", CallbackService(create=lambda i, c, cfg: created.append(i)))
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        assert created == ["1"]

    def test_rejected_create_logs_once(self, runtime: HostRuntime, caplog: pytest.LogCaptureFixture) -> None:
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        with caplog.at_level(logging.WARNING, logger="framehost"):
            runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert warnings[0].event == LogEvent.INVALID_INSTANCE_ID
        assert warnings[0].method == "createInstance"
        assert warnings[0].instance_id == "1"

    def test_recreate_after_destroy(self, runtime: HostRuntime) -> None:
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE)
        runtime.methods["destroyInstance"]("1")

        result = runtime.methods["createInstance"]("1", RAX_BUNDLE)

        assert result.is_success
        assert runtime.instances.get("1").framework == "Rax"


class TestConfigSnapshot:
    """Tests for the per-instance configuration snapshot."""

    def test_snapshot_contents(self, runtime: HostRuntime, weex) -> None:
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE, {"debug": True}, {"items": []})

        created = weex.created["1"]
        assert created["config"] == {
            "debug": True,
            "bundleVersion": None,
            "env": {"platform": "iOS", "osVersion": "17.0"},
        }
        assert created["data"] == {"items": []}
        assert created["code"] == PLAIN_BUNDLE

    def test_caller_mutation_does_not_leak(self, runtime: HostRuntime, weex) -> None:
        config: dict[str, Any] = {"nested": {"a": 1}}
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE, config)

        config["nested"]["a"] = 2
        config["extra"] = True

        snapshot = weex.created["1"]["config"]
        assert snapshot["nested"] == {"a": 1}
        assert "extra" not in snapshot

    def test_snapshot_mutation_does_not_leak(self, runtime: HostRuntime, weex) -> None:
        config: dict[str, Any] = {"nested": {"a": 1}}
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE, config)

        weex.created["1"]["config"]["nested"]["a"] = 3
        weex.created["1"]["config"]["env"]["platform"] = "changed"

        assert config == {"nested": {"a": 1}}
        assert runtime.config.environment["platform"] == "iOS"

    def test_none_config(self, runtime: HostRuntime, weex) -> None:
        runtime.methods["createInstance"]("1", PLAIN_BUNDLE, None)

        assert set(weex.created["1"]["config"]) == {"bundleVersion", "env"}


class TestCreateServices:
    """Tests for service create hooks during createInstance."""

    def test_service_objects_passed_to_framework(
        self, runtime: HostRuntime, services: ServiceRegistry, weex
    ) -> None:
        services.register("timer", CallbackService(create=lambda i, c, cfg: {"timer": "T", "shared": 1}))
        services.register("store", CallbackService(create=lambda i, c, cfg: {"store": "S", "shared": 2}))

        runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        assert weex.created["1"]["service_objects"] == {"timer": "T", "store": "S", "shared": 2}

    def test_hook_sees_record_and_runtime(
        self, runtime: HostRuntime, services: ServiceRegistry
    ) -> None:
        seen: dict[str, Any] = {}

        def create(instance_id, ctx, config):
            seen["info"] = ctx.info
            seen["runtime"] = ctx.runtime
            seen["config"] = config
            seen["registered"] = instance_id in runtime.instances
            return None

        services.register("svc", CallbackService(create=create))

        runtime.methods["createInstance"]("1", RAX_BUNDLE)

        assert seen["info"] is runtime.instances.get("1")
        assert seen["runtime"] is runtime.config
        assert seen["config"]["bundleVersion"] == "1.0"
        assert seen["registered"] is True

    def test_reentrant_create_rejected(
        self, runtime: HostRuntime, services: ServiceRegistry
    ) -> None:
        """A create for the same id issued from inside a hook sees the record."""
        nested: list[Any] = []
        services.register(
            "svc",
            CallbackService(
                create=lambda i, c, cfg: nested.append(runtime.methods["createInstance"](i, PLAIN_BUNDLE))
            ),
        )

        result = runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        assert result.is_success
        assert nested[0].error.code == "INVALID_INSTANCE_ID"


class TestCreateResult:
    """Tests for the value returned by createInstance."""

    def test_framework_value_returned_verbatim(self, make_runtime: Callable[..., HostRuntime]) -> None:
        failure = ValueError("bundle failed")

        class ErrorValueFramework(Framework):
            def init(self, config):
                pass

            def create_instance(self, instance_id, code, config, data, service_objects):
                return failure

        runtime = make_runtime({"Weex": ErrorValueFramework()})

        result = runtime.methods["createInstance"]("1", PLAIN_BUNDLE)

        assert result.is_success
        assert result.value is failure

    def test_framework_exception_propagates(self, make_runtime: Callable[..., HostRuntime]) -> None:
        class RaisingFramework(Framework):
            def init(self, config):
                pass

            def create_instance(self, instance_id, code, config, data, service_objects):
                raise RuntimeError("boom")

        runtime = make_runtime({"Weex": RaisingFramework()})

        with pytest.raises(RuntimeError, match="boom"):
            runtime.methods["createInstance"]("1", PLAIN_BUNDLE)
