"""framehost - instance dispatch runtime for multi-framework UI hosts."""

from framehost.core.errors import ErrorCode
from framehost.core.interfaces import CallbackService, Framework, FrameworkMethod, Service
from framehost.core.models import HostConfig, InstanceRecord, ServiceContext
from framehost.core.result import DispatchResult, DispatchStatus
from framehost.runtime import HostRuntime, ServiceRegistry, init

__all__ = [
    "init",
    "HostRuntime",
    "HostConfig",
    "Framework",
    "FrameworkMethod",
    "Service",
    "CallbackService",
    "ServiceRegistry",
    "ServiceContext",
    "InstanceRecord",
    "DispatchResult",
    "DispatchStatus",
    "ErrorCode",
]
