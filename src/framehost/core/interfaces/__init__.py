"""Core interfaces for the dispatch runtime."""

from framehost.core.interfaces.element import ElementRegistry
from framehost.core.interfaces.framework import (
    FANOUT_METHODS,
    INSTANCE_METHODS,
    Framework,
    FrameworkMethod,
)
from framehost.core.interfaces.service import CallbackService, Service, ServiceHook

__all__ = [
    # Frameworks
    "Framework",
    "FrameworkMethod",
    "FANOUT_METHODS",
    "INSTANCE_METHODS",
    # Services
    "Service",
    "ServiceHook",
    "CallbackService",
    # Element types
    "ElementRegistry",
]
