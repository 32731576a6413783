"""Instance dispatch runtime."""

from framehost.runtime.elements import ElementTypeRegistry
from framehost.runtime.host import LEGACY_ALIASES, HostRuntime, init
from framehost.runtime.instances import InstanceRegistry
from framehost.runtime.methods import MethodTable
from framehost.runtime.services import ServiceRegistry
from framehost.runtime.version import BundleDescriptor, check_version

__all__ = [
    "HostRuntime",
    "init",
    "LEGACY_ALIASES",
    "MethodTable",
    "InstanceRegistry",
    "ServiceRegistry",
    "ElementTypeRegistry",
    "BundleDescriptor",
    "check_version",
]
