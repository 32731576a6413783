"""Element-type registry interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence


class ElementRegistry(ABC):
    """Interface for registering custom component methods per element type.

    Implementations: ElementTypeRegistry (in-memory default), or a host
    adapter that patches its own virtual-DOM element classes.
    """

    @abstractmethod
    def register_element(self, type_name: str, methods: Sequence[str]) -> None:
        """Register callable methods for an element type.

        Args:
            type_name: Component type (e.g., "video")
            methods: Method names the native component exposes
        """
        ...
