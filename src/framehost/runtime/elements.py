"""In-memory element-type registry."""

import logging
from collections.abc import Sequence

from framehost.core.interfaces.element import ElementRegistry
from framehost.logging_schema import LogEvent

logger = logging.getLogger(__name__)


class ElementTypeRegistry(ElementRegistry):
    """Maps element types to the component methods callable on them.

    Registering a type again adds new method names and keeps existing ones.
    """

    def __init__(self) -> None:
        self._types: dict[str, list[str]] = {}

    def register_element(self, type_name: str, methods: Sequence[str]) -> None:
        if isinstance(methods, str):
            methods = [methods]
        # Malformed registrations leave the registry untouched
        if not isinstance(type_name, str) or not isinstance(methods, Sequence):
            return
        names = [m for m in methods if isinstance(m, str)]

        known = self._types.setdefault(type_name, [])
        for method in names:
            if method not in known:
                known.append(method)
        logger.debug(
            "Element type registered",
            extra={
                "event": LogEvent.ELEMENT_REGISTERED,
                "element_type": type_name,
                "methods": list(known),
            },
        )

    def get_methods(self, type_name: str) -> list[str]:
        return list(self._types.get(type_name, []))

    def types(self) -> list[str]:
        return list(self._types)

    def clear(self) -> None:
        self._types.clear()

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._types
