"""Bundle header detection.

A bundle declares its framework on its first line with a JSON comment:

    // { "framework": "Vue", "version": "2.5.16" }
    ...bundle code...

The header must be followed by a line break, so a one-line bundle never
carries a descriptor. Detection is best effort and never raises.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any

from framehost.logging_schema import LogEvent

logger = logging.getLogger(__name__)

_VERSION_RE = re.compile(r"^\s*// *(\{[^}]*\}) *\r?\n")


def check_version(code: str) -> dict[str, Any] | None:
    """Parse the bundle header.

    Args:
        code: Bundle source text

    Returns:
        The parsed JSON object, or None if there is no valid header
    """
    if not isinstance(code, str):
        return None

    match = _VERSION_RE.match(code)
    if not match:
        return None

    try:
        info = json.loads(match.group(1))
    except ValueError:
        logger.debug(
            "Ignoring malformed bundle header",
            extra={"event": LogEvent.VERSION_HEADER_INVALID, "header": match.group(1)},
        )
        return None

    # "{...}" always decodes to an object, but keep the contract explicit
    if not isinstance(info, dict):
        return None
    return info


@dataclass(frozen=True)
class BundleDescriptor:
    """Typed view of a bundle header."""

    framework: str | None = None
    version: str | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_code(cls, code: str) -> "BundleDescriptor":
        info = check_version(code) or {}
        framework = info.get("framework")
        version = info.get("version")
        return cls(
            framework=framework if isinstance(framework, str) else None,
            version=None if version is None else str(version),
            raw=info,
        )
