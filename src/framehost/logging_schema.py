"""Log event types for structured logging."""

from enum import StrEnum


class LogEvent(StrEnum):
    """Log event types for the dispatch runtime.

    Used with logger.info/warning/error extra dict:
        logger.info("message", extra={"event": LogEvent.INSTANCE_CREATED, ...})
    """

    # Runtime lifecycle
    RUNTIME_INITIALIZED = "runtime_initialized"
    FRAMEWORK_INITIALIZED = "framework_initialized"

    # Instance lifecycle
    INSTANCE_CREATED = "instance_created"
    INSTANCE_REFRESHED = "instance_refreshed"
    INSTANCE_DESTROYED = "instance_destroyed"

    # Bundle detection
    FRAMEWORK_FALLBACK = "framework_fallback"
    VERSION_HEADER_INVALID = "version_header_invalid"

    # Dispatch
    INVALID_INSTANCE_ID = "invalid_instance_id"
    METHOD_NOT_SUPPORTED = "method_not_supported"
    LEGACY_METHOD_CALLED = "legacy_method_called"

    # Services
    SERVICE_REGISTERED = "service_registered"
    SERVICE_UNREGISTERED = "service_unregistered"
    SERVICE_REJECTED = "service_rejected"

    # Element types
    ELEMENT_REGISTERED = "element_registered"
