"""Logging setup for the dispatch runtime.

framehost runs embedded in a host process that owns the root logger, so only
the ``framehost`` logger tree is configured here. Records carry their
structured fields (``event``, ``instance_id``, ``method``...) through
``extra``; the JSON format emits them as top-level keys.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any

from pythonjsonlogger import json as jsonlogger

from framehost.config import LoggingConfig

PACKAGE_LOGGER = "framehost"


class RateLimitFilter(logging.Filter):
    """Drop repeats of the same dispatch log inside a time window.

    A bridge replaying calls for a dead instance produces the same warning in
    a tight loop. A record counts as a repeat when its logger, line, message,
    ``event`` and ``instance_id`` all match, so one warning per id still
    gets through.

    Args:
        rate_limit_seconds: Window in which repeats are dropped.
        max_cache_size: Keys tracked before the oldest are evicted.
    """

    def __init__(
        self,
        rate_limit_seconds: float = 5.0,
        max_cache_size: int = 1000,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self._rate_limit = rate_limit_seconds
        self._max_cache = max_cache_size
        self._last_log: dict[tuple[Any, ...], float] = {}

    @staticmethod
    def _key(record: logging.LogRecord) -> tuple[Any, ...]:
        return (
            record.name,
            record.lineno,
            record.getMessage(),
            str(getattr(record, "event", "")),
            str(getattr(record, "instance_id", "")),
        )

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= logging.ERROR:
            return True

        key = self._key(record)
        now = time.monotonic()
        last_time = self._last_log.get(key)
        if last_time is not None and now - last_time < self._rate_limit:
            return False

        self._last_log[key] = now
        if len(self._last_log) > self._max_cache:
            self._evict()
        return True

    def _evict(self, count: int = 100) -> None:
        for key in sorted(self._last_log, key=self._last_log.__getitem__)[:count]:
            del self._last_log[key]


class FrameHostJsonFormatter(jsonlogger.JsonFormatter):
    """One JSON object per record, tagged with the configured service name."""

    def __init__(self, config: LoggingConfig, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._service = config.service_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record.update(
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            level=record.levelname,
            logger=record.name,
            service=self._service,
            pid=record.process,
            filename=record.filename,
            lineno=record.lineno,
        )
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)


def setup_logging(config: LoggingConfig) -> logging.Handler:
    """Install a stdout handler on the ``framehost`` logger.

    Replaces any handler installed by an earlier call and stops propagation
    to the host's root logger. Unknown level names fall back to INFO.

    Returns:
        The installed handler.
    """
    if config.format == "json":
        formatter: logging.Formatter = FrameHostJsonFormatter(config)
    else:
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(RateLimitFilter(rate_limit_seconds=config.rate_limit_seconds))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))
    package_logger.propagate = False
    return handler
