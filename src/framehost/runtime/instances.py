"""Instance registry.

Owns the id -> InstanceRecord mapping. Records are inserted by a successful
create and removed by destroy; nothing else mutates the registry.
"""

import logging
import threading
from collections.abc import Iterator

from framehost.core.errors import InvalidInstanceIdError
from framehost.core.models import InstanceRecord
from framehost.metrics import INSTANCES_LIVE

logger = logging.getLogger(__name__)


class InstanceRegistry:
    """Registry of live instances.

    Dispatch is single-threaded in the common case. The re-entrant lock keeps
    check-and-insert atomic when a multi-threaded host delivers calls, and
    lets a service hook running inside create read the registry.
    """

    def __init__(self) -> None:
        self._records: dict[str, InstanceRecord] = {}
        self._lock = threading.RLock()

    def insert(self, instance_id: str, record: InstanceRecord) -> None:
        """Insert a record for a new instance.

        Raises:
            InvalidInstanceIdError: If the id is already live
        """
        with self._lock:
            if instance_id in self._records:
                raise InvalidInstanceIdError(instance_id)
            self._records[instance_id] = record
            INSTANCES_LIVE.inc()

    def get(self, instance_id: str) -> InstanceRecord | None:
        with self._lock:
            return self._records.get(instance_id)

    def require(self, instance_id: str) -> InstanceRecord:
        """Get the record for a live instance.

        Raises:
            InvalidInstanceIdError: If the id is unknown or already destroyed
        """
        record = self.get(instance_id)
        if record is None:
            raise InvalidInstanceIdError(instance_id)
        return record

    def remove(self, instance_id: str) -> InstanceRecord | None:
        """Remove a record. Returns the removed record, if any."""
        with self._lock:
            record = self._records.pop(instance_id, None)
            if record is not None:
                INSTANCES_LIVE.dec()
            return record

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._records)

    def __contains__(self, instance_id: object) -> bool:
        with self._lock:
            return instance_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids())
