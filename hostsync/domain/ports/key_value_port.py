"""
Key-Value Service Port

Architectural Intent:
- Port interface for the dependent HTTP key-value service
- Readiness probe plus single-record writes
- Best-effort: failures are reported through the return value
"""

from abc import ABC, abstractmethod
from hostsync.domain.value_objects.key_value_record import KeyValueRecord


class KeyValueServicePort(ABC):
    @abstractmethod
    async def is_ready(self) -> bool:
        """
        True if the service answered its readiness probe.
        """
        pass

    @abstractmethod
    async def put_item(self, record: KeyValueRecord) -> bool:
        """
        Stores one record. Returns False if the service rejected it or was unreachable.
        """
        pass
