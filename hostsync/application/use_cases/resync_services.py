"""
Resync Services Use Case

Architectural Intent:
- Best-effort restart of the dependent services after a run
- Waits for the key-value service with a fixed number of probes, then pushes records
- Nothing here changes the outcome of the run
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Sequence
from hostsync.domain.ports.key_value_port import KeyValueServicePort
from hostsync.domain.ports.service_supervisor_port import ServiceSupervisorPort
from hostsync.domain.value_objects.key_value_record import KeyValueRecord

logger = logging.getLogger(__name__)


@dataclass
class ResyncResult:
    restarted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    service_ready: bool = False
    records_pushed: int = 0


class ResyncServices:
    def __init__(
        self,
        supervisor: ServiceSupervisorPort,
        key_value: KeyValueServicePort,
        services: Sequence[str],
        readiness_attempts: int = 30,
        readiness_interval: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if readiness_attempts < 1:
            raise ValueError("readiness_attempts must be at least 1")
        self.supervisor = supervisor
        self.key_value = key_value
        self.services = tuple(services)
        self.readiness_attempts = readiness_attempts
        self.readiness_interval = readiness_interval
        self._sleep = sleep

    async def execute(self, records: Sequence[KeyValueRecord] = ()) -> ResyncResult:
        result = ResyncResult()

        for service in self.services:
            if await self.supervisor.restart(service):
                result.restarted.append(service)
            else:
                logger.warning("Restart of %s failed, ignoring", service)
                result.failed.append(service)

        if not records:
            return result

        result.service_ready = await self._wait_until_ready()
        if not result.service_ready:
            logger.warning(
                "Key-value service not reachable after %d attempts, skipping %d records",
                self.readiness_attempts,
                len(records),
            )
            return result

        for record in records:
            if await self.key_value.put_item(record):
                result.records_pushed += 1
            else:
                logger.warning("Could not store %s/%s", record.namespace, record.key)

        return result

    async def _wait_until_ready(self) -> bool:
        for attempt in range(1, self.readiness_attempts + 1):
            if await self.key_value.is_ready():
                logger.debug("Key-value service ready after %d attempt(s)", attempt)
                return True
            if attempt < self.readiness_attempts:
                await self._sleep(self.readiness_interval)
        return False
