"""
Rollback Run Use Case

Architectural Intent:
- Drains the run's ledger newest-first, invoking each compensating action
- Best-effort throughout: failures are logged, never raised
- Single-shot per run, guarded by the run context
- Always ends with a service resync, whatever was or was not restored

Design Decisions:
- Bulk asset directories are not in the ledger and stay replaced
"""

import logging
from dataclasses import dataclass, field
from typing import Sequence
from hostsync.application.use_cases.resync_services import ResyncServices
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.value_objects.key_value_record import KeyValueRecord

logger = logging.getLogger(__name__)


@dataclass
class RollbackResult:
    performed: bool = False
    restored: list[str] = field(default_factory=list)
    not_restored: list[str] = field(default_factory=list)


class RollbackRun:
    def __init__(self, resync: ResyncServices):
        self.resync = resync

    async def execute(
        self, context: RunContext, records: Sequence[KeyValueRecord] = ()
    ) -> RollbackResult:
        result = RollbackResult()
        if not context.begin_rollback():
            logger.debug("Rollback already performed for this run")
            return result
        result.performed = True

        context.report("Update failed. Starting rollback...", level=logging.ERROR)

        for entry in context.ledger.drain():
            description = entry.describe()
            try:
                restored = await entry.undo()
            except Exception as e:
                logger.error("Rollback step failed for %s: %s", description, e)
                restored = False
            if restored:
                result.restored.append(description)
                context.report(f"Restored: {description}")
            else:
                result.not_restored.append(description)
                context.report(f"Not restored: {description}", level=logging.WARNING)

        try:
            await self.resync.execute(records)
        except Exception as e:
            logger.error("Service resync after rollback failed: %s", e)

        context.report("Rollback completed.")
        return result
