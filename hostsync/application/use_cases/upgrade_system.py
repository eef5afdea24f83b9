"""
Upgrade System Use Case

Architectural Intent:
- Optional host package upgrade, gated by an explicit flag
- Outside the transaction: never ledgered, never compensated
- A failed upgrade is reported and the run carries on
"""

import logging
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import PackageManagerError
from hostsync.domain.ports.package_manager_port import PackageManagerPort

logger = logging.getLogger(__name__)


class UpgradeSystem:
    def __init__(self, package_manager: PackageManagerPort):
        self.package_manager = package_manager

    async def execute(self, context: RunContext, enabled: bool) -> bool:
        if not enabled:
            context.report("System upgrade disabled.")
            return False

        if context.dry_run:
            context.report("Would run: package index refresh and full upgrade")
            context.mark_changed()
            return True

        try:
            await self.package_manager.refresh_index()
            await self.package_manager.upgrade()
        except PackageManagerError as e:
            context.report(
                f"System upgrade failed (not rolled back): {e}", level=logging.WARNING
            )
            return False

        context.mark_changed()
        context.report("System packages upgraded.")
        return True
