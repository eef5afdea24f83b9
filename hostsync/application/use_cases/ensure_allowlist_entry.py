"""
Ensure Allowlist Entry Use Case

Architectural Intent:
- Keeps one line present in a service allowlist file
- No backup and no ledger entry
- Stray duplicates of the file are removed best-effort
"""

import logging
from hostsync.domain.entities.config_artifact import ServiceAllowlist
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import AllowlistError
from hostsync.domain.ports.filesystem_port import FilesystemPort

logger = logging.getLogger(__name__)


class EnsureAllowlistEntry:
    def __init__(self, filesystem: FilesystemPort):
        self.filesystem = filesystem

    def execute(self, allowlist: ServiceAllowlist, context: RunContext) -> bool:
        fs = self.filesystem
        path = allowlist.path

        try:
            current = fs.read_bytes(path) if fs.is_file(path) else b""
        except OSError as e:
            raise AllowlistError(f"Cannot read {path}: {e}") from e

        lines = current.decode("utf-8", errors="replace").splitlines()
        if allowlist.entry in lines:
            logger.debug("%s already lists %s", path, allowlist.entry)
            if not context.dry_run:
                self._lock_down(allowlist)
            return False

        if context.dry_run:
            context.report(f"Would update: {path}")
            context.mark_changed()
            return True

        separator = b"\n" if current and not current.endswith(b"\n") else b""
        updated = current + separator + allowlist.entry.encode("utf-8") + b"\n"

        context.mark_mutated()
        try:
            fs.make_dirs(path.parent)
            fs.write_bytes(path, updated)
        except OSError as e:
            raise AllowlistError(f"Cannot update {path}: {e}") from e

        context.mark_changed()
        context.report(f"Added {allowlist.entry} to {path}")
        self._lock_down(allowlist)
        return True

    def _lock_down(self, allowlist: ServiceAllowlist) -> None:
        try:
            self.filesystem.set_read_only(allowlist.path)
        except OSError as e:
            logger.warning("Could not make %s read-only: %s", allowlist.path, e)

        for stray in allowlist.stray_paths:
            try:
                self.filesystem.remove_file(stray)
            except OSError as e:
                logger.warning("Could not remove stray %s: %s", stray, e)
