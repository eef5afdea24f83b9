"""
Deployment Ledger Module

Architectural Intent:
- Ordered, append-only record of the reversible actions taken in one run
- Each entry carries its own compensating action, pushed when the step succeeds
- Drained exactly once, in reverse append order, by the rollback use case
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Awaitable, Callable, Union
from hostsync.domain.value_objects.revision import Revision

# Returns True when the prior state was restored, False when there was
# nothing left to restore from.
Compensation = Callable[[], Awaitable[bool]]


@dataclass(frozen=True)
class RevisionEntry:
    component: str
    path: Path
    prior_revision: Revision
    undo: Compensation = field(repr=False, compare=False)

    def describe(self) -> str:
        return f"{self.component} at {self.path} -> {self.prior_revision}"


@dataclass(frozen=True)
class BackupEntry:
    backup_path: Path
    destination_path: Path
    undo: Compensation = field(repr=False, compare=False)

    def describe(self) -> str:
        return f"{self.destination_path} <- {self.backup_path}"


LedgerEntry = Union[RevisionEntry, BackupEntry]


class DeploymentLedger:
    def __init__(self) -> None:
        self._entries: list[LedgerEntry] = []
        self._drained = False

    def record(self, entry: LedgerEntry) -> None:
        if self._drained:
            raise RuntimeError("Ledger has already been drained")
        if isinstance(entry, RevisionEntry) and self.has_revision_for(entry.path):
            raise ValueError(f"Prior revision already recorded for {entry.path}")
        self._entries.append(entry)

    def has_revision_for(self, path: Path) -> bool:
        return any(
            isinstance(e, RevisionEntry) and e.path == path for e in self._entries
        )

    @property
    def entries(self) -> tuple[LedgerEntry, ...]:
        return tuple(self._entries)

    @property
    def drained(self) -> bool:
        return self._drained

    def drain(self) -> tuple[LedgerEntry, ...]:
        """Hand out all entries newest first. A second drain yields nothing."""
        if self._drained:
            return ()
        self._drained = True
        return tuple(reversed(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
