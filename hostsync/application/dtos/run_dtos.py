"""
Run DTOs

Architectural Intent:
- Data Transfer Objects for the sync use case boundary
- Input validation at the application boundary
- The report is everything the CLI needs to print a summary and pick an exit status
"""

from dataclasses import dataclass, field
from typing import Optional
from hostsync.domain.value_objects.outcomes import (
    DeployOutcome,
    PinOutcome,
    ReplaceOutcome,
    RunMode,
    RunOutcome,
)


@dataclass(frozen=True)
class SyncRequest:
    desired_state_path: str
    check_only: bool = False
    system_upgrade: bool = False

    def __post_init__(self) -> None:
        if not self.desired_state_path:
            raise ValueError("desired_state_path cannot be empty")

    @property
    def mode(self) -> RunMode:
        return RunMode.DRY_RUN if self.check_only else RunMode.APPLY


@dataclass(frozen=True)
class RunReport:
    outcome: RunOutcome
    mode: RunMode
    changed: bool
    lines: tuple[str, ...] = ()
    pins: dict[str, PinOutcome] = field(default_factory=dict)
    deployments: dict[str, DeployOutcome] = field(default_factory=dict)
    replacements: dict[str, ReplaceOutcome] = field(default_factory=dict)
    restored: tuple[str, ...] = ()
    not_restored: tuple[str, ...] = ()
    ledger_entries: int = 0
    services_resynced: bool = False
    error: Optional[str] = None
    precondition_failed: bool = False

    @property
    def succeeded(self) -> bool:
        return self.outcome is RunOutcome.COMPLETED

    @property
    def exit_code(self) -> int:
        if self.outcome is RunOutcome.COMPLETED:
            return 0
        if self.precondition_failed:
            return 2
        return 1
