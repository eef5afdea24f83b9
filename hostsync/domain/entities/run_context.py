"""
Run Context Module

Architectural Intent:
- Explicit per-run state passed by reference through every step
- Nothing here outlives a single run
- The changed flag is monotonic: it can be set, never cleared
"""

from __future__ import annotations
import logging
from typing import Callable, Optional
from hostsync.domain.entities.deployment_ledger import DeploymentLedger
from hostsync.domain.value_objects.outcomes import RunMode

logger = logging.getLogger(__name__)


class RunContext:
    def __init__(
        self,
        mode: RunMode = RunMode.APPLY,
        ledger: Optional[DeploymentLedger] = None,
        on_report: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._mode = mode
        self._ledger = ledger if ledger is not None else DeploymentLedger()
        self._on_report = on_report
        self._changed = False
        self._mutated = False
        self._failed = False
        self._rollback_started = False
        self._lines: list[str] = []

    @property
    def mode(self) -> RunMode:
        return self._mode

    @property
    def dry_run(self) -> bool:
        return self._mode is RunMode.DRY_RUN

    @property
    def ledger(self) -> DeploymentLedger:
        return self._ledger

    @property
    def changed(self) -> bool:
        return self._changed

    @property
    def mutated(self) -> bool:
        return self._mutated

    @property
    def failed(self) -> bool:
        return self._failed

    @property
    def rollback_started(self) -> bool:
        return self._rollback_started

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    def mark_changed(self) -> None:
        self._changed = True

    def mark_mutated(self) -> None:
        if self.dry_run:
            raise RuntimeError("Mutation attempted during a dry run")
        self._mutated = True

    def mark_failed(self) -> None:
        self._failed = True

    def begin_rollback(self) -> bool:
        """Single-shot guard. Returns False if rollback already ran."""
        if self._rollback_started:
            return False
        self._rollback_started = True
        return True

    def report(self, message: str, level: int = logging.INFO) -> None:
        self._lines.append(message)
        logger.log(level, message)
        if self._on_report is not None:
            self._on_report(message)
