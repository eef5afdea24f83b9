"""
Step Outcomes

Architectural Intent:
- Value objects describing what each orchestration step decided
- Shared vocabulary between use cases, the run report and the CLI
"""

from enum import Enum


class RunMode(Enum):
    APPLY = "apply"
    DRY_RUN = "dry-run"


class PinOutcome(Enum):
    ALREADY_PINNED = "already_pinned"
    PINNED = "pinned"
    SKIPPED = "skipped"
    DRY_RUN_WOULD_PIN = "dry_run_would_pin"


class DeployOutcome(Enum):
    NOOP = "noop"
    CREATED = "created"
    BACKED_UP_AND_REPLACED = "backed_up_and_replaced"
    WOULD_CREATE = "would_create"
    WOULD_REPLACE = "would_replace"


class ReplaceOutcome(Enum):
    SKIPPED_MISSING_SOURCE = "skipped_missing_source"
    SKIPPED_EMPTY_SOURCE = "skipped_empty_source"
    WOULD_REPLACE = "would_replace"
    REPLACED = "replaced"


class RunOutcome(Enum):
    COMPLETED = "completed"
    ROLLED_BACK = "rolled_back"
    ABORTED = "aborted"
