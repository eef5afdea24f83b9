"""
Domain Entities Package

Architectural Intent:
- Run-scoped entities describing managed components, artifacts and the ledger
"""

from hostsync.domain.entities.config_artifact import (
    BulkAssetDirectory,
    ConfigArtifact,
    ServiceAllowlist,
)
from hostsync.domain.entities.deployment_ledger import (
    BackupEntry,
    DeploymentLedger,
    LedgerEntry,
    RevisionEntry,
)
from hostsync.domain.entities.desired_state import DesiredState
from hostsync.domain.entities.managed_component import ManagedComponent
from hostsync.domain.entities.run_context import RunContext

__all__ = [
    "BulkAssetDirectory",
    "ConfigArtifact",
    "ServiceAllowlist",
    "BackupEntry",
    "DeploymentLedger",
    "LedgerEntry",
    "RevisionEntry",
    "DesiredState",
    "ManagedComponent",
    "RunContext",
]
