"""
Desired State Module

Architectural Intent:
- Everything a run needs to know about the target host, resolved to absolute paths
- Produced by the infrastructure loader, consumed by the sync use case
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
from hostsync.domain.entities.config_artifact import (
    BulkAssetDirectory,
    ConfigArtifact,
    ServiceAllowlist,
)
from hostsync.domain.entities.managed_component import ManagedComponent
from hostsync.domain.value_objects.key_value_record import KeyValueRecord


@dataclass
class DesiredState:
    data_dir: Path
    config_root: Path
    backup_dir: Path
    components: list[ManagedComponent] = field(default_factory=list)
    artifacts: list[ConfigArtifact] = field(default_factory=list)
    bulk_assets: list[BulkAssetDirectory] = field(default_factory=list)
    substitutions: dict[str, str] = field(default_factory=dict)
    allowlist: Optional[ServiceAllowlist] = None
    branding: tuple[KeyValueRecord, ...] = ()
    hygiene_repository: Optional[Path] = None
