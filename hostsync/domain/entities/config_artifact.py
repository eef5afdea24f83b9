"""
Configuration Artifact Module

Architectural Intent:
- ConfigArtifact: a single file deployed with point-in-time backup
- BulkAssetDirectory: a directory tree that is hard-replaced, never backed up
- ServiceAllowlist: a line-oriented allowlist file kept in sync, never backed up
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ConfigArtifact:
    source: Path
    destination: Path
    backup_dir: Path
    template: bool = False
    backup_path: Optional[Path] = None

    def record_backup(self, path: Path) -> None:
        if self.backup_path is not None:
            raise ValueError(f"Backup already recorded for {self.destination}")
        self.backup_path = path


@dataclass(frozen=True)
class BulkAssetDirectory:
    source: Path
    destination: Path
    label: str

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("Bulk asset label cannot be empty")


@dataclass(frozen=True)
class ServiceAllowlist:
    path: Path
    entry: str
    stray_paths: tuple[Path, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.entry or "\n" in self.entry:
            raise ValueError(f"Invalid allowlist entry: {self.entry!r}")
