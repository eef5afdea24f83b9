"""
Deploy Artifact Use Case

Architectural Intent:
- Puts a candidate file in place of a configuration artifact
- Byte-identical destinations are left alone
- A differing destination is backed up first and the backup is ledgered

Design Decisions:
- Artifacts that did not exist before the run get no ledger entry; a rolled
  back run leaves them in place since no prior state was lost
- Backups are never deleted
- Dry-run computes the same decision but neither backs up nor copies
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable
from hostsync.domain.entities.config_artifact import ConfigArtifact
from hostsync.domain.entities.deployment_ledger import BackupEntry
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import ArtifactDeploymentError
from hostsync.domain.ports.filesystem_port import FilesystemPort
from hostsync.domain.value_objects.outcomes import DeployOutcome

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


class DeployArtifact:
    def __init__(
        self,
        filesystem: FilesystemPort,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.filesystem = filesystem
        self.clock = clock

    def execute(
        self, artifact: ConfigArtifact, candidate: Path, context: RunContext
    ) -> DeployOutcome:
        fs = self.filesystem
        destination = artifact.destination
        if fs.is_dir(destination):
            raise ArtifactDeploymentError(f"Destination is a directory: {destination}")
        present = fs.is_file(destination)

        if present and fs.same_content(candidate, destination):
            logger.debug("Unchanged: %s", destination)
            return DeployOutcome.NOOP

        if context.dry_run:
            if present:
                context.report(f"Would update: {destination}")
                outcome = DeployOutcome.WOULD_REPLACE
            else:
                context.report(f"Would create: {destination}")
                outcome = DeployOutcome.WOULD_CREATE
            context.mark_changed()
            return outcome

        try:
            if present:
                backup = self._backup(artifact)
                context.ledger.record(
                    BackupEntry(
                        backup_path=backup,
                        destination_path=destination,
                        undo=self._compensation(backup, destination),
                    )
                )
                context.report(f"Backup created: {backup}")
            context.mark_mutated()
            fs.copy_file(candidate, destination)
        except OSError as e:
            raise ArtifactDeploymentError(f"Failed to deploy {destination}: {e}") from e

        context.mark_changed()
        if present:
            context.report(f"Updated: {destination}")
            return DeployOutcome.BACKED_UP_AND_REPLACED
        context.report(f"Created: {destination}")
        return DeployOutcome.CREATED

    def _backup(self, artifact: ConfigArtifact) -> Path:
        self.filesystem.make_dirs(artifact.backup_dir)
        backup = self._backup_path_for(artifact)
        self.filesystem.copy_file(artifact.destination, backup)
        artifact.record_backup(backup)
        return backup

    def _backup_path_for(self, artifact: ConfigArtifact) -> Path:
        stamp = self.clock().strftime(BACKUP_TIMESTAMP_FORMAT)
        base = f"{artifact.destination.name}.bak-{stamp}"
        candidate = artifact.backup_dir / base
        suffix = 1
        while self.filesystem.exists(candidate):
            candidate = artifact.backup_dir / f"{base}-{suffix}"
            suffix += 1
        return candidate

    def _compensation(self, backup: Path, destination: Path):
        fs = self.filesystem

        async def _restore_backup() -> bool:
            if not fs.is_file(backup):
                logger.warning("Backup %s is gone, cannot restore %s", backup, destination)
                return False
            try:
                fs.copy_file(backup, destination)
            except PermissionError as e:
                logger.warning("Permission denied restoring %s: %s", destination, e)
                return False
            return True

        return _restore_backup
