"""
Replace Directory Use Case

Architectural Intent:
- Hard-replaces a bulk asset directory with the contents of a source directory
- Never backed up and never ledgered: a rolled back run keeps the replacement
- Missing or empty sources are expected for optional asset sets and only skipped

Design Decisions:
- The replacement always happens in apply mode, but the run is only marked
  changed when the destination tree actually differed from the source
"""

import logging
from hostsync.domain.entities.config_artifact import BulkAssetDirectory
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import DirectoryReplaceError
from hostsync.domain.ports.filesystem_port import FilesystemPort
from hostsync.domain.value_objects.outcomes import ReplaceOutcome

logger = logging.getLogger(__name__)


class ReplaceDirectory:
    def __init__(self, filesystem: FilesystemPort):
        self.filesystem = filesystem

    def execute(self, asset: BulkAssetDirectory, context: RunContext) -> ReplaceOutcome:
        fs = self.filesystem

        if not fs.is_dir(asset.source):
            context.report(f"Skipping {asset.label}: missing source dir: {asset.source}")
            return ReplaceOutcome.SKIPPED_MISSING_SOURCE

        if not fs.list_entries(asset.source):
            context.report(f"Skipping {asset.label}: source dir is empty: {asset.source}")
            return ReplaceOutcome.SKIPPED_EMPTY_SOURCE

        differs = self._differs(asset)

        if context.dry_run:
            context.report(
                f"Would replace {asset.label}: {asset.destination} (from {asset.source})"
            )
            if differs:
                context.mark_changed()
            return ReplaceOutcome.WOULD_REPLACE

        context.mark_mutated()
        try:
            fs.remove_tree(asset.destination)
            fs.make_dirs(asset.destination)
            fs.copy_tree(asset.source, asset.destination)
        except OSError as e:
            raise DirectoryReplaceError(f"Failed to replace {asset.label}: {e}") from e

        if differs:
            context.mark_changed()
        context.report(f"Replaced {asset.label}: {asset.destination}")
        return ReplaceOutcome.REPLACED

    def _differs(self, asset: BulkAssetDirectory) -> bool:
        # An unreadable destination is replaced anyway
        try:
            return not (
                self.filesystem.is_dir(asset.destination)
                and self.filesystem.same_tree(asset.source, asset.destination)
            )
        except OSError as e:
            logger.warning("Could not compare %s with its source: %s", asset.destination, e)
            return True
