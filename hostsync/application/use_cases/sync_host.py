"""
Sync Host Use Case

Architectural Intent:
- Top-level run controller: Load -> PinAll -> DeployArtifacts ->
  ReplaceBulkAssets -> Finalize, with Rollback reachable after Load
- Owns the run context, the changed summary and the terminal outcome
- Any failure after the first mutation drains the ledger through RollbackRun;
  a failure before any mutation, or in dry-run, ends the run without rollback

Design Decisions:
- Load failures are PreconditionErrors and leave the host untouched
- The system upgrade sits between pinning and deployment but outside the
  transaction boundary
- Services are only resynced after an apply run that changed something,
  or by the rollback itself
"""

import logging
import shutil
from pathlib import Path
from typing import Callable, Optional, Sequence
from hostsync.application.dtos.run_dtos import RunReport, SyncRequest
from hostsync.application.use_cases.deploy_artifact import DeployArtifact
from hostsync.application.use_cases.enforce_version_pin import EnforceVersionPin
from hostsync.application.use_cases.ensure_allowlist_entry import EnsureAllowlistEntry
from hostsync.application.use_cases.render_template import RenderTemplate
from hostsync.application.use_cases.replace_directory import ReplaceDirectory
from hostsync.application.use_cases.resync_services import ResyncServices
from hostsync.application.use_cases.rollback_run import RollbackResult, RollbackRun
from hostsync.application.use_cases.upgrade_system import UpgradeSystem
from hostsync.domain.entities.config_artifact import ConfigArtifact
from hostsync.domain.entities.desired_state import DesiredState
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import (
    ArtifactDeploymentError,
    PreconditionError,
    RevisionStoreError,
)
from hostsync.domain.ports.filesystem_port import FilesystemPort
from hostsync.domain.ports.revision_store_port import RevisionStorePort
from hostsync.domain.value_objects.outcomes import DeployOutcome, RunOutcome

logger = logging.getLogger(__name__)


class SyncHost:
    def __init__(
        self,
        load_desired_state: Callable[[str], DesiredState],
        filesystem: FilesystemPort,
        revision_store: RevisionStorePort,
        enforce_pin: EnforceVersionPin,
        render_template: RenderTemplate,
        deploy_artifact: DeployArtifact,
        replace_directory: ReplaceDirectory,
        ensure_allowlist: EnsureAllowlistEntry,
        upgrade_system: UpgradeSystem,
        rollback: RollbackRun,
        resync: ResyncServices,
        required_commands: Sequence[str] = (),
        command_probe: Callable[[str], Optional[str]] = shutil.which,
    ):
        self.load_desired_state = load_desired_state
        self.filesystem = filesystem
        self.revision_store = revision_store
        self.enforce_pin = enforce_pin
        self.render_template = render_template
        self.deploy_artifact = deploy_artifact
        self.replace_directory = replace_directory
        self.ensure_allowlist = ensure_allowlist
        self.upgrade_system = upgrade_system
        self.rollback = rollback
        self.resync = resync
        self.required_commands = tuple(required_commands)
        self.command_probe = command_probe

    async def execute(
        self,
        request: SyncRequest,
        on_report: Optional[Callable[[str], None]] = None,
    ) -> RunReport:
        context = RunContext(mode=request.mode, on_report=on_report)
        pins, deployments, replacements = {}, {}, {}

        try:
            self._check_commands()
            state = self.load_desired_state(request.desired_state_path)
        except PreconditionError as e:
            context.mark_failed()
            context.report(f"Precondition failed: {e}", level=logging.ERROR)
            return RunReport(
                outcome=RunOutcome.ABORTED,
                mode=context.mode,
                changed=False,
                lines=context.lines,
                error=str(e),
                precondition_failed=True,
            )

        try:
            await self._hygiene(state, context)

            context.report("[1/4] Enforcing pinned versions...")
            for component in state.components:
                pins[component.name] = await self.enforce_pin.execute(component, context)
            await self.upgrade_system.execute(context, enabled=request.system_upgrade)

            context.report("[2/4] Deploying configuration...")
            for artifact in state.artifacts:
                deployments[str(artifact.destination)] = self._deploy(
                    artifact, state.substitutions, context
                )

            context.report("[3/4] Replacing bulk assets...")
            for asset in state.bulk_assets:
                replacements[asset.label] = self.replace_directory.execute(asset, context)
            if state.allowlist is not None:
                self.ensure_allowlist.execute(state.allowlist, context)
        except Exception as e:
            context.mark_failed()
            logger.debug("Run failed", exc_info=True)
            context.report(f"Step failed: {e}", level=logging.ERROR)

            rollback_result = RollbackResult()
            if context.mutated:
                rollback_result = await self.rollback.execute(context, state.branding)
                outcome = RunOutcome.ROLLED_BACK
            else:
                context.report("Nothing was modified, no rollback needed.")
                outcome = RunOutcome.ABORTED

            return RunReport(
                outcome=outcome,
                mode=context.mode,
                changed=context.changed,
                lines=context.lines,
                pins=pins,
                deployments=deployments,
                replacements=replacements,
                restored=tuple(rollback_result.restored),
                not_restored=tuple(rollback_result.not_restored),
                ledger_entries=len(context.ledger),
                services_resynced=rollback_result.performed,
                error=str(e),
            )

        context.report("[4/4] Finalizing...")
        resynced = False
        if not context.changed:
            context.report("No changes detected.")
        elif context.dry_run:
            context.report("Check-only mode: changes detected (no changes applied).")
        else:
            context.report("Changes applied. Restarting services...")
            await self.resync.execute(state.branding)
            resynced = True

        return RunReport(
            outcome=RunOutcome.COMPLETED,
            mode=context.mode,
            changed=context.changed,
            lines=context.lines,
            pins=pins,
            deployments=deployments,
            replacements=replacements,
            ledger_entries=len(context.ledger),
            services_resynced=resynced,
        )

    def _check_commands(self) -> None:
        missing = [c for c in self.required_commands if not self.command_probe(c)]
        if missing:
            raise PreconditionError(f"Missing command(s): {', '.join(missing)}")

    async def _hygiene(self, state: DesiredState, context: RunContext) -> None:
        repo = state.hygiene_repository
        if repo is None or context.dry_run:
            return
        try:
            await self.revision_store.disable_filemode_tracking(repo)
        except RevisionStoreError as e:
            logger.warning("Could not disable file-mode tracking in %s: %s", repo, e)

    def _deploy(
        self, artifact: ConfigArtifact, substitutions: dict[str, str], context: RunContext
    ) -> DeployOutcome:
        if not artifact.template:
            return self.deploy_artifact.execute(artifact, artifact.source, context)

        try:
            rendered = self.render_template.execute(artifact.source, substitutions)
        except OSError as e:
            raise ArtifactDeploymentError(f"Failed to render {artifact.source}: {e}") from e
        try:
            return self.deploy_artifact.execute(artifact, rendered, context)
        finally:
            try:
                self.filesystem.remove_file(rendered)
            except OSError as e:
                logger.warning("Could not remove scratch file %s: %s", rendered, e)
