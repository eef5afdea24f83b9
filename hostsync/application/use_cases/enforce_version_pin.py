"""
Enforce Version Pin Use Case

Architectural Intent:
- Brings one managed component to its pinned revision
- Captures the prior revision before anything is touched
- Pushes a compensating reset onto the ledger right before mutating

Design Decisions:
- Fetch is best-effort: the local revision may already satisfy the pin
- Discarding untracked files is best-effort; the hard reset is not
- A component already at its pin leaves the ledger untouched
"""

import logging
from hostsync.domain.entities.deployment_ledger import RevisionEntry
from hostsync.domain.entities.managed_component import ManagedComponent
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import PinEnforcementError, RevisionStoreError
from hostsync.domain.ports.revision_store_port import RevisionStorePort
from hostsync.domain.value_objects.outcomes import PinOutcome
from hostsync.domain.value_objects.revision import Revision

logger = logging.getLogger(__name__)


class EnforceVersionPin:
    def __init__(self, revision_store: RevisionStorePort):
        self.revision_store = revision_store

    async def execute(
        self, component: ManagedComponent, context: RunContext
    ) -> PinOutcome:
        pin = component.desired_pin
        if pin is None:
            context.report(f"Skipping {component.name}: empty pin")
            return PinOutcome.SKIPPED

        if not await self.revision_store.is_repository(component.path):
            context.report(
                f"Skipping {component.name}: not a repository at {component.path}"
            )
            return PinOutcome.SKIPPED

        component.capture_prior(
            await self.revision_store.head_revision(component.path)
        )

        try:
            await self.revision_store.fetch_all(component.path)
        except RevisionStoreError as e:
            logger.warning("Fetch failed for %s, continuing: %s", component.name, e)

        current = await self.revision_store.head_revision(component.path)
        component.observe(current)

        if current == pin:
            context.report(f"{component.name} already at pinned revision: {pin}")
            return PinOutcome.ALREADY_PINNED

        if context.dry_run:
            context.report(
                f"Would set {component.name} to pinned revision: {pin} "
                f"(current: {current or 'unknown'})"
            )
            context.mark_changed()
            return PinOutcome.DRY_RUN_WOULD_PIN

        self._record_prior(component, context)
        context.mark_mutated()

        try:
            await self.revision_store.force_checkout(component.path, pin)
        except RevisionStoreError as e:
            raise PinEnforcementError(
                f"Failed to set {component.name} to {pin}: {e}"
            ) from e

        try:
            await self.revision_store.discard_untracked(component.path)
        except RevisionStoreError as e:
            logger.warning(
                "Could not discard untracked files in %s: %s", component.path, e
            )

        component.observe(await self.revision_store.head_revision(component.path))
        context.mark_changed()
        context.report(f"{component.name} set to pinned revision: {pin}")
        return PinOutcome.PINNED

    def _record_prior(self, component: ManagedComponent, context: RunContext) -> None:
        prior = component.prior_revision
        if prior is None:
            logger.warning(
                "No readable prior revision for %s, it cannot be rolled back",
                component.name,
            )
            return
        if context.ledger.has_revision_for(component.path):
            return
        context.ledger.record(
            RevisionEntry(
                component=component.name,
                path=component.path,
                prior_revision=prior,
                undo=self._compensation(component, prior),
            )
        )

    def _compensation(self, component: ManagedComponent, prior: Revision):
        store = self.revision_store
        path = component.path

        async def _reset_to_prior() -> bool:
            if not await store.is_repository(path):
                logger.warning("Cannot restore %s: no longer a repository", path)
                return False
            try:
                await store.fetch_all(path)
            except RevisionStoreError as e:
                logger.warning("Fetch failed during restore of %s: %s", path, e)
            await store.force_checkout(path, prior)
            try:
                await store.discard_untracked(path)
            except RevisionStoreError as e:
                logger.warning("Could not discard untracked files in %s: %s", path, e)
            return True

        return _reset_to_prior
