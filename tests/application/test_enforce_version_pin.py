"""Tests for EnforceVersionPin use case."""

from pathlib import Path
import pytest
from hostsync.application.use_cases.enforce_version_pin import EnforceVersionPin
from hostsync.domain.entities.deployment_ledger import RevisionEntry
from hostsync.domain.entities.managed_component import ManagedComponent
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.exceptions import PinEnforcementError
from hostsync.domain.value_objects.outcomes import PinOutcome, RunMode
from hostsync.domain.value_objects.revision import Revision

KLIPPER = Path("/home/pi/klipper")


def _component(pin="bbbb"):
    return ManagedComponent("klipper", KLIPPER, Revision(pin) if pin else None)


class TestEnforceVersionPin:
    @pytest.mark.asyncio
    async def test_pins_and_records_prior(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa", "bbbb")
        ctx = RunContext()
        component = _component()

        outcome = await EnforceVersionPin(revision_store).execute(component, ctx)

        assert outcome is PinOutcome.PINNED
        assert revision_store.heads[KLIPPER] == "bbbb"
        assert component.prior_revision == Revision("aaaa")
        assert component.current_revision == Revision("bbbb")
        assert ctx.changed and ctx.mutated
        [entry] = ctx.ledger.entries
        assert isinstance(entry, RevisionEntry)
        assert entry.prior_revision == Revision("aaaa")

    @pytest.mark.asyncio
    async def test_compensation_restores_prior(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa", "bbbb")
        ctx = RunContext()
        await EnforceVersionPin(revision_store).execute(_component(), ctx)

        [entry] = ctx.ledger.drain()
        assert await entry.undo() is True
        assert revision_store.heads[KLIPPER] == "aaaa"

    @pytest.mark.asyncio
    async def test_already_pinned_is_noop(self, revision_store):
        revision_store.add_repo(KLIPPER, "bbbb")
        ctx = RunContext()

        outcome = await EnforceVersionPin(revision_store).execute(_component(), ctx)

        assert outcome is PinOutcome.ALREADY_PINNED
        assert len(ctx.ledger) == 0
        assert not ctx.changed
        assert revision_store.mutating_calls() == []

    @pytest.mark.asyncio
    async def test_empty_pin_skipped(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa")
        ctx = RunContext()

        outcome = await EnforceVersionPin(revision_store).execute(_component(pin=None), ctx)

        assert outcome is PinOutcome.SKIPPED
        assert revision_store.calls == []

    @pytest.mark.asyncio
    async def test_missing_repository_skipped(self, revision_store):
        ctx = RunContext()
        outcome = await EnforceVersionPin(revision_store).execute(_component(), ctx)
        assert outcome is PinOutcome.SKIPPED
        assert "not a repository" in ctx.lines[0]

    @pytest.mark.asyncio
    async def test_dry_run_does_not_touch_repository(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa", "bbbb")
        ctx = RunContext(mode=RunMode.DRY_RUN)

        outcome = await EnforceVersionPin(revision_store).execute(_component(), ctx)

        assert outcome is PinOutcome.DRY_RUN_WOULD_PIN
        assert ctx.changed
        assert not ctx.mutated
        assert revision_store.heads[KLIPPER] == "aaaa"
        assert revision_store.mutating_calls() == []
        assert len(ctx.ledger) == 0

    @pytest.mark.asyncio
    async def test_fetch_failure_is_tolerated(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa", "bbbb")
        revision_store.fail_fetch.add(KLIPPER)
        ctx = RunContext()

        outcome = await EnforceVersionPin(revision_store).execute(_component(), ctx)

        assert outcome is PinOutcome.PINNED

    @pytest.mark.asyncio
    async def test_unknown_pin_raises_after_ledgering(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa")
        ctx = RunContext()

        with pytest.raises(PinEnforcementError):
            await EnforceVersionPin(revision_store).execute(_component("ffff"), ctx)

        assert ctx.mutated
        assert ctx.ledger.has_revision_for(KLIPPER)

    @pytest.mark.asyncio
    async def test_clean_failure_is_tolerated(self, revision_store):
        revision_store.add_repo(KLIPPER, "aaaa", "bbbb")
        revision_store.fail_clean.add(KLIPPER)
        ctx = RunContext()

        outcome = await EnforceVersionPin(revision_store).execute(_component(), ctx)

        assert outcome is PinOutcome.PINNED

    @pytest.mark.asyncio
    async def test_unreadable_prior_not_ledgered(self, revision_store):
        revision_store.add_repo(KLIPPER, None, "bbbb")
        ctx = RunContext()

        outcome = await EnforceVersionPin(revision_store).execute(_component(), ctx)

        assert outcome is PinOutcome.PINNED
        assert len(ctx.ledger) == 0
