"""Tests for RollbackRun use case."""

from pathlib import Path
import pytest
from unittest.mock import AsyncMock
from hostsync.application.use_cases.rollback_run import RollbackRun
from hostsync.domain.entities.deployment_ledger import BackupEntry, RevisionEntry
from hostsync.domain.entities.run_context import RunContext
from hostsync.domain.value_objects.revision import Revision


def _backup(name, undo):
    return BackupEntry(Path(f"/b/{name}.bak"), Path(f"/c/{name}"), undo=undo)


class TestRollbackRun:
    @pytest.mark.asyncio
    async def test_undoes_newest_first_then_resyncs(self):
        order = []

        def make_undo(name):
            async def undo():
                order.append(name)
                return True
            return undo

        ctx = RunContext()
        ctx.ledger.record(
            RevisionEntry("klipper", Path("/opt/klipper"), Revision("aaaa"), make_undo("rev"))
        )
        ctx.ledger.record(_backup("a.cfg", make_undo("a")))
        ctx.ledger.record(_backup("b.cfg", make_undo("b")))
        resync = AsyncMock()

        result = await RollbackRun(resync).execute(ctx, records=["r"])

        assert order == ["b", "a", "rev"]
        assert result.performed
        assert len(result.restored) == 3
        resync.execute.assert_awaited_once_with(["r"])
        assert ctx.lines[0] == "Update failed. Starting rollback..."
        assert ctx.lines[-1] == "Rollback completed."

    @pytest.mark.asyncio
    async def test_failing_undo_does_not_stop_the_rest(self):
        ctx = RunContext()
        ok = AsyncMock(return_value=True)
        ctx.ledger.record(_backup("a.cfg", ok))
        ctx.ledger.record(_backup("b.cfg", AsyncMock(side_effect=OSError("gone"))))
        ctx.ledger.record(_backup("c.cfg", AsyncMock(return_value=False)))

        result = await RollbackRun(AsyncMock()).execute(ctx)

        ok.assert_awaited_once()
        assert len(result.restored) == 1
        assert len(result.not_restored) == 2

    @pytest.mark.asyncio
    async def test_runs_once_per_run(self):
        ctx = RunContext()
        undo = AsyncMock(return_value=True)
        ctx.ledger.record(_backup("a.cfg", undo))
        resync = AsyncMock()
        rollback = RollbackRun(resync)

        await rollback.execute(ctx)
        second = await rollback.execute(ctx)

        assert not second.performed
        undo.assert_awaited_once()
        resync.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_ledger_still_resyncs(self):
        resync = AsyncMock()
        result = await RollbackRun(resync).execute(RunContext())
        assert result.performed
        assert result.restored == [] and result.not_restored == []
        resync.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_resync_failure_is_swallowed(self):
        resync = AsyncMock()
        resync.execute = AsyncMock(side_effect=RuntimeError("boom"))
        ctx = RunContext()

        result = await RollbackRun(resync).execute(ctx)

        assert result.performed
        assert ctx.lines[-1] == "Rollback completed."
