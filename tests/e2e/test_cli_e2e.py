"""End-to-end tests for the hostsync CLI.

Runs the real composition root against git repositories and a data
directory under tmp_path, exercising argument parsing, config loading,
wiring, the sync run and output formatting as a single path. No services
are configured for restart and branding is disabled, so nothing leaves
the temporary directory.
"""

import json
import logging
from pathlib import Path

import pytest
import yaml
from git import Repo
from unittest.mock import patch

from hostsync.presentation.cli.cli import async_main


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = logging.getLogger("hostsync")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


def _commit(repo: Repo, content: str) -> str:
    (Path(repo.working_tree_dir) / "klippy.py").write_text(content)
    repo.index.add(["klippy.py"])
    return repo.index.commit(content.strip()).hexsha


@pytest.fixture
def printer(tmp_path):
    klipper = Repo.init(tmp_path / "klipper")
    old = _commit(klipper, "v1\n")
    new = _commit(klipper, "v2\n")

    data_dir = tmp_path / "printer_data"
    (data_dir / "config").mkdir(parents=True)
    (data_dir / "config" / "printer.cfg").write_text("old printer\n")

    configs = tmp_path / "release" / "configs"
    configs.mkdir(parents=True)
    (configs / "printer.cfg").write_text("new printer\n")

    state = {
        "data_dir_candidates": [str(data_dir)],
        "components": [
            {"name": "klipper", "path": str(tmp_path / "klipper"), "pin": old},
        ],
        "artifacts": [{"source": "printer.cfg"}],
        "branding": None,
    }
    state_file = tmp_path / "release" / "hostsync.yaml"
    state_file.write_text(yaml.safe_dump(state))

    config_file = tmp_path / "hostsync.json"
    config_file.write_text(json.dumps({
        "run": {"required_commands": ["git"]},
        "services": {"restart": [], "use_sudo": False},
        "logging": {"file": ""},
    }))

    return {
        "klipper": klipper,
        "old": old,
        "new": new,
        "data_dir": data_dir,
        "state": state,
        "state_file": state_file,
        "config_file": config_file,
    }


def _argv(printer, *extra):
    return [
        "hostsync", "--config", str(printer["config_file"]),
        "sync", "--state", str(printer["state_file"]), *extra,
    ]


class TestSyncE2E:
    @pytest.mark.asyncio
    async def test_check_only_changes_nothing(self, printer, capsys):
        with patch("sys.argv", _argv(printer, "--check-only")):
            await async_main()

        out = capsys.readouterr().out
        assert "Would set klipper to pinned revision" in out
        assert "[+] Sync completed: host would change." in out
        assert printer["klipper"].head.commit.hexsha == printer["new"]
        assert (printer["data_dir"] / "config" / "printer.cfg").read_text() == "old printer\n"

    @pytest.mark.asyncio
    async def test_apply_then_noop(self, printer, capsys):
        with patch("sys.argv", _argv(printer)):
            await async_main()

        config = printer["data_dir"] / "config"
        assert printer["klipper"].head.commit.hexsha == printer["old"]
        assert (config / "printer.cfg").read_text() == "new printer\n"
        assert len(list((config / "Backup").iterdir())) == 1
        assert "[+] Sync completed: host changed." in capsys.readouterr().out

        with patch("sys.argv", _argv(printer)):
            await async_main()
        out = capsys.readouterr().out
        assert "No changes detected." in out
        assert "[+] Sync completed: no changes." in out

    @pytest.mark.asyncio
    async def test_failed_run_rolls_back(self, printer, capsys):
        (printer["data_dir"] / "blocker").write_text("")
        state = dict(printer["state"])
        state["allowlist"] = {"path": "blocker/moonraker.asvc", "entry": "KlipperScreen"}
        printer["state_file"].write_text(yaml.safe_dump(state))

        with patch("sys.argv", _argv(printer)), pytest.raises(SystemExit, match="1"):
            await async_main()

        out = capsys.readouterr().out
        assert "Update failed. Starting rollback..." in out
        assert "[-] Rollback attempted." in out
        assert printer["klipper"].head.commit.hexsha == printer["new"]
        assert (printer["data_dir"] / "config" / "printer.cfg").read_text() == "old printer\n"

    @pytest.mark.asyncio
    async def test_missing_state_exits_2(self, printer, tmp_path):
        argv = [
            "hostsync", "--config", str(printer["config_file"]),
            "sync", "--state", str(tmp_path / "missing.yaml"),
        ]
        with patch("sys.argv", argv), pytest.raises(SystemExit, match="2"):
            await async_main()
