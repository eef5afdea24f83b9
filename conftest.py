"""Global test configuration.

In-memory fakes for the revision store, service supervisor, key-value
service and package manager, so orchestration tests never touch git,
systemd, apt or the network. The real LocalFilesystem is used against
tmp_path.
"""

from pathlib import Path
from typing import Optional

import pytest

from hostsync.domain.exceptions import PackageManagerError, RevisionStoreError
from hostsync.domain.ports.key_value_port import KeyValueServicePort
from hostsync.domain.ports.package_manager_port import PackageManagerPort
from hostsync.domain.ports.revision_store_port import RevisionStorePort
from hostsync.domain.ports.service_supervisor_port import ServiceSupervisorPort
from hostsync.domain.value_objects.revision import Revision
from hostsync.infrastructure.adapters.local_filesystem import LocalFilesystem


class FakeRevisionStore(RevisionStorePort):
    """Working copies as a dict of path -> head revision."""

    def __init__(self) -> None:
        self.heads: dict[Path, Optional[str]] = {}
        self.known: dict[Path, set[str]] = {}
        self.calls: list[tuple[str, Path]] = []
        self.fail_fetch: set[Path] = set()
        self.fail_reset: set[Path] = set()
        self.fail_clean: set[Path] = set()
        self.filemode_disabled: set[Path] = set()

    def add_repo(self, path: Path, head: Optional[str], *revisions: str) -> None:
        self.heads[path] = head
        self.known[path] = {r for r in (head, *revisions) if r}

    async def is_repository(self, path: Path) -> bool:
        return path in self.heads

    async def fetch_all(self, path: Path) -> None:
        self.calls.append(("fetch", path))
        if path in self.fail_fetch:
            raise RevisionStoreError(f"fetch failed in {path}")

    async def head_revision(self, path: Path) -> Optional[Revision]:
        head = self.heads.get(path)
        return Revision(head) if head else None

    async def force_checkout(self, path: Path, revision: Revision) -> None:
        self.calls.append(("reset", path))
        if path in self.fail_reset or str(revision) not in self.known.get(path, set()):
            raise RevisionStoreError(f"unknown revision {revision} in {path}")
        self.heads[path] = str(revision)

    async def discard_untracked(self, path: Path) -> None:
        self.calls.append(("clean", path))
        if path in self.fail_clean:
            raise RevisionStoreError(f"clean failed in {path}")

    async def disable_filemode_tracking(self, path: Path) -> None:
        if path not in self.heads:
            raise RevisionStoreError(f"Not a git repository: {path}")
        self.filemode_disabled.add(path)

    def mutating_calls(self) -> list[tuple[str, Path]]:
        return [c for c in self.calls if c[0] in ("reset", "clean")]


class FakeSupervisor(ServiceSupervisorPort):
    def __init__(self, failing: tuple[str, ...] = ()) -> None:
        self.restarted: list[str] = []
        self.failing = set(failing)

    async def restart(self, service_name: str) -> bool:
        if service_name in self.failing:
            return False
        self.restarted.append(service_name)
        return True


class FakeKeyValueService(KeyValueServicePort):
    def __init__(self, ready_after: int = 1, reachable: bool = True) -> None:
        self.ready_after = ready_after
        self.reachable = reachable
        self.probes = 0
        self.items: list[tuple[str, str, object]] = []

    async def is_ready(self) -> bool:
        self.probes += 1
        return self.reachable and self.probes >= self.ready_after

    async def put_item(self, record) -> bool:
        if not self.reachable:
            return False
        self.items.append((record.namespace, record.key, record.value))
        return True


class FakePackageManager(PackageManagerPort):
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[str] = []

    async def refresh_index(self) -> None:
        self.calls.append("refresh")
        if self.fail:
            raise PackageManagerError("apt-get update failed (100)")

    async def upgrade(self) -> None:
        self.calls.append("upgrade")


async def no_sleep(_seconds: float) -> None:
    return None


@pytest.fixture
def revision_store():
    return FakeRevisionStore()


@pytest.fixture
def supervisor():
    return FakeSupervisor()


@pytest.fixture
def key_value():
    return FakeKeyValueService()


@pytest.fixture
def package_manager():
    return FakePackageManager()


@pytest.fixture
def filesystem(tmp_path):
    scratch = tmp_path / "scratch"
    scratch.mkdir()
    return LocalFilesystem(scratch_dir=str(scratch))


@pytest.fixture
def sleep():
    return no_sleep
