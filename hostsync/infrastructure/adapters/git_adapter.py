"""
Git Adapter

Architectural Intent:
- Infrastructure adapter implementing RevisionStorePort
- Uses GitPython for repository access, wrapped in async
- Translates git failures into RevisionStoreError
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional
from git import Repo, GitCommandError, InvalidGitRepositoryError, NoSuchPathError
from hostsync.domain.exceptions import RevisionStoreError
from hostsync.domain.ports.revision_store_port import RevisionStorePort
from hostsync.domain.value_objects.revision import Revision

logger = logging.getLogger(__name__)


class GitRevisionStore(RevisionStorePort):
    async def _run(self, fn):
        return await asyncio.get_event_loop().run_in_executor(None, fn)

    @staticmethod
    def _open(path: Path) -> Repo:
        try:
            return Repo(path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RevisionStoreError(f"Not a git repository: {path}") from e

    async def is_repository(self, path: Path) -> bool:
        def _check():
            try:
                Repo(path)
                return True
            except (InvalidGitRepositoryError, NoSuchPathError):
                return False

        return await self._run(_check)

    async def fetch_all(self, path: Path) -> None:
        def _fetch():
            try:
                self._open(path).git.fetch("--all", "--prune")
            except GitCommandError as e:
                raise RevisionStoreError(f"git fetch failed in {path}: {e.stderr}") from e

        await self._run(_fetch)

    async def head_revision(self, path: Path) -> Optional[Revision]:
        def _head():
            try:
                return Revision(self._open(path).head.commit.hexsha)
            except (RevisionStoreError, ValueError) as e:
                logger.debug("No readable HEAD in %s: %s", path, e)
                return None

        return await self._run(_head)

    async def force_checkout(self, path: Path, revision: Revision) -> None:
        def _reset():
            try:
                self._open(path).git.reset("--hard", str(revision))
            except GitCommandError as e:
                raise RevisionStoreError(
                    f"git reset --hard {revision} failed in {path}: {e.stderr}"
                ) from e

        await self._run(_reset)

    async def discard_untracked(self, path: Path) -> None:
        def _clean():
            try:
                self._open(path).git.clean("-fd")
            except GitCommandError as e:
                raise RevisionStoreError(f"git clean failed in {path}: {e.stderr}") from e

        await self._run(_clean)

    async def disable_filemode_tracking(self, path: Path) -> None:
        def _configure():
            repo = self._open(path)
            try:
                with repo.config_writer() as writer:
                    writer.set_value("core", "fileMode", "false")
            except OSError as e:
                raise RevisionStoreError(f"Cannot write git config in {path}: {e}") from e

        await self._run(_configure)
