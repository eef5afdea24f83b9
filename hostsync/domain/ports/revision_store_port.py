"""
Revision Store Port

Architectural Intent:
- Port interface over a version-controlled working directory
- Implemented by GitRevisionStore
- Adapters raise RevisionStoreError for any failed operation
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional
from hostsync.domain.value_objects.revision import Revision


class RevisionStorePort(ABC):
    @abstractmethod
    async def is_repository(self, path: Path) -> bool:
        """
        True if path is the root of a working copy.
        """
        pass

    @abstractmethod
    async def fetch_all(self, path: Path) -> None:
        """
        Fetches every remote, pruning deleted refs.
        """
        pass

    @abstractmethod
    async def head_revision(self, path: Path) -> Optional[Revision]:
        """
        Returns the checked-out revision, or None if it cannot be read.
        """
        pass

    @abstractmethod
    async def force_checkout(self, path: Path, revision: Revision) -> None:
        """
        Hard-resets the working copy to exactly this revision.
        """
        pass

    @abstractmethod
    async def discard_untracked(self, path: Path) -> None:
        """
        Removes files and directories unknown to revision control.
        """
        pass

    @abstractmethod
    async def disable_filemode_tracking(self, path: Path) -> None:
        """
        Stops executable-bit changes from showing up as modifications.
        """
        pass
