"""
Package Manager Port

Architectural Intent:
- Port interface for the optional system upgrade
- Outside the rollback boundary: nothing done here is ever undone
"""

from abc import ABC, abstractmethod


class PackageManagerPort(ABC):
    @abstractmethod
    async def refresh_index(self) -> None:
        """
        Refreshes package lists. Raises PackageManagerError on failure.
        """
        pass

    @abstractmethod
    async def upgrade(self) -> None:
        """
        Upgrades installed packages non-interactively. Raises PackageManagerError on failure.
        """
        pass
