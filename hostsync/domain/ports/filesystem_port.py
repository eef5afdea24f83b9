"""
Filesystem Port

Architectural Intent:
- Port interface for the local file operations a run performs
- Implemented by LocalFilesystem
- Operations raise OSError on failure
"""

from abc import ABC, abstractmethod
from pathlib import Path


class FilesystemPort(ABC):
    @abstractmethod
    def exists(self, path: Path) -> bool:
        pass

    @abstractmethod
    def is_file(self, path: Path) -> bool:
        pass

    @abstractmethod
    def is_dir(self, path: Path) -> bool:
        pass

    @abstractmethod
    def same_content(self, first: Path, second: Path) -> bool:
        """
        Byte-for-byte comparison. False if either file is missing.
        """
        pass

    @abstractmethod
    def same_tree(self, first: Path, second: Path) -> bool:
        """
        True if both directories hold the same relative paths with identical bytes.
        """
        pass

    @abstractmethod
    def read_bytes(self, path: Path) -> bytes:
        pass

    @abstractmethod
    def write_bytes(self, path: Path, data: bytes) -> None:
        """
        Replaces the file contents atomically.
        """
        pass

    @abstractmethod
    def copy_file(self, source: Path, destination: Path) -> None:
        """
        Copies contents and metadata, creating parent directories.
        """
        pass

    @abstractmethod
    def scratch_copy(self, source: Path) -> Path:
        """
        Copies source to a new temporary file and returns its path.
        """
        pass

    @abstractmethod
    def make_dirs(self, path: Path) -> None:
        pass

    @abstractmethod
    def list_entries(self, path: Path) -> list[Path]:
        pass

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        """
        Removes a file. Missing files are ignored.
        """
        pass

    @abstractmethod
    def remove_tree(self, path: Path) -> None:
        """
        Removes a directory recursively. Missing directories are ignored.
        """
        pass

    @abstractmethod
    def copy_tree(self, source: Path, destination: Path) -> None:
        """
        Copies every entry of source into destination, preserving symlinks.
        """
        pass

    @abstractmethod
    def set_read_only(self, path: Path) -> None:
        pass
