"""
Local Filesystem Adapter

Architectural Intent:
- Infrastructure adapter implementing FilesystemPort on the local disk
- shutil/pathlib based, metadata preserving copies
"""

import filecmp
import os
import shutil
import stat
import tempfile
from pathlib import Path
from hostsync.domain.ports.filesystem_port import FilesystemPort


class LocalFilesystem(FilesystemPort):
    def __init__(self, scratch_dir: str | None = None) -> None:
        self._scratch_dir = scratch_dir

    def exists(self, path: Path) -> bool:
        return path.exists() or path.is_symlink()

    def is_file(self, path: Path) -> bool:
        return path.is_file()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def same_content(self, first: Path, second: Path) -> bool:
        if not (first.is_file() and second.is_file()):
            return False
        return filecmp.cmp(first, second, shallow=False)

    def same_tree(self, first: Path, second: Path) -> bool:
        if not (first.is_dir() and second.is_dir()):
            return False
        first_entries = self._relative_entries(first)
        if first_entries != self._relative_entries(second):
            return False
        for relative in first_entries:
            a, b = first / relative, second / relative
            if a.is_symlink() != b.is_symlink() or a.is_dir() != b.is_dir():
                return False
            if a.is_symlink():
                if os.readlink(a) != os.readlink(b):
                    return False
            elif a.is_file() and not filecmp.cmp(a, b, shallow=False):
                return False
        return True

    @staticmethod
    def _relative_entries(root: Path) -> set[Path]:
        entries = set()
        for dirpath, dirnames, filenames in os.walk(root):
            base = Path(dirpath)
            for name in dirnames + filenames:
                entries.add((base / name).relative_to(root))
        return entries

    def read_bytes(self, path: Path) -> bytes:
        return path.read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> None:
        fd, tmp = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            if path.exists():
                shutil.copymode(path, tmp)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def copy_file(self, source: Path, destination: Path) -> None:
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)

    def scratch_copy(self, source: Path) -> Path:
        fd, tmp = tempfile.mkstemp(
            prefix="hostsync-", suffix=f"-{source.name}", dir=self._scratch_dir
        )
        os.close(fd)
        try:
            shutil.copy2(source, tmp)
        except OSError:
            os.unlink(tmp)
            raise
        return Path(tmp)

    def make_dirs(self, path: Path) -> None:
        path.mkdir(parents=True, exist_ok=True)

    def list_entries(self, path: Path) -> list[Path]:
        return sorted(path.iterdir())

    def remove_file(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    def remove_tree(self, path: Path) -> None:
        if path.is_symlink() or path.is_file():
            path.unlink()
        elif path.exists():
            shutil.rmtree(path)

    def copy_tree(self, source: Path, destination: Path) -> None:
        shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)

    def set_read_only(self, path: Path) -> None:
        path.chmod(stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)
