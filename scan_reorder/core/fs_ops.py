"""
fs_ops.py - Filesystem Capabilities

LocalFileSystem is the default implementation of the operations the core
needs from its environment. Any object with the same methods can be passed
instead (tests use in-memory fakes).
"""

import os
import shutil
from typing import List

from .models_fs import DirEntry


class LocalFileSystem:
    """Filesystem operations on the local disk"""

    def list_directory(self, path: str) -> List[DirEntry]:
        """
        List a directory (non-recursive)

        Raises:
            OSError: Directory cannot be read
        """
        entries = []
        with os.scandir(path) as it:
            for item in it:
                try:
                    is_file = item.is_file()
                except OSError:
                    is_file = False
                entries.append(DirEntry(name=item.name, is_file=is_file))
        return entries

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def exists(self, path: str) -> bool:
        return os.path.lexists(path)

    def rename(self, old_path: str, new_path: str) -> None:
        """
        Rename a file without ever replacing an existing destination

        Raises:
            FileExistsError: Destination already exists
            OSError: Rename failed
        """
        if old_path == new_path:
            return
        # Same file under a different case is allowed (case-only rename)
        if os.path.lexists(new_path) and not _same_file(old_path, new_path):
            raise FileExistsError(f"Destination already exists: {new_path}")
        os.rename(old_path, new_path)

    def copy(self, src: str, dst: str) -> None:
        """
        Copy a file with its metadata, refusing to replace an existing file

        Raises:
            FileExistsError: Destination already exists
            OSError: Copy failed
        """
        if os.path.lexists(dst):
            raise FileExistsError(f"Destination already exists: {dst}")
        shutil.copy2(src, dst)

    def makedirs(self, path: str) -> None:
        os.makedirs(path, exist_ok=True)


def _same_file(a: str, b: str) -> bool:
    try:
        return os.path.samefile(a, b)
    except OSError:
        return False
