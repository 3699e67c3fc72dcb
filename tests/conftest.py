"""
Shared pytest fixtures for the scan_reorder test suite.
"""

import os

import pytest

from scan_reorder.core import LocalFileSystem


class FlakyFileSystem(LocalFileSystem):
    """Local filesystem whose renames fail for chosen source paths"""

    def __init__(self, fail_sources=()):
        self.fail_sources = set(fail_sources)
        self.calls = []

    def rename(self, old_path, new_path):
        self.calls.append((old_path, new_path))
        if old_path in self.fail_sources:
            raise PermissionError(f"Permission denied: {old_path}")
        super().rename(old_path, new_path)


@pytest.fixture
def make_scans(tmp_path):
    """Create a folder of fake scans; each file holds its own original name"""

    def _make(names, folder="book1"):
        directory = tmp_path / folder
        directory.mkdir(parents=True, exist_ok=True)
        for name in names:
            (directory / name).write_text(name, encoding="utf-8")
        return str(directory)

    return _make


@pytest.fixture
def ten_scans(make_scans):
    return make_scans([f"scan{i}.jpg" for i in range(1, 11)])


def listdir(directory):
    return sorted(os.listdir(directory))


def contents(directory):
    """Map filename -> text content"""
    result = {}
    for name in os.listdir(directory):
        path = os.path.join(directory, name)
        if os.path.isfile(path):
            with open(path, encoding="utf-8") as f:
                result[name] = f.read()
    return result
