import os

import pytest

from scan_reorder.core import (
    DroppedFiles, DroppedFolder, RenameOptions, LocalFileSystem,
    DirectoryReadError, NoSupportedFilesError, MixedDirectoryError,
    scan_directory, resolve_dropped_input, is_supported
)
from scan_reorder.core.scan_files import get_existing_names


class UnreadableFileSystem(LocalFileSystem):
    def list_directory(self, path):
        raise PermissionError(f"Permission denied: {path}")


def test_keeps_only_supported_images(make_scans):
    directory = make_scans(["A.JPG", "b.png", "notes.txt", ".hidden.jpg", "noext"])
    os.mkdir(os.path.join(directory, "sub.jpg"))

    names = sorted(e.name for e in scan_directory(directory))

    assert names == ["A.JPG", "b.png"]


def test_entries_carry_full_paths(make_scans):
    directory = make_scans(["p1.tif"])
    entry = scan_directory(directory)[0]
    assert entry.path == os.path.join(directory, "p1.tif")
    assert entry.directory == directory


def test_include_hidden(make_scans):
    directory = make_scans([".cover.jpg", "p1.jpg"])
    names = sorted(e.name for e in scan_directory(directory, RenameOptions(include_hidden=True)))
    assert names == [".cover.jpg", "p1.jpg"]


def test_custom_extension_list(make_scans):
    directory = make_scans(["p1.jpg", "p2.png"])
    entries = scan_directory(directory, RenameOptions(extensions=frozenset({"png"})))
    assert [e.name for e in entries] == ["p2.png"]


def test_missing_directory(tmp_path):
    with pytest.raises(DirectoryReadError):
        scan_directory(str(tmp_path / "missing"))


def test_unreadable_directory(make_scans):
    directory = make_scans(["p1.jpg"])
    with pytest.raises(DirectoryReadError) as excinfo:
        scan_directory(directory, fs=UnreadableFileSystem())
    assert "Permission denied" in str(excinfo.value)


def test_no_supported_files(make_scans):
    directory = make_scans(["readme.txt"])
    with pytest.raises(NoSupportedFilesError):
        scan_directory(directory)


@pytest.mark.parametrize("name, expected", [
    ("page.jpg", True),
    ("page.JPEG", True),
    ("raw.CR2", True),
    ("doc.pdf", False),
    ("jpg", False),
    ("", False),
])
def test_is_supported(name, expected):
    assert is_supported(name) is expected


def test_dropped_folder(make_scans):
    directory = make_scans(["p1.jpg", "p2.jpg"])
    resolved_dir, entries = resolve_dropped_input(DroppedFolder(directory))
    assert resolved_dir == directory
    assert len(entries) == 2


def test_dropped_files_from_one_directory(make_scans):
    directory = make_scans(["p1.jpg", "p2.jpg", "notes.txt"])
    paths = [os.path.join(directory, n) for n in ("p2.jpg", "notes.txt", "p1.jpg")]

    resolved_dir, entries = resolve_dropped_input(DroppedFiles(paths))

    assert resolved_dir == directory
    assert [e.name for e in entries] == ["p2.jpg", "p1.jpg"]


def test_dropped_files_from_several_directories(make_scans):
    first = make_scans(["p1.jpg"], folder="book1")
    second = make_scans(["p1.jpg"], folder="book2")
    paths = [os.path.join(first, "p1.jpg"), os.path.join(second, "p1.jpg")]

    with pytest.raises(MixedDirectoryError) as excinfo:
        resolve_dropped_input(DroppedFiles(paths))
    assert excinfo.value.directories == sorted([first, second])


def test_dropped_files_without_images():
    with pytest.raises(NoSupportedFilesError):
        resolve_dropped_input(DroppedFiles(["/tmp/a.txt", ""]))


def test_dropped_input_type_is_checked():
    with pytest.raises(TypeError):
        resolve_dropped_input("/tmp/book1")


def test_existing_names(make_scans):
    directory = make_scans(["P1.jpg", "p2.jpg"])
    assert get_existing_names(directory, case_insensitive=True) == {"p1.jpg", "p2.jpg"}
    assert get_existing_names(directory, case_insensitive=False) == {"P1.jpg", "p2.jpg"}
    assert get_existing_names(os.path.join(directory, "missing")) == set()
