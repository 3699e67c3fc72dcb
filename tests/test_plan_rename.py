import os

import pytest

from scan_reorder.core import (
    FileEntry, RenameOptions, PadOverflow, PlanCollisionError, PlanOverflowError,
    MixedDirectoryError, scan_directory, sort_entries, interleave, basename
)
from scan_reorder.core.plan_rename import (
    build_export_plan, build_plan, folder_prefix, pad_width, plan_reorder, target_name, validate_plan
)

MISSING_DIR = "/nonexistent-scan-reorder/book1"


def _virtual(names, directory=MISSING_DIR, sep="/"):
    return [FileEntry(name=n, path=f"{directory}{sep}{n}") for n in names]


def test_three_files_get_folder_prefix_in_plan_order(make_scans):
    directory = make_scans(["a1.jpg", "a2.png", "a3.jpg"])
    batch = sort_entries(scan_directory(directory))
    plan = build_plan(interleave(batch), batch)

    assert [basename(op.new_path) for op in plan.ops] == ["book1_001.jpg", "book1_002.jpg", "book1_003.png"]
    assert [basename(op.original_path) for op in plan.ops] == ["a3.jpg", "a1.jpg", "a2.png"]
    assert all(os.path.dirname(op.new_path) == directory for op in plan.ops)
    assert plan.directory == directory
    assert plan.warnings == []


def test_plan_does_not_touch_disk(make_scans):
    directory = make_scans(["p1.jpg", "p2.jpg"])
    plan_reorder(scan_directory(directory))
    assert sorted(os.listdir(directory)) == ["p1.jpg", "p2.jpg"]


def test_target_name():
    assert target_name("book1", 0, "jpg", 3) == "book1_001.jpg"
    assert target_name("book1", 41, "PNG", 3) == "book1_042.PNG"
    assert target_name("book1", 0, "", 3) == "book1_001"
    assert target_name("vol", 9, "tif", 4, separator="-") == "vol-0010.tif"


def test_extension_case_is_kept():
    plan = plan_reorder(_virtual(["p1.JPG"]))
    assert basename(plan.ops[0].new_path) == "book1_001.JPG"


def test_windows_paths_keep_backslashes():
    entries = _virtual(["p1.jpg", "p2.jpg"], directory="C:\\scans\\book1", sep="\\")
    plan = plan_reorder(entries)
    assert [op.new_path for op in plan.ops] == [
        "C:\\scans\\book1\\book1_001.jpg",
        "C:\\scans\\book1\\book1_002.jpg",
    ]


def test_pad_widens_for_large_batches():
    entries = _virtual([f"p{i}.jpg" for i in range(1, 1001)])
    plan = plan_reorder(entries)
    names = [basename(op.new_path) for op in plan.ops]
    assert names[0] == "book1_0001.jpg"
    assert names[-1] == "book1_1000.jpg"
    assert len(set(names)) == 1000
    assert plan.warnings == ["Sequence numbers widened to 4 digits for 1000 files"]


def test_pad_reject_policy():
    entries = _virtual([f"p{i}.jpg" for i in range(1, 1001)])
    with pytest.raises(PlanOverflowError):
        plan_reorder(entries, RenameOptions(pad_overflow=PadOverflow.REJECT))


def test_pad_width_boundaries():
    options = RenameOptions()
    assert pad_width(999, options) == 3
    assert pad_width(1000, options) == 4
    assert pad_width(5, RenameOptions(pad_width=5)) == 5


def test_collision_with_file_outside_batch_is_rejected(make_scans):
    directory = make_scans(["a.jpg", "b.jpg", "book1_002.jpg"])
    batch = [e for e in sort_entries(scan_directory(directory)) if e.name != "book1_002.jpg"]

    with pytest.raises(PlanCollisionError) as excinfo:
        build_plan(interleave(batch), batch)

    assert any(dst.endswith("book1_002.jpg") for _, dst in excinfo.value.collisions)
    assert sorted(os.listdir(directory)) == ["a.jpg", "b.jpg", "book1_002.jpg"]


def test_collision_case_insensitive(make_scans):
    directory = make_scans(["a.jpg", "b.jpg", "BOOK1_001.JPG"])
    batch = [e for e in sort_entries(scan_directory(directory)) if e.name != "BOOK1_001.JPG"]

    with pytest.raises(PlanCollisionError):
        build_plan(interleave(batch), batch, RenameOptions(case_insensitive_detect=True))


def test_batch_files_reusing_target_names_are_not_collisions(make_scans):
    directory = make_scans(["book1_001.jpg", "book1_002.jpg", "book1_003.jpg"])
    plan = plan_reorder(scan_directory(directory))
    assert plan.total_count == 3
    assert plan.needs_staging


def test_mixed_directories_rejected():
    entries = _virtual(["a.jpg"]) + _virtual(["b.jpg"], directory="/elsewhere")
    with pytest.raises(MixedDirectoryError):
        build_plan(entries, entries)


def test_entries_without_path_are_excluded():
    entries = _virtual(["p1.jpg", "p2.jpg"]) + [FileEntry(name="ghost.jpg", path="")]
    plan = plan_reorder(entries)
    assert plan.total_count == 2


def test_empty_batch():
    plan = build_plan([], [])
    assert plan.ops == []


def test_folder_prefix():
    assert folder_prefix(_virtual(["a.jpg"])) == "book1"
    assert folder_prefix([]) == ""


def test_export_plan_defaults_to_sibling_folder(make_scans, tmp_path):
    directory = make_scans(["p1.jpg", "p2.jpg"])
    batch = sort_entries(scan_directory(directory))
    plan = build_export_plan(interleave(batch), batch)

    expected_dir = str(tmp_path / "book1_reordered")
    assert plan.directory == expected_dir
    assert [op.new_path for op in plan.ops] == [
        os.path.join(expected_dir, "book1_001.jpg"),
        os.path.join(expected_dir, "book1_002.jpg"),
    ]


def test_export_plan_rejects_existing_output(make_scans, tmp_path):
    directory = make_scans(["p1.jpg"])
    out = tmp_path / "out"
    out.mkdir()
    (out / "book1_001.jpg").write_text("old")
    batch = scan_directory(directory)
    with pytest.raises(PlanCollisionError):
        build_export_plan(batch, batch, str(out))


def test_validate_plan_reports_missing_source(make_scans):
    directory = make_scans(["p1.jpg", "p2.jpg"])
    plan = plan_reorder(scan_directory(directory))
    os.remove(os.path.join(directory, "p1.jpg"))

    problems = validate_plan(plan)
    assert len(problems) == 1
    assert "does not exist" in problems[0]


def test_build_plan_skips_entries_without_path():
    entries = _virtual(["p1.jpg", "p2.jpg"]) + [FileEntry(name="ghost.jpg", path="")]
    batch = sort_entries(entries)
    plan = build_plan(interleave(batch), batch)

    assert [basename(op.original_path) for op in plan.ops] == ["p2.jpg", "p1.jpg"]
    assert [basename(op.new_path) for op in plan.ops] == ["book1_001.jpg", "book1_002.jpg"]


def test_export_plan_skips_entries_without_path(tmp_path):
    entries = [FileEntry(name="ghost.jpg", path="")] + _virtual(["p1.jpg"])
    plan = build_export_plan(entries, entries, str(tmp_path / "out"))
    assert plan.total_count == 1


def test_entry_without_name_gets_no_extension():
    entries = [FileEntry(name=None, path=f"{MISSING_DIR}/p1.jpg")]
    plan = build_plan(entries, entries)
    assert basename(plan.ops[0].new_path) == "book1_001"


@pytest.mark.parametrize("directory, sep", [("C:", "\\"), ("", "/")])
def test_root_directories_use_fallback_prefix(directory, sep):
    entries = _virtual(["p1.jpg"], directory=directory, sep=sep)
    assert folder_prefix(entries) == "output"
    plan = build_plan(entries, entries)
    assert basename(plan.ops[0].new_path) == "output_001.jpg"
