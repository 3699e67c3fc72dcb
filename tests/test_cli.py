import os

from conftest import listdir
from scan_reorder.cli import cli_interactive
from scan_reorder.cli.cli_entry import main

ORIGINAL_TEN = sorted(f"scan{i}.jpg" for i in range(1, 11))


def _undo_log_from(output):
    for line in output.splitlines():
        if line.startswith("Undo log: "):
            return line[len("Undo log: "):]
    return None


def test_scan_lists_natural_order(ten_scans, capsys):
    assert main(["scan", ten_scans]) == 0
    out = capsys.readouterr().out
    assert "Found 10 images" in out
    assert out.index("scan2.jpg") < out.index("scan10.jpg")


def test_preview_does_not_rename(ten_scans, capsys):
    assert main(["preview", ten_scans]) == 0
    out = capsys.readouterr().out
    assert "book1_001.jpg" in out
    assert listdir(ten_scans) == ORIGINAL_TEN


def test_reorder_and_undo_from_log(ten_scans, tmp_path, capsys):
    log_dir = str(tmp_path / "logs")

    assert main(["reorder", ten_scans, "--yes", "--log-dir", log_dir]) == 0
    log_file = _undo_log_from(capsys.readouterr().out)
    assert log_file is not None and os.path.exists(log_file)
    assert listdir(ten_scans) == [f"book1_{i:03d}.jpg" for i in range(1, 11)]

    assert main(["undo", log_file, "--yes"]) == 0
    assert listdir(ten_scans) == ORIGINAL_TEN
    assert not os.path.exists(log_file)


def test_reorder_dry_run(ten_scans, tmp_path, capsys):
    assert main(["reorder", ten_scans, "--dry-run", "--log-dir", str(tmp_path / "logs")]) == 0
    assert "Preview mode" in capsys.readouterr().out
    assert listdir(ten_scans) == ORIGINAL_TEN


def test_reorder_cancelled(ten_scans, tmp_path, monkeypatch):
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")
    assert main(["reorder", ten_scans, "--log-dir", str(tmp_path / "logs")]) == 0
    assert listdir(ten_scans) == ORIGINAL_TEN


def test_reorder_collision_reports_error(make_scans, tmp_path, capsys):
    directory = make_scans(["a.jpg", "b.jpg"])
    os.mkdir(os.path.join(directory, "book1_002.jpg"))

    assert main(["reorder", directory, "--yes", "--log-dir", str(tmp_path / "logs")]) == 1
    assert "colliding" in capsys.readouterr().out
    assert listdir(directory) == ["a.jpg", "b.jpg", "book1_002.jpg"]


def test_missing_directory_returns_error(tmp_path, capsys):
    assert main(["scan", str(tmp_path / "missing")]) == 1
    assert "Error:" in capsys.readouterr().out


def test_export_copies_into_new_folder(ten_scans, tmp_path, capsys):
    output = tmp_path / "out"
    assert main(["export", ten_scans, "--output", str(output), "--yes"]) == 0
    assert listdir(str(output)) == [f"book1_{i:03d}.jpg" for i in range(1, 11)]
    assert listdir(ten_scans) == ORIGINAL_TEN


def test_interactive_reorder_then_undo(ten_scans, monkeypatch, capsys):
    answers = iter(["1", ten_scans, "y", "", "2", "y", "", "q"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    monkeypatch.setattr(cli_interactive, "clear_screen", lambda: None)

    assert cli_interactive.interactive_mode() == 0
    assert listdir(ten_scans) == ORIGINAL_TEN
    assert "Restored: 10" in capsys.readouterr().out


def test_entry_point_cli_flag(ten_scans, monkeypatch, capsys):
    from scan_reorder.main import main as entry_main

    monkeypatch.setattr("sys.argv", ["scan-reorder", "--cli", "scan", ten_scans])
    assert entry_main() == 0
    assert "Found 10 images" in capsys.readouterr().out


def test_recover_restores_temporary_names(make_scans, capsys):
    directory = make_scans(["scan1.jpg", ".__tmp_reorder__0badf00d__scan2.jpg"])
    assert main(["recover", directory]) == 0
    assert "Restored 1 file(s)" in capsys.readouterr().out
    assert listdir(directory) == ["scan1.jpg", "scan2.jpg"]
