import pytest

from scan_reorder.core.safety_checks import check_path_length, check_rename_op, is_valid_filename


@pytest.mark.parametrize("name", ["book1_001.jpg", "scan 7.TIF", ".cover.png"])
def test_valid_names(name):
    assert is_valid_filename(name) == (True, None)


@pytest.mark.parametrize("name", ["", "a:b.jpg", "page?.jpg", "trailing.", "CON.jpg", "x" * 256])
def test_invalid_names(name):
    valid, error = is_valid_filename(name)
    assert not valid
    assert error


def test_path_length():
    assert check_path_length("C:\\" + "a" * 10)[0]
    assert not check_path_length("C:\\" + "a" * 300)[0]


def test_rename_op_checks(make_scans):
    directory = make_scans(["p1.jpg"])
    assert check_rename_op(f"{directory}/p1.jpg", f"{directory}/book1_001.jpg") == (True, None)

    valid, error = check_rename_op(f"{directory}/p9.jpg", f"{directory}/book1_001.jpg")
    assert not valid
    assert "does not exist" in error

    valid, error = check_rename_op(f"{directory}/p1.jpg", f"{directory}/book1|001.jpg")
    assert not valid
