import pytest

from packtools.templatefuncs import file_contents, to_string_list


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (["dc1", "dc2", "dc3", "dc4"], '["dc1", "dc2", "dc3", "dc4"]'),
        (["dc1"], '["dc1"]'),
        ([], "[]"),
    ],
)
def test_to_string_list(value, expected):
    assert to_string_list(value) == expected


def test_to_string_list_escapes_quotes_and_backslashes():
    assert to_string_list(['a"b', "c\\d"]) == '["a\\"b", "c\\\\d"]'


def test_to_string_list_single_value():
    assert to_string_list("dc1") == '["dc1"]'


def test_to_string_list_tuple_matches_list():
    assert to_string_list(("x", "y")) == to_string_list(["x", "y"])


def test_file_contents_reads_file(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text("line one\nline two\n")
    assert file_contents(str(path)) == "line one\nline two\n"


def test_file_contents_missing_file(tmp_path):
    missing = tmp_path / "missing.txt"
    with pytest.raises(OSError, match="failed to read"):
        file_contents(str(missing))