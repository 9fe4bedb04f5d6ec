import sys

import pytest

from meshrel.textio import (
    file_exists,
    format_array,
    format_pair,
    parse_array,
    parse_pair,
    run_command,
)


def test_format_pair_layout():
    assert format_pair((1, 2)) == "(1, 2)"


def test_format_array_layout():
    assert format_array([1, 2, 3]) == "[1, 2, 3]"


def test_format_empty_array():
    assert format_array([]) == "[]"


@pytest.mark.parametrize("pair", [(0, 0), (3, -7), (12345, 42)])
def test_pair_round_trip(pair):
    assert parse_pair(format_pair(pair)) == pair


def test_pair_round_trip_with_floats():
    pair = (1.5, -2.25)
    assert parse_pair(format_pair(pair), float) == pair


def test_parse_pair_tolerates_whitespace():
    assert parse_pair("  ( 4 ,5 )  ") == (4, 5)
    assert parse_pair("(4,5)") == (4, 5)


@pytest.mark.parametrize("text", ["4, 5)", "(4, 5", "(4 5)", "[4, 5]", ""])
def test_parse_pair_rejects_bad_delimiters(text):
    with pytest.raises(ValueError):
        parse_pair(text)


def test_parse_pair_propagates_conversion_errors():
    with pytest.raises(ValueError):
        parse_pair("(a, 1)")


@pytest.mark.parametrize("values", [[1], [5, 6], [9, 8, 7, 6]])
def test_array_round_trip(values):
    assert parse_array(format_array(values), len(values)) == values


def test_empty_array_round_trip():
    assert parse_array(format_array([]), 0) == []


def test_array_round_trip_with_floats():
    values = [0.5, 1.25, -3.0]
    assert parse_array(format_array(values), 3, float) == values


def test_parse_array_wrong_count():
    with pytest.raises(ValueError):
        parse_array("[1, 2, 3]", 2)
    with pytest.raises(ValueError):
        parse_array("[1, 2]", 3)


def test_parse_array_nonempty_when_empty_expected():
    with pytest.raises(ValueError):
        parse_array("[1]", 0)


@pytest.mark.parametrize("text", ["1, 2]", "[1, 2", "(1, 2)", ""])
def test_parse_array_rejects_bad_brackets(text):
    with pytest.raises(ValueError):
        parse_array(text, 2)


def test_parse_array_negative_size():
    with pytest.raises(ValueError):
        parse_array("[]", -1)


def test_file_exists(tmp_path):
    target = tmp_path / "data.txt"
    assert file_exists(target) is False
    target.write_text("content", encoding="ascii")
    assert file_exists(target) is True
    assert file_exists(str(target)) is True


def test_file_exists_false_for_directory(tmp_path):
    assert file_exists(tmp_path) is False


def test_run_command_returns_exit_status():
    command = f'"{sys.executable}" -c "import sys; sys.exit(3)"'
    assert run_command(command) == 3


def test_run_command_success():
    command = f'"{sys.executable}" -c "pass"'
    assert run_command(command) == 0