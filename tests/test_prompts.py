import pytest

from conftest import output_lines
from console import InputClosed
from prompts import (
    FieldResult, at_least, between, non_empty, one_of_range, parse_int, parse_text, prompt_field,
)


def test_parse_int_accepts_padded_numbers():
    assert parse_int(" 7 ").value == 7


@pytest.mark.parametrize("raw", ["", "12x", "7.5", "seven"])
def test_parse_int_rejects_non_numbers(raw):
    result = parse_int(raw)
    assert not result.ok
    assert result.value is None


def test_parse_text_trims():
    assert parse_text("  Jane ").value == "Jane"


def test_predicates():
    assert non_empty("x").ok
    assert not non_empty("").ok
    assert at_least(1970)(1970).ok
    assert not at_least(1970)(1969).ok
    assert between(0, 100)(0).ok
    assert not between(0, 100)(100).ok
    assert one_of_range(3)(3).ok
    assert not one_of_range(3)(0).ok


def test_invalid_lines_are_reprompted_until_valid(make_console):
    console = make_console("abc", "", "12x", "42")
    assert prompt_field(console, "Enter id:", parse_int) == 42

    lines = output_lines(console)
    assert lines.count("Enter id:") == 4
    assert "'12x' rejected: Not a whole number: '12x'" in lines
    assert lines[-1] == "42"


def test_empty_text_is_rejected(make_console):
    console = make_console("", "   ", "Jane")
    assert prompt_field(console, "First name:", parse_text, non_empty) == "Jane"
    assert output_lines(console).count("First name:") == 3


def test_predicate_failure_reprompts(make_console):
    console = make_console("100", "-1", "99")
    assert prompt_field(console, "Experience:", parse_int, between(0, 100)) == 99
    assert output_lines(console).count("Experience:") == 3


def test_custom_predicate(make_console):
    def even(value):
        return FieldResult.success(value) if value % 2 == 0 else FieldResult.failure("odd")

    console = make_console("3", "4")
    assert prompt_field(console, "Even:", parse_int, even) == 4
    assert "'3' rejected: odd" in output_lines(console)


def test_exhausted_input_raises(make_console):
    console = make_console("x")
    with pytest.raises(InputClosed):
        prompt_field(console, "Enter id:", parse_int)
