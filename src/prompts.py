'''
Field-by-field operator input.

Every workflow collects its record through prompt_field: show a label,
read a line, parse it, check it, and ask again until the value is good.
Bad input is an ordinary FieldResult failure, never an exception.
'''

from dataclasses import dataclass
from typing import Any, Callable, Optional


@dataclass(frozen=True)
class FieldResult:
    """Outcome of parsing or checking one field: a value or a reason."""
    value: Any = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.error is None

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def failure(cls, reason):
        return cls(error=reason)


# --------- Parsers ---------
def parse_text(raw: str) -> FieldResult:
    return FieldResult.success(raw.strip())


def parse_int(raw: str) -> FieldResult:
    try:
        return FieldResult.success(int(raw.strip()))
    except ValueError:
        return FieldResult.failure(f"Not a whole number: {raw!r}")


# --------- Predicates ---------
def non_empty(value) -> FieldResult:
    if len(value) > 0:
        return FieldResult.success(value)
    return FieldResult.failure("Need to enter something valid")


def at_least(low):
    def check(value):
        if value >= low:
            return FieldResult.success(value)
        return FieldResult.failure(f"Must be at least {low}")
    return check


def between(low, high):
    """Accept low <= value < high."""
    def check(value):
        if low <= value < high:
            return FieldResult.success(value)
        return FieldResult.failure(f"Must be from {low} up to (not including) {high}")
    return check


def one_of_range(count):
    """Accept a numbered choice 1..count."""
    def check(value):
        if 1 <= value <= count:
            return FieldResult.success(value)
        return FieldResult.failure(f"Choose a number from 1 to {count}")
    return check


def prompt_field(console, label: str,
                 parse: Callable[[str], FieldResult] = parse_text,
                 predicate: Optional[Callable[[Any], FieldResult]] = None):
    """
    Ask for one field until the operator gives a valid value.

    The accepted value is echoed back; a rejected line is echoed together
    with the reason and the label is shown again. There is no retry limit.
    InputClosed from the console is the only way out without a value.
    """
    while True:
        raw = console.read_line(label)
        result = parse(raw)
        if result.ok and predicate is not None:
            result = predicate(result.value)
        if result.ok:
            console.write(str(result.value))
            return result.value
        console.write(f"{raw!r} rejected: {result.error}")
