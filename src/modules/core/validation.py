"""Declarative per-field validation rules.

A rule is a ``(predicate, message)`` pair.  ``collect_violations`` runs every
rule of every declared field in one pass and returns all failing messages,
so a client learns about every problem in a single round-trip.

DTOs call ``raise_for_violations`` from a ``model_validator(mode="before")``;
the resulting pydantic ``ValidationError`` is turned back into a flat list
of messages with ``messages_from``.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError
from pydantic_core import PydanticCustomError

Predicate = Callable[[Any], bool]
Rule = Tuple[Predicate, str]

RULE_VIOLATION = "rule_violation"

_ALPHANUMERIC = re.compile(r"^[A-Za-z0-9]+$")
_INTEGER_STRING = re.compile(r"^[+-]?\d+$")


# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------


def to_decimal(value: Any) -> Optional[Decimal]:
    """Coerce a JSON number or numeric string into a finite ``Decimal``.

    Returns ``None`` for anything that is not a number (booleans included).
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None
    return number if number.is_finite() else None


def to_int(value: Any) -> Optional[int]:
    """Coerce an integer or an integer string; ``None`` otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_STRING.match(value):
        return int(value)
    return None


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def is_present(value: Any) -> bool:
    return value is not None and value != ""


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def min_length(size: int) -> Predicate:
    return lambda value: isinstance(value, str) and len(value) >= size


def max_length(size: int) -> Predicate:
    return lambda value: isinstance(value, str) and len(value) <= size


def is_alphanumeric(value: Any) -> bool:
    return isinstance(value, str) and bool(_ALPHANUMERIC.match(value))


def is_number(max_decimal_places: Optional[int] = None) -> Predicate:
    def check(value: Any) -> bool:
        number = to_decimal(value)
        if number is None:
            return False
        if max_decimal_places is None:
            return True
        return -number.as_tuple().exponent <= max_decimal_places

    return check


def is_positive(value: Any) -> bool:
    number = to_decimal(value)
    return number is not None and number > 0


def min_value(bound: int) -> Predicate:
    def check(value: Any) -> bool:
        number = to_decimal(value)
        return number is not None and number >= bound

    return check


def is_integer(value: Any) -> bool:
    return to_int(value) is not None


def min_integer(bound: int) -> Predicate:
    def check(value: Any) -> bool:
        number = to_int(value)
        return number is not None and number >= bound

    return check


def optional(predicate: Predicate) -> Predicate:
    """Skip the check when the value was not supplied."""
    return lambda value: value is None or predicate(value)


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def collect_violations(
    data: Any,
    rules: Mapping[str, Sequence[Rule]],
    *,
    forbid_unknown: bool = True,
) -> List[str]:
    """Evaluate every rule of every field and return the failing messages."""
    if not isinstance(data, Mapping):
        return ["Request body must be a JSON object"]

    messages: List[str] = []
    if forbid_unknown:
        messages.extend(
            f"property {name} should not exist" for name in data if name not in rules
        )
    for field_name, field_rules in rules.items():
        value = data.get(field_name)
        messages.extend(message for check, message in field_rules if not check(value))
    return messages


def raise_for_violations(
    data: Any,
    rules: Mapping[str, Sequence[Rule]],
    *,
    forbid_unknown: bool = True,
) -> None:
    """Raise a pydantic custom error carrying every failing message."""
    messages = collect_violations(data, rules, forbid_unknown=forbid_unknown)
    if messages:
        raise PydanticCustomError(
            RULE_VIOLATION,
            "{count} validation rule(s) failed",
            {"count": len(messages), "messages": messages},
        )


def messages_from(exc: ValidationError) -> List[str]:
    """Flatten a pydantic ``ValidationError`` into human-readable messages."""
    messages: List[str] = []
    for error in exc.errors():
        if error["type"] == RULE_VIOLATION:
            messages.extend(error["ctx"]["messages"])
            continue
        location = ".".join(str(part) for part in error["loc"])
        messages.append(f"{location}: {error['msg']}" if location else error["msg"])
    return messages
