"""
Turning whatever the user typed into the integers the score sheet stores.

Parsing follows the lenient rules of a number input field:
* surrounding whitespace is ignored
* an optional sign followed by at least one digit is required
* everything after the leading digits is ignored ("7.9" -> 7, "11pts" -> 11)
"""

import re
from typing import Any, Optional

_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)")
_WHOLE_INT = re.compile(r"\s*([+-]?)([0-9]+)\s*")

# Anything longer is far outside every range on the sheet; converting it would only cost time (or hit the
# interpreter's int conversion limit).
_MAX_DIGITS = 18


def _digits_to_int(sign: str, digits: str) -> int:
    digits = digits.lstrip("0") or "0"
    magnitude = 10**_MAX_DIGITS if len(digits) > _MAX_DIGITS else int(digits)
    return -magnitude if sign == "-" else magnitude


def parse_int(value: Any) -> Optional[int]:
    """Best effort integer parse. Returns None when nothing usable is found."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)

    match = _LEADING_INT.match(str(value))
    if match is None:
        return None
    return _digits_to_int(*match.groups())


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def clamp(value: int, minimum: int, maximum: int) -> int:
    return max(minimum, min(maximum, value))


def clamp_int(value: Any, minimum: int, maximum: int) -> int:
    """Handicap rule: no empty state, so anything unparseable becomes 0."""
    parsed = parse_int(value)
    if parsed is None:
        return 0
    return clamp(parsed, minimum, maximum)


def clamp_int_or_blank(value: Any, minimum: int, maximum: int) -> Optional[int]:
    """Game cell rule: blank stays blank, and so does unparseable input (cleared, not a scored zero)."""
    if is_blank(value):
        return None
    parsed = parse_int(value)
    if parsed is None:
        return None
    return clamp(parsed, minimum, maximum)


def as_number(value: Any) -> int:
    """Value a (possibly garbage) stored entry contributes to a sum. Never raises."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    if isinstance(value, str):
        match = _WHOLE_INT.fullmatch(value)
        return _digits_to_int(*match.groups()) if match else 0
    return 0
