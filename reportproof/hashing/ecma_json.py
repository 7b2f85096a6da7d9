"""JSON text identical to ECMAScript ``JSON.stringify(value, null, indent)``.

Fingerprints anchored by the JavaScript writer hash this exact text, so
numbers follow Number::toString and integer-like keys come first.
"""

import json
import math
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

MAX_SAFE_INTEGER = 2**53
MAX_ARRAY_INDEX = 2**32 - 2

_INDEX_KEY = re.compile(r"0|[1-9][0-9]*")
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def stringify(value: Any, indent: int = 2) -> str:
    """Serialize value the way ``JSON.stringify`` would after ``JSON.parse``.

    Raises:
        TypeError: for values JSON cannot represent.
        ValueError: for NaN or infinite numbers.
    """
    return _render(value, indent, 0)


def _render(value: Any, indent: int, depth: int) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return _integer_text(value)
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, Mapping):
        return _render_object(value, indent, depth)
    if isinstance(value, (list, tuple)):
        items = [_render(item, indent, depth + 1) for item in value]
        return _wrap("[", items, "]", indent, depth)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _render_object(value: Mapping[Any, Any], indent: int, depth: int) -> str:
    members = []
    for key in _property_order(value):
        members.append(f"{_quote(key)}: {_render(value[key], indent, depth + 1)}")
    return _wrap("{", members, "}", indent, depth)


def _wrap(opening: str, items: list[str], closing: str, indent: int, depth: int) -> str:
    if not items:
        return opening + closing
    inner = "\n" + " " * (indent * (depth + 1))
    outer = "\n" + " " * (indent * depth)
    return opening + inner + ("," + inner).join(items) + outer + closing


def _property_order(value: Mapping[Any, Any]) -> list[str]:
    """Array-index keys ascending, then the remaining keys in insertion order."""
    keys = list(value)
    for key in keys:
        if not isinstance(key, str):
            raise TypeError(f"Object keys must be str, not {type(key).__name__}")
    indexes = sorted((key for key in keys if _is_array_index(key)), key=int)
    named = [key for key in keys if not _is_array_index(key)]
    return indexes + named


def _is_array_index(key: str) -> bool:
    return _INDEX_KEY.fullmatch(key) is not None and int(key) <= MAX_ARRAY_INDEX


def _quote(text: str) -> str:
    quoted = json.dumps(text, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", quoted)


def _integer_text(value: int) -> str:
    # JSON.parse reads every number as a double
    if abs(value) <= MAX_SAFE_INTEGER:
        return str(value)
    return _float_text(float(value))


def _float_text(value: float) -> str:
    if not math.isfinite(value):
        raise ValueError(f"Out of range float value {value!r} is not JSON compliant")
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, coefficient, exponent = Decimal(repr(abs(value))).as_tuple()
    raw_digits = "".join(str(digit) for digit in coefficient)
    # value == 0.<digits> * 10**point
    point = len(raw_digits) + exponent
    digits = raw_digits.rstrip("0")
    count = len(digits)

    if count <= point <= 21:
        return sign + digits + "0" * (point - count)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    power = point - 1
    power_text = f"e+{power}" if power >= 0 else f"e-{-power}"
    mantissa = digits if count == 1 else digits[0] + "." + digits[1:]
    return sign + mantissa + power_text
