"""
Parsing of money-ish form input.

Form fields hand us whatever the user typed. Two readings exist:

- ``parse_amount`` is lenient and mirrors a browser number field: a leading
  number is taken, anything unreadable counts as 0.
- ``parse_positive_amount`` is strict and returns ``None`` unless the whole
  value is a finite number greater than zero.
"""
import math
import re
from typing import Optional

_LEADING_NUMBER = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_amount(value: object) -> float:
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value).strip())
        if match is None:
            return 0.0
        number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def parse_positive_amount(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or number <= 0:
        return None
    return number


def round_money(value: float) -> float:
    return round(value * 100) / 100
