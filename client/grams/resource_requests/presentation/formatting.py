from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

RUPEE = "₹"


def group_indian(digits: str) -> str:
    """Lakh/crore grouping: 1234567 -> 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: Optional[float], decimals: int = 0) -> str:
    value = Decimal(str(amount or 0))
    quantum = Decimal(1).scaleb(-decimals)
    value = value.quantize(quantum, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    whole, _, fraction = f"{abs(value):f}".partition(".")
    text = group_indian(whole)
    if decimals:
        text = f"{text}.{fraction}"
    return f"{sign}{RUPEE}{text}"


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    return value.strftime("%d/%m/%Y")
