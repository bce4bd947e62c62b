from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from .calculation import to_decimal

BE_OFFSET = 543  # ปี พ.ศ. = ค.ศ. + 543


def round_money(value) -> Decimal:
    return to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def format_money(value) -> str:
    """1234.5 -> '1,234.50'"""
    if value is None:
        return "0.00"
    return f"{round_money(value):,.2f}"


def _to_date(value) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    s = (str(value) if value is not None else "").strip()
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def format_date_th(value) -> str:
    d = _to_date(value)
    if d is None:
        return "-"
    return f"{d.day:02d}/{d.month:02d}/{d.year + BE_OFFSET}"


def format_date_for_input(value) -> str:
    d = _to_date(value)
    return d.isoformat() if d else ""
