# salesdocs/utils/__init__.py
from __future__ import annotations

from .bahttext import INVALID_AMOUNT_TEXT, ZERO_BAHT_TEXT, thai_baht_text
from .calculation import calculate_document_totals, line_amount, to_decimal
from .formatting import format_date_for_input, format_date_th, format_money, round_money

__all__ = [
    "INVALID_AMOUNT_TEXT",
    "ZERO_BAHT_TEXT",
    "calculate_document_totals",
    "format_date_for_input",
    "format_date_th",
    "format_money",
    "line_amount",
    "round_money",
    "thai_baht_text",
    "to_decimal",
]
