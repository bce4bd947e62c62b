# tests/test_bahttext.py
from decimal import Decimal

import pytest

from salesdocs.utils.bahttext import (
    INVALID_AMOUNT_TEXT,
    ZERO_BAHT_TEXT,
    digits_to_thai,
    thai_baht_text,
)


@pytest.mark.parametrize(
    "amount, expected",
    [
        (0, "ศูนย์บาทถ้วน"),
        (1, "หนึ่งบาทถ้วน"),
        (10, "สิบบาทถ้วน"),
        (11, "สิบเอ็ดบาทถ้วน"),
        (20, "ยี่สิบบาทถ้วน"),
        (21, "ยี่สิบเอ็ดบาทถ้วน"),
        (101, "หนึ่งร้อยเอ็ดบาทถ้วน"),
        (121.50, "หนึ่งร้อยยี่สิบเอ็ดบาทห้าสิบสตางค์"),
        (1000, "หนึ่งพันบาทถ้วน"),
        (1070, "หนึ่งพันเจ็ดสิบบาทถ้วน"),
        (25000, "สองหมื่นห้าพันบาทถ้วน"),
        (936, "เก้าร้อยสามสิบหกบาทถ้วน"),
    ],
)
def test_basic_amounts(amount, expected):
    assert thai_baht_text(amount) == expected


def test_millions():
    assert thai_baht_text(1_000_000) == "หนึ่งล้านบาทถ้วน"
    assert thai_baht_text(10_000_000) == "สิบล้านบาทถ้วน"
    assert thai_baht_text(11_000_000) == "สิบเอ็ดล้านบาทถ้วน"
    assert thai_baht_text(21_500_000) == "ยี่สิบเอ็ดล้านห้าแสนบาทถ้วน"
    assert thai_baht_text(1_250_000.75) == "หนึ่งล้านสองแสนห้าหมื่นบาทเจ็ดสิบห้าสตางค์"


def test_million_million():
    assert thai_baht_text(1_000_000_000_000) == "หนึ่งล้านล้านบาทถ้วน"


def test_satang():
    assert thai_baht_text(0.5) == "ศูนย์บาทห้าสิบสตางค์"
    assert thai_baht_text("0.25") == "ศูนย์บาทยี่สิบห้าสตางค์"
    assert thai_baht_text(Decimal("5.11")) == "ห้าบาทสิบเอ็ดสตางค์"
    # satang is always read as two digits, so 01 ends with เอ็ด
    assert thai_baht_text(Decimal("3.01")) == "สามบาทเอ็ดสตางค์"


def test_ends_with_exact_or_satang_not_both():
    for amount in (1, 2.5, 99.99, 100, 1234.56, 7_000_000):
        text = thai_baht_text(amount)
        assert text.endswith("ถ้วน") != text.endswith("สตางค์")


def test_string_input_with_commas():
    assert thai_baht_text("1,234") == "หนึ่งพันสองร้อยสามสิบสี่บาทถ้วน"
    assert thai_baht_text(" 1,000.00 ") == "หนึ่งพันบาทถ้วน"


@pytest.mark.parametrize("bad", ["abc", "12abc", "", None, "nan", "inf", True, "1_000"])
def test_invalid_amount_returns_sentinel(bad):
    assert thai_baht_text(bad) == INVALID_AMOUNT_TEXT


def test_zero_like_values():
    assert thai_baht_text(Decimal("0.00")) == ZERO_BAHT_TEXT
    assert thai_baht_text("0") == ZERO_BAHT_TEXT
    # rounds to 0.00 before reading
    assert thai_baht_text(0.004) == ZERO_BAHT_TEXT


def test_negative_amount_has_minus_prefix():
    assert thai_baht_text(-21) == "ลบยี่สิบเอ็ดบาทถ้วน"


def test_rounding_follows_exact_binary_value():
    # float 1.005 is 1.00499999... so it formats to 1.00
    assert thai_baht_text(1.005) == "หนึ่งบาทถ้วน"
    # Decimal keeps the exact half and rounds up
    assert thai_baht_text(Decimal("1.005")) == "หนึ่งบาทเอ็ดสตางค์"
    assert thai_baht_text(2.675) == "สองบาทหกสิบเจ็ดสตางค์"


def test_very_large_amount_does_not_raise():
    text = thai_baht_text(Decimal("123456789012345678901234567890.12"))
    assert text.endswith("สิบสองสตางค์")
    assert thai_baht_text(Decimal("1e30")) == "หนึ่ง" + "ล้าน" * 5 + "บาทถ้วน"
    assert thai_baht_text(10**30) == "หนึ่ง" + "ล้าน" * 5 + "บาทถ้วน"
    assert thai_baht_text(-(10**30)).startswith("ลบหนึ่งล้าน")


def test_digits_to_thai():
    assert digits_to_thai("0") == ""
    assert digits_to_thai("05") == "ห้า"
    assert digits_to_thai("10") == "สิบ"
    assert digits_to_thai("1") == "หนึ่ง"
