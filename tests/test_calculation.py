# tests/test_calculation.py
from decimal import Decimal
from types import SimpleNamespace

from salesdocs.utils.calculation import calculate_document_totals, line_amount, to_decimal

TOTAL_KEYS = {
    "subtotal",
    "discount",
    "after_discount",
    "vat_rate",
    "vat_amount",
    "grand_total",
    "wht_rate",
    "wht_amount",
    "net_total",
}


def test_empty_items_without_manual_subtotal():
    t = calculate_document_totals([])
    assert set(t) == TOTAL_KEYS
    assert t["subtotal"] == 0
    assert t["net_total"] == 0
    assert calculate_document_totals(None)["subtotal"] == 0


def test_manual_subtotal():
    t = calculate_document_totals([], 0, 7, 0, 1000)
    assert t["subtotal"] == 1000
    assert t["after_discount"] == 1000
    assert t["vat_amount"] == 70
    assert t["grand_total"] == 1070
    assert t["wht_amount"] == 0
    assert t["net_total"] == 1070


def test_items_with_discount_vat_and_wht():
    t = calculate_document_totals([{"quantity": 2, "price": 500}], 100, 7, 3)
    assert t["subtotal"] == 1000
    assert t["discount"] == 100
    assert t["after_discount"] == 900
    assert t["vat_amount"] == 63
    assert t["grand_total"] == 963
    assert t["wht_amount"] == 27
    assert t["net_total"] == 936


def test_wht_is_on_pre_vat_base_but_taken_from_grand_total():
    t = calculate_document_totals([], 0, 7, 3, 10000)
    assert t["wht_amount"] == Decimal("300")
    assert t["net_total"] == Decimal("10700") - Decimal("300")


def test_items_take_precedence_over_manual_subtotal():
    t = calculate_document_totals([{"quantity": 1, "price": 50}], manual_subtotal=999)
    assert t["subtotal"] == 50


def test_amount_overrides_quantity_price_and_discount():
    item = {"amount": 120, "quantity": 10, "price": 1000, "discount": 5}
    assert line_amount(item) == 120
    t = calculate_document_totals([item], vat_rate=0)
    assert t["subtotal"] == 120


def test_line_discount_and_unit_price_fallback():
    items = [
        {"quantity": 3, "unitPrice": 100, "discount": 50},
        {"qty": "2", "unit_price": "10.50"},
    ]
    t = calculate_document_totals(items, vat_rate=0)
    assert t["subtotal"] == Decimal("271.00")


def test_price_zero_is_not_replaced_by_unit_price():
    assert line_amount({"quantity": 2, "price": 0, "unitPrice": 99}) == 0


def test_orm_like_objects():
    row = SimpleNamespace(qty=Decimal("2"), unit_price=Decimal("150.00"), discount_amount=Decimal("25"), amount=None)
    assert line_amount(row) == Decimal("275.00")


def test_malformed_fields_count_as_zero():
    items = [
        {"quantity": "abc", "price": 100},
        {"quantity": 1},
        {"quantity": 1, "price": None, "discount": "x"},
        {},
    ]
    t = calculate_document_totals(items, None, None, None)
    assert t["subtotal"] == 0
    assert t["discount"] == 0
    assert t["vat_rate"] == 7
    assert t["wht_rate"] == 0


def test_defaults():
    t = calculate_document_totals([{"quantity": 1, "price": 100}])
    assert t["vat_rate"] == 7
    assert t["wht_rate"] == 0
    assert t["discount"] == 0
    assert t["grand_total"] == 107


def test_invariants_hold():
    cases = [
        ([{"quantity": 3, "price": 333.33}], 12.5, 7, 3),
        ([{"quantity": 1, "price": 0.1}, {"amount": 0.2}], 0, 7, 1),
        ([{"quantity": 7, "unitPrice": 19.99, "discount": 3}], 50, 10, 5),
    ]
    for items, disc, vat, wht in cases:
        t = calculate_document_totals(items, disc, vat, wht)
        assert t["after_discount"] == t["subtotal"] - t["discount"]
        assert t["vat_amount"] == t["after_discount"] * t["vat_rate"] / 100
        assert t["grand_total"] == t["after_discount"] + t["vat_amount"]
        assert t["wht_amount"] == t["after_discount"] * t["wht_rate"] / 100
        assert t["net_total"] == t["grand_total"] - t["wht_amount"]


def test_subtotal_is_order_independent():
    items = [
        {"quantity": 3, "price": 19.99},
        {"amount": 250.5},
        {"quantity": 1, "unitPrice": 0.1, "discount": 0.05},
    ]
    a = calculate_document_totals(items)["subtotal"]
    b = calculate_document_totals(list(reversed(items)))["subtotal"]
    assert a == b


def test_result_is_a_fresh_dict():
    items = [{"quantity": 1, "price": 10}]
    first = calculate_document_totals(items)
    first["subtotal"] = Decimal("-1")
    assert calculate_document_totals(items)["subtotal"] == 10
    assert items == [{"quantity": 1, "price": 10}]


def test_to_decimal():
    assert to_decimal("1,234.50") == Decimal("1234.50")
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("", "7") == Decimal("7")
    assert to_decimal("nan") == 0
    assert to_decimal(False) == 0
