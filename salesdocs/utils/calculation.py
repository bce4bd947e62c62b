from __future__ import annotations

from decimal import Decimal, InvalidOperation
from collections.abc import Iterable, Mapping
from typing import Any

HUNDRED = Decimal("100")

# ชื่อฟิลด์ที่รองรับ (payload จากหน้าเว็บใช้ camelCase, ORM ใช้ snake_case)
_AMOUNT_KEYS = ("amount",)
_QTY_KEYS = ("quantity", "qty")
_PRICE_KEYS = ("price", "unit_price", "unitPrice")
_DISCOUNT_KEYS = ("discount", "discount_amount", "discountAmount")


def to_decimal(v, default: str = "0") -> Decimal:
    """แปลงเป็น Decimal, ค่าว่าง/อ่านไม่ได้ -> default"""
    if v is None or isinstance(v, bool):
        return Decimal(default)
    if isinstance(v, Decimal):
        return v if v.is_finite() else Decimal(default)
    try:
        s = str(v).strip().replace(",", "")
        if s == "":
            return Decimal(default)
        d = Decimal(s)
    except (InvalidOperation, ValueError):
        return Decimal(default)
    return d if d.is_finite() else Decimal(default)


def _field(item: Any, keys: Iterable[str]):
    """ค่าแรกที่ไม่ใช่ None ตามลำดับชื่อฟิลด์"""
    for key in keys:
        if isinstance(item, Mapping):
            value = item.get(key)
        else:
            value = getattr(item, key, None)
        if value is not None:
            return value
    return None


def line_amount(item: Any) -> Decimal:
    """
    ยอดของรายการเดียว
    - มี amount -> ใช้ amount ตรง ๆ (เช่นรายการในใบเสร็จ)
    - ไม่มี -> quantity * price - discount
    """
    amount = _field(item, _AMOUNT_KEYS)
    if amount is not None:
        return to_decimal(amount)

    qty = to_decimal(_field(item, _QTY_KEYS))
    price = to_decimal(_field(item, _PRICE_KEYS))
    discount = to_decimal(_field(item, _DISCOUNT_KEYS))
    return qty * price - discount


def calculate_document_totals(
    items: Iterable[Any] | None,
    global_discount=0,
    vat_rate=7,
    wht_rate=0,
    manual_subtotal=None,
) -> dict:
    """
    คำนวณยอดรวมเอกสาร (ใบเสนอราคา/ใบแจ้งหนี้/ใบเสร็จ)

    - VAT คิดจากยอดหลังหักส่วนลด
    - หัก ณ ที่จ่าย คิดจากยอดหลังหักส่วนลด (ก่อน VAT) แต่หักออกจาก grand_total
    - ไม่ปัดเศษภายใน ให้ผู้เรียกปัดตอนแสดงผลเอง
    """
    rows = list(items or [])

    if rows:
        subtotal = sum((line_amount(it) for it in rows), Decimal("0"))
    elif manual_subtotal is not None:
        subtotal = to_decimal(manual_subtotal)
    else:
        subtotal = Decimal("0")

    discount = to_decimal(global_discount)
    vat_rate = to_decimal(vat_rate, "7")
    wht_rate = to_decimal(wht_rate)

    after_discount = subtotal - discount
    vat_amount = after_discount * (vat_rate / HUNDRED)
    grand_total = after_discount + vat_amount
    wht_amount = after_discount * (wht_rate / HUNDRED)
    net_total = grand_total - wht_amount

    return {
        "subtotal": subtotal,
        "discount": discount,
        "after_discount": after_discount,
        "vat_rate": vat_rate,
        "vat_amount": vat_amount,
        "grand_total": grand_total,
        "wht_rate": wht_rate,
        "wht_amount": wht_amount,
        "net_total": net_total,
    }
