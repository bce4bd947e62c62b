from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext

THAI_DIGITS = ["ศูนย์", "หนึ่ง", "สอง", "สาม", "สี่", "ห้า", "หก", "เจ็ด", "แปด", "เก้า"]
THAI_POS = ["", "สิบ", "ร้อย", "พัน", "หมื่น", "แสน"]
THAI_MILLION = "ล้าน"

BAHT = "บาท"
SATANG = "สตางค์"
EXACT = "ถ้วน"
MINUS = "ลบ"

INVALID_AMOUNT_TEXT = "จำนวนเงินไม่ถูกต้อง"
ZERO_BAHT_TEXT = "ศูนย์บาทถ้วน"

_CENTS = Decimal("0.01")


def _parse_amount(amount) -> Decimal | None:
    """คืน Decimal ของจำนวนเงิน หรือ None ถ้าอ่านเป็นตัวเลขไม่ได้"""
    if amount is None or isinstance(amount, bool):
        return None

    if isinstance(amount, Decimal):
        d = amount
    elif isinstance(amount, (int, float)):
        # float -> Decimal แบบ exact (1.005 จริง ๆ คือ 1.00499...)
        d = Decimal(amount)
    else:
        s = str(amount).strip().replace(",", "")
        if not s or "_" in s:
            return None
        try:
            d = Decimal(float(s))
        except (ValueError, OverflowError):
            return None

    if not d.is_finite():
        return None
    return d


def _to_fixed_2(d: Decimal) -> Decimal:
    """ปัดเป็นทศนิยม 2 ตำแหน่ง (ROUND_HALF_UP) คืนค่าสัมบูรณ์"""
    # ขยาย precision ให้พอกับตัวเลขใหญ่ ๆ ก่อน quantize
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, d.adjusted() + 4)
        return d.copy_abs().quantize(_CENTS, rounding=ROUND_HALF_UP)


def digits_to_thai(digits: str) -> str:
    """
    อ่านสตริงตัวเลข (เช่น "121", "05") เป็นคำอ่านภาษาไทย ไม่รวมหน่วยเงิน
    - หลักสิบ: 1 -> "สิบ", 2 -> "ยี่สิบ"
    - หลักหน่วย: 1 -> "เอ็ด" เมื่อมีมากกว่า 1 หลักและไม่ใช่หลักแรก
    - ทุกตำแหน่งล้าน ต่อท้าย "ล้าน" แม้หลักนั้นเป็น 0
    """
    words = []
    size = len(digits)
    for i, ch in enumerate(digits):
        digit = int(ch)
        pos = size - i - 1
        unit = pos % 6

        if digit == 0:
            if unit == 0 and pos > 0:
                words.append(THAI_MILLION)
            continue

        if unit == 1 and digit == 1:
            word = ""
        elif unit == 1 and digit == 2:
            word = "ยี่"
        elif unit == 0 and digit == 1 and size > 1 and i > 0:
            word = "เอ็ด"
        else:
            word = THAI_DIGITS[digit]

        words.append(word + THAI_POS[unit])
        if unit == 0 and pos > 0:
            words.append(THAI_MILLION)
    return "".join(words)


def thai_baht_text(amount) -> str:
    """
    แปลงจำนวนเงินเป็นคำอ่านบาท/สตางค์
    ตัวอย่าง: 121.50 -> หนึ่งร้อยยี่สิบเอ็ดบาทห้าสิบสตางค์
    """
    d = _parse_amount(amount)
    if d is None:
        return INVALID_AMOUNT_TEXT

    negative = d < 0
    try:
        d = _to_fixed_2(d)
    except InvalidOperation:
        return INVALID_AMOUNT_TEXT

    if d == 0:
        return ZERO_BAHT_TEXT

    prefix = MINUS if negative else ""
    baht_digits, satang_digits = f"{d:f}".split(".")

    baht_text = digits_to_thai(baht_digits) or THAI_DIGITS[0]
    if int(satang_digits) == 0:
        return prefix + baht_text + BAHT + EXACT
    return prefix + baht_text + BAHT + digits_to_thai(satang_digits) + SATANG
