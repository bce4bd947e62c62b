from __future__ import annotations

import os
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from pypdf import PageObject, PdfReader, PdfWriter

from .formatting import format_date_th, format_money

# =========================================================
# CONFIG
# =========================================================
FONT_REL = os.path.join("static", "fonts", "THSarabunNew.ttf")
FONT_NAME = "THSarabunNew"

# หัวกระดาษบริษัท (ถ้ามีไฟล์จะวาดทับลงบนหน้าแรกของ template)
LETTERHEAD_REL = os.path.join("static", "forms", "letterhead.pdf")

MARGIN_X = 40
TOP_Y = A4[1] - 50
LINE_H = 16
ROWS_PER_PAGE = 25

# คอลัมน์ตารางรายการ (x ขวาสุดของตัวเลข)
COL_NO = MARGIN_X
COL_DESC = MARGIN_X + 30
COL_QTY_RIGHT = 360
COL_PRICE_RIGHT = 430
COL_DISC_RIGHT = 490
COL_TOTAL_RIGHT = A4[0] - MARGIN_X


# =========================================================
# Helpers (Paths / Font)
# =========================================================
def _app_dir() -> str:
    return os.path.dirname(os.path.dirname(__file__))


def _abs_path(rel: str) -> str:
    return os.path.join(_app_dir(), rel)


def _register_thai_font() -> str:
    font_path = _abs_path(FONT_REL)
    if os.path.exists(font_path):
        try:
            pdfmetrics.getFont(FONT_NAME)
            return FONT_NAME
        except Exception:
            pdfmetrics.registerFont(TTFont(FONT_NAME, font_path))
            return FONT_NAME
    return "Helvetica"


def _draw_text(c: canvas.Canvas, font: str, x: float, y: float, text: str, size: int = 12):
    c.setFont(font, size)
    c.drawString(x, y, text or "")


def _draw_right(c: canvas.Canvas, font: str, x: float, y: float, text: str, size: int = 12):
    c.setFont(font, size)
    c.drawRightString(x, y, text or "")


def _draw_header(c: canvas.Canvas, font: str, doc, title: str) -> float:
    y = TOP_Y
    _draw_text(c, font, MARGIN_X, y, doc.company_name or "", 16)
    _draw_right(c, font, COL_TOTAL_RIGHT, y, title, 18)

    y -= LINE_H
    _draw_text(c, font, MARGIN_X, y, doc.company_address or "", 11)
    _draw_right(c, font, COL_TOTAL_RIGHT, y, f"เลขที่ {doc.doc_no}", 12)

    y -= LINE_H
    if doc.company_tax_id:
        _draw_text(c, font, MARGIN_X, y, f"เลขประจำตัวผู้เสียภาษี {doc.company_tax_id}", 11)
    _draw_right(c, font, COL_TOTAL_RIGHT, y, f"วันที่ {format_date_th(doc.issue_date)}", 12)

    if doc.due_date:
        y -= LINE_H
        _draw_right(c, font, COL_TOTAL_RIGHT, y, f"ครบกำหนด {format_date_th(doc.due_date)}", 12)

    # ลูกค้า
    y -= LINE_H * 2
    _draw_text(c, font, MARGIN_X, y, f"ลูกค้า: {doc.customer_name or ''}", 13)
    y -= LINE_H
    _draw_text(c, font, MARGIN_X, y, doc.customer_address or "", 11)
    if doc.customer_tax_id:
        y -= LINE_H
        _draw_text(c, font, MARGIN_X, y, f"เลขประจำตัวผู้เสียภาษี {doc.customer_tax_id}", 11)
    if doc.subject:
        y -= LINE_H
        _draw_text(c, font, MARGIN_X, y, f"เรื่อง: {doc.subject}", 12)
    return y - LINE_H * 2


def _draw_items_head(c: canvas.Canvas, font: str, y: float) -> float:
    _draw_text(c, font, COL_NO, y, "#", 12)
    _draw_text(c, font, COL_DESC, y, "รายการ", 12)
    _draw_right(c, font, COL_QTY_RIGHT, y, "จำนวน", 12)
    _draw_right(c, font, COL_PRICE_RIGHT, y, "ราคา/หน่วย", 12)
    _draw_right(c, font, COL_DISC_RIGHT, y, "ส่วนลด", 12)
    _draw_right(c, font, COL_TOTAL_RIGHT, y, "จำนวนเงิน", 12)
    c.line(MARGIN_X, y - 4, COL_TOTAL_RIGHT, y - 4)
    return y - LINE_H


def _draw_totals(c: canvas.Canvas, font: str, doc, y: float) -> float:
    t = doc.totals
    rows = [
        ("รวมเป็นเงิน", t["subtotal"]),
        ("ส่วนลด", t["discount"]),
        ("ยอดหลังหักส่วนลด", t["after_discount"]),
        (f"ภาษีมูลค่าเพิ่ม {format_money(t['vat_rate'])}%", t["vat_amount"]),
        ("จำนวนเงินรวมทั้งสิ้น", t["grand_total"]),
    ]
    if t["wht_rate"]:
        rows.append((f"หัก ณ ที่จ่าย {format_money(t['wht_rate'])}%", t["wht_amount"]))
        rows.append(("ยอดชำระสุทธิ", t["net_total"]))

    c.line(MARGIN_X, y + LINE_H - 4, COL_TOTAL_RIGHT, y + LINE_H - 4)
    for label, value in rows:
        _draw_right(c, font, COL_DISC_RIGHT, y, label, 12)
        _draw_right(c, font, COL_TOTAL_RIGHT, y, format_money(value), 12)
        y -= LINE_H

    y -= LINE_H / 2
    _draw_text(c, font, MARGIN_X, y, f"({doc.amount_in_words})", 13)
    return y - LINE_H


# =========================================================
# Public API
# =========================================================
def render_document_pdf(doc, title: str | None = None) -> bytes:
    """วาดเอกสารขาย (หัวเอกสาร, ตารางรายการ, ยอดรวม, จำนวนเงินตัวอักษร) เป็น PDF"""
    font = _register_thai_font()
    title = title or doc.doc_type

    buf = BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    c.setTitle(f"{title} {doc.doc_no}")

    y = _draw_header(c, font, doc, title)
    y = _draw_items_head(c, font, y)

    for i, it in enumerate(doc.items or [], start=1):
        if i > 1 and (i - 1) % ROWS_PER_PAGE == 0:
            c.showPage()
            y = _draw_items_head(c, font, TOP_Y)

        _draw_text(c, font, COL_NO, y, str(i), 11)
        _draw_text(c, font, COL_DESC, y, (it.description or "")[:60], 11)
        _draw_right(c, font, COL_QTY_RIGHT, y, format_money(it.qty), 11)
        _draw_right(c, font, COL_PRICE_RIGHT, y, format_money(it.unit_price), 11)
        _draw_right(c, font, COL_DISC_RIGHT, y, format_money(it.discount_amount), 11)
        _draw_right(c, font, COL_TOTAL_RIGHT, y, format_money(it.line_total), 11)
        y -= LINE_H

    if y < 160:
        c.showPage()
        y = TOP_Y

    y = _draw_totals(c, font, doc, y - LINE_H)

    if doc.note:
        _draw_text(c, font, MARGIN_X, y - LINE_H, f"หมายเหตุ: {doc.note}"[:100], 11)

    c.showPage()
    c.save()
    buf.seek(0)

    return _merge_letterhead(buf, title=f"{title} {doc.doc_no}")


def _merge_letterhead(buf: BytesIO, title: str) -> bytes:
    reader = PdfReader(buf)
    writer = PdfWriter()

    letterhead_path = _abs_path(LETTERHEAD_REL)
    template_page = None
    if os.path.exists(letterhead_path):
        template_page = PdfReader(letterhead_path).pages[0]

    for page in reader.pages:
        if template_page is not None:
            # หัวกระดาษอยู่ชั้นล่าง เนื้อหาวาดทับ
            base = PageObject.create_blank_page(width=page.mediabox.width, height=page.mediabox.height)
            base.merge_page(template_page)
            base.merge_page(page)
            page = base
        writer.add_page(page)

    writer.add_metadata({"/Title": title})

    out = BytesIO()
    writer.write(out)
    return out.getvalue()
