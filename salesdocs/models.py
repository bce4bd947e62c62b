from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import CheckConstraint, Index

from . import db
from .utils import calculate_document_totals, line_amount, thai_baht_text

DOC_TYPES = ("QT", "IV", "RC", "PO")
DOC_STATUSES = ("DRAFT", "APPROVED", "CANCELLED")


class TimestampMixin:
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)


class CompanyProfile(db.Model, TimestampMixin):
    __tablename__ = "company_profiles"

    id = db.Column(db.Integer, primary_key=True)
    company_name = db.Column(db.String(200), nullable=True)
    tax_id = db.Column(db.String(40), nullable=True)
    address = db.Column(db.Text, nullable=True)
    phone = db.Column(db.String(80), nullable=True)
    email = db.Column(db.String(120), nullable=True)

    # ข้อมูลการชำระเงิน (พิมพ์ท้ายเอกสาร)
    bank_name = db.Column(db.String(120), nullable=True)
    bank_account = db.Column(db.String(60), nullable=True)

    @classmethod
    def get_one(cls) -> "CompanyProfile":
        profile = cls.query.order_by(cls.id.asc()).first()
        if not profile:
            profile = cls(company_name="")
            db.session.add(profile)
            db.session.flush()
        return profile


class SalesDoc(db.Model, TimestampMixin):
    __tablename__ = "sales_docs"

    id = db.Column(db.Integer, primary_key=True)
    # QT=ใบเสนอราคา, IV=ใบแจ้งหนี้/ใบกำกับภาษี, RC=ใบเสร็จรับเงิน, PO=ใบสั่งซื้อ
    doc_type = db.Column(db.String(10), nullable=False, default="QT")
    doc_no = db.Column(db.String(40), nullable=False, unique=True)
    status = db.Column(db.String(20), nullable=False, default="DRAFT")

    issue_date = db.Column(db.Date, nullable=False, default=date.today)
    due_date = db.Column(db.Date, nullable=True)

    # snapshot ข้อมูลบริษัท ณ วันที่ออกเอกสาร
    company_name = db.Column(db.String(200), nullable=True)
    company_tax_id = db.Column(db.String(40), nullable=True)
    company_address = db.Column(db.Text, nullable=True)
    company_phone = db.Column(db.String(80), nullable=True)

    customer_name = db.Column(db.String(200), nullable=False)
    customer_tax_id = db.Column(db.String(40), nullable=True)
    customer_address = db.Column(db.Text, nullable=True)
    customer_phone = db.Column(db.String(80), nullable=True)
    customer_email = db.Column(db.String(120), nullable=True)

    subject = db.Column(db.String(255), nullable=True)
    note = db.Column(db.Text, nullable=True)

    discount_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    vat_rate = db.Column(db.Numeric(5, 2), nullable=False, default=7)
    wht_rate = db.Column(db.Numeric(5, 2), nullable=False, default=0)
    # ใช้เมื่อไม่มีรายการสินค้า (เช่นมูลค่าดีลแบบก้อนเดียว)
    manual_subtotal = db.Column(db.Numeric(14, 2), nullable=True)

    approved_at = db.Column(db.DateTime, nullable=True)
    parent_id = db.Column(db.Integer, db.ForeignKey("sales_docs.id", ondelete="SET NULL"), nullable=True)

    items = db.relationship(
        "SalesItem", backref="doc", lazy=True, cascade="all, delete-orphan", order_by="SalesItem.id"
    )
    children = db.relationship("SalesDoc", backref=db.backref("parent", remote_side=[id]), lazy=True)

    __table_args__ = (
        Index("ix_sales_docs_doc_type", "doc_type"),
        Index("ix_sales_docs_status", "status"),
        CheckConstraint("discount_amount >= 0", name="ck_sales_docs_discount_nonneg"),
        CheckConstraint("vat_rate >= 0", name="ck_sales_docs_vat_rate_nonneg"),
        CheckConstraint("wht_rate >= 0", name="ck_sales_docs_wht_rate_nonneg"),
    )

    @staticmethod
    def next_doc_no(doc_type: str, today: date | None = None) -> str:
        """เลขที่เอกสารแบบรันต่อเดือน เช่น IV-202610-0001"""
        today = today or date.today()
        prefix = f"{doc_type}-{today:%Y%m}"

        # เลขรันเทียบเป็นจำนวนเต็ม ไม่ใช่สตริง
        rows = db.session.query(SalesDoc.doc_no).filter(SalesDoc.doc_no.like(f"{prefix}-%")).all()
        tails = [no.rsplit("-", 1)[-1] for (no,) in rows]
        running = max((int(t) for t in tails if t.isdigit()), default=0) + 1
        return f"{prefix}-{running:04d}"

    @property
    def totals(self) -> dict:
        return calculate_document_totals(
            self.items,
            self.discount_amount,
            self.vat_rate,
            self.wht_rate,
            self.manual_subtotal,
        )

    @property
    def payable_amount(self):
        # ใบสั่งซื้อแสดงยอดรวม VAT, เอกสารขายแสดงยอดหลังหัก ณ ที่จ่าย
        t = self.totals
        return t["grand_total"] if self.doc_type == "PO" else t["net_total"]

    @property
    def amount_in_words(self) -> str:
        return thai_baht_text(self.payable_amount)


class SalesItem(db.Model, TimestampMixin):
    __tablename__ = "sales_items"

    id = db.Column(db.Integer, primary_key=True)
    doc_id = db.Column(db.Integer, db.ForeignKey("sales_docs.id", ondelete="CASCADE"), nullable=False)

    description = db.Column(db.Text, nullable=False)
    qty = db.Column(db.Numeric(12, 2), nullable=False, default=1)
    unit_price = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    discount_amount = db.Column(db.Numeric(12, 2), nullable=False, default=0)
    # ยอดรายการแบบระบุเอง (ใบเสร็จ) ถ้ามีจะใช้แทน qty * unit_price - discount
    amount = db.Column(db.Numeric(14, 2), nullable=True)

    __table_args__ = (
        Index("ix_sales_items_doc_id", "doc_id"),
        CheckConstraint("qty >= 0", name="ck_sales_items_qty_nonneg"),
        CheckConstraint("unit_price >= 0", name="ck_sales_items_unit_price_nonneg"),
    )

    @property
    def line_total(self):
        return line_amount(self)
