# tests/test_models.py
from datetime import date
from decimal import Decimal

from salesdocs import db
from salesdocs.models import CompanyProfile, SalesDoc, SalesItem


def _doc(doc_no, doc_type="IV", **kw):
    d = SalesDoc(doc_type=doc_type, doc_no=doc_no, customer_name="ลูกค้า", **kw)
    db.session.add(d)
    db.session.commit()
    return d


def test_next_doc_no_starts_at_one(app):
    assert SalesDoc.next_doc_no("IV", date(2026, 10, 1)) == "IV-202610-0001"


def test_next_doc_no_past_9999(app):
    _doc("IV-202610-9999")
    _doc("IV-202610-10000")
    assert SalesDoc.next_doc_no("IV", date(2026, 10, 5)) == "IV-202610-10001"


def test_next_doc_no_runs_per_month_and_type(app):
    _doc("IV-202610-0001")
    _doc("IV-202610-0002")
    _doc("QT-202610-0007", doc_type="QT")
    _doc("IV-202609-0010")
    assert SalesDoc.next_doc_no("IV", date(2026, 10, 20)) == "IV-202610-0003"
    assert SalesDoc.next_doc_no("QT", date(2026, 10, 20)) == "QT-202610-0008"
    assert SalesDoc.next_doc_no("IV", date(2026, 11, 1)) == "IV-202611-0001"


def test_totals_from_items(app):
    doc = _doc("QT-202610-0001", doc_type="QT", discount_amount=100, vat_rate=7, wht_rate=3)
    doc.items.append(SalesItem(description="งาน", qty=2, unit_price=500, discount_amount=0))
    db.session.commit()

    t = doc.totals
    assert t["subtotal"] == 1000
    assert t["net_total"] == 936
    assert doc.amount_in_words == "เก้าร้อยสามสิบหกบาทถ้วน"


def test_item_amount_override(app):
    doc = _doc("RC-202610-0001", doc_type="RC", vat_rate=0, wht_rate=0)
    doc.items.append(SalesItem(description="ชำระงวด 1", qty=1, unit_price=0, discount_amount=0, amount=Decimal("1500.25")))
    db.session.commit()

    assert doc.items[0].line_total == Decimal("1500.25")
    assert doc.amount_in_words == "หนึ่งพันห้าร้อยบาทยี่สิบห้าสตางค์"


def test_manual_subtotal_when_no_items(app):
    doc = _doc("IV-202610-0005", manual_subtotal=1000, vat_rate=7, wht_rate=0)
    assert doc.totals["grand_total"] == 1070


def test_purchase_order_words_use_grand_total(app):
    doc = _doc("PO-202610-0001", doc_type="PO", manual_subtotal=1000, vat_rate=7, wht_rate=3)
    assert doc.payable_amount == doc.totals["grand_total"]
    assert doc.amount_in_words == "หนึ่งพันเจ็ดสิบบาทถ้วน"


def test_company_profile_get_one_is_singleton(app):
    a = CompanyProfile.get_one()
    db.session.commit()
    b = CompanyProfile.get_one()
    assert a.id == b.id
    assert CompanyProfile.query.count() == 1
