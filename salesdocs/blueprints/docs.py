from __future__ import annotations

from datetime import date, datetime, timedelta

from flask import Blueprint, Response, abort, current_app, jsonify, request
from sqlalchemy.exc import IntegrityError

from .. import db
from ..models import DOC_STATUSES, DOC_TYPES, CompanyProfile, SalesDoc, SalesItem
from ..utils import format_date_for_input, to_decimal
from ..utils.document_pdf import render_document_pdf
from .api import serialize_totals

bp_docs = Blueprint("docs", __name__)

# -------------------------------------------------
# Config
# -------------------------------------------------
DOC_TITLE = {
    "QT": "ใบเสนอราคา",
    "IV": "ใบแจ้งหนี้/ใบกำกับภาษี",
    "RC": "ใบเสร็จรับเงิน",
    "PO": "ใบสั่งซื้อ",
}

# เอกสารถัดไปที่สร้างต่อจากเอกสารต้นทางได้
CHILD_TYPES = {
    "QT": ("IV",),
    "IV": ("RC",),
}


# -------------------------------------------------
# Helpers
# -------------------------------------------------
def _s(v) -> str:
    """Safe strip."""
    return (v if isinstance(v, str) else "" if v is None else str(v)).strip()


def _parse_date(value) -> date | None:
    s = _s(value)
    if not s:
        return None
    try:
        return datetime.strptime(s, "%Y-%m-%d").date()
    except ValueError:
        return None


def _today() -> date:
    return date.today()


def _snapshot_company_to_doc(doc: SalesDoc) -> None:
    cp = CompanyProfile.query.order_by(CompanyProfile.id.asc()).first()
    if not cp:
        return
    doc.company_name = cp.company_name
    doc.company_tax_id = cp.tax_id
    doc.company_address = cp.address
    doc.company_phone = cp.phone


def _apply_doc_payload(doc: SalesDoc, payload: dict) -> None:
    doc.customer_name = _s(payload.get("customer_name"))
    doc.customer_tax_id = _s(payload.get("customer_tax_id")) or None
    doc.customer_address = _s(payload.get("customer_address")) or None
    doc.customer_phone = _s(payload.get("customer_phone")) or None
    doc.customer_email = _s(payload.get("customer_email")) or None
    doc.subject = _s(payload.get("subject")) or None
    doc.note = _s(payload.get("note")) or None

    if "issue_date" in payload:
        doc.issue_date = _parse_date(payload.get("issue_date")) or doc.issue_date or _today()
    if "due_date" in payload:
        doc.due_date = _parse_date(payload.get("due_date"))

    default_vat = current_app.config.get("DEFAULT_VAT_RATE", "7")
    doc.discount_amount = to_decimal(payload.get("discount_amount"))
    doc.vat_rate = to_decimal(payload.get("vat_rate"), str(default_vat))
    doc.wht_rate = to_decimal(payload.get("wht_rate"))

    manual = payload.get("manual_subtotal")
    doc.manual_subtotal = to_decimal(manual) if _s(manual) else None

    # ล้างแล้วสร้างรายการใหม่ทั้งหมด
    doc.items.clear()
    for row in payload.get("items") or []:
        if not isinstance(row, dict):
            continue
        desc = _s(row.get("description"))
        qty = to_decimal(row.get("qty", row.get("quantity")), "1")
        price = to_decimal(row.get("unit_price", row.get("price")))
        disc = to_decimal(row.get("discount_amount", row.get("discount")))
        amount = row.get("amount")

        # ข้ามแถวที่ว่างจริง ๆ
        if not desc and price == 0 and disc == 0 and amount is None:
            continue

        doc.items.append(
            SalesItem(
                description=desc or "(ไม่ระบุ)",
                qty=qty,
                unit_price=price,
                discount_amount=disc,
                amount=to_decimal(amount) if amount is not None else None,
            )
        )

    # validation เบื้องต้น
    if not doc.customer_name:
        raise ValueError("customer_name is required")
    if not doc.items and doc.manual_subtotal is None:
        raise ValueError("at least one item or manual_subtotal is required")
    if doc.discount_amount < 0 or doc.vat_rate < 0 or doc.wht_rate < 0:
        raise ValueError("discount and rates must not be negative")
    for it in doc.items:
        if it.qty < 0 or it.unit_price < 0:
            raise ValueError("item qty and unit_price must not be negative")


def _clone_child_from_parent(parent: SalesDoc, child_type: str) -> SalesDoc:
    today = _today()
    child = SalesDoc(
        doc_type=child_type,
        doc_no=SalesDoc.next_doc_no(child_type, today),
        status="DRAFT",
        issue_date=today,
        parent_id=parent.id,
        company_name=parent.company_name,
        company_tax_id=parent.company_tax_id,
        company_address=parent.company_address,
        company_phone=parent.company_phone,
        customer_name=parent.customer_name,
        customer_tax_id=parent.customer_tax_id,
        customer_address=parent.customer_address,
        customer_phone=parent.customer_phone,
        customer_email=parent.customer_email,
        subject=parent.subject,
        note=parent.note,
        discount_amount=parent.discount_amount,
        vat_rate=parent.vat_rate,
        wht_rate=parent.wht_rate,
        manual_subtotal=parent.manual_subtotal,
    )

    if child_type == "IV":
        days = int(current_app.config.get("DEFAULT_CREDIT_DAYS") or 30)
        child.due_date = today + timedelta(days=days)

    # ถ้าต้นทางไม่มี snapshot บริษัท ให้ fallback
    if not _s(child.company_name):
        _snapshot_company_to_doc(child)

    for it in (parent.items or []):
        child.items.append(
            SalesItem(
                description=it.description,
                qty=it.qty,
                unit_price=it.unit_price,
                discount_amount=it.discount_amount,
                amount=it.amount,
            )
        )
    return child


def _serialize_doc(doc: SalesDoc, with_items: bool = True) -> dict:
    data = {
        "id": doc.id,
        "doc_type": doc.doc_type,
        "title": DOC_TITLE.get(doc.doc_type, doc.doc_type),
        "doc_no": doc.doc_no,
        "status": doc.status,
        "issue_date": format_date_for_input(doc.issue_date),
        "due_date": format_date_for_input(doc.due_date),
        "parent_id": doc.parent_id,
        "company": {
            "name": doc.company_name or "",
            "tax_id": doc.company_tax_id or "",
            "address": doc.company_address or "",
            "phone": doc.company_phone or "",
        },
        "customer_name": doc.customer_name,
        "customer_tax_id": doc.customer_tax_id or "",
        "customer_address": doc.customer_address or "",
        "customer_phone": doc.customer_phone or "",
        "customer_email": doc.customer_email or "",
        "subject": doc.subject or "",
        "note": doc.note or "",
        "discount_amount": float(doc.discount_amount or 0),
        "vat_rate": float(doc.vat_rate or 0),
        "wht_rate": float(doc.wht_rate or 0),
        "manual_subtotal": float(doc.manual_subtotal) if doc.manual_subtotal is not None else None,
        "totals": serialize_totals(doc.totals),
        "amount_in_words": doc.amount_in_words,
    }
    if with_items:
        data["items"] = [
            {
                "id": it.id,
                "description": it.description,
                "qty": float(it.qty or 0),
                "unit_price": float(it.unit_price or 0),
                "discount_amount": float(it.discount_amount or 0),
                "amount": float(it.amount) if it.amount is not None else None,
                "line_total": float(it.line_total),
            }
            for it in doc.items
        ]
    return data


# -------------------------------------------------
# Routes
# -------------------------------------------------
@bp_docs.get("/documents")
def list_documents():
    q = _s(request.args.get("q"))
    doc_type = _s(request.args.get("type")).upper()
    status = _s(request.args.get("status")).upper()

    query = SalesDoc.query
    if doc_type:
        query = query.filter(SalesDoc.doc_type == doc_type)
    if status in DOC_STATUSES:
        query = query.filter(SalesDoc.status == status)
    if q:
        like = f"%{q}%"
        query = query.filter(
            (SalesDoc.doc_no.ilike(like))
            | (SalesDoc.customer_name.ilike(like))
            | (SalesDoc.subject.ilike(like))
        )

    docs = query.order_by(SalesDoc.id.desc()).all()
    return jsonify({"ok": True, "documents": [_serialize_doc(d, with_items=False) for d in docs]})


@bp_docs.post("/documents")
def create_document():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "payload must be a JSON object"}), 400

    doc_type = _s(payload.get("doc_type") or "QT").upper()
    if doc_type not in DOC_TYPES:
        return jsonify({"ok": False, "error": f"doc_type must be one of {', '.join(DOC_TYPES)}"}), 400

    today = _today()
    doc = SalesDoc(
        doc_type=doc_type,
        status="DRAFT",
        issue_date=today,
    )
    try:
        _apply_doc_payload(doc, payload)
    except ValueError as e:
        return jsonify({"ok": False, "error": str(e)}), 400

    doc.doc_no = _s(payload.get("doc_no")) or SalesDoc.next_doc_no(doc_type, doc.issue_date or today)
    _snapshot_company_to_doc(doc)

    db.session.add(doc)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning("create_document: duplicate doc_no %s", doc.doc_no)
        return jsonify({"ok": False, "error": "เลขที่เอกสารซ้ำ (doc_no ต้องไม่ซ้ำ)"}), 400

    current_app.logger.info("created %s %s", doc.doc_type, doc.doc_no)
    return jsonify({"ok": True, "id": doc.id, "doc_no": doc.doc_no}), 201


@bp_docs.get("/documents/<int:doc_id>")
def get_document(doc_id: int):
    doc = SalesDoc.query.get_or_404(doc_id)
    return jsonify({"ok": True, "document": _serialize_doc(doc)})


@bp_docs.put("/documents/<int:doc_id>")
def update_document(doc_id: int):
    doc = SalesDoc.query.get_or_404(doc_id)

    # อนุญาตแก้ไขเฉพาะ DRAFT
    if (doc.status or "").upper() != "DRAFT":
        return jsonify({"ok": False, "error": "แก้ไขได้เฉพาะเอกสารสถานะ DRAFT"}), 400

    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "payload must be a JSON object"}), 400
    try:
        _apply_doc_payload(doc, payload)
    except ValueError as e:
        db.session.rollback()
        return jsonify({"ok": False, "error": str(e)}), 400

    db.session.commit()
    return jsonify({"ok": True, "id": doc.id})


@bp_docs.delete("/documents/<int:doc_id>")
def delete_document(doc_id: int):
    doc = SalesDoc.query.get_or_404(doc_id)
    db.session.delete(doc)
    db.session.commit()
    current_app.logger.info("deleted %s %s", doc.doc_type, doc.doc_no)
    return jsonify({"ok": True})


@bp_docs.post("/documents/<int:doc_id>/approve")
def approve_document(doc_id: int):
    doc = SalesDoc.query.get_or_404(doc_id)

    if doc.status == "CANCELLED":
        return jsonify({"ok": False, "error": "เอกสารถูกยกเลิกแล้ว"}), 400

    if doc.status != "APPROVED":
        doc.status = "APPROVED"
        doc.approved_at = datetime.utcnow()
        db.session.commit()
        current_app.logger.info("approved %s %s", doc.doc_type, doc.doc_no)

    return jsonify({"ok": True, "id": doc.id, "status": doc.status})


@bp_docs.post("/documents/<int:doc_id>/create/<string:child_type>")
def create_child_document(doc_id: int, child_type: str):
    child_type = _s(child_type).upper()
    if child_type not in DOC_TYPES:
        abort(404)

    parent = SalesDoc.query.get_or_404(doc_id)

    if child_type not in CHILD_TYPES.get(parent.doc_type, ()):
        return jsonify({
            "ok": False,
            "error": f"สร้าง {DOC_TITLE[child_type]} จาก {DOC_TITLE.get(parent.doc_type, parent.doc_type)} ไม่ได้",
        }), 400

    if parent.status != "APPROVED":
        return jsonify({"ok": False, "error": "ต้องอนุมัติเอกสารต้นทางก่อน ถึงจะสร้างเอกสารถัดไปได้"}), 400

    existing = SalesDoc.query.filter_by(parent_id=parent.id, doc_type=child_type).first()
    if existing:
        return jsonify({
            "ok": False,
            "error": f"{DOC_TITLE[child_type]} ถูกสร้างไว้แล้ว",
            "id": existing.id,
        }), 400

    child = _clone_child_from_parent(parent, child_type)
    db.session.add(child)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning("create_child_document: duplicate doc_no %s", child.doc_no)
        return jsonify({"ok": False, "error": "เลขที่เอกสารซ้ำ (doc_no ต้องไม่ซ้ำ)"}), 400

    current_app.logger.info("created %s %s from %s", child.doc_type, child.doc_no, parent.doc_no)
    return jsonify({"ok": True, "id": child.id, "doc_no": child.doc_no}), 201


@bp_docs.get("/documents/<int:doc_id>/pdf")
def document_pdf(doc_id: int):
    doc = SalesDoc.query.get_or_404(doc_id)
    pdf_bytes = render_document_pdf(doc, title=DOC_TITLE.get(doc.doc_type, doc.doc_type))
    return Response(
        pdf_bytes,
        mimetype="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{doc.doc_no}.pdf"'},
    )
