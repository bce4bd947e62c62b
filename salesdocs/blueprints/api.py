from __future__ import annotations

from decimal import Decimal

from flask import Blueprint, current_app, jsonify, request

from ..utils import INVALID_AMOUNT_TEXT, calculate_document_totals, thai_baht_text

bp_api = Blueprint("api", __name__)


def serialize_totals(totals: dict) -> dict:
    # Decimal -> float สำหรับ JSON
    return {k: float(v) if isinstance(v, Decimal) else v for k, v in totals.items()}


@bp_api.post("/calc/totals")
def calc_totals():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "payload must be a JSON object"}), 400

    items = payload.get("items") or []
    if not isinstance(items, list):
        return jsonify({"ok": False, "error": "items must be a list"}), 400

    rows = [row for row in items if isinstance(row, dict)]
    if len(rows) != len(items):
        current_app.logger.warning("calc_totals: skipped %d non-object item(s)", len(items) - len(rows))

    vat_rate = payload.get("vat_rate")
    if vat_rate is None:
        vat_rate = current_app.config.get("DEFAULT_VAT_RATE", 7)

    totals = calculate_document_totals(
        rows,
        payload.get("discount") or 0,
        vat_rate,
        payload.get("wht_rate") or 0,
        payload.get("manual_subtotal"),
    )
    return jsonify({
        "ok": True,
        "totals": serialize_totals(totals),
        "amount_in_words": thai_baht_text(totals["net_total"]),
    })


@bp_api.get("/calc/baht-text")
def calc_baht_text():
    raw = request.args.get("amount")
    text = thai_baht_text(raw)
    return jsonify({
        "ok": text != INVALID_AMOUNT_TEXT,
        "amount": raw,
        "text": text,
    })
