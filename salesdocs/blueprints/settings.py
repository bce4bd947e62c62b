from __future__ import annotations

from flask import Blueprint, jsonify, request

from .. import db
from ..models import CompanyProfile

bp_settings = Blueprint("settings", __name__)

COMPANY_FIELDS = ("company_name", "tax_id", "address", "phone", "email", "bank_name", "bank_account")


def _serialize_company(profile: CompanyProfile) -> dict:
    return {f: getattr(profile, f) or "" for f in COMPANY_FIELDS}


@bp_settings.get("/company")
def company_settings():
    profile = CompanyProfile.get_one()
    db.session.commit()
    return jsonify({"ok": True, "company": _serialize_company(profile)})


@bp_settings.put("/company")
def company_settings_save():
    payload = request.get_json(silent=True) or {}
    if not isinstance(payload, dict):
        return jsonify({"ok": False, "error": "payload must be a JSON object"}), 400
    profile = CompanyProfile.get_one()

    # ฟิลด์ที่ไม่ได้ส่งมา คงค่าเดิมไว้
    for f in COMPANY_FIELDS:
        if f in payload:
            setattr(profile, f, (str(payload.get(f) or "")).strip() or None)

    db.session.commit()
    return jsonify({"ok": True, "company": _serialize_company(profile)})
