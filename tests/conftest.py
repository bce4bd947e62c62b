# tests/conftest.py
import pytest

from salesdocs import create_app, db


@pytest.fixture
def app():
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
        "DEFAULT_VAT_RATE": "7",
        "DEFAULT_CREDIT_DAYS": 30,
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_doc(client):
    """POST a document and return its id."""

    def _make(**overrides):
        payload = {
            "doc_type": "QT",
            "customer_name": "บริษัท ลูกค้า จำกัด",
            "vat_rate": 7,
            "wht_rate": 3,
            "discount_amount": 100,
            "items": [{"description": "งานติดตั้ง", "qty": 2, "unit_price": 500}],
        }
        payload.update(overrides)
        resp = client.post("/api/documents", json=payload)
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["id"]

    return _make
