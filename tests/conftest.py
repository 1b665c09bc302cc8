from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from facturacion.config import CalculationConfig, Settings, ValidationPolicy, get_settings
from facturacion.main import app
from facturacion.models import InvoiceDraft, LineItem


@pytest.fixture
def config():
    return CalculationConfig(tax_percentage=Decimal("12"))


@pytest.fixture
def policy():
    return ValidationPolicy()


@pytest.fixture
def make_draft():
    def _make(lines=None, **overrides):
        data = {
            "customer_reference": "900123456",
            "customer_address": "Calle 10 # 20-30",
            "customer_phone": "3001234567",
            "observations": "",
            "discount_percentage": Decimal("10"),
            "line_items": [
                LineItem(article_reference="ART-1", quantity=3, unit_price=Decimal("10.00"))
            ]
            if lines is None
            else lines,
        }
        data.update(overrides)
        return InvoiceDraft(**data)

    return _make


@pytest.fixture
def settings():
    return Settings(tax_percentage=Decimal("12"), auto_discount_enabled=False)


@pytest.fixture
def client(settings):
    app.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
