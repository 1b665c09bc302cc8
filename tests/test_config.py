from decimal import Decimal

from facturacion.config import Settings


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("FACTURACION_TAX_PERCENTAGE", "16")
    monkeypatch.setenv("FACTURACION_CURRENCY_SYMBOL", "€")
    monkeypatch.setenv("FACTURACION_AUTO_DISCOUNT_ENABLED", "false")

    settings = Settings()
    config = settings.calculation_config()

    assert config.tax_percentage == Decimal("16")
    assert config.currency.symbol == "€"
    assert config.discount_policy is None


def test_default_settings_match_business_defaults():
    settings = Settings()
    config = settings.calculation_config()
    policy = settings.validation_policy()

    assert config.tax_percentage == Decimal("19")
    assert config.currency.decimal_separator == ","
    assert config.currency.thousands_separator == "."
    assert config.discount_policy.percentage == Decimal("5")
    assert config.discount_policy.minimum_subtotal == Decimal("500000")
    assert policy.high_discount_threshold == Decimal("50")
    assert policy.observations_max_length == 500
