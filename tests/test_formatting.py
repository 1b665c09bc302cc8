from decimal import Decimal

from facturacion.calculator import compute_totals
from facturacion.formatting import CurrencyFormat, format_currency, format_percentage, format_totals
from facturacion.lines import normalize_lines
from facturacion.models import LineItem, Totals


def test_default_format_groups_with_dots():
    assert format_currency(Decimal("1234567.891")) == "$1.234.567,89"
    assert format_currency(Decimal("0")) == "$0,00"
    assert format_currency(Decimal("999.995")) == "$1.000,00"


def test_custom_format():
    fmt = CurrencyFormat(symbol="€", decimal_separator=".", thousands_separator=",")
    assert format_currency(Decimal("1234.5"), fmt) == "€1,234.50"


def test_zero_decimal_places():
    fmt = CurrencyFormat(decimal_places=0)
    assert format_currency(Decimal("1234.5"), fmt) == "$1.235"


def test_negative_amount_keeps_sign_before_symbol():
    assert format_currency(Decimal("-1500")) == "-$1.500,00"


def test_percentage_drops_trailing_zeros():
    assert format_percentage(Decimal("12")) == "12%"
    assert format_percentage(Decimal("12.50")) == "12.5%"
    assert format_percentage(Decimal("0")) == "0%"
    assert format_percentage(Decimal("7.125")) == "7.13%"
    assert format_percentage(Decimal("12.5"), CurrencyFormat()) == "12,5%"


def test_format_totals_leaves_numbers_untouched():
    items = [LineItem(article_reference="A", quantity=3, unit_price=Decimal("10.00"))]
    lines = [line for line, _ in normalize_lines(items)]
    totals = compute_totals(lines, Decimal("10"), Decimal("12"))
    before = totals.model_dump()

    formatted = format_totals(totals)

    assert formatted.subtotal == "$30,00"
    assert formatted.discount_percentage == "10%"
    assert formatted.discount_value == "$3,00"
    assert formatted.taxable_base == "$27,00"
    assert formatted.tax_percentage == "12%"
    assert formatted.tax_value == "$3,24"
    assert formatted.total == "$30,24"
    assert totals.model_dump() == before


def test_formatted_totals_are_not_accepted_as_totals():
    formatted = format_totals(Totals.zero())
    assert not isinstance(formatted, Totals)
    assert set(formatted.model_dump().values()) <= {"$0,00", "0%"}
