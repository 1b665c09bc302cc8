"""Display strings for invoice totals.

Formatting is presentation only: nothing here feeds back into the numbers.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import FormattedTotals, Totals
from .money import Number, money_round, to_decimal


class CurrencyFormat(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str = "$"
    decimal_separator: str = ","
    thousands_separator: str = "."
    decimal_places: int = Field(default=2, ge=0)


def format_number(value: Number, fmt: CurrencyFormat) -> str:
    amount = to_decimal(value)
    quantum = Decimal(1).scaleb(-fmt.decimal_places)
    rounded = abs(amount).quantize(quantum, rounding=ROUND_HALF_UP)
    integer, _, fraction = f"{rounded:,f}".partition(".")
    text = integer.replace(",", fmt.thousands_separator)
    if fraction:
        text = f"{text}{fmt.decimal_separator}{fraction}"
    if amount < 0 and rounded != 0:
        text = f"-{text}"
    return text


def format_currency(value: Number, fmt: Optional[CurrencyFormat] = None) -> str:
    fmt = fmt or CurrencyFormat()
    text = format_number(value, fmt)
    if text.startswith("-"):
        return f"-{fmt.symbol}{text[1:]}"
    return f"{fmt.symbol}{text}"


def format_percentage(value: Number, fmt: Optional[CurrencyFormat] = None) -> str:
    # Up to two decimals, trailing zeros dropped: 12 -> "12%", 12.5 -> "12.5%".
    text = f"{money_round(value):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    if fmt is not None:
        text = text.replace(".", fmt.decimal_separator)
    return f"{text}%"


def format_totals(totals: Totals, fmt: Optional[CurrencyFormat] = None) -> FormattedTotals:
    fmt = fmt or CurrencyFormat()
    return FormattedTotals(
        subtotal=format_currency(totals.subtotal, fmt),
        discount_percentage=format_percentage(totals.discount_percentage, fmt),
        discount_value=format_currency(totals.discount_value, fmt),
        taxable_base=format_currency(totals.taxable_base, fmt),
        tax_percentage=format_percentage(totals.tax_percentage, fmt),
        tax_value=format_currency(totals.tax_value, fmt),
        total=format_currency(totals.total, fmt),
    )
