from decimal import Decimal
from typing import Iterable, List, Tuple

from .models import LineItem, LineItemComputed
from .money import ZERO, money_round, to_decimal


def _label(item: LineItem) -> str:
    reference = (item.article_reference or "").strip()
    return f" (article {reference})" if reference else ""


def line_errors(item: LineItem) -> List[str]:
    errors: List[str] = []
    label = _label(item)
    if item.quantity <= 0:
        errors.append(f"invalid quantity{label}: must be greater than 0")
    if to_decimal(item.unit_price) < 0:
        errors.append(f"invalid unit price{label}: cannot be negative")
    return errors


def normalize_line(item: LineItem, position: int) -> Tuple[LineItemComputed, List[str]]:
    """Compute the line subtotal for ``item``.

    Lines that fail validation still come back, with a zero subtotal, so a
    partial draft can be displayed. The errors are returned alongside.
    """
    if item is None:
        raise ValueError(f"Line item at position {position} is missing")
    errors = line_errors(item)
    if errors:
        line_subtotal = ZERO
    else:
        line_subtotal = money_round(Decimal(item.quantity) * to_decimal(item.unit_price))
    computed = LineItemComputed(
        article_reference=item.article_reference,
        description=item.description,
        quantity=item.quantity,
        unit_price=item.unit_price,
        position=position,
        line_subtotal=line_subtotal,
    )
    return computed, errors


def normalize_lines(
    items: Iterable[LineItem],
) -> List[Tuple[LineItemComputed, List[str]]]:
    return [normalize_line(item, position) for position, item in enumerate(items, start=1)]


def check_stock(item: LineItem, available: int) -> bool:
    if available < 0:
        raise ValueError("available stock cannot be negative")
    return available >= item.quantity
