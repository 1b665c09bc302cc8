from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel, ConfigDict

from .models import LineItemComputed, Money, Percentage, Totals
from .money import ZERO, Number, apply_percentage, money_round, to_decimal


class DiscountPolicy(BaseModel):
    """Automatic discount for drafts that do not state one.

    ``percentage`` applies once the subtotal reaches ``minimum_subtotal``.
    """

    model_config = ConfigDict(frozen=True)

    percentage: Percentage = Decimal("5")
    minimum_subtotal: Money = Decimal("500000")

    def discount_for(self, subtotal: Number) -> Decimal:
        if to_decimal(subtotal) >= self.minimum_subtotal:
            return self.percentage
        return ZERO


def compute_subtotal(lines: Iterable[LineItemComputed]) -> Decimal:
    return money_round(sum((to_decimal(line.line_subtotal) for line in lines), ZERO))


def resolve_discount_percentage(
    requested: Optional[Number],
    subtotal: Number,
    policy: Optional[DiscountPolicy] = None,
) -> Decimal:
    if requested is not None:
        return to_decimal(requested)
    if policy is None:
        return ZERO
    return policy.discount_for(subtotal)


def compute_totals(
    lines: Iterable[LineItemComputed],
    discount_percentage: Number,
    tax_percentage: Number,
) -> Totals:
    tax_rate = to_decimal(tax_percentage)
    if tax_rate < 0:
        raise ValueError(f"Tax percentage cannot be negative: {tax_rate}")
    discount_rate = to_decimal(discount_percentage)

    lines = list(lines)
    if not lines:
        return Totals.zero(tax_rate)

    subtotal = compute_subtotal(lines)
    # Out-of-range discounts are applied as given; the validator reports them.
    discount_value = apply_percentage(subtotal, discount_rate)
    taxable_base = money_round(subtotal - discount_value)
    tax_value = apply_percentage(taxable_base, tax_rate)
    total = money_round(taxable_base + tax_value)

    return Totals(
        subtotal=subtotal,
        discount_percentage=discount_rate,
        discount_value=discount_value,
        taxable_base=taxable_base,
        tax_percentage=tax_rate,
        tax_value=tax_value,
        total=total,
    )


def calculate_totals_for(
    lines: Iterable[LineItemComputed],
    requested_discount: Optional[Number],
    tax_percentage: Number,
    discount_policy: Optional[DiscountPolicy] = None,
) -> Totals:
    """Totals for ``lines`` with the draft's discount, or the policy's when it has none."""
    lines = list(lines)
    discount = resolve_discount_percentage(
        requested_discount, compute_subtotal(lines), discount_policy
    )
    return compute_totals(lines, discount, tax_percentage)
