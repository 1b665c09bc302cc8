from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field

from .money import ZERO

# Monetary and percentage values travel as JSON numbers, never as strings.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
Percentage = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class LineItem(BaseModel):
    article_reference: str = ""
    description: str = ""
    quantity: int
    unit_price: Money


class LineItemComputed(LineItem):
    position: int
    line_subtotal: Money


class Totals(BaseModel):
    model_config = ConfigDict(frozen=True)

    subtotal: Money
    discount_percentage: Percentage
    discount_value: Money
    taxable_base: Money
    tax_percentage: Percentage
    tax_value: Money
    total: Money

    @classmethod
    def zero(cls, tax_percentage: Decimal = ZERO) -> "Totals":
        return cls(
            subtotal=ZERO,
            discount_percentage=ZERO,
            discount_value=ZERO,
            taxable_base=ZERO,
            tax_percentage=tax_percentage,
            tax_value=ZERO,
            total=ZERO,
        )


class FormattedTotals(BaseModel):
    """Display strings derived from :class:`Totals`. Output only."""

    model_config = ConfigDict(frozen=True)

    subtotal: str
    discount_percentage: str
    discount_value: str
    taxable_base: str
    tax_percentage: str
    tax_value: str
    total: str


class InvoiceDraft(BaseModel):
    customer_reference: Optional[str] = None
    customer_address: Optional[str] = None
    customer_phone: Optional[str] = None
    observations: Optional[str] = None
    # None lets the configured discount policy decide.
    discount_percentage: Optional[Percentage] = None
    line_items: List[LineItem] = Field(default_factory=list)
    # Totals the caller currently holds; checked for staleness on validate.
    totals: Optional[Totals] = None


class CalculationResult(BaseModel):
    lines: List[LineItemComputed]
    totals: Totals
    formatted: FormattedTotals
    errors: List[str] = Field(default_factory=list)


class ValidationResult(BaseModel):
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    recalculated_totals: Totals

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_valid(self) -> bool:
        return not self.errors
