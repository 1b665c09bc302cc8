from .config import CalculationConfig, ValidationPolicy
from .models import (
    CalculationResult,
    FormattedTotals,
    InvoiceDraft,
    LineItem,
    LineItemComputed,
    Totals,
    ValidationResult,
)
from .services import calculate, validate

__all__ = [
    "CalculationConfig",
    "CalculationResult",
    "FormattedTotals",
    "InvoiceDraft",
    "LineItem",
    "LineItemComputed",
    "Totals",
    "ValidationPolicy",
    "ValidationResult",
    "calculate",
    "validate",
]
