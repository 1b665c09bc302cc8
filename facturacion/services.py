"""Entry points used by the rest of the application: ``calculate`` and ``validate``."""

import logging
from typing import List, Optional

from .calculator import calculate_totals_for
from .config import CalculationConfig, ValidationPolicy
from .formatting import format_totals
from .lines import normalize_lines
from .models import CalculationResult, InvoiceDraft, Totals, ValidationResult
from .validator import validate_invoice

logger = logging.getLogger(__name__)


def _require_draft(draft: Optional[InvoiceDraft]) -> InvoiceDraft:
    if draft is None:
        raise ValueError("An invoice draft is required")
    if not isinstance(draft, InvoiceDraft):
        raise TypeError(f"Expected InvoiceDraft, got {type(draft).__name__}")
    return draft


def calculate(
    draft: InvoiceDraft, config: Optional[CalculationConfig] = None
) -> CalculationResult:
    """Best-effort totals for ``draft``.

    Invalid lines are reported in ``errors`` and count as zero, so a draft
    that is still being edited can always be displayed.
    """
    draft = _require_draft(draft)
    config = config or CalculationConfig()

    normalized = normalize_lines(draft.line_items)
    lines = [line for line, _ in normalized]
    errors: List[str] = [
        f"line {line.position}: {error}" for line, line_errors in normalized for error in line_errors
    ]
    totals = calculate_totals_for(
        lines, draft.discount_percentage, config.tax_percentage, config.discount_policy
    )
    logger.debug(
        "Calculated %d line(s): subtotal=%s total=%s", len(lines), totals.subtotal, totals.total
    )
    return CalculationResult(
        lines=lines,
        totals=totals,
        formatted=format_totals(totals, config.currency),
        errors=errors,
    )


def validate(
    draft: InvoiceDraft,
    config: Optional[CalculationConfig] = None,
    policy: Optional[ValidationPolicy] = None,
    totals: Optional[Totals] = None,
) -> ValidationResult:
    """Validate ``draft`` against the business rules.

    The totals checked for staleness are ``totals`` when given, otherwise the
    ones the draft carries. Without either, only the validator's own
    recalculation is used, which is never stale.
    """
    draft = _require_draft(draft)
    config = config or CalculationConfig()

    supplied = totals if totals is not None else draft.totals

    result = validate_invoice(draft, supplied, config, policy)
    if not result.is_valid:
        logger.info(
            "Draft rejected with %d error(s) and %d warning(s)",
            len(result.errors),
            len(result.warnings),
        )
    return result
