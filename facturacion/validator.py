"""Business rules a draft invoice must pass before submission.

Every rule is a plain entry in :data:`RULES` and returns user-facing
messages. Error rules block submission; warning rules are advisory.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .calculator import calculate_totals_for
from .config import CalculationConfig, ValidationPolicy
from .lines import normalize_lines
from .models import InvoiceDraft, LineItemComputed, Totals, ValidationResult
from .money import HUNDRED, ZERO, money_round, to_decimal, within_tolerance

logger = logging.getLogger(__name__)

ERROR = "error"
WARNING = "warning"

EMPTY_INVOICE = "invoice must contain at least one item"
STALE_TOTALS = "totals are stale, recalculate before submitting"
DISCOUNT_OUT_OF_RANGE = "discount percentage must be between 0 and 100"

HEADER_FIELDS = (
    ("customer_reference", "customer reference"),
    ("customer_address", "customer address"),
    ("customer_phone", "customer phone"),
)

TOTALS_FIELDS = (
    "subtotal",
    "discount_percentage",
    "discount_value",
    "taxable_base",
    "tax_percentage",
    "tax_value",
    "total",
)


@dataclass(frozen=True)
class ValidationContext:
    draft: InvoiceDraft
    lines: Sequence[Tuple[LineItemComputed, List[str]]]
    supplied_totals: Totals
    recalculated_totals: Totals
    policy: ValidationPolicy


@dataclass(frozen=True)
class Rule:
    name: str
    severity: str
    check: Callable[[ValidationContext], List[str]]


def _blank(value: Optional[str]) -> bool:
    return not (value or "").strip()


def check_header(ctx: ValidationContext) -> List[str]:
    return [
        f"{label} is required"
        for field, label in HEADER_FIELDS
        if _blank(getattr(ctx.draft, field))
    ]


def check_observations_length(ctx: ValidationContext) -> List[str]:
    limit = ctx.policy.observations_max_length
    if len(ctx.draft.observations or "") > limit:
        return [f"observations cannot exceed {limit} characters"]
    return []


def check_has_items(ctx: ValidationContext) -> List[str]:
    if not ctx.draft.line_items:
        return [EMPTY_INVOICE]
    return []


def check_lines(ctx: ValidationContext) -> List[str]:
    return [
        f"line {computed.position}: {error}"
        for computed, errors in ctx.lines
        for error in errors
    ]


def check_duplicate_articles(ctx: ValidationContext) -> List[str]:
    seen = set()
    reported = {}
    for item in ctx.draft.line_items:
        reference = (item.article_reference or "").strip()
        if not reference:
            continue
        key = reference.casefold()
        if key in seen:
            reported.setdefault(key, reference)
        seen.add(key)
    return [f"article {reference} appears more than once" for reference in reported.values()]


def check_discount_range(ctx: ValidationContext) -> List[str]:
    discount = ctx.draft.discount_percentage
    if discount is None:
        discount = ctx.recalculated_totals.discount_percentage
    if discount < ZERO or discount > HUNDRED:
        return [f"{DISCOUNT_OUT_OF_RANGE} (got {discount})"]
    return []


def check_stale_totals(ctx: ValidationContext) -> List[str]:
    tolerance = ctx.policy.totals_tolerance
    for field in TOTALS_FIELDS:
        supplied = getattr(ctx.supplied_totals, field)
        fresh = getattr(ctx.recalculated_totals, field)
        if not within_tolerance(supplied, fresh, tolerance):
            return [STALE_TOTALS]
    return []


def warn_missing_article_reference(ctx: ValidationContext) -> List[str]:
    return [
        f"line {computed.position}: missing article reference"
        for computed, _ in ctx.lines
        if _blank(computed.article_reference)
    ]


def warn_unit_price_precision(ctx: ValidationContext) -> List[str]:
    # Prices carry 2 decimals; extra digits are rounded away at the line subtotal.
    return [
        f"line {computed.position}: unit price {computed.unit_price} has more than 2 decimals"
        for computed, _ in ctx.lines
        if to_decimal(computed.unit_price) != money_round(computed.unit_price)
    ]


def warn_minimum_total(ctx: ValidationContext) -> List[str]:
    total = ctx.recalculated_totals.total
    minimum = ctx.policy.minimum_total
    if ctx.draft.line_items and total < minimum:
        return [f"total {total} is below the minimum of {minimum}"]
    return []


def warn_high_discount(ctx: ValidationContext) -> List[str]:
    discount = ctx.recalculated_totals.discount_percentage
    if ctx.policy.high_discount_threshold < discount <= HUNDRED:
        return [
            f"discount of {discount}% is above {ctx.policy.high_discount_threshold}%, "
            "check for a data-entry mistake"
        ]
    return []


def warn_observations_near_limit(ctx: ValidationContext) -> List[str]:
    limit = ctx.policy.observations_max_length
    length = len(ctx.draft.observations or "")
    if limit - ctx.policy.observations_warning_margin <= length <= limit and length:
        return [f"observations are close to the {limit} character limit ({length} used)"]
    return []


RULES: Tuple[Rule, ...] = (
    Rule("header_required", ERROR, check_header),
    Rule("observations_length", ERROR, check_observations_length),
    Rule("has_items", ERROR, check_has_items),
    Rule("line_items", ERROR, check_lines),
    Rule("duplicate_articles", ERROR, check_duplicate_articles),
    Rule("discount_range", ERROR, check_discount_range),
    Rule("stale_totals", ERROR, check_stale_totals),
    Rule("missing_article_reference", WARNING, warn_missing_article_reference),
    Rule("unit_price_precision", WARNING, warn_unit_price_precision),
    Rule("minimum_total", WARNING, warn_minimum_total),
    Rule("high_discount", WARNING, warn_high_discount),
    Rule("observations_near_limit", WARNING, warn_observations_near_limit),
)


def validate_invoice(
    draft: InvoiceDraft,
    totals: Optional[Totals],
    config: CalculationConfig,
    policy: Optional[ValidationPolicy] = None,
    rules: Sequence[Rule] = RULES,
) -> ValidationResult:
    """Check ``draft`` and the ``totals`` the caller holds for it.

    ``recalculated_totals`` in the result is always computed here from the
    draft, so callers can compare it with what they passed in. Without
    ``totals`` the staleness check compares the recalculation with itself.
    """
    if draft is None:
        raise ValueError("An invoice draft is required")
    policy = policy or ValidationPolicy()

    lines = normalize_lines(draft.line_items)
    recalculated = calculate_totals_for(
        [line for line, _ in lines],
        draft.discount_percentage,
        config.tax_percentage,
        config.discount_policy,
    )
    ctx = ValidationContext(
        draft=draft,
        lines=lines,
        supplied_totals=totals if totals is not None else recalculated,
        recalculated_totals=recalculated,
        policy=policy,
    )

    errors: List[str] = []
    warnings: List[str] = []
    for rule in rules:
        messages = rule.check(ctx)
        if not messages:
            continue
        logger.debug("Rule %s reported %d message(s)", rule.name, len(messages))
        if rule.severity == ERROR:
            errors.extend(messages)
        else:
            warnings.extend(messages)

    return ValidationResult(
        errors=errors,
        warnings=warnings,
        recalculated_totals=recalculated,
    )
