"""Pure-function condition evaluation.

A condition matcher is a stateless function ``(normalized_value, raw_value,
context) -> bool``. No database, no side effects. Every condition type in
``ConditionType`` has exactly one matcher in ``_MATCHERS``; a rule whose
type is not recognized simply never matches.

String comparisons are case-insensitive: the rule's value is trimmed and
lower-cased once, context strings are lower-cased at comparison time.
"""

import math
import numbers
import re
from decimal import Decimal
from typing import Callable

from routing.context import RoutingContext
from routing.models import ConditionType, RoutingRule

Matcher = Callable[[str, object, RoutingContext], bool]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def normalize(value: str | None) -> str:
    """Trim and lower-case a rule operand."""
    return (value or "").strip().lower()


_NUMERIC_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def _as_number(value) -> float | None:
    # bool is an int subclass but never a quantity
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return None if math.isnan(number) else number


def parse_threshold(value) -> float | None:
    """Parse a numeric condition value.

    Strings are read leniently: leading whitespace is skipped and the
    longest numeric prefix is used, so ``"100 USD"`` is 100. Numbers are
    taken as they are. Returns None when no number can be read or the
    result is NaN.
    """
    if not isinstance(value, str):
        return _as_number(value)
    match = _NUMERIC_PREFIX.match(value.lstrip())
    if match is None:
        return None
    return float(match.group())


def _lower(value) -> str | None:
    return value.lower() if isinstance(value, str) else None


def _order_value(context: RoutingContext) -> float | None:
    return _as_number(context.order_value)


# ---------------------------------------------------------------------------
# Item conditions
# ---------------------------------------------------------------------------

def _match_product_type(normalized: str, raw, context: RoutingContext) -> bool:
    return any(_lower(item.product_type) == normalized for item in (context.items or ()))


def _match_product_tag(normalized: str, raw, context: RoutingContext) -> bool:
    return any(
        _lower(tag) == normalized
        for item in (context.items or ())
        for tag in (item.product_tags or ())
    )


def _match_product_vendor(normalized: str, raw, context: RoutingContext) -> bool:
    return any(_lower(item.product_vendor) == normalized for item in (context.items or ()))


def _match_sku_contains(normalized: str, raw, context: RoutingContext) -> bool:
    for item in (context.items or ()):
        sku = _lower(item.sku)
        if sku is not None and normalized in sku:
            return True
    return False


# ---------------------------------------------------------------------------
# Order value thresholds (strict comparisons)
# ---------------------------------------------------------------------------

def _match_order_value_above(normalized: str, raw, context: RoutingContext) -> bool:
    threshold = parse_threshold(raw)
    order_value = _order_value(context)
    if threshold is None or order_value is None:
        return False
    return order_value > threshold


def _match_order_value_below(normalized: str, raw, context: RoutingContext) -> bool:
    threshold = parse_threshold(raw)
    order_value = _order_value(context)
    if threshold is None or order_value is None:
        return False
    return order_value < threshold


# ---------------------------------------------------------------------------
# Return and customer conditions
# ---------------------------------------------------------------------------

def _match_return_reason(normalized: str, raw, context: RoutingContext) -> bool:
    reason = _lower(context.return_reason)
    return reason is not None and reason == normalized


def _match_customer_tag(normalized: str, raw, context: RoutingContext) -> bool:
    # Unset tags are a non-match, not an error
    if context.customer_tags is None:
        return False
    return any(_lower(tag) == normalized for tag in context.customer_tags)


_MATCHERS: dict[ConditionType, Matcher] = {
    ConditionType.PRODUCT_TYPE: _match_product_type,
    ConditionType.PRODUCT_TAG: _match_product_tag,
    ConditionType.PRODUCT_VENDOR: _match_product_vendor,
    ConditionType.SKU_CONTAINS: _match_sku_contains,
    ConditionType.ORDER_VALUE_ABOVE: _match_order_value_above,
    ConditionType.ORDER_VALUE_BELOW: _match_order_value_below,
    ConditionType.RETURN_REASON: _match_return_reason,
    ConditionType.CUSTOMER_TAG: _match_customer_tag,
}


def supported_condition_types() -> frozenset[ConditionType]:
    """Condition types the evaluator knows how to match."""
    return frozenset(_MATCHERS)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def evaluate_condition(rule: RoutingRule, context: RoutingContext) -> bool:
    """Decide whether ``rule``'s condition holds for ``context``.

    Total over its inputs: unknown condition types and malformed numeric
    values evaluate to False instead of raising.
    """
    condition_type = ConditionType.parse(rule.condition_type)
    if condition_type is None:
        return False

    matcher = _MATCHERS.get(condition_type)
    if matcher is None:
        return False

    raw = rule.condition_value
    return matcher(normalize(raw if isinstance(raw, str) else None), raw, context)
