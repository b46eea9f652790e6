"""Engine-side records for rules and destinations.

These are plain dataclasses, detached from any database session. The
persistence layer converts its rows into them so the engine only ever
sees an in-memory snapshot.
"""

from dataclasses import dataclass
from enum import Enum


class ConditionType(str, Enum):
    """What a routing rule's condition inspects."""

    PRODUCT_TYPE = "product_type"
    PRODUCT_TAG = "product_tag"
    SKU_CONTAINS = "sku_contains"
    ORDER_VALUE_ABOVE = "order_value_above"
    ORDER_VALUE_BELOW = "order_value_below"
    RETURN_REASON = "return_reason"
    CUSTOMER_TAG = "customer_tag"
    PRODUCT_VENDOR = "product_vendor"

    @classmethod
    def parse(cls, raw: "ConditionType | str") -> "ConditionType | None":
        """Return the matching member, or None for an unrecognized type."""
        try:
            return cls(raw)
        except ValueError:
            return None


# Condition types whose value is a numeric threshold
THRESHOLD_CONDITIONS = frozenset(
    {ConditionType.ORDER_VALUE_ABOVE, ConditionType.ORDER_VALUE_BELOW}
)


@dataclass(frozen=True)
class Destination:
    """Where a returned item can be sent."""

    id: str
    name: str
    address_line1: str = ""
    address_line2: str | None = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = "US"
    phone: str | None = None
    is_default: bool = False


@dataclass(frozen=True)
class RoutingRule:
    """A merchant-authored rule mapping one condition to a destination.

    ``condition_type`` is kept as a raw string when it is not a known
    ``ConditionType`` so that rules written by a newer release load
    without error. ``destination`` is None when ``destination_id`` points
    at a destination that no longer exists.
    """

    id: str
    name: str
    condition_type: ConditionType | str
    condition_value: str
    destination_id: str
    priority: int = 0
    is_active: bool = True
    destination: Destination | None = None
