"""Routing context snapshot and its builder.

The context is the immutable set of order, return and customer facts a
rule is evaluated against. Optional facts that were never supplied stay
``None`` rather than becoming empty collections: a customer with no tag
data is different from a customer with zero tags.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ItemFacet:
    """The routable facts of one order line item."""

    product_type: str | None = None
    product_tags: frozenset[str] = field(default_factory=frozenset)
    product_vendor: str | None = None
    sku: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ItemFacet":
        return cls(
            product_type=data.get("product_type"),
            product_tags=frozenset(data.get("product_tags") or ()),
            product_vendor=data.get("product_vendor"),
            sku=data.get("sku"),
        )


@dataclass(frozen=True)
class RoutingContext:
    """Facts about one return, evaluated by every candidate rule."""

    order_value: float
    return_reason: str | None = None
    customer_tags: frozenset[str] | None = None
    items: tuple[ItemFacet, ...] = ()


def build_routing_context(
    order_data: Mapping[str, Any],
    return_data: Mapping[str, Any],
    customer_data: Mapping[str, Any] | None = None,
) -> RoutingContext:
    """Reshape raw order/return/customer data into a RoutingContext.

    Example::

        context = build_routing_context(
            {"total_value": 120.0, "line_items": [{"product_type": "Shoes"}]},
            {"reason": "defective"},
            {"tags": ["vip"]},
        )
    """
    tags = customer_data.get("tags") if customer_data is not None else None

    return RoutingContext(
        order_value=order_data["total_value"],
        return_reason=return_data.get("reason"),
        customer_tags=frozenset(tags) if tags is not None else None,
        items=_to_facets(order_data.get("line_items") or ()),
    )


def _to_facets(line_items: Iterable[Any]) -> tuple[ItemFacet, ...]:
    return tuple(
        item if isinstance(item, ItemFacet) else ItemFacet.from_mapping(item)
        for item in line_items
    )
