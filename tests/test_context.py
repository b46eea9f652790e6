"""Test routing context construction."""
import pytest

from routing.context import ItemFacet, RoutingContext, build_routing_context


def test_copies_order_and_return_facts():
    context = build_routing_context(
        {"total_value": 149.5, "line_items": [{"product_type": "Shoes", "sku": "SH-1"}]},
        {"reason": "too_small"},
        {"tags": ["vip"]},
    )
    assert context.order_value == 149.5
    assert context.return_reason == "too_small"
    assert context.customer_tags == frozenset({"vip"})
    assert context.items == (ItemFacet(product_type="Shoes", sku="SH-1"),)


def test_missing_customer_data_leaves_tags_unset():
    context = build_routing_context({"total_value": 10, "line_items": []}, {})
    assert context.customer_tags is None
    assert context.return_reason is None


def test_customer_without_tags_leaves_tags_unset():
    context = build_routing_context({"total_value": 10, "line_items": []}, {}, {})
    assert context.customer_tags is None


def test_empty_customer_tags_stay_empty():
    context = build_routing_context({"total_value": 10, "line_items": []}, {}, {"tags": []})
    assert context.customer_tags == frozenset()


def test_empty_line_items_allowed():
    context = build_routing_context({"total_value": 0, "line_items": []}, {"reason": None})
    assert context.items == ()


def test_line_item_order_preserved():
    facet = ItemFacet(product_type="Books")
    context = build_routing_context(
        {"total_value": 1, "line_items": [{"sku": "A"}, facet, {"sku": "C"}]},
        {},
    )
    assert [i.sku for i in context.items] == ["A", None, "C"]
    assert context.items[1] is facet


def test_product_tags_become_frozenset():
    context = build_routing_context(
        {"total_value": 1, "line_items": [{"product_tags": ["a", "b"]}, {"product_tags": None}]},
        {},
    )
    assert context.items[0].product_tags == frozenset({"a", "b"})
    assert context.items[1].product_tags == frozenset()


def test_context_is_immutable():
    context = RoutingContext(order_value=1)
    with pytest.raises(AttributeError):
        context.order_value = 2
