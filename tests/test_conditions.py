"""Test condition evaluation."""
from decimal import Decimal
from fractions import Fraction

import pytest

from routing.conditions import evaluate_condition, parse_threshold, supported_condition_types
from routing.context import ItemFacet, RoutingContext, build_routing_context
from routing.models import ConditionType

from factories import make_context, make_rule


def test_product_type_matches():
    rule = make_rule(condition_type="product_type", condition_value="Electronics")
    assert evaluate_condition(rule, make_context())


def test_product_type_case_insensitive():
    rule = make_rule(condition_type="product_type", condition_value="ELECTRONICS", priority=5)
    context = RoutingContext(order_value=0, items=(ItemFacet(product_type="Electronics"),))
    assert evaluate_condition(rule, context)


def test_product_type_value_is_trimmed():
    rule = make_rule(condition_type="product_type", condition_value="  electronics ")
    assert evaluate_condition(rule, make_context())


def test_product_type_mismatch():
    rule = make_rule(condition_type="product_type", condition_value="Clothing")
    assert not evaluate_condition(rule, make_context())


def test_product_type_matches_any_item():
    context = make_context(items=(
        ItemFacet(product_type="Shoes"),
        ItemFacet(),
        ItemFacet(product_type="Books"),
    ))
    rule = make_rule(condition_type="product_type", condition_value="books")
    assert evaluate_condition(rule, context)


def test_product_tag_matches():
    rule = make_rule(condition_type="product_tag", condition_value="FEATURED")
    assert evaluate_condition(rule, make_context())


def test_product_tag_mismatch():
    rule = make_rule(condition_type="product_tag", condition_value="clearance")
    assert not evaluate_condition(rule, make_context())


def test_product_vendor_matches():
    rule = make_rule(condition_type="product_vendor", condition_value="acme corp")
    assert evaluate_condition(rule, make_context())


def test_product_vendor_is_exact_not_substring():
    rule = make_rule(condition_type="product_vendor", condition_value="acme")
    assert not evaluate_condition(rule, make_context())


def test_sku_contains_prefix():
    rule = make_rule(condition_type="sku_contains", condition_value="ELEC")
    assert evaluate_condition(rule, make_context())


def test_sku_contains_case_insensitive():
    rule = make_rule(condition_type="sku_contains", condition_value="blk")
    assert evaluate_condition(rule, make_context())


def test_sku_contains_mismatch():
    rule = make_rule(condition_type="sku_contains", condition_value="CLOTH")
    assert not evaluate_condition(rule, make_context())


def test_sku_contains_ignores_items_without_sku():
    rule = make_rule(condition_type="sku_contains", condition_value="elec")
    assert not evaluate_condition(rule, make_context(items=(ItemFacet(),)))


@pytest.mark.parametrize("order_value,expected", [(150, True), (100.01, True), (100, False), (99.99, False)])
def test_order_value_above_is_strict(order_value, expected):
    rule = make_rule(condition_type="order_value_above", condition_value="100")
    assert evaluate_condition(rule, make_context(order_value=order_value)) is expected


@pytest.mark.parametrize("order_value,expected", [(99.99, True), (100, False), (150, False)])
def test_order_value_below_is_strict(order_value, expected):
    rule = make_rule(condition_type="order_value_below", condition_value="100")
    assert evaluate_condition(rule, make_context(order_value=order_value)) is expected


@pytest.mark.parametrize("order_value", [-1e9, 0, 100, 1e9])
def test_non_numeric_threshold_never_matches(order_value):
    above = make_rule(condition_type="order_value_above", condition_value="not-a-number")
    below = make_rule(condition_type="order_value_below", condition_value="not-a-number")
    context = make_context(order_value=order_value)
    assert evaluate_condition(above, context) is False
    assert evaluate_condition(below, context) is False


def test_return_reason_matches():
    rule = make_rule(condition_type="return_reason", condition_value="DEFECTIVE")
    assert evaluate_condition(rule, make_context())


def test_return_reason_unset():
    rule = make_rule(condition_type="return_reason", condition_value="defective")
    assert not evaluate_condition(rule, make_context(return_reason=None))


def test_customer_tag_matches():
    rule = make_rule(condition_type="customer_tag", condition_value="VIP")
    assert evaluate_condition(rule, make_context())


def test_customer_tag_unset_is_false():
    rule = make_rule(condition_type="customer_tag", condition_value="vip")
    assert evaluate_condition(rule, make_context(customer_tags=None)) is False


def test_customer_tag_empty_set_is_false():
    rule = make_rule(condition_type="customer_tag", condition_value="vip")
    assert evaluate_condition(rule, make_context(customer_tags=frozenset())) is False


def test_unknown_condition_type_is_false():
    rule = make_rule(condition_type="warehouse_zone", condition_value="A")
    assert evaluate_condition(rule, make_context()) is False


def test_enum_condition_type_accepted():
    rule = make_rule(condition_type=ConditionType.RETURN_REASON, condition_value="defective")
    assert evaluate_condition(rule, make_context())


@pytest.mark.parametrize("condition_type", [t.value for t in ConditionType] + ["bogus"])
def test_empty_context_never_raises(condition_type):
    rule = make_rule(condition_type=condition_type, condition_value="x")
    result = evaluate_condition(rule, RoutingContext(order_value=0))
    assert result is False


def test_every_condition_type_has_a_matcher():
    assert supported_condition_types() == frozenset(ConditionType)


def test_parse_threshold():
    assert parse_threshold("100") == 100.0
    assert parse_threshold(" 12.5 ") == 12.5
    assert parse_threshold("1e3") == 1000.0
    assert parse_threshold("-5") == -5.0
    assert parse_threshold(".5") == 0.5
    assert parse_threshold("Infinity") == float("inf")
    assert parse_threshold("abc") is None
    assert parse_threshold("nan") is None
    assert parse_threshold("") is None
    assert parse_threshold(None) is None


@pytest.mark.parametrize("value,expected", [
    ("100abc", 100.0),
    ("100 USD", 100.0),
    ("2.5e2x", 250.0),
    ("12.", 12.0),
    ("7e", 7.0),
])
def test_parse_threshold_reads_numeric_prefix(value, expected):
    assert parse_threshold(value) == expected


def test_parse_threshold_accepts_numbers():
    assert parse_threshold(100) == 100.0
    assert parse_threshold(Decimal("99.50")) == 99.5
    assert parse_threshold(float("nan")) is None
    assert parse_threshold(True) is None
    assert parse_threshold(["100"]) is None


def test_threshold_with_unit_suffix_matches():
    rule = make_rule(condition_type="order_value_above", condition_value="100 USD")
    assert evaluate_condition(rule, make_context(order_value=150))


def test_non_string_threshold_value():
    above = make_rule(condition_type="order_value_above", condition_value=100)
    below = make_rule(condition_type="order_value_below", condition_value=object())
    assert evaluate_condition(above, make_context(order_value=150))
    assert evaluate_condition(below, make_context(order_value=50)) is False


@pytest.mark.parametrize("order_value,expected", [
    (Decimal("150.00"), True),
    (Decimal("100.00"), False),
    (Fraction(201, 2), True),
])
def test_decimal_order_value(order_value, expected):
    rule = make_rule(condition_type="order_value_above", condition_value="100")
    assert evaluate_condition(rule, make_context(order_value=order_value)) is expected


def test_decimal_order_total_from_order_data():
    context = build_routing_context(
        {"total_value": Decimal("150.00"), "line_items": []},
        {"reason": "defective"},
    )
    rule = make_rule(condition_type="order_value_above", condition_value="100")
    assert evaluate_condition(rule, context)


@pytest.mark.parametrize("order_value", [None, "150", float("nan"), True])
def test_unusable_order_value_never_matches(order_value):
    above = make_rule(condition_type="order_value_above", condition_value="0")
    context = RoutingContext(order_value=order_value)
    assert evaluate_condition(above, context) is False


@pytest.mark.parametrize("condition_type", [t.value for t in ConditionType])
def test_missing_items_never_raises(condition_type):
    rule = make_rule(condition_type=condition_type, condition_value="x")
    assert evaluate_condition(rule, RoutingContext(order_value=1, items=None)) is False
