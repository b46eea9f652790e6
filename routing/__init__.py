"""Disposition routing engine.

Decides where a returned item goes from a shop's prioritized routing
rules. Everything here is pure and synchronous; loading rules and
destinations is the caller's job.
"""
from routing.conditions import evaluate_condition, parse_threshold
from routing.context import ItemFacet, RoutingContext, build_routing_context
from routing.models import ConditionType, Destination, RoutingRule
from routing.selector import (
    RoutingDecision,
    find_default_destination,
    find_matching_destination,
    resolve_destination,
    select_rule,
)
from routing.validator import ValidationReport, validate_rule_set

__all__ = [
    # Records
    "ConditionType",
    "Destination",
    "RoutingRule",
    # Context
    "ItemFacet",
    "RoutingContext",
    "build_routing_context",
    # Evaluation
    "evaluate_condition",
    "parse_threshold",
    # Selection
    "RoutingDecision",
    "find_default_destination",
    "find_matching_destination",
    "resolve_destination",
    "select_rule",
    # Validation
    "ValidationReport",
    "validate_rule_set",
]
