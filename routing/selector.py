"""Rule selection: first matching active rule wins.

Rules are filtered to active ones and stably sorted ascending by
priority, so rules sharing a priority keep the order the caller supplied
them in. The validator warns about such ties; callers that load rules
from storage should order them deterministically.

A rule that matches but whose destination no longer exists is skipped
(treated as a non-match) and evaluation moves on to the next rule.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from core.logging import get_logger
from routing.conditions import evaluate_condition
from routing.context import RoutingContext
from routing.models import Destination, RoutingRule

logger = get_logger(__name__)


@dataclass(frozen=True)
class RoutingDecision:
    """Outcome of routing one return."""

    destination: Destination | None
    matched_rule: RoutingRule | None = None
    used_default: bool = False
    reason: str = ""
    return_request_id: str | None = None

    @property
    def is_routed(self) -> bool:
        return self.destination is not None


def ordered_active_rules(rules: Iterable[RoutingRule]) -> list[RoutingRule]:
    """Active rules in evaluation order (stable on input order for ties)."""
    return sorted(
        (rule for rule in rules if rule.is_active),
        key=lambda rule: rule.priority,
    )


def select_rule(
    rules: Iterable[RoutingRule], context: RoutingContext
) -> RoutingRule | None:
    """Return the first active rule that matches and has a destination."""
    for rule in ordered_active_rules(rules):
        if not evaluate_condition(rule, context):
            continue
        if rule.destination is None:
            logger.warning(
                "Skipping matched rule with missing destination",
                rule_id=rule.id,
                rule_name=rule.name,
                destination_id=rule.destination_id,
            )
            continue
        return rule
    return None


def find_matching_destination(
    rules: Iterable[RoutingRule], context: RoutingContext
) -> Destination | None:
    """Destination of the highest-priority matching rule, or None."""
    rule = select_rule(rules, context)
    return rule.destination if rule else None


def find_default_destination(
    destinations: Iterable[Destination],
) -> Destination | None:
    """The shop's default destination, if one is flagged."""
    return next((d for d in destinations if d.is_default), None)


def resolve_destination(
    rules: Iterable[RoutingRule],
    destinations: Iterable[Destination],
    context: RoutingContext,
    return_request_id: str | None = None,
) -> RoutingDecision:
    """Route a return: matching rule first, then the shop default.

    Never invents a destination. When neither a rule nor a default
    applies the decision carries ``destination=None`` and the caller
    decides what to do (typically manual triage).
    """
    rule = select_rule(rules, context)
    if rule is not None:
        decision = RoutingDecision(
            destination=rule.destination,
            matched_rule=rule,
            reason=f"Rule '{rule.name}' matched",
            return_request_id=return_request_id,
        )
    else:
        default = find_default_destination(destinations)
        if default is not None:
            decision = RoutingDecision(
                destination=default,
                used_default=True,
                reason="No rule matched; using default destination",
                return_request_id=return_request_id,
            )
        else:
            decision = RoutingDecision(
                destination=None,
                reason="No rule matched and no default destination is set",
                return_request_id=return_request_id,
            )

    logger.debug(
        "Routing decision",
        return_request_id=return_request_id,
        destination_id=decision.destination.id if decision.destination else None,
        rule_id=rule.id if rule else None,
        used_default=decision.used_default,
    )
    return decision
