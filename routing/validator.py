"""Static checks over a shop's complete routing configuration.

Run by the configuration API (or a CI job) against every rule a shop
has, active or not. Each problem becomes one human-readable issue; the
validator never raises and never blocks routing.
"""

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field

from routing.conditions import parse_threshold
from routing.models import THRESHOLD_CONDITIONS, ConditionType, Destination, RoutingRule


@dataclass
class ValidationReport:
    """Aggregate outcome of validating a rule set."""

    issues: list[str] = field(default_factory=list)
    valid: bool = field(init=False)

    def __post_init__(self):
        self.valid = len(self.issues) == 0


def validate_rule_set(
    rules: Iterable[RoutingRule], destinations: Iterable[Destination]
) -> ValidationReport:
    """Collect configuration issues for ``rules`` against ``destinations``."""
    rules = list(rules)
    destinations = list(destinations)
    issues: list[str] = []

    if not destinations:
        issues.append("No return destinations configured")
    elif not any(d.is_default for d in destinations):
        issues.append(
            "No default destination set - returns without matching rules "
            "will have no destination"
        )

    known_ids = {d.id for d in destinations}
    for rule in rules:
        if rule.destination is None or rule.destination_id not in known_ids:
            issues.append(f'Rule "{rule.name}" references a deleted destination')

        if ConditionType.parse(rule.condition_type) in THRESHOLD_CONDITIONS:
            if parse_threshold(rule.condition_value) is None:
                issues.append(
                    f'Rule "{rule.name}" has invalid numeric value: '
                    f"{rule.condition_value}"
                )

    priority_counts = Counter(rule.priority for rule in rules if rule.is_active)
    for priority, count in priority_counts.items():
        if count > 1:
            issues.append(
                f"Multiple active rules have the same priority ({priority}) "
                "- order may be unpredictable"
            )

    return ValidationReport(issues=issues)
