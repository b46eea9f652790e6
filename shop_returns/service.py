"""Routing service: load a shop's snapshot, then ask the engine.

Each call reads the shop's rules and destinations once and hands that
in-memory snapshot to the pure routing engine. No transaction spans
load and decision; a rule edited in between is picked up on the next
call.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.logging import get_logger
from routing import (
    Destination,
    RoutingContext,
    RoutingDecision,
    RoutingRule,
    ValidationReport,
    resolve_destination,
    validate_rule_set,
)
from shop_returns.repository import DestinationRepository, RoutingRuleRepository

logger = get_logger(__name__)


class RoutingService:
    """Routes returns and validates routing configuration for a shop."""

    def __init__(
        self,
        rules: RoutingRuleRepository,
        destinations: DestinationRepository,
    ):
        self.rules = rules
        self.destinations = destinations

    @classmethod
    def for_session(cls, session: AsyncSession) -> "RoutingService":
        return cls(RoutingRuleRepository(session), DestinationRepository(session))

    async def load_snapshot(
        self, shop: str, active_only: bool = False
    ) -> tuple[list[RoutingRule], list[Destination]]:
        """Rules (joined with destinations) and destinations for ``shop``."""
        destinations = await self.destinations.load_destinations(shop)
        rules = await self.rules.load_rules(shop, destinations, active_only=active_only)
        return rules, destinations

    async def route_return_request(
        self,
        shop: str,
        return_request_id: str | None,
        context: RoutingContext,
    ) -> RoutingDecision:
        """Pick a destination for one return request."""
        rules, destinations = await self.load_snapshot(shop, active_only=True)
        decision = resolve_destination(
            rules, destinations, context, return_request_id=return_request_id
        )

        if decision.is_routed:
            logger.info(
                "Return routed",
                shop=shop,
                return_request_id=return_request_id,
                destination_id=decision.destination.id,
                rule_id=decision.matched_rule.id if decision.matched_rule else None,
                used_default=decision.used_default,
            )
        else:
            logger.warning(
                "Return has no destination",
                shop=shop,
                return_request_id=return_request_id,
                rules_evaluated=len(rules),
            )
        return decision

    async def get_destination_for_return(
        self, shop: str, context: RoutingContext
    ) -> Destination | None:
        """Destination for a return, or None when nothing applies."""
        decision = await self.route_return_request(shop, None, context)
        return decision.destination

    async def validate_routing_rules(self, shop: str) -> ValidationReport:
        """Check every rule the shop has, active or not."""
        rules, destinations = await self.load_snapshot(shop)
        report = validate_rule_set(rules, destinations)
        if not report.valid:
            logger.info(
                "Routing configuration has issues",
                shop=shop,
                issue_count=len(report.issues),
            )
        return report


# ---------------------------------------------------------------------------
# FastAPI dependency factory
# ---------------------------------------------------------------------------

def get_routing_service(
    session: AsyncSession = Depends(get_session),
) -> RoutingService:
    """FastAPI dependency for RoutingService."""
    return RoutingService.for_session(session)
