"""Routing configuration repositories.

Extends BaseRepository with the queries routing needs: rules in
evaluation order, rules joined with their destinations as engine
records, and default-destination bookkeeping.
"""

from __future__ import annotations

from typing import Any

from fastapi import Depends
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.repository import BaseRepository
from routing.models import Destination, RoutingRule
from shop_returns.db_models import ReturnDestinationRow, RoutingRuleRow


# ---------------------------------------------------------------------------
# Destination repository
# ---------------------------------------------------------------------------

class DestinationRepository(BaseRepository[ReturnDestinationRow]):
    """Repository for return destinations.

    Keeps at most one default destination per shop: flagging a
    destination as default clears the flag on the others.
    """

    model = ReturnDestinationRow

    async def list(self, shop: str) -> list[ReturnDestinationRow]:
        """Destinations for a shop, default first."""
        stmt = (
            select(ReturnDestinationRow)
            .where(ReturnDestinationRow.shop == shop)
            .order_by(ReturnDestinationRow.is_default.desc(), ReturnDestinationRow.name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_default(self, shop: str) -> ReturnDestinationRow | None:
        stmt = select(ReturnDestinationRow).where(
            ReturnDestinationRow.shop == shop,
            ReturnDestinationRow.is_default.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def create(self, shop: str, data: dict[str, Any]) -> ReturnDestinationRow:
        if data.get("is_default"):
            await self._clear_default(shop)
        return await super().create(shop, data)

    async def update(
        self, item_id: str, shop: str, data: dict[str, Any]
    ) -> ReturnDestinationRow | None:
        if data.get("is_default") and await self.get(item_id, shop) is not None:
            await self._clear_default(shop, keep_id=item_id)
        return await super().update(item_id, shop, data)

    async def load_destinations(self, shop: str) -> list[Destination]:
        """All destinations for a shop as engine records."""
        return [row.to_destination() for row in await self.list(shop)]

    async def _clear_default(self, shop: str, keep_id: str | None = None) -> None:
        stmt = (
            update(ReturnDestinationRow)
            .where(
                ReturnDestinationRow.shop == shop,
                ReturnDestinationRow.is_default.is_(True),
            )
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        if keep_id is not None:
            stmt = stmt.where(ReturnDestinationRow.id != keep_id)
        await self.session.execute(stmt)


# ---------------------------------------------------------------------------
# Routing rule repository
# ---------------------------------------------------------------------------

class RoutingRuleRepository(BaseRepository[RoutingRuleRow]):
    """Repository for routing rules."""

    model = RoutingRuleRow

    async def list(self, shop: str, active_only: bool = False) -> list[RoutingRuleRow]:
        """Rules for a shop in evaluation order.

        Ties on priority are broken by creation time then id so that the
        order is the same on every query.
        """
        stmt = select(RoutingRuleRow).where(RoutingRuleRow.shop == shop)
        if active_only:
            stmt = stmt.where(RoutingRuleRow.is_active.is_(True))
        stmt = stmt.order_by(
            RoutingRuleRow.priority,
            RoutingRuleRow.created_at,
            RoutingRuleRow.id,
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def load_rules(
        self,
        shop: str,
        destinations: list[Destination],
        active_only: bool = False,
    ) -> list[RoutingRule]:
        """Rules joined with their destinations as engine records.

        A rule whose destination is not among ``destinations`` gets
        ``destination=None``.
        """
        by_id = {d.id: d for d in destinations}
        return [
            row.to_routing_rule(by_id.get(row.destination_id))
            for row in await self.list(shop, active_only=active_only)
        ]


# ---------------------------------------------------------------------------
# FastAPI dependency factories
# ---------------------------------------------------------------------------

def get_destination_repository(
    session: AsyncSession = Depends(get_session),
) -> DestinationRepository:
    """FastAPI dependency for DestinationRepository."""
    return DestinationRepository(session)


def get_rule_repository(
    session: AsyncSession = Depends(get_session),
) -> RoutingRuleRepository:
    """FastAPI dependency for RoutingRuleRepository."""
    return RoutingRuleRepository(session)
