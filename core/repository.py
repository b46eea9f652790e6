"""Async repository pattern for database access.

Provides a generic base repository with CRUD operations scoped to a
single shop. Domain repositories subclass this to add their own queries.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.base import Base

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)

_PROTECTED_COLUMNS = ("id", "shop", "created_at")


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with CRUD + shop isolation.

    Subclass and set `model` to your SQLAlchemy model::

        class DestinationRepository(BaseRepository[ReturnDestinationRow]):
            model = ReturnDestinationRow
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- List --

    async def list(self, shop: str) -> list[ModelT]:
        """All rows for a shop."""
        stmt = select(self.model).where(self.model.shop == shop)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    # -- Get by ID --

    async def get(self, item_id: str, shop: str) -> ModelT | None:
        """Get a single row by ID with shop isolation."""
        stmt = select(self.model).where(
            self.model.id == item_id,
            self.model.shop == shop,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    # -- Create --

    async def create(self, shop: str, data: dict[str, Any]) -> ModelT:
        """Create a new row."""
        item = self.model(shop=shop, **data)
        self.session.add(item)
        await self.session.flush()
        await self.session.refresh(item)
        return item

    # -- Update --

    async def update(
        self, item_id: str, shop: str, data: dict[str, Any]
    ) -> ModelT | None:
        """Update an existing row. Returns None if not found."""
        item = await self.get(item_id, shop)
        if not item:
            return None

        for key, value in data.items():
            if hasattr(item, key) and key not in _PROTECTED_COLUMNS:
                setattr(item, key, value)

        await self.session.flush()
        await self.session.refresh(item)
        return item

    # -- Delete --

    async def delete(self, item_id: str, shop: str) -> bool:
        """Delete a row. Returns True if deleted, False if not found."""
        item = await self.get(item_id, shop)
        if not item:
            return False

        await self.session.delete(item)
        await self.session.flush()
        return True
