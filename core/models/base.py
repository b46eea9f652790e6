"""Base model and mixins for all SQLAlchemy models.

Provides:
- Base: Declarative base class for all models
- ShopMixin: Adds a string primary key, the owning shop, and timestamps

Every model inherits from Base and includes ShopMixin so that each
merchant's configuration stays isolated. The shop column is indexed for
efficient per-shop queries.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def new_id() -> str:
    return str(uuid.uuid4())


class Base(DeclarativeBase):
    """Declarative base for all returns hub models."""
    pass


class ShopMixin:
    """Mixin providing per-shop isolation and standard audit columns.

    Adds:
    - id: String UUID primary key (auto-generated)
    - shop: Indexed shop domain, e.g. "acme.myshopify.com"
    - created_at: Timestamp set on insert
    - updated_at: Timestamp updated on every change
    """

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=new_id,
    )
    shop: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
