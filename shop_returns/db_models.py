"""SQLAlchemy models for routing configuration.

Each model inherits from Base and uses ShopMixin for per-shop isolation.
``to_dict()`` is the serialisation interface used by the API router;
the ``to_*`` converters produce the detached records the routing engine
consumes.

``routing_rules.destination_id`` deliberately has no foreign key: a
destination can be deleted while rules still point at it, and the
routing validator reports those rules instead of the database refusing
the delete.
"""

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, ShopMixin
from routing.models import ConditionType, Destination, RoutingRule


class ReturnDestinationRow(ShopMixin, Base):
    """A warehouse, outlet or partner that accepts returned items."""

    __tablename__ = "return_destinations"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    address_line1: Mapped[str] = mapped_column(String(500), nullable=False)
    address_line2: Mapped[str | None] = mapped_column(String(500), nullable=True)
    city: Mapped[str] = mapped_column(String(200), nullable=False)
    state: Mapped[str] = mapped_column(String(200), nullable=False)
    postal_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(2), nullable=False, default="US")
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def to_destination(self) -> Destination:
        return Destination(
            id=self.id,
            name=self.name,
            address_line1=self.address_line1,
            address_line2=self.address_line2,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            country=self.country,
            phone=self.phone,
            is_default=self.is_default,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "shop": self.shop,
            "name": self.name,
            "address_line1": self.address_line1,
            "address_line2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "phone": self.phone,
            "is_default": self.is_default,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


class RoutingRuleRow(ShopMixin, Base):
    """A merchant-authored routing rule."""

    __tablename__ = "routing_rules"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=0, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    condition_type: Mapped[str] = mapped_column(String(50), nullable=False)
    condition_value: Mapped[str] = mapped_column(String(500), nullable=False)
    destination_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)

    def to_routing_rule(self, destination: Destination | None) -> RoutingRule:
        return RoutingRule(
            id=self.id,
            name=self.name,
            priority=self.priority,
            is_active=self.is_active,
            condition_type=ConditionType.parse(self.condition_type) or self.condition_type,
            condition_value=self.condition_value,
            destination_id=self.destination_id,
            destination=destination,
        )

    def to_dict(self, destination_name: str | None = None) -> dict:
        return {
            "id": self.id,
            "shop": self.shop,
            "name": self.name,
            "priority": self.priority,
            "is_active": self.is_active,
            "condition_type": self.condition_type,
            "condition_value": self.condition_value,
            "destination_id": self.destination_id,
            "destination_name": destination_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
