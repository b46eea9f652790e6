"""Pydantic schemas for API request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from routing.models import ConditionType


def _reject_null(value):
    # Update fields may be omitted, but a column that is NOT NULL cannot be cleared
    if value is None:
        raise ValueError("may be omitted but not null")
    return value


# ---------------------------------------------------------------------------
# Destination models
# ---------------------------------------------------------------------------

class DestinationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    address_line1: str = Field(..., min_length=1)
    address_line2: Optional[str] = None
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    country: str = Field("US", min_length=2, max_length=2)
    phone: Optional[str] = None
    is_default: bool = False


class DestinationUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    address_line1: Optional[str] = Field(None, min_length=1)
    address_line2: Optional[str] = None
    city: Optional[str] = Field(None, min_length=1)
    state: Optional[str] = Field(None, min_length=1)
    postal_code: Optional[str] = Field(None, min_length=1)
    country: Optional[str] = Field(None, min_length=2, max_length=2)
    phone: Optional[str] = None
    is_default: Optional[bool] = None

    check_not_null = field_validator(
        "name", "address_line1", "city", "state", "postal_code", "country", "is_default",
        mode="before",
    )(_reject_null)


# ---------------------------------------------------------------------------
# Rule models
# ---------------------------------------------------------------------------

class RoutingRuleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    priority: int = Field(0, ge=0)
    is_active: bool = True
    condition_type: ConditionType
    condition_value: str = Field(..., min_length=1)
    destination_id: str = Field(..., min_length=1)


class RoutingRuleUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    priority: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    condition_type: Optional[ConditionType] = None
    condition_value: Optional[str] = Field(None, min_length=1)
    destination_id: Optional[str] = Field(None, min_length=1)

    check_not_null = field_validator(
        "name", "priority", "is_active", "condition_type", "condition_value", "destination_id",
        mode="before",
    )(_reject_null)


# ---------------------------------------------------------------------------
# Routing preview
# ---------------------------------------------------------------------------

class LineItemFacts(BaseModel):
    product_type: Optional[str] = None
    product_tags: list[str] = Field(default_factory=list)
    product_vendor: Optional[str] = None
    sku: Optional[str] = None


class OrderFacts(BaseModel):
    total_value: float
    line_items: list[LineItemFacts] = Field(default_factory=list)


class ReturnFacts(BaseModel):
    id: Optional[str] = None
    reason: Optional[str] = None


class CustomerFacts(BaseModel):
    tags: Optional[list[str]] = None


class RouteRequest(BaseModel):
    order: OrderFacts
    return_request: ReturnFacts = Field(default_factory=ReturnFacts)
    customer: Optional[CustomerFacts] = None


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class DestinationResponse(BaseModel):
    id: str
    name: str
    address_line1: str
    address_line2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str
    phone: Optional[str] = None
    is_default: bool


class RouteResponse(BaseModel):
    destination: Optional[DestinationResponse] = None
    matched_rule_id: Optional[str] = None
    matched_rule_name: Optional[str] = None
    used_default: bool = False
    reason: str
    return_request_id: Optional[str] = None


class ValidationResponse(BaseModel):
    valid: bool
    issues: list[str]
