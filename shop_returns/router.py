"""Routing configuration API router.

Endpoints a merchant-facing configuration screen calls:
- CRUD for return destinations
- CRUD for routing rules
- Rule-set validation report
- Routing preview for a hypothetical return

The shop comes from the middleware; every query is scoped to it.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from api.middleware import get_current_shop
from routing import build_routing_context
from shop_returns.repository import (
    DestinationRepository,
    RoutingRuleRepository,
    get_destination_repository,
    get_rule_repository,
)
from shop_returns.schemas import (
    DestinationCreate,
    DestinationResponse,
    DestinationUpdate,
    RouteRequest,
    RouteResponse,
    RoutingRuleCreate,
    RoutingRuleUpdate,
    ValidationResponse,
)
from shop_returns.service import RoutingService, get_routing_service

router = APIRouter()


# ============================================================================
# Destination Endpoints
# ============================================================================

@router.get("/destinations")
async def list_destinations(
    repo: DestinationRepository = Depends(get_destination_repository),
):
    """List the shop's destinations, default first."""
    shop = get_current_shop()
    rows = await repo.list(shop)
    return {"data": [row.to_dict() for row in rows], "count": len(rows)}


@router.post("/destinations", status_code=201)
async def create_destination(
    request: DestinationCreate,
    repo: DestinationRepository = Depends(get_destination_repository),
):
    """Add a destination. Flagging it default un-flags the previous default."""
    shop = get_current_shop()
    row = await repo.create(shop, request.model_dump())
    return row.to_dict()


@router.patch("/destinations/{destination_id}")
async def update_destination(
    destination_id: str,
    request: DestinationUpdate,
    repo: DestinationRepository = Depends(get_destination_repository),
):
    shop = get_current_shop()
    row = await repo.update(destination_id, shop, request.model_dump(exclude_unset=True))
    if not row:
        raise HTTPException(status_code=404, detail="Destination not found")
    return row.to_dict()


@router.delete("/destinations/{destination_id}", status_code=204)
async def delete_destination(
    destination_id: str,
    repo: DestinationRepository = Depends(get_destination_repository),
):
    """Remove a destination. Rules pointing at it show up in /validate."""
    shop = get_current_shop()
    deleted = await repo.delete(destination_id, shop)
    if not deleted:
        raise HTTPException(status_code=404, detail="Destination not found")


# ============================================================================
# Rule Endpoints
# ============================================================================

@router.get("/rules")
async def list_rules(
    repo: RoutingRuleRepository = Depends(get_rule_repository),
    destination_repo: DestinationRepository = Depends(get_destination_repository),
):
    """List the shop's rules in evaluation order."""
    shop = get_current_shop()
    names = {row.id: row.name for row in await destination_repo.list(shop)}
    rows = await repo.list(shop)
    return {
        "data": [row.to_dict(names.get(row.destination_id)) for row in rows],
        "count": len(rows),
    }


@router.post("/rules", status_code=201)
async def create_rule(
    request: RoutingRuleCreate,
    repo: RoutingRuleRepository = Depends(get_rule_repository),
    destination_repo: DestinationRepository = Depends(get_destination_repository),
):
    """Create a rule pointing at one of the shop's destinations."""
    shop = get_current_shop()
    destination = await destination_repo.get(request.destination_id, shop)
    if not destination:
        raise HTTPException(status_code=400, detail="Unknown destination")

    data = request.model_dump()
    data["condition_type"] = request.condition_type.value
    row = await repo.create(shop, data)
    return row.to_dict(destination.name)


@router.patch("/rules/{rule_id}")
async def update_rule(
    rule_id: str,
    request: RoutingRuleUpdate,
    repo: RoutingRuleRepository = Depends(get_rule_repository),
    destination_repo: DestinationRepository = Depends(get_destination_repository),
):
    shop = get_current_shop()
    updates = request.model_dump(exclude_unset=True)
    if request.condition_type is not None:
        updates["condition_type"] = request.condition_type.value
    if request.destination_id is not None:
        if not await destination_repo.get(request.destination_id, shop):
            raise HTTPException(status_code=400, detail="Unknown destination")

    row = await repo.update(rule_id, shop, updates)
    if not row:
        raise HTTPException(status_code=404, detail="Rule not found")
    destination = await destination_repo.get(row.destination_id, shop)
    return row.to_dict(destination.name if destination else None)


@router.delete("/rules/{rule_id}", status_code=204)
async def delete_rule(
    rule_id: str,
    repo: RoutingRuleRepository = Depends(get_rule_repository),
):
    shop = get_current_shop()
    deleted = await repo.delete(rule_id, shop)
    if not deleted:
        raise HTTPException(status_code=404, detail="Rule not found")


# ============================================================================
# Validation & Routing
# ============================================================================

@router.get("/validate", response_model=ValidationResponse)
async def validate_rules(
    service: RoutingService = Depends(get_routing_service),
):
    """Report configuration problems in the shop's rule set."""
    report = await service.validate_routing_rules(get_current_shop())
    return ValidationResponse(valid=report.valid, issues=report.issues)


@router.post("/route", response_model=RouteResponse)
async def route_return(
    request: RouteRequest,
    service: RoutingService = Depends(get_routing_service),
):
    """Preview where a return with these facts would be sent."""
    context = build_routing_context(
        request.order.model_dump(),
        request.return_request.model_dump(),
        request.customer.model_dump() if request.customer else None,
    )
    decision = await service.route_return_request(
        get_current_shop(), request.return_request.id, context
    )

    destination = decision.destination
    rule = decision.matched_rule
    return RouteResponse(
        destination=(
            DestinationResponse(**asdict(destination)) if destination else None
        ),
        matched_rule_id=rule.id if rule else None,
        matched_rule_name=rule.name if rule else None,
        used_default=decision.used_default,
        reason=decision.reason,
        return_request_id=decision.return_request_id,
    )
