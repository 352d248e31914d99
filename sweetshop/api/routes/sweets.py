"""
Catalog routes: browsing, search, admin management and stock changes.
"""

import math
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status

from sweetshop.api.deps import get_current_admin_user, get_current_user, get_sweet_service
from sweetshop.core.exceptions import ValidationError
from sweetshop.models.user import User
from sweetshop.schemas.sweet import (
    MessageResponse,
    StockChange,
    StockResponse,
    SweetCreate,
    SweetEnvelope,
    SweetListResponse,
    SweetResponse,
    SweetUpdate,
)
from sweetshop.services.sweet_service import SweetService

router = APIRouter(prefix="/sweets", tags=["sweets"])

ServiceDep = Annotated[SweetService, Depends(get_sweet_service)]


def _parse_price(value: Optional[str], name: str) -> Optional[float]:
    """Empty strings mean "no bound"; anything else must be a number."""
    if value is None or value.strip() == "":
        return None
    try:
        bound = float(value)
    except ValueError:
        raise ValidationError(f"{name} must be a number")
    if not math.isfinite(bound):
        raise ValidationError(f"{name} must be a number")
    return bound


def _envelope(sweet) -> SweetEnvelope:
    return SweetEnvelope(sweet=SweetResponse.model_validate(sweet))


def _listing(sweets) -> SweetListResponse:
    return SweetListResponse(sweets=[SweetResponse.model_validate(s) for s in sweets])


@router.get("/search", response_model=SweetListResponse)
def search_sweets(
    service: ServiceDep,
    q: Optional[str] = None,
    category: Optional[str] = None,
    min_price: Annotated[Optional[str], Query(alias="minPrice")] = None,
    max_price: Annotated[Optional[str], Query(alias="maxPrice")] = None,
) -> SweetListResponse:
    """
    Search the catalog. Public.

    All supplied filters must match; results are newest first.
    """
    sweets = service.search(
        q=q or None,
        category=category or None,
        min_price=_parse_price(min_price, "minPrice"),
        max_price=_parse_price(max_price, "maxPrice"),
    )
    return _listing(sweets)


@router.get("", response_model=SweetListResponse)
def list_sweets(
    service: ServiceDep,
    current_user: Annotated[User, Depends(get_current_user)],
) -> SweetListResponse:
    """List the whole catalog, newest first. Requires login."""
    return _listing(service.list_all())


@router.get("/{sweet_id}", response_model=SweetEnvelope)
def get_sweet(sweet_id: str, service: ServiceDep) -> SweetEnvelope:
    """Fetch one sweet. Public."""
    return _envelope(service.get(sweet_id))


@router.post("", response_model=SweetEnvelope, status_code=status.HTTP_201_CREATED)
def create_sweet(
    sweet_in: SweetCreate,
    service: ServiceDep,
    current_user: Annotated[User, Depends(get_current_admin_user)],
) -> SweetEnvelope:
    return _envelope(service.create(sweet_in))


@router.put("/{sweet_id}", response_model=SweetEnvelope)
def update_sweet(
    sweet_id: str,
    sweet_in: SweetUpdate,
    service: ServiceDep,
    current_user: Annotated[User, Depends(get_current_admin_user)],
) -> SweetEnvelope:
    return _envelope(service.update(sweet_id, sweet_in))


@router.delete("/{sweet_id}", response_model=MessageResponse)
def delete_sweet(
    sweet_id: str,
    service: ServiceDep,
    current_user: Annotated[User, Depends(get_current_admin_user)],
) -> MessageResponse:
    service.delete(sweet_id)
    return MessageResponse(message="Sweet deleted successfully")


@router.post("/{sweet_id}/purchase", response_model=StockResponse)
def purchase_sweet(
    sweet_id: str,
    order: StockChange,
    service: ServiceDep,
    current_user: Annotated[User, Depends(get_current_user)],
) -> StockResponse:
    """Buy units of a sweet. Any logged-in user."""
    sweet = service.purchase(sweet_id, order.quantity)
    return StockResponse(
        sweet=SweetResponse.model_validate(sweet),
        message=f"Sweet purchased successfully. {order.quantity} items purchased",
    )


@router.post("/{sweet_id}/restock", response_model=StockResponse)
def restock_sweet(
    sweet_id: str,
    delivery: StockChange,
    service: ServiceDep,
    current_user: Annotated[User, Depends(get_current_admin_user)],
) -> StockResponse:
    """Add units to a sweet's stock. Admin only."""
    sweet = service.restock(sweet_id, delivery.quantity)
    return StockResponse(
        sweet=SweetResponse.model_validate(sweet),
        message=f"Sweet restocked successfully. {delivery.quantity} items added",
    )
