"""Checkout endpoints: availability, calendar, discounts and packaging fee."""

from datetime import timedelta
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from catering.db.session import get_db
from catering.schemas.availability import (
    AvailabilityRequest,
    AvailabilityResult,
    CalendarDay,
    CalendarRequest,
)
from catering.schemas.catalog import CartItemPayload, CartLine
from catering.schemas.discount import (
    ApplyDiscountResult,
    DiscountApplyRequest,
    DiscountResult,
    DiscountRevalidateRequest,
    DiscountValidateRequest,
    RevalidationResult,
)
from catering.schemas.settings import PackagingFeeRequest
from catering.services.availability_service import check_availability, date_statuses
from catering.services.capacity_service import CapacityModel
from catering.services.checkout_service import UnknownProductError, resolve_cart
from catering.services.discount_service import apply_discount, revalidate_discounts, validate_discount
from catering.services.packaging_service import compute_packaging_fee
from catering.services.ports import Catalog
from catering.services.store import SqlStore
from catering.utils.time import business_today

router: APIRouter = APIRouter()


def _cart(store: Catalog, items: list[CartItemPayload]) -> list[CartLine]:
    try:
        return resolve_cart(store, items)
    except UnknownProductError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


@router.post("/availability", response_model=AvailabilityResult)
def availability(payload: AvailabilityRequest, db: Session = Depends(get_db)) -> AvailabilityResult:
    """Classify one delivery date for the submitted cart."""
    store = SqlStore(db)
    cart = _cart(store, payload.items)
    return check_availability(
        payload.date,
        cart,
        orders=store.get_orders(delivery_date=payload.date),
        capacity=CapacityModel.from_store(store, payload.date),
        exclude_order_id=payload.exclude_order_id,
        today=business_today(),
    )


@router.post("/calendar", response_model=list[CalendarDay])
def calendar(payload: CalendarRequest, db: Session = Depends(get_db)) -> list[CalendarDay]:
    """Return the status of each date in a range for calendar rendering."""
    store = SqlStore(db)
    cart = _cart(store, payload.items)
    end = payload.start + timedelta(days=payload.days - 1)
    orders = [order for order in store.get_orders() if payload.start <= order.delivery_date <= end]
    statuses = date_statuses(
        payload.start,
        payload.days,
        cart,
        orders=orders,
        capacity=CapacityModel.from_store(store, payload.start, end),
        exclude_order_id=payload.exclude_order_id,
        today=business_today(),
    )
    return [CalendarDay(date=day, status=status) for day, status in statuses.items()]


@router.post("/discounts/validate", response_model=DiscountResult)
def validate_code(payload: DiscountValidateRequest, db: Session = Depends(get_db)) -> DiscountResult:
    store = SqlStore(db)
    cart = _cart(store, payload.items)
    return validate_discount(
        payload.code,
        cart,
        store.get_discount_catalog(),
        store.get_orders(),
        today=business_today(),
    )


@router.post("/discounts/apply", response_model=ApplyDiscountResult)
def apply_code(payload: DiscountApplyRequest, db: Session = Depends(get_db)) -> ApplyDiscountResult:
    """Try to add a code to the client's active discount list."""
    store = SqlStore(db)
    cart = _cart(store, payload.items)
    return apply_discount(
        payload.code,
        payload.applied,
        cart,
        store.get_discount_catalog(),
        store.get_orders(),
        today=business_today(),
    )


@router.post("/discounts/revalidate", response_model=RevalidationResult)
def revalidate_codes(payload: DiscountRevalidateRequest, db: Session = Depends(get_db)) -> RevalidationResult:
    """Re-check active codes after the cart changed."""
    store = SqlStore(db)
    cart = _cart(store, payload.items)
    return revalidate_discounts(
        payload.applied,
        cart,
        store.get_discount_catalog(),
        store.get_orders(),
        today=business_today(),
    )


@router.post("/packaging-fee")
def packaging_fee(payload: PackagingFeeRequest, db: Session = Depends(get_db)) -> dict[str, Decimal]:
    store = SqlStore(db)
    cart = _cart(store, payload.items)
    config = store.get_packaging_config()
    return {"packaging_fee": compute_packaging_fee(cart, config.types, config.free_from)}
