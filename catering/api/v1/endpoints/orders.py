"""Order endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from catering.db.session import get_db
from catering.models import Order
from catering.schemas.order import OrderCreate, OrderItemsUpdate, OrderResponse, OrderStatusUpdate
from catering.services.checkout_service import (
    CapacityExceededError,
    DiscountRejectedError,
    EmptyCartError,
    InvalidStatusTransitionError,
    OrderNotFoundError,
    UnknownProductError,
    set_order_status,
    submit_order,
    update_order_items,
)
from catering.utils.time import business_today

router: APIRouter = APIRouter()


def _capacity_conflict(exc: CapacityExceededError) -> HTTPException:
    return HTTPException(
        status_code=409,
        detail={"status": exc.result.status.value, "reason": exc.result.reason},
    )


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def create_order(payload: OrderCreate, db: Session = Depends(get_db)) -> OrderResponse:
    """Submit a checkout; availability and discounts are re-validated here."""
    try:
        order = submit_order(
            db,
            delivery_date=payload.delivery_date,
            items=payload.items,
            discount_codes=payload.discount_codes,
            note=payload.note,
            today=business_today(),
        )
    except UnknownProductError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except EmptyCartError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except CapacityExceededError as exc:
        raise _capacity_conflict(exc) from exc
    except DiscountRejectedError as exc:
        raise HTTPException(
            status_code=409,
            detail={"code": exc.code, "error": exc.error.value if exc.error else None, "reason": str(exc)},
        ) from exc
    return OrderResponse.model_validate(order)


@router.put("/{order_id}/items", response_model=OrderResponse)
def replace_order_items(order_id: int, payload: OrderItemsUpdate, db: Session = Depends(get_db)) -> OrderResponse:
    """Staff edit of an order's items, excluding the order's own load."""
    try:
        order, removed = update_order_items(db, order_id, payload.items, today=business_today())
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except UnknownProductError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except EmptyCartError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except CapacityExceededError as exc:
        raise _capacity_conflict(exc) from exc
    return OrderResponse.model_validate(order).model_copy(update={"removed_discounts": removed})


@router.put("/{order_id}/status", response_model=OrderResponse)
def update_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)) -> OrderResponse:
    try:
        order = set_order_status(db, order_id, payload.status)
    except OrderNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidStatusTransitionError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return OrderResponse.model_validate(order)


@router.get("", response_model=list[OrderResponse])
def list_orders(
    delivery_date: date | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[OrderResponse]:
    query = select(Order).order_by(Order.id.asc())
    if delivery_date is not None:
        query = query.where(Order.delivery_date == delivery_date)
    return [OrderResponse.model_validate(order) for order in db.scalars(query).all()]
