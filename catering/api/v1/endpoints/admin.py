"""Admin endpoints: capacities, day configs, load, packaging, codes and products."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from catering.db.session import get_db
from catering.models import Product
from catering.schemas.catalog import ProductCreate, ProductResponse
from catering.schemas.common import ProductCategory
from catering.schemas.discount import DiscountCode, DiscountCodeCreate
from catering.schemas.settings import (
    CapacitiesUpdate,
    DailyLoadResponse,
    DayConfig,
    DayConfigUpdate,
    PackagingConfig,
)
from catering.services.capacity_service import CapacityModel
from catering.services.discount_service import discount_usage
from catering.services.load_service import daily_load_report
from catering.services.settings_service import (
    DuplicateDiscountCodeError,
    create_discount_code,
    delete_day_config,
    save_day_config,
    save_default_capacities,
    save_packaging_config,
)
from catering.services.store import SqlStore, day_config_snapshot

router: APIRouter = APIRouter()


@router.get("/capacities")
def get_capacities(db: Session = Depends(get_db)) -> dict[ProductCategory, float]:
    return SqlStore(db).get_default_capacities()


@router.put("/capacities")
def update_capacities(payload: CapacitiesUpdate, db: Session = Depends(get_db)) -> dict[ProductCategory, float]:
    """Replace default limits for the submitted categories."""
    save_default_capacities(db, payload.capacities)
    return SqlStore(db).get_default_capacities()


@router.put("/days/{day}", response_model=DayConfig)
def upsert_day(day: date, payload: DayConfigUpdate, db: Session = Depends(get_db)) -> DayConfig:
    row = save_day_config(db, day=day, is_open=payload.is_open, capacity_overrides=payload.capacity_overrides)
    return day_config_snapshot(row)


@router.delete("/days/{day}")
def remove_day(day: date, db: Session = Depends(get_db)) -> dict[str, str]:
    if not delete_day_config(db, day):
        raise HTTPException(status_code=404, detail="Day config not found")
    return {"message": "Day config removed"}


@router.get("/load/{day}", response_model=DailyLoadResponse)
def get_daily_load(day: date, db: Session = Depends(get_db)) -> DailyLoadResponse:
    """Per-category load versus limit for one date."""
    store = SqlStore(db)
    capacity = CapacityModel.from_store(store, day)
    return DailyLoadResponse(
        date=day,
        is_closed=capacity.is_date_closed(day),
        categories=daily_load_report(day, store.get_orders(delivery_date=day), capacity),
    )


@router.get("/packaging", response_model=PackagingConfig)
def get_packaging(db: Session = Depends(get_db)) -> PackagingConfig:
    return SqlStore(db).get_packaging_config()


@router.put("/packaging", response_model=PackagingConfig)
def update_packaging(payload: PackagingConfig, db: Session = Depends(get_db)) -> PackagingConfig:
    save_packaging_config(db, payload)
    return SqlStore(db).get_packaging_config()


@router.post("/discounts", response_model=DiscountCode, status_code=status.HTTP_201_CREATED)
def create_discount(payload: DiscountCodeCreate, db: Session = Depends(get_db)) -> DiscountCode:
    try:
        row = create_discount_code(db, payload)
    except DuplicateDiscountCodeError as exc:
        raise HTTPException(status_code=409, detail=f"Discount code {exc} already exists") from exc
    return DiscountCode.model_validate(row)


@router.get("/discounts", response_model=list[DiscountCode])
def list_discounts(db: Session = Depends(get_db)) -> list[DiscountCode]:
    """List codes with usage statistics recomputed from order history."""
    store = SqlStore(db)
    orders = store.get_orders()
    codes: list[DiscountCode] = []
    for discount in store.get_discount_catalog():
        usage = discount_usage(discount.code, orders)
        codes.append(discount.model_copy(update={"usage_count": usage.usage_count, "total_saved": usage.total_saved}))
    return codes


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)) -> Product:
    data = payload.model_dump()
    data["category"] = payload.category.value
    product = Product(**data)
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


@router.get("/products", response_model=list[ProductResponse])
def list_products(db: Session = Depends(get_db)) -> list[Product]:
    return db.scalars(select(Product).order_by(Product.id.asc())).all()
