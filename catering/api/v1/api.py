"""API v1 router composition."""

from fastapi import APIRouter

from catering.api.v1.endpoints import admin, checkout, orders

api_router: APIRouter = APIRouter()
api_router.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
