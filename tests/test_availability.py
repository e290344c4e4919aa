"""Admission status tests for delivery dates."""

from datetime import date, timedelta
from decimal import Decimal

import pytest

from catering.schemas.catalog import CartLine, Product
from catering.schemas.common import DayStatus, OrderStatus, ProductCategory
from catering.schemas.order import OrderLineSnapshot, OrderSnapshot
from catering.schemas.settings import DayConfig
from catering.services.availability_service import check_availability, date_statuses, get_date_status
from catering.services.capacity_service import CapacityModel

TODAY = date(2025, 5, 20)
DAY = date(2025, 6, 1)


def _product(
    product_id: int = 1,
    *,
    category: ProductCategory = ProductCategory.WARM,
    workload: float = 5,
    overhead: float = 0,
    lead_time_days: int = 0,
) -> Product:
    return Product(
        id=product_id,
        name=f"Product {product_id}",
        category=category,
        price=Decimal("10"),
        workload=workload,
        workload_overhead=overhead,
        lead_time_days=lead_time_days,
    )


def _capacity(*day_configs: DayConfig, warm: float = 100) -> CapacityModel:
    defaults = {category: 100.0 for category in ProductCategory}
    defaults[ProductCategory.WARM] = warm
    return CapacityModel(defaults, day_configs)


def _existing_warm_load(total: float) -> list[OrderSnapshot]:
    return [
        OrderSnapshot(
            id=99,
            delivery_date=DAY,
            status=OrderStatus.CONFIRMED,
            items=(OrderLineSnapshot(product_id=50, quantity=1, category=ProductCategory.WARM, workload=total),),
        )
    ]


@pytest.mark.parametrize("days_back", [1, 2, 30, 365])
def test_past_dates_are_rejected_regardless_of_cart(days_back: int) -> None:
    day = TODAY - timedelta(days=days_back)
    cart = [CartLine(product=_product(lead_time_days=5), quantity=1)]

    for current_cart in ([], cart):
        result = check_availability(day, current_cart, orders=[], capacity=_capacity(), today=TODAY)
        assert result.status is DayStatus.PAST
        assert result.allowed is False


def test_past_wins_over_closed_day() -> None:
    yesterday = TODAY - timedelta(days=1)
    capacity = _capacity(DayConfig(date=yesterday, is_open=False))

    assert get_date_status(yesterday, [], orders=[], capacity=capacity, today=TODAY) is DayStatus.PAST


def test_longest_lead_time_in_cart_is_binding() -> None:
    cart = [
        CartLine(product=_product(1, lead_time_days=1), quantity=1),
        CartLine(product=_product(2, lead_time_days=3), quantity=1),
    ]

    statuses = [
        check_availability(TODAY + timedelta(days=offset), cart, orders=[], capacity=_capacity(), today=TODAY).status
        for offset in range(5)
    ]

    assert statuses == [
        DayStatus.TOO_SOON,
        DayStatus.TOO_SOON,
        DayStatus.TOO_SOON,
        DayStatus.AVAILABLE,
        DayStatus.AVAILABLE,
    ]


def test_today_is_available_for_empty_cart() -> None:
    result = check_availability(TODAY, [], orders=[], capacity=_capacity(), today=TODAY)

    assert result.status is DayStatus.AVAILABLE
    assert result.reason is None


def test_closed_day_is_reported() -> None:
    capacity = _capacity(DayConfig(date=DAY, is_open=False))

    result = check_availability(DAY, [], orders=[], capacity=capacity, today=TODAY)

    assert result.status is DayStatus.CLOSED
    assert result.reason


def test_cart_pushing_category_over_limit_exceeds() -> None:
    cart = [CartLine(product=_product(workload=5, overhead=2), quantity=3)]

    result = check_availability(DAY, cart, orders=_existing_warm_load(90), capacity=_capacity(), today=TODAY)

    assert result.status is DayStatus.EXCEEDS


def test_load_exactly_at_limit_is_available() -> None:
    cart = [CartLine(product=_product(workload=5), quantity=2)]

    result = check_availability(DAY, cart, orders=_existing_warm_load(90), capacity=_capacity(), today=TODAY)

    assert result.status is DayStatus.AVAILABLE


def test_cart_overhead_counted_once_per_product() -> None:
    cart = [
        CartLine(product=_product(1, workload=1, overhead=5), quantity=2),
        CartLine(product=_product(1, workload=1, overhead=5), quantity=2),
    ]
    capacity = _capacity(warm=9)

    assert check_availability(DAY, cart, orders=[], capacity=capacity, today=TODAY).status is DayStatus.AVAILABLE


def test_saturated_unrelated_category_does_not_block() -> None:
    cart = [CartLine(product=_product(category=ProductCategory.COLD), quantity=1)]
    capacity = _capacity(DayConfig(date=DAY, capacity_overrides={ProductCategory.WARM: 0}))

    result = check_availability(DAY, cart, orders=_existing_warm_load(90), capacity=capacity, today=TODAY)

    assert result.status is DayStatus.AVAILABLE


def test_day_override_lowers_limit() -> None:
    cart = [CartLine(product=_product(workload=5), quantity=1)]
    capacity = _capacity(DayConfig(date=DAY, capacity_overrides={ProductCategory.WARM: 4}))

    assert check_availability(DAY, cart, orders=[], capacity=capacity, today=TODAY).status is DayStatus.EXCEEDS


def test_excluding_an_order_releases_its_load() -> None:
    cart = [CartLine(product=_product(workload=5), quantity=3)]
    orders = _existing_warm_load(90)

    blocked = check_availability(DAY, cart, orders=orders, capacity=_capacity(), today=TODAY)
    edited = check_availability(DAY, cart, orders=orders, capacity=_capacity(), exclude_order_id=99, today=TODAY)

    assert blocked.status is DayStatus.EXCEEDS
    assert edited.status is DayStatus.AVAILABLE


def test_repeated_checks_return_identical_results() -> None:
    cart = [CartLine(product=_product(workload=5, overhead=2), quantity=1)]
    orders = _existing_warm_load(90)
    capacity = _capacity()

    first = check_availability(DAY, cart, orders=orders, capacity=capacity, today=TODAY)
    second = check_availability(DAY, cart, orders=orders, capacity=capacity, today=TODAY)

    assert first == second
    assert orders[0].items[0].workload == 90


def test_date_statuses_cover_range() -> None:
    cart = [CartLine(product=_product(lead_time_days=2), quantity=1)]
    capacity = _capacity(DayConfig(date=TODAY + timedelta(days=3), is_open=False))

    statuses = date_statuses(TODAY - timedelta(days=1), 6, cart, orders=[], capacity=capacity, today=TODAY)

    assert list(statuses.values()) == [
        DayStatus.PAST,
        DayStatus.TOO_SOON,
        DayStatus.TOO_SOON,
        DayStatus.AVAILABLE,
        DayStatus.CLOSED,
        DayStatus.AVAILABLE,
    ]


def test_date_statuses_can_ignore_the_order_being_moved() -> None:
    cart = [CartLine(product=_product(workload=5), quantity=3)]
    orders = _existing_warm_load(90)

    blocked = date_statuses(DAY, 2, cart, orders=orders, capacity=_capacity(), today=TODAY)
    moving = date_statuses(DAY, 2, cart, orders=orders, capacity=_capacity(), exclude_order_id=99, today=TODAY)

    assert blocked[DAY] is DayStatus.EXCEEDS
    assert moving[DAY] is DayStatus.AVAILABLE
    assert get_date_status(DAY, cart, orders=orders, capacity=_capacity(), exclude_order_id=99, today=TODAY) is (
        DayStatus.AVAILABLE
    )
