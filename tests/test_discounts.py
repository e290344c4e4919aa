"""Discount validation, stacking and re-validation tests."""

from datetime import date
from decimal import Decimal

from catering.schemas.catalog import CartLine, Product
from catering.schemas.common import DiscountError, DiscountType, OrderStatus, ProductCategory
from catering.schemas.discount import DiscountCode
from catering.schemas.order import AppliedDiscount, OrderSnapshot
from catering.services.discount_service import (
    apply_discount,
    count_usage,
    discount_usage,
    remove_discount,
    revalidate_discounts,
    validate_discount,
)

TODAY = date(2025, 6, 15)


def _line(price: str, quantity: int = 1, category: ProductCategory = ProductCategory.WARM, product_id: int = 1):
    product = Product(id=product_id, name="Dish", category=category, price=Decimal(price))
    return CartLine(product=product, quantity=quantity)


def _code(code: str = "SUMMER10", **overrides) -> DiscountCode:
    data = {"code": code, "type": DiscountType.PERCENTAGE, "value": Decimal("10")}
    data.update(overrides)
    return DiscountCode(**data)


def _order_using(order_id: int, code: str, amount: str = "10", status=OrderStatus.DELIVERED) -> OrderSnapshot:
    return OrderSnapshot(
        id=order_id,
        delivery_date=date(2025, 6, 1),
        status=status,
        applied_discounts=(AppliedDiscount(code=code, amount=Decimal(amount)),),
    )


def test_percentage_discount_on_full_subtotal() -> None:
    discount = _code(min_order_value=Decimal("200"))
    cart = [_line("125", 2)]

    result = validate_discount("summer10", cart, [discount], [], today=TODAY)

    assert result.success is True
    assert result.amount == Decimal("25")
    assert result.discount.code == "SUMMER10"


def test_percentage_amount_is_floored() -> None:
    result = validate_discount("SUMMER10", [_line("99")], [_code()], [], today=TODAY)

    assert result.amount == Decimal("9")


def test_fixed_discount_never_exceeds_eligible_subtotal() -> None:
    discount = _code("FLAT100", type=DiscountType.FIXED, value=Decimal("100"))

    result = validate_discount("FLAT100", [_line("60")], [discount], [], today=TODAY)

    assert result.success is True
    assert result.amount == Decimal("60")


def test_unknown_code_is_invalid() -> None:
    result = validate_discount("NOPE", [_line("100")], [_code()], [], today=TODAY)

    assert result.success is False
    assert result.error is DiscountError.INVALID_CODE
    assert result.message


def test_disabled_code_is_inactive() -> None:
    result = validate_discount("SUMMER10", [_line("100")], [_code(enabled=False)], [], today=TODAY)

    assert result.error is DiscountError.INACTIVE


def test_usage_limit_counts_only_non_cancelled_orders() -> None:
    discount = _code(max_usage=1)
    used = [_order_using(1, "SUMMER10")]
    cancelled = [_order_using(1, "SUMMER10", status=OrderStatus.CANCELLED)]

    assert validate_discount("SUMMER10", [_line("100")], [discount], used, today=TODAY).error is DiscountError.USED_UP
    assert validate_discount("SUMMER10", [_line("100")], [discount], cancelled, today=TODAY).success is True


def test_stored_usage_counter_is_ignored() -> None:
    discount = _code(max_usage=1, usage_count=5)

    assert validate_discount("SUMMER10", [_line("100")], [discount], [], today=TODAY).success is True


def test_unlimited_usage_when_max_usage_is_zero() -> None:
    orders = [_order_using(order_id, "SUMMER10") for order_id in range(1, 20)]

    assert validate_discount("SUMMER10", [_line("100")], [_code(max_usage=0)], orders, today=TODAY).success is True


def test_date_window_is_inclusive() -> None:
    cart = [_line("100")]
    discount = _code(valid_from=TODAY, valid_to=TODAY)

    assert validate_discount("SUMMER10", cart, [discount], [], today=TODAY).success is True
    assert validate_discount("SUMMER10", cart, [discount], [], today=date(2025, 6, 14)).error is DiscountError.NOT_YET_VALID
    assert validate_discount("SUMMER10", cart, [discount], [], today=date(2025, 6, 16)).error is DiscountError.EXPIRED


def test_restricted_code_requires_matching_category() -> None:
    discount = _code(applicable_categories=[ProductCategory.DESSERT])

    result = validate_discount("SUMMER10", [_line("500")], [discount], [], today=TODAY)

    assert result.error is DiscountError.NOT_APPLICABLE


def test_restricted_code_uses_restricted_total_for_minimum_and_amount() -> None:
    discount = _code(applicable_categories=[ProductCategory.DESSERT], min_order_value=Decimal("100"))
    cart = [_line("500"), _line("80", category=ProductCategory.DESSERT, product_id=2)]

    below_minimum = validate_discount("SUMMER10", cart, [discount], [], today=TODAY)
    cart.append(_line("40", category=ProductCategory.DESSERT, product_id=3))
    above_minimum = validate_discount("SUMMER10", cart, [discount], [], today=TODAY)

    assert below_minimum.error is DiscountError.MIN_ORDER_NOT_MET
    assert "100" in below_minimum.message
    assert above_minimum.amount == Decimal("12")


def test_non_stackable_code_blocks_any_second_code() -> None:
    catalog = [_code("FIRST"), _code("SECOND", is_stackable=True), _code("THIRD")]
    cart = [_line("100")]

    first = apply_discount("FIRST", [], cart, catalog, [], today=TODAY)
    second = apply_discount("SECOND", first.applied, cart, catalog, [], today=TODAY)
    third = apply_discount("THIRD", first.applied, cart, catalog, [], today=TODAY)

    assert first.success is True
    assert second.error is DiscountError.NOT_STACKABLE
    assert third.error is DiscountError.NOT_STACKABLE
    assert second.applied == first.applied


def test_non_stackable_code_cannot_join_stackable_one() -> None:
    catalog = [_code("STACK", is_stackable=True), _code("SOLO")]
    cart = [_line("100")]

    first = apply_discount("STACK", [], cart, catalog, [], today=TODAY)
    second = apply_discount("SOLO", first.applied, cart, catalog, [], today=TODAY)

    assert second.success is False
    assert second.error is DiscountError.NOT_STACKABLE


def test_stackable_codes_combine_additively() -> None:
    catalog = [
        _code("TEN", is_stackable=True),
        _code("FIVE", type=DiscountType.FIXED, value=Decimal("5"), is_stackable=True),
    ]
    cart = [_line("200")]

    first = apply_discount("ten", [], cart, catalog, [], today=TODAY)
    second = apply_discount("FIVE", first.applied, cart, catalog, [], today=TODAY)

    assert second.success is True
    assert [(active.code, active.amount) for active in second.applied] == [("TEN", Decimal("20")), ("FIVE", Decimal("5"))]
    assert sum(active.amount for active in second.applied) == Decimal("25")


def test_same_code_cannot_be_applied_twice() -> None:
    catalog = [_code(is_stackable=True)]
    applied = [AppliedDiscount(code="SUMMER10", amount=Decimal("10"))]

    result = apply_discount("summer10", applied, [_line("100")], catalog, [], today=TODAY)

    assert result.error is DiscountError.ALREADY_APPLIED


def test_apply_surfaces_validation_error() -> None:
    result = apply_discount("SUMMER10", [], [_line("100")], [_code(enabled=False)], [], today=TODAY)

    assert result.success is False
    assert result.error is DiscountError.INACTIVE
    assert result.applied == []


def test_revalidation_drops_codes_the_cart_no_longer_satisfies() -> None:
    catalog = [
        _code("BIG", min_order_value=Decimal("150"), is_stackable=True),
        _code("ANY", is_stackable=True),
    ]
    applied = [AppliedDiscount(code="BIG", amount=Decimal("20")), AppliedDiscount(code="ANY", amount=Decimal("20"))]

    result = revalidate_discounts(applied, [_line("100")], catalog, [], today=TODAY)

    assert result.removed_codes == ["BIG"]
    assert result.applied == [AppliedDiscount(code="ANY", amount=Decimal("10"))]


def test_remove_discount_ignores_case() -> None:
    applied = [AppliedDiscount(code="TEN", amount=Decimal("1")), AppliedDiscount(code="FIVE", amount=Decimal("1"))]

    assert remove_discount("ten", applied) == [AppliedDiscount(code="FIVE", amount=Decimal("1"))]


def test_usage_statistics_recomputed_from_history() -> None:
    orders = [
        _order_using(1, "SUMMER10", "10"),
        _order_using(2, "summer10", "15"),
        _order_using(3, "SUMMER10", "99", status=OrderStatus.CANCELLED),
        _order_using(4, "OTHER", "5"),
    ]

    usage = discount_usage("SUMMER10", orders)

    assert count_usage("SUMMER10", orders) == 2
    assert usage.usage_count == 2
    assert usage.total_saved == Decimal("25")
