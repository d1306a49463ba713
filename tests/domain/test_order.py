"""Unit tests for the Order aggregate and its business rules."""

import re

import pytest

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.order import (
    Address,
    Order,
    OrderItem,
    OrderPricing,
    OrderStatus,
)
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.service.order_number import SUFFIX_LENGTH, generate_order_number
from tests.fakes import billing_info, make_order


def _make_item(order_id="o1", qty=1, price="15.00", item_id="i1"):
    return OrderItem(
        id=item_id,
        order_id=order_id,
        product_id="p1",
        quantity=Quantity(qty),
        price=Money.of(price),
    )


def _billing():
    return Address.from_mapping(billing_info())


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create("o1", "ORD-1", "u1", [_make_item(qty=2, price="10.00")], _billing())

        assert order.status == OrderStatus.CONFIRMED
        assert order.subtotal == Money.of("20.00")
        assert order.total == Money.of("20.00")
        assert order.shipping_address == order.billing_address

    def test_totals_include_pricing(self):
        order = make_order(
            items=[("p1", 3, "15.00"), ("p2", 1, "5.00")],
            pricing=OrderPricing(
                tax=Money.of("4.00"), shipping=Money.of("6.00"), discount=Money.of("10.00")
            ),
        )

        assert order.subtotal == Money.of("50.00")
        assert order.total == Money.of("50.00")
        assert order.item_quantity == 4
        assert order.totals_consistent()

    def test_pricing_defaults_to_zero(self):
        order = make_order()
        assert order.tax.is_zero and order.shipping.is_zero and order.discount.is_zero

    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create("o1", "ORD-1", "u1", [], _billing())

    def test_pending_allowed(self):
        order = Order.create("o1", "ORD-1", "u1", [_make_item()], _billing(), status=OrderStatus.PENDING)
        assert order.status == OrderStatus.PENDING

    @pytest.mark.parametrize("status", [OrderStatus.SHIPPED, OrderStatus.CANCELLED])
    def test_non_initial_status_rejected(self, status):
        with pytest.raises(ValidationError, match="cannot be created"):
            Order.create("o1", "ORD-1", "u1", [_make_item()], _billing(), status=status)

    def test_item_of_another_order_rejected(self):
        with pytest.raises(ValidationError, match="belongs to order"):
            Order.create("o1", "ORD-1", "u1", [_make_item(order_id="o2")], _billing())

    def test_discount_larger_than_total_rejected(self):
        with pytest.raises(ValidationError, match="negative"):
            make_order(pricing=OrderPricing(discount=Money.of("100")))

    def test_line_total(self):
        assert _make_item(qty=3, price="2.50").line_total == Money.of("7.50")


class TestAddress:

    def test_accepts_camel_case(self):
        address = Address.from_mapping(billing_info())
        assert address.first_name == "Ada"
        assert address.zip_code == "N1 9GU"
        assert address.full_name == "Ada Lovelace"

    def test_accepts_snake_case(self):
        address = Address.from_mapping(
            {
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "address": "1 Road",
                "city": "London",
                "zip_code": "N1",
                "country": "UK",
            }
        )
        assert address.phone == ""
        assert address.to_mapping()["zip_code"] == "N1"

    def test_missing_fields_listed(self):
        with pytest.raises(ValidationError, match="city, zip_code"):
            Address.from_mapping(billing_info(city="", zipCode=None))

    def test_bad_email_rejected(self):
        with pytest.raises(ValidationError, match="Invalid billing email"):
            Address.from_mapping(billing_info(email="not-an-email"))

    def test_non_mapping_rejected(self):
        with pytest.raises(ValidationError, match="Billing information required"):
            Address.from_mapping("Ada, London")


class TestOrderNumber:

    def test_format(self):
        number = generate_order_number(now_ms=1700000000000)
        assert re.fullmatch(rf"ORD-1700000000000-[0-9A-Z]{{{SUFFIX_LENGTH}}}", number)

    def test_numbers_differ(self):
        numbers = {generate_order_number(now_ms=1) for _ in range(50)}
        assert len(numbers) == 50
