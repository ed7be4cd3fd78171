"""Tests for the Order state machine — valid and invalid transitions."""

import pytest
from dispatch.order.order import ContactSnapshot, Order, OrderStatus
from protean.exceptions import ValidationError


def _make_order():
    return Order.place(
        retailer_id="ret-001",
        wholesaler_id="whs-001",
        items_data=[{"name": "Sugar", "quantity": 20, "unit": "kg", "unit_price": 42.0}],
    )


def _pack(order):
    order.mark_packed(
        snapshot=ContactSnapshot(name="Retailer", address="Main Bazaar, Rewari"),
        distance_km=18.0,
        cost=180.0,
    )
    return order


def _ship(order):
    _pack(order)
    order.mark_shipped()
    return order


class TestValidTransitions:
    def test_pending_to_confirmed(self):
        order = _make_order()
        order.confirm()
        assert order.status == OrderStatus.CONFIRMED.value

    def test_pending_to_packed(self):
        order = _pack(_make_order())
        assert order.status == OrderStatus.PACKED.value

    def test_packed_to_shipped(self):
        order = _ship(_make_order())
        assert order.status == OrderStatus.SHIPPED.value

    def test_shipped_to_delivered(self):
        order = _ship(_make_order())
        order.mark_delivered()
        assert order.status == OrderStatus.DELIVERED.value

    def test_delivery_details_survive_shipping(self):
        order = _ship(_make_order())
        order.mark_delivered()
        assert order.delivery.distance_km == 18.0
        assert order.packed_at is not None


class TestInvalidTransitions:
    def test_cannot_confirm_twice(self):
        order = _make_order()
        order.confirm()
        with pytest.raises(ValidationError):
            order.confirm()

    def test_cannot_ship_pending_order(self):
        with pytest.raises(ValidationError):
            _make_order().mark_shipped()

    def test_cannot_deliver_packed_order(self):
        order = _pack(_make_order())
        with pytest.raises(ValidationError):
            order.mark_delivered()

    def test_cannot_pack_shipped_order(self):
        order = _ship(_make_order())
        with pytest.raises(ValidationError):
            _pack(order)

    def test_delivered_is_terminal(self):
        order = _ship(_make_order())
        order.mark_delivered()
        with pytest.raises(ValidationError):
            order.confirm()


class TestDeliveryDetailsInvariant:
    def test_packed_order_without_quote_is_invalid(self):
        with pytest.raises(ValidationError) as exc:
            Order(
                retailer_id="ret-001",
                wholesaler_id="whs-001",
                status=OrderStatus.PACKED.value,
            )
        assert "delivery" in exc.value.messages

    def test_pending_order_with_packed_at_is_invalid(self):
        from datetime import UTC, datetime

        with pytest.raises(ValidationError):
            Order(
                retailer_id="ret-001",
                wholesaler_id="whs-001",
                status=OrderStatus.PENDING.value,
                packed_at=datetime.now(UTC),
            )
