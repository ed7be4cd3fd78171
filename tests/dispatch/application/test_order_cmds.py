"""Application tests for order commands via domain.process()."""

import json

import pytest
from dispatch.order.confirmation import ConfirmOrder
from dispatch.order.order import Order, OrderStatus, PaymentStatus
from dispatch.order.payment import UpdatePaymentStatus
from dispatch.order.placement import PlaceOrder
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _place(order_id=None):
    items = [
        {"name": "Mustard Oil", "quantity": 12, "unit": "litre", "unit_price": 150.0},
        {"name": "Atta", "quantity": 50, "unit": "kg", "unit_price": 32.0},
    ]
    return current_domain.process(
        PlaceOrder(
            order_id=order_id,
            retailer_id="ret-001",
            wholesaler_id="whs-001",
            retailer_name="Sharma Stores",
            items=json.dumps(items),
        ),
        asynchronous=False,
    )


class TestPlaceOrder:
    def test_returns_order_id(self):
        order_id = _place()
        assert order_id is not None

    def test_persists_pending_order(self):
        order_id = _place()
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.PENDING.value
        assert order.amount == 3400.0
        assert len(order.items) == 2

    def test_caller_chosen_id(self):
        assert _place(order_id="O1") == "O1"
        assert current_domain.repository_for(Order).get("O1").retailer_name == "Sharma Stores"


class TestConfirmOrder:
    def test_confirms_pending_order(self):
        order_id = _place()
        current_domain.process(ConfirmOrder(order_id=order_id), asynchronous=False)
        order = current_domain.repository_for(Order).get(order_id)
        assert order.status == OrderStatus.CONFIRMED.value

    def test_confirming_twice_is_rejected(self):
        order_id = _place()
        current_domain.process(ConfirmOrder(order_id=order_id), asynchronous=False)
        with pytest.raises(ValidationError):
            current_domain.process(ConfirmOrder(order_id=order_id), asynchronous=False)

    def test_unknown_order(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(ConfirmOrder(order_id="missing"), asynchronous=False)


class TestUpdatePaymentStatus:
    def test_marks_paid(self):
        order_id = _place()
        current_domain.process(UpdatePaymentStatus(order_id=order_id, payment_status="Paid"), asynchronous=False)
        order = current_domain.repository_for(Order).get(order_id)
        assert order.payment_status == PaymentStatus.PAID.value
        assert order.status == OrderStatus.PENDING.value

    def test_invalid_status_rejected(self):
        order_id = _place()
        with pytest.raises(ValidationError):
            current_domain.process(
                UpdatePaymentStatus(order_id=order_id, payment_status="Bounced"),
                asynchronous=False,
            )
