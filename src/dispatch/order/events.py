"""Order domain events — immutable facts about order progression."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from dispatch.domain import dispatch


@dispatch.event(part_of="Order")
class OrderPlaced:
    """A retailer placed an order against a wholesaler."""

    __version__ = 1

    order_id = Identifier(required=True)
    retailer_id = Identifier(required=True)
    wholesaler_id = Identifier(required=True)
    item_count = Integer(required=True)
    amount = Float(required=True)
    placed_at = DateTime(required=True)


@dispatch.event(part_of="Order")
class OrderConfirmed:
    """The wholesaler accepted the order."""

    __version__ = 1

    order_id = Identifier(required=True)
    wholesaler_id = Identifier(required=True)
    confirmed_at = DateTime(required=True)


@dispatch.event(part_of="Order")
class OrderPacked:
    """The order was packed and priced for delivery."""

    __version__ = 1

    order_id = Identifier(required=True)
    wholesaler_id = Identifier(required=True)
    retailer_id = Identifier(required=True)
    distance_km = Float(required=True)
    delivery_cost = Float(required=True)
    packed_at = DateTime(required=True)


@dispatch.event(part_of="Order")
class OrderShipped:
    """A vehicle owner picked the order up."""

    __version__ = 1

    order_id = Identifier(required=True)
    shipped_at = DateTime(required=True)


@dispatch.event(part_of="Order")
class OrderDelivered:
    """The order reached the retailer."""

    __version__ = 1

    order_id = Identifier(required=True)
    delivered_at = DateTime(required=True)


@dispatch.event(part_of="Order")
class PaymentStatusChanged:
    """The payment status of an order changed."""

    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(required=True)
    payment_status = String(required=True)
    changed_at = DateTime(required=True)
