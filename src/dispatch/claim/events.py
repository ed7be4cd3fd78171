"""Delivery claim events."""

from protean.fields import DateTime, Float, Identifier

from dispatch.domain import dispatch


@dispatch.event(part_of="DeliveryClaim")
class DeliveryClaimPosted:
    """A packed order became available for vehicle owners to claim."""

    __version__ = 1

    claim_id = Identifier(required=True)
    order_id = Identifier(required=True)
    distance_km = Float(required=True)
    delivery_cost = Float(required=True)
    posted_at = DateTime(required=True)
