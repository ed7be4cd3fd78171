"""DeliveryClaim aggregate — an unclaimed delivery job.

One claim exists per packed order. Its id is derived from the order id so a
retried packing finds the claim it already wrote instead of posting a second
one. Vehicle owners read claims in status ``available``; accepting a job
happens outside this context.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, Float, Identifier, String, Text, ValueObject

from dispatch.claim.events import DeliveryClaimPosted
from dispatch.domain import dispatch


class ClaimStatus(Enum):
    AVAILABLE = "available"
    CLAIMED = "claimed"


def claim_id_for(order_id: str) -> str:
    return f"delivery_{order_id}"


@dispatch.value_object(part_of="DeliveryClaim")
class PartySummary:
    """Who to collect from or deliver to."""

    party_id = String(max_length=100)
    name = String(max_length=200)
    shop_name = String(max_length=200)
    address = String(max_length=500)
    phone = String(max_length=50)


@dispatch.aggregate
class DeliveryClaim:
    order_id = Identifier(required=True)
    wholesaler = ValueObject(PartySummary)
    retailer = ValueObject(PartySummary)
    items = Text(default="Various items")
    amount = Float(default=0.0)
    distance_km = Float(required=True, min_value=0.0)
    delivery_cost = Float(required=True, min_value=0.0)
    estimated_duration = String(max_length=100)
    packed_at = DateTime()
    status = String(choices=ClaimStatus, default=ClaimStatus.AVAILABLE.value)
    created_at = DateTime()

    @classmethod
    def post(
        cls,
        order_id: str,
        wholesaler: PartySummary,
        retailer: PartySummary,
        distance_km: float,
        delivery_cost: float,
        amount: float = 0.0,
        items: str | None = None,
        estimated_duration: str | None = None,
        packed_at: datetime | None = None,
    ):
        """Open a delivery job for a packed order."""
        now = datetime.now(UTC)
        claim = cls(
            id=claim_id_for(order_id),
            order_id=order_id,
            wholesaler=wholesaler,
            retailer=retailer,
            items=items or "Various items",
            amount=amount,
            distance_km=distance_km,
            delivery_cost=delivery_cost,
            estimated_duration=estimated_duration,
            packed_at=packed_at or now,
            status=ClaimStatus.AVAILABLE.value,
            created_at=now,
        )
        claim.raise_(
            DeliveryClaimPosted(
                claim_id=str(claim.id),
                order_id=order_id,
                distance_km=distance_km,
                delivery_cost=delivery_cost,
                posted_at=now,
            )
        )
        return claim

    @property
    def is_available(self) -> bool:
        return self.status == ClaimStatus.AVAILABLE.value
