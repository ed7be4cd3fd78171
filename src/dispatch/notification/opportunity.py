"""The delivery opportunity handed from packing to the fan-out."""

import math
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Party:
    """Contact details of one end of a delivery."""

    party_id: str = ""
    name: str = ""
    shop_name: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""

    def as_dict(self) -> dict:
        return {
            "id": self.party_id,
            "name": self.name,
            "shop_name": self.shop_name,
            "address": self.address,
            "phone": self.phone,
            "email": self.email,
        }


@dataclass(frozen=True)
class DeliveryOpportunity:
    order_id: str
    wholesaler: Party
    retailer: Party
    distance_km: float
    delivery_cost: float
    order_amount: float = 0.0
    items: str = "Various items"
    duration_label: str = ""
    packed_at: datetime | None = None
    # Who triggered the dispatch, for the activity trail
    actor_id: str = ""
    actor_name: str = ""
    actor_role: str = "wholesaler"

    def estimated_duration(self, assumed_speed_kmh: float) -> str:
        """Travel time rounded up to whole hours at the assumed average speed."""
        return f"{math.ceil(self.distance_km / assumed_speed_kmh)} hours"

    def details(self, assumed_speed_kmh: float) -> dict:
        return {
            "pickup": self.wholesaler.as_dict(),
            "delivery": self.retailer.as_dict(),
            "distance": self.distance_km,
            "delivery_cost": self.delivery_cost,
            "order_amount": self.order_amount,
            "items": self.items,
            "estimated_duration": self.estimated_duration(assumed_speed_kmh),
        }
