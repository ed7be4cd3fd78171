"""Profile aggregate — the registry of people who take part in dispatch.

Wholesalers, retailers and vehicle owners all register a profile. The
packing workflow reads it for two things: a retailer's contact details when
an order lacks them, and the set of vehicle owners to notify about a job.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import DateTime, String

from dispatch.domain import dispatch
from dispatch.directory.events import ProfileRegistered


class Role(Enum):
    WHOLESALER = "wholesaler"
    RETAILER = "retailer"
    VEHICLE_OWNER = "vehicle_owner"
    ADMIN = "admin"


@dispatch.aggregate
class Profile:
    role = String(required=True, choices=Role)
    full_name = String(required=True, max_length=200)
    business_name = String(max_length=200)
    address = String(max_length=500)
    phone = String(max_length=50)
    email = String(max_length=254)
    vehicle_type = String(max_length=50)
    registered_at = DateTime()

    @classmethod
    def register(
        cls,
        role: str,
        full_name: str,
        business_name: str | None = None,
        address: str | None = None,
        phone: str | None = None,
        email: str | None = None,
        vehicle_type: str | None = None,
        profile_id: str | None = None,
    ):
        now = datetime.now(UTC)
        kwargs = {"id": profile_id} if profile_id else {}
        profile = cls(
            role=role,
            full_name=full_name,
            business_name=business_name,
            address=address,
            phone=phone,
            email=email,
            vehicle_type=vehicle_type,
            registered_at=now,
            **kwargs,
        )
        profile.raise_(
            ProfileRegistered(
                profile_id=str(profile.id),
                role=role,
                full_name=full_name,
                registered_at=now,
            )
        )
        return profile

    @property
    def display_shop_name(self) -> str:
        return self.business_name or self.full_name
