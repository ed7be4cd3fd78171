"""Inputs and outputs of the packing workflow."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Actor:
    """The user marking the order packed, as supplied by the caller.

    Address and phone stand in for the wholesaler's profile when that profile
    cannot be read.
    """

    id: str
    name: str
    role: str = "wholesaler"
    business_name: str | None = None
    address: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class PackingResult:
    order_id: str
    status: str
    distance_km: float
    delivery_cost: float
    duration_label: str = ""
    estimate_source: str = "unknown"
    already_packed: bool = False
    order_updated: bool = False
    claim_id: str | None = None
    claim_created: bool = False
    registry_available: bool = True
    notifications_sent: bool = False
    notified_recipients: list[str] = field(default_factory=list)
    failed_recipients: dict[str, str] = field(default_factory=dict)
    activity_logged: bool = False
    failed_step: str | None = None
    error: str | None = None

    @property
    def complete(self) -> bool:
        """Every sub-step of packing has finished."""
        return self.order_updated and self.claim_created and self.notifications_sent and self.failed_step is None

    def as_dict(self) -> dict:
        return {
            "order_id": self.order_id,
            "status": self.status,
            "distance_km": self.distance_km,
            "delivery_cost": self.delivery_cost,
            "duration_label": self.duration_label,
            "estimate_source": self.estimate_source,
            "already_packed": self.already_packed,
            "order_updated": self.order_updated,
            "claim_id": self.claim_id,
            "claim_created": self.claim_created,
            "registry_available": self.registry_available,
            "notifications_sent": self.notifications_sent,
            "notified_recipients": list(self.notified_recipients),
            "failed_recipients": dict(self.failed_recipients),
            "activity_logged": self.activity_logged,
            "failed_step": self.failed_step,
            "error": self.error,
            "complete": self.complete,
        }
