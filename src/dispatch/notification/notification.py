"""Notification aggregate — one in-app message to one vehicle owner.

Notifications are written in bulk by the delivery fan-out, one per vehicle
owner. Only the owner ever changes one afterwards, by reading it.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from dispatch.domain import dispatch
from dispatch.notification.events import NotificationCreated
from dispatch.notification.opportunity import DeliveryOpportunity


class NotificationType(Enum):
    DELIVERY_OPPORTUNITY = "delivery_opportunity"
    ORDER_PACKED = "order_packed"
    GENERAL = "general"


@dispatch.aggregate
class Notification:
    recipient_id = Identifier(required=True)
    notification_type = String(choices=NotificationType, default=NotificationType.GENERAL.value)
    title = String(required=True, max_length=200)
    message = Text(required=True)

    # Delivery opportunity payload
    order_id = Identifier()
    distance_km = Float()
    delivery_cost = Float()
    order_amount = Float()
    details = Text()  # JSON — pickup, delivery, distance, cost, amount, duration

    read = Boolean(default=False)
    created_at = DateTime()

    @classmethod
    def announce_delivery(
        cls,
        recipient_id: str,
        opportunity: DeliveryOpportunity,
        assumed_speed_kmh: float = 30.0,
    ):
        """Build the delivery-opportunity notification for one vehicle owner."""
        now = datetime.now(UTC)
        notification = cls(
            recipient_id=recipient_id,
            notification_type=NotificationType.DELIVERY_OPPORTUNITY.value,
            title="New Delivery Opportunity",
            message=f"Order #{opportunity.order_id} ready for pickup",
            order_id=opportunity.order_id,
            distance_km=opportunity.distance_km,
            delivery_cost=opportunity.delivery_cost,
            order_amount=opportunity.order_amount,
            details=json.dumps(opportunity.details(assumed_speed_kmh)),
            read=False,
            created_at=now,
        )
        notification.raise_(
            NotificationCreated(
                notification_id=str(notification.id),
                recipient_id=recipient_id,
                notification_type=NotificationType.DELIVERY_OPPORTUNITY.value,
                order_id=opportunity.order_id,
                created_at=now,
            )
        )
        return notification

    @property
    def details_data(self) -> dict:
        return json.loads(self.details) if self.details else {}
