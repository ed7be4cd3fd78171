"""Notification events."""

from protean.fields import DateTime, Identifier, String

from dispatch.domain import dispatch


@dispatch.event(part_of="Notification")
class NotificationCreated:
    """A vehicle owner was told about a delivery opportunity."""

    __version__ = 1

    notification_id = Identifier(required=True)
    recipient_id = Identifier(required=True)
    notification_type = String(required=True)
    order_id = Identifier()
    created_at = DateTime(required=True)
