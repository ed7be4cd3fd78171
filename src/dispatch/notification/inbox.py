"""Reading a vehicle owner's notifications."""

from protean.utils.globals import current_domain

from dispatch.notification.notification import Notification
from dispatch.utils.query import fetch_all


def notifications_for(recipient_id: str, unread_only: bool = False) -> list[Notification]:
    """Newest first."""
    criteria = {"recipient_id": recipient_id}
    if unread_only:
        criteria["read"] = False
    repo = current_domain.repository_for(Notification)
    items = fetch_all(repo._dao.query.filter(**criteria))
    return sorted(items, key=lambda n: n.created_at, reverse=True)
