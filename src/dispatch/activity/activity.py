"""ActivityLogEntry aggregate — append-only audit trail of dispatch actions."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from dispatch.domain import dispatch


@dispatch.aggregate
class ActivityLogEntry:
    actor_id = Identifier(required=True)
    actor_role = String(max_length=30)
    actor_name = String(max_length=200)
    action = String(required=True, max_length=500)
    details = Text()
    category = String(max_length=30, default="order")
    created_at = DateTime()

    @classmethod
    def record(cls, actor_id, actor_role, actor_name, action, details=None, category="order"):
        return cls(
            actor_id=actor_id,
            actor_role=actor_role,
            actor_name=actor_name,
            action=action,
            details=details,
            category=category,
            created_at=datetime.now(UTC),
        )
