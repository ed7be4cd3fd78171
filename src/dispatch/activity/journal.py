"""Appending to and reading the activity trail.

Writing an entry is best effort: a failed append is logged and never fails
the action it describes.
"""

import structlog
from protean.utils.globals import current_domain

from dispatch.activity.activity import ActivityLogEntry
from dispatch.utils.query import fetch_all

logger = structlog.get_logger(__name__)


def log_activity(
    actor_id: str,
    actor_role: str,
    actor_name: str,
    action: str,
    details: str | None = None,
) -> ActivityLogEntry | None:
    """Append an entry scoped to ``actor_id``. Returns None if the write failed."""
    try:
        entry = ActivityLogEntry.record(
            actor_id=actor_id,
            actor_role=actor_role,
            actor_name=actor_name,
            action=action,
            details=details,
        )
        current_domain.repository_for(ActivityLogEntry).add(entry)
    except Exception as exc:
        logger.error("Failed to log activity", actor_id=actor_id, action=action, error=str(exc))
        return None
    return entry


def activity_for(actor_id: str) -> list[ActivityLogEntry]:
    repo = current_domain.repository_for(ActivityLogEntry)
    return fetch_all(repo._dao.query.filter(actor_id=actor_id))
