"""PackingState aggregate — how far packing has progressed for one order.

Every sub-step of packing commits on its own, so this record is what lets
a retry pick up where the previous attempt stopped instead of repeating
writes that already happened.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, DateTime, Integer, String, Text
from protean.utils.globals import current_domain

from dispatch.domain import dispatch


@dispatch.aggregate
class PackingState:
    """Keyed by order id."""

    order_updated = Boolean(default=False)
    claim_id = String(max_length=255)
    claim_created = Boolean(default=False)
    notifications_sent = Boolean(default=False)
    notified_recipients = Text(default="[]")  # JSON list of profile ids
    failed_recipients = Text(default="{}")  # JSON: profile id -> last error
    activity_logged = Boolean(default=False)
    attempts = Integer(default=0)
    last_error = Text()
    updated_at = DateTime()

    @classmethod
    def start(cls, order_id: str):
        return cls(id=order_id, updated_at=datetime.now(UTC))

    @property
    def notified(self) -> list[str]:
        return json.loads(self.notified_recipients or "[]")

    @property
    def failed(self) -> dict[str, str]:
        return json.loads(self.failed_recipients or "{}")

    @property
    def complete(self) -> bool:
        return bool(self.order_updated and self.claim_created and self.notifications_sent)

    def begin_attempt(self) -> None:
        self.attempts = (self.attempts or 0) + 1
        self.updated_at = datetime.now(UTC)

    def record_order_updated(self) -> None:
        self.order_updated = True
        self.updated_at = datetime.now(UTC)

    def record_claim(self, claim_id: str) -> None:
        self.claim_id = claim_id
        self.claim_created = True
        self.updated_at = datetime.now(UTC)

    def record_fan_out(self, notified: list[str], failed: dict[str, str], complete: bool) -> None:
        """Merge one fan-out round into the running totals."""
        merged = self.notified
        merged.extend(recipient for recipient in notified if recipient not in merged)
        self.notified_recipients = json.dumps(merged)

        still_failed = {recipient: error for recipient, error in failed.items() if recipient not in merged}
        self.failed_recipients = json.dumps(still_failed)
        self.notifications_sent = complete and not still_failed
        self.updated_at = datetime.now(UTC)

    def record_activity(self) -> None:
        self.activity_logged = True
        self.updated_at = datetime.now(UTC)

    def record_error(self, message: str | None) -> None:
        self.last_error = message
        self.updated_at = datetime.now(UTC)


def load_state(order_id: str) -> PackingState:
    """Fetch the packing state for ``order_id``, starting a fresh one if none exists."""
    try:
        return current_domain.repository_for(PackingState).get(order_id)
    except ObjectNotFoundError:
        return PackingState.start(order_id)


def save_state(state: PackingState) -> None:
    current_domain.repository_for(PackingState).add(state)
