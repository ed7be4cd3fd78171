"""Delivery fan-out — announce a packed order to every vehicle owner.

Steps, in order:
    A. post the DeliveryClaim for the order (create-if-absent)
    B. snapshot the vehicle-owner registry
    C. queue one notify task per owner; a worker loop writes each
       Notification independently, retrying failed writes with backoff
    D. send a best-effort SMS to each owner that was notified

A failed notification never rolls back the ones already written; it is
reported back so the caller can retry just those recipients.
"""

import time
from collections import deque
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable

import structlog
from protean.utils.globals import current_domain

from dispatch.activity.journal import log_activity
from dispatch.channel import get_sms_channel
from dispatch.channel.sms_port import SMSPort
from dispatch.claim.claim import DeliveryClaim, PartySummary
from dispatch.claim.store import post_if_absent
from dispatch.config import DispatchSettings, load_settings
from dispatch.directory.lookup import vehicle_owners
from dispatch.exceptions import PackingPersistenceError
from dispatch.notification.notification import Notification
from dispatch.notification.opportunity import DeliveryOpportunity, Party
from dispatch.notification.sms import render_opportunity_sms

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NotifyTask:
    recipient_id: str
    phone: str = ""
    attempt: int = 1
    not_before: float = 0.0


@dataclass
class FanOutReport:
    claim_id: str
    claim_created: bool
    registry_available: bool = True
    notified: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    sms_failures: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """Every known vehicle owner has been notified."""
        return self.registry_available and not self.failed


def summarize_party(party: Party) -> PartySummary:
    """Claim-side summary of a party. Raises ValidationError when a field is out of bounds."""
    return PartySummary(
        party_id=party.party_id or None,
        name=party.name,
        shop_name=party.shop_name,
        address=party.address,
        phone=party.phone,
    )


class DeliveryFanOut:
    def __init__(
        self,
        sms: SMSPort | None = None,
        settings: DispatchSettings | None = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.sms = sms
        self.settings = settings or load_settings()
        self._sleep = sleep
        self._clock = clock

    # -------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------
    def notify_vehicle_owners(
        self,
        opportunity: DeliveryOpportunity,
        already_notified: Iterable[str] = (),
    ) -> FanOutReport:
        """Post the claim and notify every vehicle owner not in ``already_notified``."""
        claim, created = self.post_claim(opportunity)
        report = FanOutReport(claim_id=str(claim.id), claim_created=created)

        owners = self._vehicle_owners(report)
        if not owners:
            logger.info(
                "No vehicle owners to notify",
                order_id=opportunity.order_id,
                registry_available=report.registry_available,
            )
            return report

        done = set(already_notified)
        queue = deque()
        for owner in owners:
            owner_id = str(owner.id)
            if owner_id in done:
                report.skipped.append(owner_id)
            else:
                queue.append(NotifyTask(recipient_id=owner_id, phone=owner.phone or ""))

        self._drain(queue, opportunity, report)

        if report.notified:
            self.log_activity(
                actor_id=opportunity.actor_id or opportunity.wholesaler.party_id,
                actor_role=opportunity.actor_role,
                actor_name=opportunity.actor_name or opportunity.wholesaler.name,
                action=f"Notified {len(report.notified)} vehicle owners about order #{opportunity.order_id}",
                details=f"Distance: {opportunity.distance_km}km, Fee: ₹{opportunity.delivery_cost}",
            )

        logger.info(
            "Delivery fan-out finished",
            order_id=opportunity.order_id,
            notified=len(report.notified),
            skipped=len(report.skipped),
            failed=len(report.failed),
        )
        return report

    def post_claim(self, opportunity: DeliveryOpportunity) -> tuple[DeliveryClaim, bool]:
        try:
            claim = DeliveryClaim.post(
                order_id=opportunity.order_id,
                wholesaler=summarize_party(opportunity.wholesaler),
                retailer=summarize_party(opportunity.retailer),
                distance_km=opportunity.distance_km,
                delivery_cost=opportunity.delivery_cost,
                amount=opportunity.order_amount,
                items=opportunity.items,
                estimated_duration=opportunity.estimated_duration(self.settings.assumed_speed_kmh),
                packed_at=opportunity.packed_at,
            )
            stored, created = post_if_absent(claim)
        except Exception as exc:
            logger.error("Failed to post delivery claim", order_id=opportunity.order_id, error=str(exc))
            raise PackingPersistenceError("claim", opportunity.order_id, exc) from exc

        if created:
            logger.info("Delivery claim posted", claim_id=str(stored.id), order_id=opportunity.order_id)
        else:
            logger.info("Delivery claim already exists", claim_id=str(stored.id), order_id=opportunity.order_id)
        return stored, created

    def log_activity(self, actor_id, actor_role, actor_name, action, details=None):
        return log_activity(
            actor_id=actor_id,
            actor_role=actor_role,
            actor_name=actor_name,
            action=action,
            details=details,
        )

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _vehicle_owners(self, report: FanOutReport) -> list:
        try:
            return list(vehicle_owners())
        except Exception as exc:
            logger.error("Vehicle owner registry unreadable", error=str(exc))
            report.registry_available = False
            return []

    def _backoff_delay(self, attempt: int) -> float:
        base = self.settings.fanout_backoff_seconds * (2 ** (attempt - 1))
        return min(base, self.settings.fanout_backoff_cap_seconds)

    def _drain(self, queue: deque, opportunity: DeliveryOpportunity, report: FanOutReport) -> None:
        """Work the notify queue until every task succeeded or ran out of attempts.

        Retried tasks go to the back of the queue with a not-before time, so
        one slow recipient does not hold up the others.
        """
        repo = current_domain.repository_for(Notification)
        max_attempts = self.settings.fanout_max_attempts

        while queue:
            task = queue.popleft()
            wait = task.not_before - self._clock()
            if wait > 0:
                self._sleep(wait)

            try:
                notification = Notification.announce_delivery(
                    recipient_id=task.recipient_id,
                    opportunity=opportunity,
                    assumed_speed_kmh=self.settings.assumed_speed_kmh,
                )
                repo.add(notification)
            except Exception as exc:
                if task.attempt >= max_attempts:
                    logger.error(
                        "Giving up on vehicle owner notification",
                        recipient_id=task.recipient_id,
                        order_id=opportunity.order_id,
                        attempts=task.attempt,
                        error=str(exc),
                    )
                    report.failed[task.recipient_id] = str(exc)
                    continue

                delay = self._backoff_delay(task.attempt)
                logger.warning(
                    "Vehicle owner notification failed, retrying",
                    recipient_id=task.recipient_id,
                    order_id=opportunity.order_id,
                    attempt=task.attempt,
                    retry_in=delay,
                    error=str(exc),
                )
                queue.append(replace(task, attempt=task.attempt + 1, not_before=self._clock() + delay))
                continue

            report.notified.append(task.recipient_id)
            self._send_sms(task, opportunity, report)

    def _send_sms(self, task: NotifyTask, opportunity: DeliveryOpportunity, report: FanOutReport) -> None:
        """Best-effort SMS; failures are logged and recorded, never raised."""
        try:
            channel = self.sms or get_sms_channel()
            result = channel.send(to=task.phone, body=render_opportunity_sms(opportunity))
        except Exception as exc:
            result = {"status": "failed", "error": str(exc)}

        if result.get("status") != "sent":
            logger.warning(
                "SMS to vehicle owner failed",
                recipient_id=task.recipient_id,
                order_id=opportunity.order_id,
                error=result.get("error"),
            )
            report.sms_failures.append(task.recipient_id)
