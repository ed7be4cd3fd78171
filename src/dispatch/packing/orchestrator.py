"""Packing orchestrator — the wholesaler's "mark as packed" use case.

Sequence:
    1. load the order and refuse orders already out for delivery
    2. resolve retailer and wholesaler contact details
    3. price the delivery with the configured distance estimator
    4. write the order as Packed
    5. fan the delivery opportunity out to vehicle owners
    6. append an activity-log entry

Each write commits on its own; nothing is rolled back. A PackingState record
per order tracks finished sub-steps so calling ``mark_packed`` again only
repeats the ones that did not complete.

Runs as a plain service rather than a command handler, outside any unit
of work.
"""

import structlog
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from dispatch.config import DispatchSettings, load_settings
from dispatch.directory.lookup import get_profile
from dispatch.estimator import get_estimator
from dispatch.estimator.port import DistanceEstimate, DistanceEstimator
from dispatch.estimator.random_adapter import RandomDistanceEstimator
from dispatch.exceptions import PackingPersistenceError
from dispatch.notification.fanout import DeliveryFanOut, summarize_party
from dispatch.notification.opportunity import DeliveryOpportunity, Party
from dispatch.order.order import ContactSnapshot, Order, OrderStatus
from dispatch.packing.result import Actor, PackingResult
from dispatch.packing.state import PackingState, load_state, save_state

logger = structlog.get_logger(__name__)

RETAILER_PLACEHOLDER_NAME = "Retailer"
RETAILER_PLACEHOLDER_SHOP = "Retailer Shop"
ADDRESS_PLACEHOLDER = "Address not provided"

_DISPATCHED_STATUSES = {OrderStatus.SHIPPED, OrderStatus.DELIVERED}


class PackingOrchestrator:
    def __init__(
        self,
        estimator: DistanceEstimator | None = None,
        fan_out: DeliveryFanOut | None = None,
        settings: DispatchSettings | None = None,
    ) -> None:
        self.settings = settings or load_settings()
        self._estimator = estimator
        self.fan_out = fan_out or DeliveryFanOut(settings=self.settings)

    @property
    def estimator(self) -> DistanceEstimator:
        return self._estimator or get_estimator()

    # -------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------
    def mark_packed(self, order_id: str, actor: Actor) -> PackingResult:
        """Pack ``order_id`` and dispatch it to vehicle owners.

        Raises ValidationError for bad input, ObjectNotFoundError for an
        unknown order and PackingPersistenceError when the order write
        fails. A failure after the order write is reported in the result.
        """
        if not order_id:
            raise ValidationError({"order_id": ["Order id is required"]})

        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(order_id)

        status = OrderStatus(order.status)
        if status in _DISPATCHED_STATUSES:
            raise ValidationError({"status": [f"Order {order_id} is already {status.value}"]})

        wholesaler = self._resolve_wholesaler(order, actor)
        already_packed = order.is_packed

        state = load_state(order_id)
        state.begin_attempt()

        if already_packed:
            retailer = self._retailer_party(order, self._resolve_retailer(order))
            estimate = DistanceEstimate(
                distance_km=order.delivery.distance_km,
                duration_label=order.delivery.duration_label or "",
                cost=order.delivery.cost,
                source="stored",
            )
            logger.info("Order already packed, resuming dispatch", order_id=order_id, attempt=state.attempts)
        else:
            snapshot = self._resolve_retailer(order)
            retailer = self._retailer_party(order, snapshot)
            estimate = self._estimate(wholesaler.address, snapshot.address)

            order.mark_packed(
                snapshot=snapshot,
                distance_km=estimate.distance_km,
                cost=estimate.cost,
                duration_label=estimate.duration_label,
            )
            try:
                order_repo.add(order)
            except Exception as exc:
                logger.error("Failed to write packed order", order_id=order_id, error=str(exc))
                state.record_error(f"order: {exc}")
                self._checkpoint(state)
                raise PackingPersistenceError("order", order_id, exc) from exc

            logger.info(
                "Order packed",
                order_id=order_id,
                distance_km=estimate.distance_km,
                delivery_cost=estimate.cost,
                source=estimate.source,
            )

        state.record_order_updated()
        self._checkpoint(state)

        registry_available = True
        if not state.notifications_sent:
            opportunity = DeliveryOpportunity(
                order_id=order_id,
                wholesaler=wholesaler,
                retailer=retailer,
                distance_km=estimate.distance_km,
                delivery_cost=estimate.cost,
                order_amount=order.amount or 0.0,
                items=order.describe_items(),
                duration_label=estimate.duration_label,
                packed_at=order.packed_at,
                actor_id=actor.id,
                actor_name=actor.name,
                actor_role=actor.role,
            )
            try:
                report = self.fan_out.notify_vehicle_owners(opportunity, already_notified=state.notified)
            except PackingPersistenceError as exc:
                state.record_error(f"{exc.step}: {exc.cause or exc}")
                self._checkpoint(state)
                return self._result(
                    state,
                    order,
                    estimate,
                    already_packed=already_packed,
                    failed_step=exc.step,
                    error=str(exc),
                )

            registry_available = report.registry_available
            state.record_claim(report.claim_id)
            state.record_fan_out(report.notified, report.failed, report.complete)
            if report.failed:
                state.record_error(f"notifications failed for {len(state.failed)} vehicle owners")
            elif not report.registry_available:
                state.record_error("vehicle owner registry unavailable")
            else:
                state.record_error(None)
            self._checkpoint(state)
        else:
            logger.info("Vehicle owners already notified", order_id=order_id)

        if not state.activity_logged:
            entry = self.fan_out.log_activity(
                actor_id=actor.id,
                actor_role=actor.role,
                actor_name=actor.name,
                action=f"Marked order {order_id} as packed and notified all vehicle owners",
                details=f"Distance: {_fmt(estimate.distance_km)}km, Cost: ₹{_fmt(estimate.cost)}",
            )
            if entry is not None:
                state.record_activity()
                self._checkpoint(state)

        failed_step = None
        if state.failed or not registry_available:
            failed_step = "notifications"

        return self._result(
            state,
            order,
            estimate,
            already_packed=already_packed,
            registry_available=registry_available,
            failed_step=failed_step,
            error=state.last_error if failed_step else None,
        )

    def retry_fan_out(self, order_id: str, actor: Actor) -> PackingResult:
        """Re-run whatever packing sub-steps are still incomplete."""
        return self.mark_packed(order_id, actor)

    # -------------------------------------------------------------------
    # Contact resolution
    # -------------------------------------------------------------------
    def _resolve_retailer(self, order: Order) -> ContactSnapshot:
        snapshot = order.retailer_snapshot
        if snapshot is not None and snapshot.address:
            return snapshot

        try:
            profile = get_profile(str(order.retailer_id))
        except Exception as exc:
            logger.warning(
                "Retailer profile unavailable, using placeholders",
                order_id=str(order.id),
                retailer_id=str(order.retailer_id),
                error=str(exc),
            )
            return ContactSnapshot(
                name=order.retailer_name or RETAILER_PLACEHOLDER_NAME,
                shop_name=RETAILER_PLACEHOLDER_SHOP,
                address=ADDRESS_PLACEHOLDER,
            )

        return ContactSnapshot(
            name=profile.full_name or order.retailer_name or RETAILER_PLACEHOLDER_NAME,
            shop_name=profile.business_name or RETAILER_PLACEHOLDER_SHOP,
            address=profile.address or ADDRESS_PLACEHOLDER,
            phone=profile.phone,
            email=profile.email,
        )

    def _retailer_party(self, order: Order, snapshot: ContactSnapshot) -> Party:
        return Party(
            party_id=str(order.retailer_id),
            name=snapshot.name or RETAILER_PLACEHOLDER_NAME,
            shop_name=snapshot.shop_name or RETAILER_PLACEHOLDER_SHOP,
            address=snapshot.address or ADDRESS_PLACEHOLDER,
            phone=snapshot.phone or "",
            email=snapshot.email or "",
        )

    def _resolve_wholesaler(self, order: Order, actor: Actor) -> Party:
        profile = None
        try:
            profile = get_profile(str(order.wholesaler_id))
        except Exception as exc:
            logger.warning(
                "Wholesaler profile unavailable, using caller details",
                order_id=str(order.id),
                wholesaler_id=str(order.wholesaler_id),
                error=str(exc),
            )

        name = (profile.full_name if profile else None) or actor.name
        shop_name = (profile.display_shop_name if profile else None) or actor.business_name or name
        address = (profile.address if profile else None) or actor.address
        phone = (profile.phone if profile else None) or actor.phone

        if not address:
            raise ValidationError({"wholesaler_address": ["Wholesaler address is required to dispatch a delivery"]})

        party = Party(
            party_id=str(order.wholesaler_id),
            name=name,
            shop_name=shop_name,
            address=address,
            phone=phone or "",
            email=(profile.email if profile else None) or "",
        )
        # Caller-supplied details must fit the claim before anything is written.
        summarize_party(party)
        return party

    # -------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------
    def _estimate(self, origin: str, destination: str) -> DistanceEstimate:
        try:
            return self.estimator.estimate(origin, destination)
        except Exception as exc:
            logger.warning("Distance estimator failed, using random distance", error=str(exc))
            return RandomDistanceEstimator().estimate(origin, destination)

    def _checkpoint(self, state: PackingState) -> None:
        """Persist packing progress. A lost checkpoint only costs repeated work on retry."""
        try:
            save_state(state)
        except Exception as exc:
            logger.error("Failed to save packing state", order_id=str(state.id), error=str(exc))

    def _result(
        self,
        state: PackingState,
        order: Order,
        estimate: DistanceEstimate,
        already_packed: bool,
        registry_available: bool = True,
        failed_step: str | None = None,
        error: str | None = None,
    ) -> PackingResult:
        return PackingResult(
            order_id=str(order.id),
            status=order.status,
            distance_km=estimate.distance_km,
            delivery_cost=estimate.cost,
            duration_label=estimate.duration_label,
            estimate_source=estimate.source,
            already_packed=already_packed,
            order_updated=bool(state.order_updated),
            claim_id=state.claim_id,
            claim_created=bool(state.claim_created),
            registry_available=registry_available,
            notifications_sent=bool(state.notifications_sent),
            notified_recipients=state.notified,
            failed_recipients=state.failed,
            activity_logged=bool(state.activity_logged),
            failed_step=failed_step,
            error=error,
        )


def _fmt(value: float):
    return int(value) if float(value).is_integer() else value
