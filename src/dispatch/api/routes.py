"""FastAPI endpoints for the Dispatch domain."""

import json
from contextlib import contextmanager

import structlog
from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from dispatch.api.schemas import (
    DeliveryClaimResponse,
    MarkPackedRequest,
    NotificationResponse,
    OrderIdResponse,
    PackingResultResponse,
    PackingStateResponse,
    PartySchema,
    PlaceOrderRequest,
    ProfileIdResponse,
    RegisterProfileRequest,
    StatusResponse,
    UpdatePaymentStatusRequest,
)
from dispatch.claim.store import available_claims
from dispatch.directory.registration import RegisterProfile
from dispatch.exceptions import PackingPersistenceError
from dispatch.notification.inbox import notifications_for
from dispatch.order.confirmation import ConfirmOrder
from dispatch.order.payment import UpdatePaymentStatus
from dispatch.order.placement import PlaceOrder
from dispatch.packing.orchestrator import PackingOrchestrator
from dispatch.packing.result import Actor
from dispatch.packing.state import PackingState

logger = structlog.get_logger(__name__)

order_router = APIRouter(prefix="/orders", tags=["orders"])
profile_router = APIRouter(prefix="/profiles", tags=["profiles"])
delivery_router = APIRouter(prefix="/deliveries", tags=["deliveries"])
notification_router = APIRouter(prefix="/notifications", tags=["notifications"])


@contextmanager
def _domain_errors():
    """Translate domain exceptions into HTTP errors."""
    try:
        yield
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except PackingPersistenceError as exc:
        logger.error("Packing write failed", order_id=exc.order_id, step=exc.step, error=str(exc))
        raise HTTPException(status_code=503, detail={"step": exc.step, "error": str(exc)}) from exc


def _party(summary) -> PartySchema | None:
    if summary is None:
        return None
    return PartySchema(
        party_id=summary.party_id,
        name=summary.name,
        shop_name=summary.shop_name,
        address=summary.address,
        phone=summary.phone,
    )


# --- Order endpoints ---


@order_router.post("", status_code=201, response_model=OrderIdResponse)
async def place_order(body: PlaceOrderRequest) -> OrderIdResponse:
    command = PlaceOrder(
        order_id=body.order_id,
        retailer_id=body.retailer_id,
        wholesaler_id=body.wholesaler_id,
        retailer_name=body.retailer_name,
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    with _domain_errors():
        result = current_domain.process(command, asynchronous=False)
    return OrderIdResponse(order_id=result)


@order_router.put("/{order_id}/confirm", response_model=StatusResponse)
async def confirm_order(order_id: str) -> StatusResponse:
    with _domain_errors():
        current_domain.process(ConfirmOrder(order_id=order_id), asynchronous=False)
    return StatusResponse()


@order_router.put("/{order_id}/payment-status", response_model=StatusResponse)
async def update_payment_status(order_id: str, body: UpdatePaymentStatusRequest) -> StatusResponse:
    command = UpdatePaymentStatus(order_id=order_id, payment_status=body.payment_status)
    with _domain_errors():
        current_domain.process(command, asynchronous=False)
    return StatusResponse()


@order_router.put(
    "/{order_id}/pack",
    response_model=PackingResultResponse,
    responses={202: {"model": PackingResultResponse, "description": "Packed; some dispatch steps still pending"}},
)
def mark_packed(order_id: str, body: MarkPackedRequest):
    """Mark an order packed and dispatch it to vehicle owners.

    Returns 200 when every step finished and 202 when the order was packed
    but part of the dispatch needs a retry. Declared sync so the blocking
    distance lookup and fan-out backoff run in the worker threadpool.
    """
    actor = Actor(**body.actor.model_dump())
    with _domain_errors():
        result = PackingOrchestrator().mark_packed(order_id, actor)

    payload = PackingResultResponse(**result.as_dict())
    status_code = 200 if result.complete else 202
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


@order_router.get("/{order_id}/packing", response_model=PackingStateResponse)
async def packing_state(order_id: str) -> PackingStateResponse:
    with _domain_errors():
        state = current_domain.repository_for(PackingState).get(order_id)
    return PackingStateResponse(
        order_id=str(state.id),
        order_updated=bool(state.order_updated),
        claim_id=state.claim_id,
        claim_created=bool(state.claim_created),
        notifications_sent=bool(state.notifications_sent),
        notified_recipients=state.notified,
        failed_recipients=state.failed,
        activity_logged=bool(state.activity_logged),
        attempts=state.attempts or 0,
        last_error=state.last_error,
    )


# --- Profile endpoints ---


@profile_router.post("", status_code=201, response_model=ProfileIdResponse)
async def register_profile(body: RegisterProfileRequest) -> ProfileIdResponse:
    command = RegisterProfile(
        profile_id=body.profile_id,
        role=body.role,
        full_name=body.full_name,
        business_name=body.business_name,
        address=body.address,
        phone=body.phone,
        email=body.email,
        vehicle_type=body.vehicle_type,
    )
    with _domain_errors():
        result = current_domain.process(command, asynchronous=False)
    return ProfileIdResponse(profile_id=result)


# --- Delivery endpoints ---


@delivery_router.get("/available", response_model=list[DeliveryClaimResponse])
async def list_available_deliveries() -> list[DeliveryClaimResponse]:
    return [
        DeliveryClaimResponse(
            claim_id=str(claim.id),
            order_id=str(claim.order_id),
            wholesaler=_party(claim.wholesaler),
            retailer=_party(claim.retailer),
            items=claim.items,
            amount=claim.amount or 0.0,
            distance_km=claim.distance_km,
            delivery_cost=claim.delivery_cost,
            estimated_duration=claim.estimated_duration,
            packed_at=claim.packed_at,
            status=claim.status,
            created_at=claim.created_at,
        )
        for claim in available_claims()
    ]


# --- Notification endpoints ---


@notification_router.get("/{recipient_id}", response_model=list[NotificationResponse])
async def list_notifications(recipient_id: str, unread_only: bool = False) -> list[NotificationResponse]:
    return [
        NotificationResponse(
            notification_id=str(notification.id),
            recipient_id=str(notification.recipient_id),
            notification_type=notification.notification_type,
            title=notification.title,
            message=notification.message,
            order_id=str(notification.order_id) if notification.order_id else None,
            distance_km=notification.distance_km,
            delivery_cost=notification.delivery_cost,
            order_amount=notification.order_amount,
            details=notification.details_data,
            read=bool(notification.read),
            created_at=notification.created_at,
        )
        for notification in notifications_for(recipient_id, unread_only=unread_only)
    ]
