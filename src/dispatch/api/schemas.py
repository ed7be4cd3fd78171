"""Pydantic request/response schemas for the Dispatch API.

These are external contracts, kept separate from the Protean commands and
aggregates they map onto.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    name: str = Field(..., max_length=200)
    quantity: float = Field(gt=0)
    unit: str = Field("unit", max_length=30)
    unit_price: float = Field(ge=0)


class ActorSchema(BaseModel):
    id: str = Field(..., max_length=100)
    name: str = Field(..., max_length=200)
    role: str = Field("wholesaler", max_length=30)
    business_name: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)


# ---------------------------------------------------------------------------
# Order Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "retailer_id": "retailer-017",
                    "wholesaler_id": "wholesaler-003",
                    "retailer_name": "Sharma General Store",
                    "items": [
                        {"name": "Basmati Rice", "quantity": 10, "unit": "kg", "unit_price": 80},
                        {"name": "Toor Dal", "quantity": 5, "unit": "kg", "unit_price": 120},
                    ],
                }
            ]
        }
    }

    order_id: str | None = None
    retailer_id: str
    wholesaler_id: str
    retailer_name: str | None = Field(None, max_length=200)
    items: list[OrderItemSchema] = Field(default_factory=list)


class UpdatePaymentStatusRequest(BaseModel):
    payment_status: str = Field(..., max_length=20)


class MarkPackedRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "actor": {
                        "id": "wholesaler-003",
                        "name": "Anil Gupta",
                        "role": "wholesaler",
                        "address": "Connaught Place, New Delhi",
                    }
                }
            ]
        }
    }

    actor: ActorSchema


# ---------------------------------------------------------------------------
# Profile Request Schemas
# ---------------------------------------------------------------------------
class RegisterProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "role": "vehicle_owner",
                    "full_name": "Ramesh Yadav",
                    "phone": "+919800000001",
                    "address": "Sohna Road, Gurgaon",
                    "vehicle_type": "mini-truck",
                }
            ]
        }
    }

    profile_id: str | None = None
    role: str = Field(..., max_length=30)
    full_name: str = Field(..., max_length=200)
    business_name: str | None = Field(None, max_length=200)
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=254)
    vehicle_type: str | None = Field(None, max_length=50)


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    order_id: str


class ProfileIdResponse(BaseModel):
    profile_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class PackingResultResponse(BaseModel):
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
    notified_recipients: list[str] = Field(default_factory=list)
    failed_recipients: dict[str, str] = Field(default_factory=dict)
    activity_logged: bool = False
    failed_step: str | None = None
    error: str | None = None
    complete: bool = False


class PackingStateResponse(BaseModel):
    order_id: str
    order_updated: bool = False
    claim_id: str | None = None
    claim_created: bool = False
    notifications_sent: bool = False
    notified_recipients: list[str] = Field(default_factory=list)
    failed_recipients: dict[str, str] = Field(default_factory=dict)
    activity_logged: bool = False
    attempts: int = 0
    last_error: str | None = None


class PartySchema(BaseModel):
    party_id: str | None = None
    name: str | None = None
    shop_name: str | None = None
    address: str | None = None
    phone: str | None = None


class DeliveryClaimResponse(BaseModel):
    claim_id: str
    order_id: str
    wholesaler: PartySchema | None = None
    retailer: PartySchema | None = None
    items: str | None = None
    amount: float = 0.0
    distance_km: float
    delivery_cost: float
    estimated_duration: str | None = None
    packed_at: datetime | None = None
    status: str
    created_at: datetime | None = None


class NotificationResponse(BaseModel):
    notification_id: str
    recipient_id: str
    notification_type: str
    title: str
    message: str
    order_id: str | None = None
    distance_km: float | None = None
    delivery_cost: float | None = None
    order_amount: float | None = None
    details: dict = Field(default_factory=dict)
    read: bool = False
    created_at: datetime | None = None
