"""Tests for the Notification aggregate and the SMS text."""

import math

from dispatch.notification.events import NotificationCreated
from dispatch.notification.notification import Notification, NotificationType
from dispatch.notification.opportunity import DeliveryOpportunity, Party
from dispatch.notification.sms import render_opportunity_sms


def _opportunity(distance_km=25.0, cost=250.0):
    return DeliveryOpportunity(
        order_id="O2",
        wholesaler=Party(party_id="whs-001", name="Anil", shop_name="Anil Traders", address="Delhi", phone="+9111"),
        retailer=Party(party_id="ret-001", name="Priya", shop_name="Sharma Stores", address="Gurgaon"),
        distance_km=distance_km,
        delivery_cost=cost,
        order_amount=1400.0,
        items="Rice x 10 kg",
    )


class TestDeliveryOpportunity:
    def test_estimated_duration_rounds_up_to_whole_hours(self):
        assert _opportunity(distance_km=25.0).estimated_duration(30.0) == "1 hours"
        assert _opportunity(distance_km=31.0).estimated_duration(30.0) == "2 hours"
        assert _opportunity(distance_km=60.0).estimated_duration(30.0) == "2 hours"

    def test_details_payload(self):
        details = _opportunity().details(30.0)
        assert details["pickup"]["address"] == "Delhi"
        assert details["delivery"]["shop_name"] == "Sharma Stores"
        assert details["distance"] == 25.0
        assert details["delivery_cost"] == 250.0
        assert details["order_amount"] == 1400.0
        assert details["estimated_duration"] == f"{math.ceil(25.0 / 30)} hours"


class TestAnnounceDelivery:
    def test_builds_delivery_opportunity_notification(self):
        notification = Notification.announce_delivery("V1", _opportunity())

        assert notification.recipient_id == "V1"
        assert notification.notification_type == NotificationType.DELIVERY_OPPORTUNITY.value
        assert notification.title == "New Delivery Opportunity"
        assert notification.message == "Order #O2 ready for pickup"
        assert notification.order_id == "O2"
        assert notification.distance_km == 25.0
        assert notification.delivery_cost == 250.0
        assert notification.read is False

    def test_details_round_trip_through_json(self):
        notification = Notification.announce_delivery("V1", _opportunity())
        assert notification.details_data["pickup"]["name"] == "Anil"
        assert notification.details_data["items"] == "Rice x 10 kg"

    def test_raises_notification_created_event(self):
        notification = Notification.announce_delivery("V1", _opportunity())
        assert isinstance(notification._events[0], NotificationCreated)
        assert notification._events[0].recipient_id == "V1"


class TestOpportunitySms:
    def test_mentions_order_and_both_parties(self):
        body = render_opportunity_sms(_opportunity())
        assert "Order: #O2" in body
        assert "Anil Traders" in body
        assert "Sharma Stores" in body
        assert "Phone: +9111" in body

    def test_shows_whole_numbers_without_decimals(self):
        body = render_opportunity_sms(_opportunity())
        assert "Distance: 25 km" in body
        assert "Delivery Fee: ₹250" in body
        assert "Order Value: ₹1400" in body
