"""Tests for the Profile aggregate."""

import pytest
from dispatch.directory.events import ProfileRegistered
from dispatch.directory.profile import Profile, Role
from protean.exceptions import ValidationError


class TestRegisterProfile:
    def test_vehicle_owner(self):
        profile = Profile.register(
            role=Role.VEHICLE_OWNER.value,
            full_name="Ramesh Yadav",
            phone="+919800000001",
            vehicle_type="mini-truck",
        )
        assert profile.role == "vehicle_owner"
        assert profile.vehicle_type == "mini-truck"
        assert profile.registered_at is not None

    def test_explicit_id(self):
        profile = Profile.register(role="retailer", full_name="Priya", profile_id="ret-001")
        assert str(profile.id) == "ret-001"

    def test_unknown_role_rejected(self):
        with pytest.raises(ValidationError):
            Profile.register(role="courier", full_name="Someone")

    def test_raises_profile_registered_event(self):
        profile = Profile.register(role="wholesaler", full_name="Anil")
        assert isinstance(profile._events[0], ProfileRegistered)


class TestDisplayShopName:
    def test_prefers_business_name(self):
        profile = Profile.register(role="retailer", full_name="Priya", business_name="Sharma Stores")
        assert profile.display_shop_name == "Sharma Stores"

    def test_falls_back_to_full_name(self):
        profile = Profile.register(role="retailer", full_name="Priya")
        assert profile.display_shop_name == "Priya"
