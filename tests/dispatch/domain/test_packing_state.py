"""Tests for the PackingState progress record."""

from dispatch.packing.state import PackingState


class TestPackingState:
    def test_new_state_has_nothing_done(self):
        state = PackingState.start("O1")
        assert str(state.id) == "O1"
        assert state.order_updated is False
        assert state.claim_created is False
        assert state.notifications_sent is False
        assert state.notified == []
        assert state.failed == {}
        assert state.complete is False

    def test_begin_attempt_counts(self):
        state = PackingState.start("O1")
        state.begin_attempt()
        state.begin_attempt()
        assert state.attempts == 2

    def test_fan_out_rounds_merge(self):
        state = PackingState.start("O1")
        state.record_fan_out(["V1", "V2"], {"V3": "store down"}, complete=False)
        assert state.notified == ["V1", "V2"]
        assert state.failed == {"V3": "store down"}
        assert state.notifications_sent is False

        state.record_fan_out(["V3"], {}, complete=True)
        assert state.notified == ["V1", "V2", "V3"]
        assert state.failed == {}
        assert state.notifications_sent is True

    def test_complete_once_every_step_recorded(self):
        state = PackingState.start("O1")
        state.record_order_updated()
        state.record_claim("delivery_O1")
        state.record_fan_out([], {}, complete=True)
        assert state.claim_id == "delivery_O1"
        assert state.complete is True
