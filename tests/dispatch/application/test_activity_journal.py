"""Application tests for the activity trail."""

from unittest.mock import MagicMock, patch

from dispatch.activity.journal import activity_for, log_activity


class TestLogActivity:
    def test_appends_entry_scoped_to_actor(self):
        entry = log_activity(
            actor_id="W1",
            actor_role="wholesaler",
            actor_name="Anil",
            action="Marked order O1 as packed and notified all vehicle owners",
            details="Distance: 25km, Cost: ₹250",
        )
        assert entry is not None

        entries = activity_for("W1")
        assert len(entries) == 1
        assert entries[0].details == "Distance: 25km, Cost: ₹250"
        assert entries[0].category == "order"
        assert activity_for("W2") == []

    def test_store_failure_is_swallowed(self):
        with patch("dispatch.activity.journal.current_domain", new_callable=MagicMock) as mock_domain:
            mock_domain.repository_for.return_value.add.side_effect = RuntimeError("store down")
            entry = log_activity(actor_id="W1", actor_role="wholesaler", actor_name="Anil", action="Packed")

        assert entry is None
        assert activity_for("W1") == []

    def test_entry_that_cannot_be_built_is_swallowed(self):
        entry = log_activity(actor_id="W1", actor_role="wholesaler", actor_name="A" * 300, action="Packed")

        assert entry is None
        assert activity_for("W1") == []


class TestActivityFor:
    def test_reads_every_entry_past_the_first_page(self):
        for index in range(150):
            log_activity(actor_id="W1", actor_role="wholesaler", actor_name="Anil", action=f"Packed order O{index}")

        entries = activity_for("W1")

        assert len(entries) == 150
        assert {entry.action for entry in entries} == {f"Packed order O{index}" for index in range(150)}
