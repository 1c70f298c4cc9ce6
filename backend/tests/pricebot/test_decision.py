"""Tests for the send-on-change-or-heartbeat decision."""

import pytest

from app.pricebot.decision import decide, format_price


class TestDecide:
    """Unit tests for the pure decision function."""

    def test_first_observation_sends(self):
        """No previous price always counts as a change."""
        decision = decide(1.00, None, 0.0, 0.0)
        assert decision.send is True
        assert decision.changed is True
        assert decision.heartbeat_due is False

    def test_unchanged_within_heartbeat_is_suppressed(self):
        """Same price, heartbeat not yet due: no send."""
        decision = decide(1.00, 1.00, 1000.0, 1030.0)
        assert decision.send is False
        assert decision.changed is False
        assert decision.heartbeat_due is False

    def test_change_sends_regardless_of_heartbeat(self):
        """A different price sends even one second after the last send."""
        decision = decide(1.01, 1.00, 1000.0, 1001.0)
        assert decision.send is True
        assert decision.changed is True
        assert decision.heartbeat_due is False

    def test_heartbeat_boundary_is_inclusive(self):
        """Exactly heartbeat_interval seconds later is due."""
        decision = decide(1.00, 1.00, 1000.0, 1120.0)
        assert decision.send is True
        assert decision.changed is False
        assert decision.heartbeat_due is True

    def test_just_before_heartbeat_is_suppressed(self):
        """119.999 seconds later is not due yet."""
        assert decide(1.00, 1.00, 1000.0, 1119.999).send is False

    def test_custom_heartbeat_interval(self):
        """The heartbeat interval is a parameter."""
        assert decide(1.00, 1.00, 0.0, 10.0, heartbeat_interval=10.0).send is True
        assert decide(1.00, 1.00, 0.0, 9.0, heartbeat_interval=10.0).send is False

    def test_exact_equality_not_epsilon(self):
        """Values that display identically but differ in the last bits are a change."""
        assert decide(0.1 + 0.2, 0.3, 1000.0, 1001.0).send is True

    def test_epoch_zero_last_sent_makes_heartbeat_due(self):
        """With a real clock, a never-sent destination is always heartbeat-due."""
        decision = decide(1.00, 1.00, 0.0, 1_700_000_000.0)
        assert decision.heartbeat_due is True

    @pytest.mark.parametrize(
        ("current", "last", "last_sent_at", "now", "expected"),
        [
            (2.0, 2.0, 0.0, 119.0, False),
            (2.0, 2.0, 0.0, 120.0, True),
            (2.0, 2.5, 0.0, 1.0, True),
            (2.0, None, 500.0, 501.0, True),
        ],
    )
    def test_send_iff_changed_or_heartbeat_due(self, current, last, last_sent_at, now, expected):
        """send is exactly `current != last or now - last_sent_at >= 120`."""
        assert decide(current, last, last_sent_at, now).send is expected


class TestFormatPrice:
    """Tests for the delivered display string."""

    def test_two_decimals_and_suffix(self):
        assert format_price(5.4321) == "TON Price: 5.43$"

    def test_rounds_half_cent(self):
        assert format_price(1.006) == "TON Price: 1.01$"

    def test_custom_label_and_suffix(self):
        assert format_price(65000, label="BTC", suffix=" USDT") == "BTC Price: 65000.00 USDT"
