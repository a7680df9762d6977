"""
Unit tests for value objects.
"""

import pytest

from core.domain.value_objects import RejectionReason, Verdict


class TestVerdict:
    """Tests for Verdict value object."""

    def test_accept(self):
        """Test an accepting verdict carries the owner."""
        verdict = Verdict.accept("owner@example.com")

        assert verdict.accepted is True
        assert verdict.owner == "owner@example.com"
        assert verdict.reason is None
        assert verdict.bound is False
        assert verdict.message == "License validated successfully."

    def test_accept_with_binding(self):
        """Test the first-use binding flag."""
        assert Verdict.accept("owner", bound=True).bound is True

    @pytest.mark.parametrize(
        "reason,message",
        [
            (RejectionReason.MISSING_INPUT, "License key and Device ID are required."),
            (RejectionReason.INVALID_INPUT, "Device ID is too long."),
            (RejectionReason.NOT_FOUND, "Invalid license key."),
            (RejectionReason.TERMINATED, "This license has been terminated."),
            (RejectionReason.EXPIRED, "Your license has expired."),
            (
                RejectionReason.DEVICE_MISMATCH,
                "This key is already registered to another device.",
            ),
        ],
    )
    def test_reject_messages(self, reason, message):
        """Test every rejection reason has its client message."""
        verdict = Verdict.reject(reason)

        assert verdict.accepted is False
        assert verdict.owner is None
        assert verdict.reason == reason
        assert verdict.message == message

    def test_reason_string(self):
        """Test reasons render as their codes."""
        assert str(RejectionReason.DEVICE_MISMATCH) == "DEVICE_MISMATCH"
