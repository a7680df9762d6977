"""
Unit tests for the login throttle.
"""

import threading

import pytest

from core.security.config import AdminAuthConfig
from core.security.throttle import LoginThrottle


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    """Fixture for a controllable clock."""
    return FakeClock()


@pytest.fixture
def throttle(clock):
    """Fixture for a 5 attempts per 300 seconds throttle."""
    return LoginThrottle(max_attempts=5, window_seconds=300, clock=clock)


class TestLoginThrottle:
    """Tests for LoginThrottle."""

    def test_allows_up_to_limit(self, throttle):
        """Test the first five attempts pass with a shrinking remainder."""
        remaining = [throttle.hit("10.0.0.1")[1] for _ in range(5)]
        assert remaining == [4, 3, 2, 1, 0]

    def test_rejects_sixth_attempt(self, throttle):
        """Test the sixth attempt within the window is refused."""
        for _ in range(5):
            throttle.hit("10.0.0.1")

        is_allowed, remaining, _ = throttle.hit("10.0.0.1")

        assert is_allowed is False
        assert remaining == 0

    def test_reset_time_is_window_end(self, throttle, clock):
        """Test the reset time is measured from the first attempt."""
        _, _, reset_time = throttle.hit("10.0.0.1")
        clock.advance(100)
        _, _, later_reset = throttle.hit("10.0.0.1")

        assert reset_time == int(clock.now - 100 + 300)
        assert later_reset == reset_time

    def test_window_elapses(self, throttle, clock):
        """Test a fresh window opens once the old one has elapsed."""
        for _ in range(6):
            throttle.hit("10.0.0.1")

        clock.advance(300)
        is_allowed, remaining, _ = throttle.hit("10.0.0.1")

        assert is_allowed is True
        assert remaining == 4

    def test_still_blocked_just_before_window_end(self, throttle, clock):
        """Test the window does not slide with refused attempts."""
        for _ in range(5):
            throttle.hit("10.0.0.1")

        clock.advance(299)
        assert throttle.hit("10.0.0.1")[0] is False
        assert throttle.retry_after("10.0.0.1") == 1

    def test_identities_are_independent(self, throttle):
        """Test one caller's attempts do not count against another."""
        for _ in range(5):
            throttle.hit("10.0.0.1")

        assert throttle.hit("10.0.0.1")[0] is False
        assert throttle.hit("10.0.0.2")[0] is True

    def test_retry_after_unknown_identity(self, throttle):
        """Test an unseen identity has nothing to wait for."""
        assert throttle.retry_after("10.0.0.9") == 0

    def test_purge_expired(self, throttle, clock):
        """Test elapsed windows are evicted."""
        throttle.hit("10.0.0.1")
        clock.advance(200)
        throttle.hit("10.0.0.2")
        clock.advance(100)

        assert throttle.purge_expired() == 1
        assert len(throttle) == 1

    def test_reset(self, throttle):
        """Test reset forgets every identity."""
        throttle.hit("10.0.0.1")
        throttle.hit("10.0.0.2")

        throttle.reset()

        assert len(throttle) == 0

    def test_from_config(self):
        """Test limits come from the admin configuration."""
        throttle = LoginThrottle.from_config(
            AdminAuthConfig(secret="s3cret", login_max_attempts=2, login_window_seconds=30)
        )

        assert throttle.max_attempts == 2
        assert throttle.window_seconds == 30

    def test_concurrent_attempts_are_all_counted(self, clock):
        """Test parallel attempts never let more than the limit through."""
        throttle = LoginThrottle(max_attempts=5, window_seconds=300, clock=clock)
        results = []
        lock = threading.Lock()
        start = threading.Barrier(20)

        def attempt():
            start.wait()
            allowed = throttle.hit("10.0.0.1")[0]
            with lock:
                results.append(allowed)

        threads = [threading.Thread(target=attempt) for _ in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 5
        assert results.count(False) == 15
