"""
Login attempt throttle.

Counts admin login attempts per caller identity in a fixed window that
opens with the caller's first attempt.
"""

import math
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

from core.security.config import AdminAuthConfig


@dataclass
class _Window:
    """Attempt counter for one identity."""

    count: int
    started_at: float


class LoginThrottle:
    """
    Per-identity login attempt limiter.

    Owns the identity -> (count, window start) mapping. A window is
    evicted once it has elapsed, either when its identity is seen again
    or by purge_expired(). All reads and increments happen under one
    lock so concurrent attempts cannot under-count.
    """

    def __init__(
        self,
        max_attempts: int,
        window_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        """
        Initialize throttle.

        Args:
            max_attempts: Attempts allowed per window
            window_seconds: Window length in seconds
            clock: Time source returning epoch seconds
        """
        self.max_attempts = max_attempts
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: AdminAuthConfig) -> "LoginThrottle":
        """Build a throttle from the admin configuration."""
        return cls(config.login_max_attempts, config.login_window_seconds)

    def _expired(self, window: _Window, now: float) -> bool:
        return now - window.started_at >= self.window_seconds

    def hit(self, identity: str) -> Tuple[bool, int, int]:
        """
        Record an attempt and decide whether it may proceed.

        Args:
            identity: Caller identity (client address)

        Returns:
            Tuple of (is_allowed, remaining, reset_time)
        """
        with self._lock:
            now = self._clock()
            window = self._windows.get(identity)
            if window is None or self._expired(window, now):
                window = _Window(count=0, started_at=now)
                self._windows[identity] = window

            reset_time = math.ceil(window.started_at + self.window_seconds)
            if window.count >= self.max_attempts:
                return False, 0, reset_time

            window.count += 1
            return True, self.max_attempts - window.count, reset_time

    def retry_after(self, identity: str) -> int:
        """Seconds until the identity's window resets (0 if none)."""
        with self._lock:
            window = self._windows.get(identity)
            if window is None:
                return 0
            remaining = window.started_at + self.window_seconds - self._clock()
            return max(0, math.ceil(remaining))

    def purge_expired(self) -> int:
        """
        Drop every elapsed window.

        Returns:
            Number of identities evicted
        """
        with self._lock:
            now = self._clock()
            stale = [key for key, window in self._windows.items() if self._expired(window, now)]
            for key in stale:
                del self._windows[key]
            return len(stale)

    def reset(self) -> None:
        """Forget every identity."""
        with self._lock:
            self._windows.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
