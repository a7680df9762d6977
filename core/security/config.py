"""
Admin authorization configuration.

The admin secret and throttle limits are read once from Django settings
into an explicit object that is handed to the gate and the throttle.
"""
from dataclasses import dataclass

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

DEFAULT_SECRET_HEADER = "X-Admin-Password"
DEFAULT_LOGIN_MAX_ATTEMPTS = 5
DEFAULT_LOGIN_WINDOW_SECONDS = 5 * 60


@dataclass(frozen=True)
class AdminAuthConfig:
    """Process-wide admin secret and login throttle settings."""

    secret: str
    header_name: str = DEFAULT_SECRET_HEADER
    login_max_attempts: int = DEFAULT_LOGIN_MAX_ATTEMPTS
    login_window_seconds: int = DEFAULT_LOGIN_WINDOW_SECONDS
    trust_forwarded_for: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        if not self.secret:
            raise ImproperlyConfigured("LICENSE_ADMIN_SECRET must be set")
        if self.login_max_attempts < 1:
            raise ImproperlyConfigured("ADMIN_LOGIN_MAX_ATTEMPTS must be at least 1")
        if self.login_window_seconds < 1:
            raise ImproperlyConfigured("ADMIN_LOGIN_WINDOW_SECONDS must be positive")

    @classmethod
    def from_settings(cls) -> "AdminAuthConfig":
        """
        Build the configuration from Django settings.

        Returns:
            AdminAuthConfig instance

        Raises:
            ImproperlyConfigured: If the secret is missing
        """
        return cls(
            secret=getattr(settings, "LICENSE_ADMIN_SECRET", ""),
            header_name=getattr(settings, "ADMIN_SECRET_HEADER", DEFAULT_SECRET_HEADER),
            login_max_attempts=int(
                getattr(settings, "ADMIN_LOGIN_MAX_ATTEMPTS", DEFAULT_LOGIN_MAX_ATTEMPTS)
            ),
            login_window_seconds=int(
                getattr(settings, "ADMIN_LOGIN_WINDOW_SECONDS", DEFAULT_LOGIN_WINDOW_SECONDS)
            ),
            trust_forwarded_for=bool(
                getattr(settings, "ADMIN_LOGIN_TRUST_X_FORWARDED_FOR", False)
            ),
        )
