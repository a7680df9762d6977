"""
App configuration for the core app.
"""

import logging

from django.apps import AppConfig

logger = logging.getLogger(__name__)


class CoreConfig(AppConfig):
    """
    Core app configuration.

    Builds the admin gate and the login throttle once at startup from
    an explicit AdminAuthConfig, then sets up observability.
    """

    name = "core"
    verbose_name = "Core"

    def ready(self):
        """Called when Django starts."""
        from core.instrumentation import setup_opentelemetry, start_metrics_server
        from core.security.config import AdminAuthConfig
        from core.security.gate import AdminGate
        from core.security.throttle import LoginThrottle

        config = AdminAuthConfig.from_settings()
        self.admin_gate = AdminGate(config)
        self.login_throttle = LoginThrottle.from_config(config)
        logger.info(
            "Admin gate ready (header %s, %s login attempts per %ss)",
            config.header_name,
            config.login_max_attempts,
            config.login_window_seconds,
        )

        setup_opentelemetry()
        start_metrics_server()
