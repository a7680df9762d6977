"""
Production settings for DeviceLicenseService.
"""

import os

from django.core.exceptions import ImproperlyConfigured

from .base import *  # noqa: F403, F401
from .logging import get_logging_config

DEBUG = False

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "").split(",")

# Security settings
SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "true").lower() == "true"
SESSION_COOKIE_SECURE = True
CSRF_COOKIE_SECURE = True
SECURE_CONTENT_TYPE_NOSNIFF = True
X_FRAME_OPTIONS = "DENY"

SECRET_KEY = os.environ.get("SECRET_KEY")
if not SECRET_KEY:
    raise ImproperlyConfigured("SECRET_KEY must be set in production")

LICENSE_ADMIN_SECRET = os.environ.get("LICENSE_ADMIN_SECRET")
if not LICENSE_ADMIN_SECRET:
    raise ImproperlyConfigured("LICENSE_ADMIN_SECRET must be set in production")

# Logging in production
LOGGING = get_logging_config("production", log_file=os.environ.get("LOG_FILE"))
