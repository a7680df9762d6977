"""
Model registry entry point for the licenses app.

The ORM models live in licenses.infrastructure.models.
"""
from licenses.infrastructure.models import License  # noqa: F401
