"""
Unit tests for the observability middleware.
"""

import pytest
from django.http import HttpResponse
from django.test import RequestFactory
from django.urls import resolve

from core.metrics import http_requests_total
from core.middleware.observability import (
    UNMATCHED_ROUTE,
    ObservabilityMiddleware,
    request_outcome,
    route_label,
)


@pytest.fixture
def rf():
    """Fixture for Django's request factory."""
    return RequestFactory()


def _responding(status):
    def get_response(request):
        request.resolver_match = resolve("/validate-license")
        return HttpResponse(status=status)

    return get_response


class TestRouteLabel:
    """Tests for route_label."""

    def test_unresolved_request(self, rf):
        """Test a request that never resolved gets the fallback label."""
        assert route_label(rf.get("/nowhere")) == UNMATCHED_ROUTE

    def test_detail_route_uses_name_not_id(self, rf):
        """Test a license id does not leak into the label."""
        request = rf.get("/api/users/0b6f3a7e-0000-4000-8000-000000000001")
        request.resolver_match = resolve(request.path)

        assert route_label(request) == "license-detail"


@pytest.mark.parametrize(
    "status,outcome",
    [(200, "success"), (204, "success"), (404, "client_error"), (503, "server_error")],
)
def test_request_outcome(status, outcome):
    """Test status codes are bucketed by class."""
    assert request_outcome(status) == outcome


class TestObservabilityMiddleware:
    """Tests for ObservabilityMiddleware."""

    def test_generates_correlation_id(self, rf):
        """Test a correlation id is assigned and echoed."""
        request = rf.post("/validate-license")

        response = ObservabilityMiddleware(_responding(200))(request)

        assert response["X-Correlation-ID"] == request.correlation_id
        assert response["X-Request-Status"] == "success"
        assert float(response["X-Request-Duration"]) >= 0

    def test_keeps_incoming_correlation_id(self, rf):
        """Test a caller-supplied correlation id is reused."""
        request = rf.post("/validate-license", HTTP_X_CORRELATION_ID="corr-1")

        response = ObservabilityMiddleware(_responding(403))(request)

        assert response["X-Correlation-ID"] == "corr-1"
        assert response["X-Request-Status"] == "client_error"

    def test_counts_by_route(self, rf):
        """Test the request counter is labelled with the route name."""
        counter = http_requests_total.labels(
            method="POST", endpoint="validate-license", status_code=200
        )
        before = counter._value.get()

        ObservabilityMiddleware(_responding(200))(rf.post("/validate-license"))

        assert counter._value.get() == before + 1

    def test_reraises_view_errors(self, rf):
        """Test errors escaping the stack propagate after being recorded."""

        def boom(request):
            raise RuntimeError("storage down")

        with pytest.raises(RuntimeError, match="storage down"):
            ObservabilityMiddleware(boom)(rf.get("/health/"))
