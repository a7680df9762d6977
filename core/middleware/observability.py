"""
Observability middleware.

Correlation ids, structured request logs and HTTP metrics for every
request, labelled by route name rather than raw path so license ids
never become metric labels.
"""

import logging
import time
import uuid
from typing import Callable, Optional

from django.http import HttpRequest, HttpResponse
from opentelemetry import trace
from opentelemetry.trace import format_trace_id

from core.metrics import http_request_duration_seconds, http_requests_total

logger = logging.getLogger(__name__)

UNMATCHED_ROUTE = "unmatched"


def route_label(request: HttpRequest) -> str:
    """Metric label for the route a request resolved to."""
    match = getattr(request, "resolver_match", None)
    if match is None:
        return UNMATCHED_ROUTE
    return match.view_name or match.route or UNMATCHED_ROUTE


def request_outcome(status_code: int) -> str:
    """Classify a status code as success, client_error or server_error."""
    if status_code >= 500:
        return "server_error"
    if status_code >= 400:
        return "client_error"
    return "success"


def active_trace_id() -> Optional[str]:
    """Hex id of the active trace, if a real span is recording."""
    span_context = trace.get_current_span().get_span_context()
    if not span_context.is_valid:
        return None
    return format_trace_id(span_context.trace_id)


class ObservabilityMiddleware:
    """
    Middleware for request observability.

    Sets request.correlation_id (and request.trace_id when tracing is on),
    logs start and finish, records request count and latency, and echoes
    X-Correlation-ID, X-Request-Status and X-Request-Duration.
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        request.correlation_id = correlation_id  # type: ignore
        trace_id = active_trace_id()
        if trace_id:
            request.trace_id = trace_id  # type: ignore

        context = {
            "correlation_id": correlation_id,
            "method": request.method,
            "path": request.path,
            "remote_addr": request.META.get("REMOTE_ADDR"),
        }
        if trace_id:
            context["trace_id"] = trace_id
        logger.info("Request started", extra=context)

        started = time.perf_counter()
        try:
            response = self.get_response(request)
        except Exception as e:
            duration = time.perf_counter() - started
            self._observe(request, 500, duration)
            logger.error(
                "Request failed",
                extra={
                    **context,
                    "error_type": type(e).__name__,
                    "duration_ms": round(duration * 1000, 2),
                },
                exc_info=True,
            )
            raise

        duration = time.perf_counter() - started
        self._observe(request, response.status_code, duration)
        outcome = request_outcome(response.status_code)

        finished = {
            **context,
            "route": route_label(request),
            "status_code": response.status_code,
            "request_status": outcome,
            "duration_ms": round(duration * 1000, 2),
        }
        if outcome == "server_error":
            logger.error("Request completed with server error", extra=finished)
        elif outcome == "client_error":
            logger.warning("Request completed with client error", extra=finished)
        else:
            logger.info("Request completed successfully", extra=finished)

        response["X-Correlation-ID"] = correlation_id
        response["X-Request-Status"] = outcome
        response["X-Request-Duration"] = f"{duration:.3f}"
        if trace_id:
            response["X-Trace-ID"] = trace_id
        return response

    def _observe(self, request: HttpRequest, status_code: int, duration: float) -> None:
        route = route_label(request)
        http_requests_total.labels(
            method=request.method, endpoint=route, status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(method=request.method, endpoint=route).observe(
            duration
        )
