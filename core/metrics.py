"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# License metrics
license_validations_total = Counter(
    "license_validations_total",
    "Total license validations",
    ["outcome"],
)

device_bindings_total = Counter(
    "device_bindings_total",
    "Total first-use bindings of a license to a device",
)

license_mutations_total = Counter(
    "license_mutations_total",
    "Total admin mutations of license records",
    ["operation"],
)

# Admin metrics
admin_login_attempts_total = Counter(
    "admin_login_attempts_total",
    "Total admin login attempts",
    ["result"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
