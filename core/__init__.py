"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- Admin secret gate and login throttle
- Middleware components
- Metrics, tracing and health checks
"""
