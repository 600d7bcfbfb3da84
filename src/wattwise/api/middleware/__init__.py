"""API middleware for cross-cutting concerns."""

__all__ = ["RateLimitMiddleware", "ErrorHandlerMiddleware"]

from wattwise.api.middleware.error_handler import ErrorHandlerMiddleware
from wattwise.api.middleware.rate_limit import RateLimitMiddleware
