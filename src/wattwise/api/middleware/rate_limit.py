"""Rate limiting middleware using in-memory TTL cache."""

import json
import logging
from datetime import datetime

from cachetools import TTLCache
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

EXEMPT_PATHS = {"/", "/health", "/docs", "/openapi.json", "/redoc"}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client sliding window rate limiter.

    Attributes
    ----------
    limit : int
        Maximum requests per window
    window : int
        Time window in seconds
    requests : TTLCache
        Request timestamps per client host
    """

    def __init__(self, app, limit: int = 100, window: int = 3600):
        """Initialize rate limiter.

        Parameters
        ----------
        app : FastAPI
            FastAPI application instance
        limit : int, optional
            Maximum requests per window, by default 100
        window : int, optional
            Time window in seconds, by default 3600 (1 hour)
        """
        super().__init__(app)
        self.limit = limit
        self.window = window
        # Clients idle for a whole window drop out of the cache
        self.requests = TTLCache(maxsize=10000, ttl=window)

        logger.info(f"Rate limiter initialized: {limit} req/{window}s")

    @staticmethod
    def client_key(request: Request) -> str:
        return request.client.host if request.client else "anonymous"

    async def dispatch(self, request: Request, call_next):
        """Process request with rate limiting.

        Parameters
        ----------
        request : Request
            Incoming HTTP request
        call_next : callable
            Next middleware in chain

        Returns
        -------
        Response
            HTTP response with rate limit headers
        """
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client = self.client_key(request)
        now = datetime.now().timestamp()

        history = [ts for ts in self.requests.get(client, []) if now - ts < self.window]

        if len(history) >= self.limit:
            retry_after = int(self.window - (now - min(history))) if history else self.window
            logger.warning(f"Rate limit exceeded for {client}")

            return Response(
                content=json.dumps(
                    {
                        "detail": f"Rate limit exceeded. Try again in {retry_after} seconds.",
                        "error_code": "RATE_LIMITED",
                        "retry_after": retry_after,
                    }
                ),
                status_code=429,
                media_type="application/json",
                headers={
                    "X-RateLimit-Limit": str(self.limit),
                    "X-RateLimit-Remaining": "0",
                    "X-RateLimit-Reset": str(int(now + retry_after)),
                    "Retry-After": str(retry_after),
                },
            )

        history.append(now)
        self.requests[client] = history

        response = await call_next(request)

        response.headers["X-RateLimit-Limit"] = str(self.limit)
        response.headers["X-RateLimit-Remaining"] = str(self.limit - len(history))
        response.headers["X-RateLimit-Reset"] = str(int(now + self.window))

        return response
