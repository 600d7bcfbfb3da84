"""Error handling middleware for consistent error responses."""

import logging
from datetime import datetime

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from wattwise.exceptions.errors import (
    EmptyCatalogError,
    MalformedInputError,
    UsageDataError,
    WattwiseError,
)

logger = logging.getLogger(__name__)


def _error_response(status_code: int, error: WattwiseError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={**error.to_dict(), "timestamp": datetime.now().isoformat()},
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware for turning wattwise exceptions into JSON errors.

    Catches all exceptions and returns JSON error responses with
    appropriate HTTP status codes.
    """

    async def dispatch(self, request: Request, call_next):
        """Process request with error handling.

        Parameters
        ----------
        request : Request
            Incoming HTTP request
        call_next : callable
            Next middleware in chain

        Returns
        -------
        Response
            HTTP response, potentially error response
        """
        try:
            response = await call_next(request)
            return response

        except MalformedInputError as e:
            logger.warning(f"Malformed usage feed: {e}")
            return _error_response(400, e)

        except UsageDataError as e:
            logger.info(f"Usage data rejected: {e}")
            return _error_response(422, e)

        except EmptyCatalogError as e:
            logger.error(f"Empty plan catalog: {e}")
            return _error_response(503, e)

        except WattwiseError as e:
            logger.warning(f"Request failed: {e}")
            return _error_response(400, e)

        except ValueError as e:
            logger.warning(f"Value error: {e}")
            return JSONResponse(
                status_code=400,
                content={
                    "detail": str(e),
                    "error_code": "VALIDATION_ERROR",
                    "timestamp": datetime.now().isoformat(),
                },
            )

        except Exception as e:
            # Log with full traceback for debugging
            logger.error(f"Unhandled error: {e}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={
                    "detail": "Internal server error",
                    "error_code": "INTERNAL_ERROR",
                    "timestamp": datetime.now().isoformat(),
                },
            )
