"""API middleware for the catalog API.

Provides:
- Request context (request ID, access log)
- A last-resort error envelope for exceptions that escape the handlers
"""

import time
from typing import Any, Callable
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"

# Probes are polled constantly and would drown the access log
QUIET_PATHS = frozenset({"/health", "/ready"})


def error_payload(
    request: Request,
    error_code: str,
    message: str,
    details: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    """Build the JSON body shared by every error response.

    Args:
        request: Request being answered.
        error_code: Machine-readable error code.
        message: Human-readable message.
        details: Optional field-level details.

    Returns:
        Error body matching ``ErrorResponse``.
    """
    return {
        "error_code": error_code,
        "message": message,
        "details": details or [],
        "request_id": getattr(request.state, "request_id", None),
    }


# ============================================================================
# Request Context Middleware
# ============================================================================


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the request and its log lines.

    The ID is taken from the ``X-Request-ID`` header when the client sends
    one, stored on ``request.state``, bound into structlog's context and
    echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        request.state.request_id = request_id
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response = None
        try:
            response = await call_next(request)
        finally:
            status_code = getattr(response, "status_code", 500)
            if request.url.path not in QUIET_PATHS:
                log = logger.warning if status_code >= 500 else logger.info
                log(
                    "Request completed",
                    method=request.method,
                    path=request.url.path,
                    query=str(request.query_params) or None,
                    status_code=status_code,
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Error Envelope Middleware
# ============================================================================


class ErrorEnvelopeMiddleware(BaseHTTPMiddleware):
    """Turn exceptions that escaped the exception handlers into a 500 envelope."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            logger.exception(
                "Unhandled exception",
                path=request.url.path,
                method=request.method,
                error=str(e),
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=error_payload(request, "INTERNAL_ERROR", "An internal error occurred"),
            )


def setup_middleware(app: FastAPI) -> None:
    """Install the catalog middleware stack.

    The last middleware added runs first, so the request context wraps the
    error envelope and its request ID is available there.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(ErrorEnvelopeMiddleware)
    app.add_middleware(RequestContextMiddleware)
