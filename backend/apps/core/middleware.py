"""
Core middleware.
"""

from collections.abc import Callable
from uuid import UUID, uuid4

from django.http import HttpRequest, HttpResponse

from apps.core.logging import bind_contextvars, clear_contextvars

CORRELATION_HEADER = "X-Correlation-ID"


class CorrelationIdMiddleware:
    """
    Attach a correlation ID to every request.

    Reuses a valid UUID from the X-Correlation-ID header, otherwise
    generates one. The ID is bound to the structlog context for the
    duration of the request and echoed back in the response header.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        correlation_id = self._resolve_correlation_id(request)
        request.correlation_id = correlation_id  # type: ignore[attr-defined]

        clear_contextvars()
        bind_contextvars(correlation_id=str(correlation_id))
        try:
            response = self.get_response(request)
        finally:
            clear_contextvars()

        response[CORRELATION_HEADER] = str(correlation_id)
        return response

    @staticmethod
    def _resolve_correlation_id(request: HttpRequest) -> UUID:
        header_value = request.headers.get(CORRELATION_HEADER)
        if header_value:
            try:
                return UUID(header_value)
            except ValueError:
                pass
        return uuid4()
