"""
Tests for CorrelationIdMiddleware.
"""

import uuid
from unittest.mock import MagicMock

from django.http import HttpResponse
from django.test import RequestFactory
from structlog.contextvars import get_contextvars

from apps.core.middleware import CORRELATION_HEADER, CorrelationIdMiddleware


def make_middleware(seen: dict) -> CorrelationIdMiddleware:
    """Middleware whose downstream view records the bound log context."""

    def get_response(request):
        seen.update(get_contextvars())
        return HttpResponse()

    return CorrelationIdMiddleware(MagicMock(side_effect=get_response))


class TestCorrelationIdMiddleware:
    """Tests for correlation ID handling."""

    def test_reuses_valid_header(self) -> None:
        """A valid X-Correlation-ID is propagated to logs and response."""
        seen: dict = {}
        incoming = str(uuid.uuid4())
        request = RequestFactory().post("/webhooks/chat/", HTTP_X_CORRELATION_ID=incoming)

        response = make_middleware(seen)(request)

        assert response[CORRELATION_HEADER] == incoming
        assert seen["correlation_id"] == incoming
        assert str(request.correlation_id) == incoming

    def test_generates_id_when_header_missing(self) -> None:
        seen: dict = {}
        request = RequestFactory().get("/api/v1/health")

        response = make_middleware(seen)(request)

        generated = response[CORRELATION_HEADER]
        assert uuid.UUID(generated).version == 4
        assert seen["correlation_id"] == generated

    def test_invalid_header_is_replaced(self) -> None:
        seen: dict = {}
        request = RequestFactory().get("/api/v1/health", HTTP_X_CORRELATION_ID="not-a-uuid")

        response = make_middleware(seen)(request)

        assert response[CORRELATION_HEADER] != "not-a-uuid"
        uuid.UUID(response[CORRELATION_HEADER])

    def test_context_cleared_after_request(self) -> None:
        request = RequestFactory().get("/api/v1/health")

        make_middleware({})(request)

        assert "correlation_id" not in get_contextvars()
