"""
Django Ninja API configuration.
"""

from django.http import HttpRequest
from ninja import NinjaAPI

api = NinjaAPI(
    title="Standup Bot API",
    version="1.0.0",
    description="Chat-driven organization directory and daily standup bot.",
    openapi_extra={
        "tags": [
            {
                "name": "health",
                "description": "Service health and readiness checks",
            },
        ],
    },
)


@api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    """Health check endpoint for load balancer."""
    return {"status": "ok"}
