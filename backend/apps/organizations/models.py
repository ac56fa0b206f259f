"""
Organizations models - top-level tenant of the bot.
"""

from django.db import models

from apps.core.models import TimestampedModel


class Organization(TimestampedModel):
    """
    A company registered through the chat bot.

    The registering chat identity becomes the first organization admin.
    Names are unique across the installation (compared case-insensitively
    at registration time).
    """

    name = models.CharField(max_length=100, unique=True)
    domain = models.CharField(
        max_length=255,
        blank=True,
        help_text="Company domain, e.g. 'acme.com'",
    )

    # Registration audit
    created_by_identity = models.CharField(max_length=255)
    created_by_name = models.CharField(max_length=255, blank=True)

    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name
