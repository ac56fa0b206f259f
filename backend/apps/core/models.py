"""
Abstract model base shared by the bot's records.
"""

from django.db import models


class TimestampedModel(models.Model):
    """Adds created_at / updated_at. Services pass "updated_at" in update_fields."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
