"""
Accounts models - chat users and their collaborator credentials.
"""

from django.db import models

from apps.accounts.constants import ROLE_CAPABILITIES, Capability, Role
from apps.core.models import TimestampedModel

PENDING_PREFIX = "pending:"


class User(TimestampedModel):
    """
    A person known to the bot, keyed by their chat identity.

    Users added by a lead before they ever message the bot get a
    placeholder identity starting with PENDING_PREFIX; the first message
    carrying a matching email claims the record.
    """

    identity = models.CharField(
        max_length=255,
        unique=True,
        help_text="External chat identity, e.g. 'users/1234567890'",
    )
    name = models.CharField(max_length=255)
    email = models.EmailField(unique=True, null=True, blank=True)

    role = models.CharField(max_length=20, choices=Role.choices, default=Role.MEMBER)
    organization = models.ForeignKey(
        "organizations.Organization",
        on_delete=models.CASCADE,
        related_name="users",
    )
    team = models.ForeignKey(
        "teams.Team",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="members",
    )

    # GitHub
    github_username = models.CharField(max_length=255, blank=True)
    github_token = models.CharField(max_length=255, blank=True)

    # Jira
    jira_account_id = models.CharField(max_length=255, blank=True)
    jira_email = models.EmailField(blank=True)
    jira_api_token = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return f"{self.name} ({self.identity})"

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES.get(self.role, frozenset())

    @property
    def is_pending(self) -> bool:
        """True until the person messages the bot themselves."""
        return self.identity.startswith(PENDING_PREFIX)

    @property
    def has_github(self) -> bool:
        return bool(self.github_username and self.github_token)

    @property
    def has_jira(self) -> bool:
        return bool(self.jira_account_id and self.jira_email and self.jira_api_token)
