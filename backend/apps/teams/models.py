"""
Teams models - groups of users inside an organization.
"""

from django.db import models

from apps.core.models import TimestampedModel


class Team(TimestampedModel):
    """
    A team within an organization.

    The lead is recorded by chat identity; the lead's User row points back
    at the team through User.team.
    """

    organization = models.ForeignKey(
        "organizations.Organization",
        on_delete=models.CASCADE,
        related_name="teams",
    )
    name = models.CharField(max_length=100)
    lead_identity = models.CharField(max_length=255, db_index=True)

    # Collaborator settings
    github_organization = models.CharField(max_length=255, blank=True)
    jira_api_url = models.URLField(
        max_length=500,
        blank=True,
        help_text="Jira base URL, e.g. 'https://acme.atlassian.net'",
    )
    channel_ref = models.CharField(
        max_length=255,
        blank=True,
        help_text="Chat channel the team was created from",
    )

    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["organization", "name"],
                name="unique_team_name_per_organization",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.organization_id})"
