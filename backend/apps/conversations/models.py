"""
Conversations models - per-identity dialogue state.
"""

from django.db import models
from django.utils import timezone


class SessionState(models.TextChoices):
    """Named phase of a conversation. IDLE is both initial and terminal."""

    IDLE = "idle", "Idle"
    REGISTERING_ORG = "registering_org", "Registering organization"
    CREATING_TEAM = "creating_team", "Creating team"
    ADDING_USER = "adding_user", "Adding user"
    STANDUP_YESTERDAY = "standup_yesterday", "Standup: yesterday"
    STANDUP_TODAY = "standup_today", "Standup: today"
    STANDUP_BLOCKERS = "standup_blockers", "Standup: blockers"
    UPDATING_GITHUB = "updating_github", "Updating GitHub credentials"
    UPDATING_JIRA = "updating_jira", "Updating Jira credentials"


class ConversationSession(models.Model):
    """
    One conversation record per chat identity.

    `step` is an index into the flow of the current `state` and is reset
    to 0 whenever the state changes. `data` accumulates the answers
    collected so far, in the order they were given.
    """

    identity = models.CharField(max_length=255, unique=True)
    state = models.CharField(
        max_length=32,
        choices=SessionState.choices,
        default=SessionState.IDLE,
    )
    step = models.PositiveIntegerField(default=0)
    data = models.JSONField(default=dict, blank=True)

    last_activity = models.DateTimeField(default=timezone.now, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-last_activity"]

    def __str__(self) -> str:
        return f"{self.identity} [{self.state}:{self.step}]"

    @property
    def is_active(self) -> bool:
        return self.state != SessionState.IDLE
