"""
Standups models - one daily report per user and date.
"""

from django.db import models

from apps.core.exceptions import InvalidTransitionError
from apps.core.models import TimestampedModel


class Standup(TimestampedModel):
    """
    A daily standup report.

    Status only moves forward: IN_PROGRESS to COMPLETED or CANCELLED.
    A finished standup is never reopened.
    """

    class Status(models.TextChoices):
        IN_PROGRESS = "in_progress", "In progress"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    ALLOWED_TRANSITIONS = {
        Status.IN_PROGRESS: {Status.COMPLETED, Status.CANCELLED},
        Status.COMPLETED: set(),
        Status.CANCELLED: set(),
    }

    user = models.ForeignKey(
        "accounts.User",
        on_delete=models.CASCADE,
        related_name="standups",
    )
    standup_date = models.DateField(db_index=True)

    yesterday_work = models.TextField(blank=True)
    today_plan = models.TextField(blank=True)
    blockers = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.IN_PROGRESS,
    )
    ai_summary = models.TextField(blank=True)

    # Lines shown to the user when the standup started
    github_commits = models.JSONField(default=list, blank=True)
    jira_issues = models.JSONField(default=list, blank=True)

    submitted_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-standup_date", "-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "standup_date"],
                name="unique_standup_per_user_per_day",
            ),
        ]

    def __str__(self) -> str:
        return f"Standup {self.standup_date} ({self.user_id}, {self.status})"

    def can_transition_to(self, status: str) -> bool:
        return status in self.ALLOWED_TRANSITIONS.get(self.status, set())

    def transition_to(self, status: str) -> None:
        """Move to a new status; raises InvalidTransitionError if not allowed. Does not save."""
        if not self.can_transition_to(status):
            raise InvalidTransitionError(f"Standup cannot move from {self.status} to {status}.")
        self.status = status
