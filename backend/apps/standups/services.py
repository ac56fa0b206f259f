"""
Standups services - daily standup submission.
"""

import datetime
from collections.abc import Sequence
from zoneinfo import ZoneInfo

from django.conf import settings
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.core.exceptions import StandupAlreadySubmittedError
from apps.core.logging import get_logger
from apps.integrations.ai import generate_summary
from apps.standups.models import Standup

logger = get_logger(__name__)

NO_BLOCKER_ANSWERS = frozenset({"none", "no", "no blockers", "nothing", "n/a"})


def today_for_standups() -> datetime.date:
    """The current date in the configured standup timezone."""
    return timezone.now().astimezone(ZoneInfo(settings.STANDUP_TIMEZONE)).date()


def has_submitted(user: User, standup_date: datetime.date) -> bool:
    return Standup.objects.filter(user=user, standup_date=standup_date).exists()


def normalize_blockers(blockers: str | None) -> str:
    """Answers like 'none' or 'no blockers' mean there are no blockers."""
    text = (blockers or "").strip()
    if text.lower().rstrip(".!") in NO_BLOCKER_ANSWERS:
        return ""
    return text


def create_standup(
    user: User,
    standup_date: datetime.date,
    yesterday: str,
    today: str,
    blockers: str | None,
    github_commits: Sequence[str] = (),
    jira_issues: Sequence[str] = (),
) -> Standup:
    """
    Record a standup as IN_PROGRESS.

    The unique (user, date) constraint rejects a second submission for the
    same day, even under concurrency.

    Raises:
        StandupAlreadySubmittedError: A standup exists for (user, date).
    """
    try:
        with transaction.atomic():
            return Standup.objects.create(
                user=user,
                standup_date=standup_date,
                yesterday_work=yesterday,
                today_plan=today,
                blockers=normalize_blockers(blockers),
                github_commits=list(github_commits),
                jira_issues=list(jira_issues),
                status=Standup.Status.IN_PROGRESS,
            )
    except IntegrityError as e:
        raise StandupAlreadySubmittedError("You've already submitted your standup for today.") from e


def complete_standup(standup: Standup) -> Standup:
    """
    Attach an AI summary and mark the standup COMPLETED.

    The summary is best-effort: without one the standup is still
    completed. Call this outside any long-lived transaction, since the
    AI provider may take up to AI_TIMEOUT_SECONDS.
    """
    summary = generate_summary(
        standup.yesterday_work,
        standup.today_plan,
        standup.blockers,
        commits=list(standup.github_commits),
        issues=list(standup.jira_issues),
        events=[],
    )

    standup.ai_summary = summary or ""
    standup.transition_to(Standup.Status.COMPLETED)
    standup.submitted_at = timezone.now()
    standup.save(update_fields=["ai_summary", "status", "submitted_at", "updated_at"])

    logger.info(
        "standup_submitted",
        standup_id=standup.id,
        user_id=standup.user_id,
        standup_date=standup.standup_date.isoformat(),
        has_summary=bool(summary),
    )
    return standup
