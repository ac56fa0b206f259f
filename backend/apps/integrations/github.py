"""
GitHub client for fetching a user's recent commits.

Best-effort: any failure yields an empty list so a standup prompt is
never blocked by GitHub being slow or unreachable.
"""

import logging
from datetime import UTC, datetime, timedelta

import httpx
from django.conf import settings

logger = logging.getLogger(__name__)

PUSH_EVENT = "PushEvent"
LOOKBACK = timedelta(hours=24)


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def fetch_recent_commits(username: str, token: str | None = None) -> list[str]:
    """
    Fetch commits pushed by a user in the last 24 hours.

    Reads the user's public event stream and keeps PushEvents.

    Returns:
        Lines formatted as "<repo>: <first line of commit message>",
        newest first, at most GITHUB_MAX_COMMITS.
    """
    if not username:
        return []

    headers = {"Accept": "application/vnd.github+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"

    try:
        response = httpx.get(
            f"{settings.GITHUB_API_URL}/users/{username}/events",
            headers=headers,
            params={"per_page": 100},
            timeout=settings.COLLABORATOR_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        events = response.json()
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
        logger.warning("GitHub events fetch failed for %s: %s", username, e)
        return []
    except ValueError:
        logger.warning("GitHub returned a non-JSON body for %s", username)
        return []

    if not isinstance(events, list):
        return []

    limit = settings.GITHUB_MAX_COMMITS
    cutoff = datetime.now(UTC) - LOOKBACK
    commits: list[str] = []
    try:
        for event in events:
            if event.get("type") != PUSH_EVENT:
                continue
            if _parse_timestamp(event["created_at"]) < cutoff:
                continue
            repo_name = event.get("repo", {}).get("name", "unknown")
            for commit in event.get("payload", {}).get("commits", []):
                message = (commit.get("message") or "").splitlines()
                commits.append(f"{repo_name}: {message[0] if message else ''}")
                if len(commits) >= limit:
                    return commits
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Unexpected GitHub event payload for %s: %s", username, e)

    logger.info("Fetched %d GitHub commits for %s", len(commits), username)
    return commits
