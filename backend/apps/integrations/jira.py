"""
Jira client for fetching a user's active issues.

Best-effort: any failure yields an empty list. The site URL comes from
team settings typed in chat, so it is checked against SSRF targets
before credentials are sent to it.
"""

import logging

import httpx
from django.conf import settings

from apps.core.url_validation import SSRFError, validate_outbound_url

logger = logging.getLogger(__name__)

ACTIVE_ISSUES_JQL = "assignee = {assignee} AND status in ('In Progress','To Do','Open') ORDER BY updated DESC"


def jql_string(value: str) -> str:
    """Quote a value as a JQL string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_active_issues_jql(account_id: str) -> str:
    return ACTIVE_ISSUES_JQL.format(assignee=jql_string(account_id))


def fetch_active_issues(account_id: str, base_url: str, email: str, token: str) -> list[str]:
    """
    Fetch open issues assigned to a Jira account.

    Args:
        account_id: Jira account id of the assignee
        base_url: Jira site URL, e.g. 'https://acme.atlassian.net'
        email: Email used for basic auth
        token: Jira API token used for basic auth

    Returns:
        Lines formatted as "[KEY] summary - status", at most JIRA_MAX_ISSUES.
    """
    if not (account_id and base_url and email and token):
        return []

    try:
        validate_outbound_url(base_url, resolve_dns=settings.OUTBOUND_URL_RESOLVE_DNS)
    except SSRFError as e:
        logger.warning("Refusing Jira request to %s: %s", base_url, e)
        return []

    try:
        response = httpx.get(
            f"{base_url.rstrip('/')}/rest/api/3/search",
            params={
                "jql": build_active_issues_jql(account_id),
                "maxResults": settings.JIRA_MAX_ISSUES,
                "fields": "summary,status,priority",
            },
            auth=(email, token),
            headers={"Accept": "application/json"},
            timeout=settings.COLLABORATOR_TIMEOUT_SECONDS,
            follow_redirects=False,
        )
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as e:
        logger.warning("Jira issue search failed for account %s: %s", account_id, e)
        return []
    except ValueError:
        logger.warning("Jira returned a non-JSON body for account %s", account_id)
        return []

    issues: list[str] = []
    try:
        for issue in payload.get("issues", []):
            fields = issue["fields"]
            issues.append(f"[{issue['key']}] {fields['summary']} - {fields['status']['name']}")
    except (KeyError, TypeError, AttributeError) as e:
        logger.warning("Unexpected Jira search payload for account %s: %s", account_id, e)

    logger.info("Fetched %d Jira issues for account %s", len(issues), account_id)
    return issues[: settings.JIRA_MAX_ISSUES]
