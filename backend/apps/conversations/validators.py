"""
Field validators for conversation steps.

A validator receives the raw message text and the data collected so far,
and returns the value to store. It raises FieldValidationError with a
message meant for the chat user when the answer is unusable; the engine
then repeats the question without changing the session.
"""

import re
from collections.abc import Callable
from typing import Any

from django.core.exceptions import ValidationError
from django.core.validators import URLValidator, validate_email

from apps.core.url_validation import SSRFError, validate_outbound_url

Validator = Callable[[str, dict[str, Any]], Any]

AUTO_KEYWORD = "auto"

_DOMAIN_RE = re.compile(r"^(?=.{1,253}$)(?!-)[a-z0-9-]{1,63}(?<!-)(\.(?!-)[a-z0-9-]{1,63}(?<!-))+$")
_GITHUB_LOGIN_RE = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")
_url_validator = URLValidator(schemes=["http", "https"])


class FieldValidationError(ValueError):
    """The answer to a conversation question is not acceptable."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def required_text(max_length: int = 255) -> Validator:
    def validate(text: str, data: dict[str, Any]) -> str:
        value = text.strip()
        if not value:
            raise FieldValidationError("This answer can't be empty.")
        if len(value) > max_length:
            raise FieldValidationError(f"Please keep it under {max_length} characters.")
        return value

    return validate


def email(text: str, data: dict[str, Any]) -> str:
    value = text.strip().lower()
    try:
        validate_email(value)
    except ValidationError as e:
        raise FieldValidationError(f"'{text.strip()}' doesn't look like an email address.") from e
    return value


def domain(text: str, data: dict[str, Any]) -> str:
    value = text.strip().lower().removeprefix("@")
    if not _DOMAIN_RE.match(value):
        raise FieldValidationError(f"'{text.strip()}' doesn't look like a domain. Example: _acme.com_")
    return value


def http_url(text: str, data: dict[str, Any]) -> str:
    """An http(s) URL the server may call later, e.g. a Jira site."""
    value = text.strip().rstrip("/")
    try:
        _url_validator(value)
        validate_outbound_url(value, resolve_dns=False)
    except (ValidationError, SSRFError, ValueError) as e:
        raise FieldValidationError(
            "Please send a public site URL starting with https://, e.g. _https://acme.atlassian.net_"
        ) from e
    return value


def github_login(text: str, data: dict[str, Any]) -> str:
    value = text.strip().removeprefix("@")
    if not _GITHUB_LOGIN_RE.match(value):
        raise FieldValidationError(f"'{text.strip()}' isn't a valid GitHub username.")
    return value


def mention(text: str, data: dict[str, Any]) -> str:
    """A chat mention like '@Jane Doe' becomes 'Jane Doe'."""
    value = text.strip().replace("@", "").strip()
    if not value:
        raise FieldValidationError("Please mention the user, e.g. _@JohnDoe_.")
    return value[:255]


def yesterday_work(text: str, data: dict[str, Any]) -> str:
    """Free text, or 'auto' to reuse the fetched commits and issues."""
    value = text.strip()
    if value.lower() != AUTO_KEYWORD:
        return required_text(max_length=5000)(value, data)

    lines = [*data.get("github_commits", []), *data.get("jira_issues", [])]
    if not lines:
        raise FieldValidationError("There are no commits or issues to use. Please describe your work instead.")
    return "\n".join(f"• {line}" for line in lines)
