"""
Declarative conversation flows.

Each multi-step conversation is a Flow: an ordered tuple of Steps, one
question per step. A Step names the field its answer is stored under,
the validator for the answer, and where the conversation goes next,
either after an answer (`next`) or after "skip" (`on_skip`). A target is

- an int: index of another step in the same flow,
- a SessionState: the first step of another flow (standup chains three),
- COMPLETE: run the flow's operation and return to IDLE.

`next=None` means "the following step, or COMPLETE after the last one";
`on_skip=None` means "same as next".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from apps.conversations import replies, validators
from apps.conversations.models import SessionState
from apps.conversations.validators import Validator


class FlowEnd(Enum):
    COMPLETE = "complete"


COMPLETE = FlowEnd.COMPLETE

Target = int | SessionState | FlowEnd


class _BlankMissing(dict):
    def __missing__(self, key: str) -> str:
        return ""


def render_prompt(prompt: str, data: dict[str, Any]) -> str:
    """Fill {field} placeholders from collected data; unknown fields render empty."""
    return prompt.format_map(_BlankMissing(data))


@dataclass(frozen=True)
class Step:
    field: str
    prompt: str
    validator: Validator = validators.required_text()
    skippable: bool = False
    next: Target | None = None
    on_skip: Target | None = None


@dataclass(frozen=True)
class Flow:
    state: SessionState
    steps: tuple[Step, ...]
    restart_command: str
    cancelled_reply: str

    def next_target(self, index: int, skipped: bool = False) -> Target:
        step = self.steps[index]
        if skipped and step.on_skip is not None:
            return step.on_skip
        if step.next is not None:
            return step.next
        return index + 1 if index + 1 < len(self.steps) else COMPLETE


SKIP_HINT = "(Type **skip** {reason}, or **cancel** to abort)"
CANCEL_HINT = "(Type **cancel** to abort)"

REGISTER_ORG = Flow(
    state=SessionState.REGISTERING_ORG,
    restart_command="/register-org",
    cancelled_reply=replies.ORG_REGISTRATION_CANCELLED,
    steps=(
        Step(
            field="org_name",
            prompt="What is your organization name?\n\nExample: _TechCorp_, _Acme Inc_, _DevTeam_",
            validator=validators.required_text(max_length=100),
        ),
        Step(
            field="domain",
            prompt=f"Great! What is your organization's email domain?\n\nExample: _techcorp.com_, _acme.io_\n\n{CANCEL_HINT}",
            validator=validators.domain,
        ),
    ),
)

CREATE_TEAM = Flow(
    state=SessionState.CREATING_TEAM,
    restart_command="/create-team",
    cancelled_reply=replies.TEAM_CREATION_CANCELLED,
    steps=(
        Step(
            field="team_name",
            prompt="What is the team name?\n\nExample: _Backend Team_, _Frontend Team_, _DevOps_",
            validator=validators.required_text(max_length=100),
        ),
        Step(
            field="github_org",
            prompt="What is your GitHub organization name?\n\nExample: _microsoft_, _google_\n\n"
            + SKIP_HINT.format(reason="if you don't have one"),
            skippable=True,
        ),
        Step(
            field="jira_api_url",
            prompt="What is your Jira site URL?\n\nExample: _https://acme.atlassian.net_\n\n"
            + SKIP_HINT.format(reason="if your team doesn't use Jira"),
            validator=validators.http_url,
            skippable=True,
        ),
    ),
)

ADD_USER = Flow(
    state=SessionState.ADDING_USER,
    restart_command="/add-user",
    cancelled_reply=replies.USER_ADDITION_CANCELLED,
    steps=(
        Step(
            field="new_user_name",
            prompt=f"Please mention the user you want to add.\n\nExample: _@JohnDoe_\n\n{CANCEL_HINT}",
            validator=validators.mention,
        ),
        Step(
            field="new_user_email",
            prompt="What is {new_user_name}'s email address?",
            validator=validators.email,
        ),
        Step(
            field="github_username",
            prompt="What is their GitHub username?\n\n" + SKIP_HINT.format(reason="if they don't have one"),
            validator=validators.github_login,
            skippable=True,
            on_skip=4,
        ),
        Step(
            field="github_token",
            prompt="What is their GitHub Personal Access Token?\n\n"
            "_This is needed to auto-fetch their commits during standup._\n\n"
            + SKIP_HINT.format(reason="to configure later"),
            skippable=True,
        ),
        Step(
            field="jira_email",
            prompt="What is their Jira email?\n\n" + SKIP_HINT.format(reason="if they don't use Jira"),
            validator=validators.email,
            skippable=True,
            on_skip=COMPLETE,
        ),
        Step(
            field="jira_account_id",
            prompt="What is their Jira Account ID?\n\n" + SKIP_HINT.format(reason="to configure later"),
            skippable=True,
            on_skip=COMPLETE,
        ),
        Step(
            field="jira_api_token",
            prompt="What is their Jira API Token?\n\n" + SKIP_HINT.format(reason="to configure later"),
            skippable=True,
        ),
    ),
)

STANDUP_YESTERDAY = Flow(
    state=SessionState.STANDUP_YESTERDAY,
    restart_command="standup",
    cancelled_reply=replies.STANDUP_CANCELLED,
    steps=(
        Step(
            field="yesterday",
            prompt="\n**What did you accomplish yesterday?**\n\n"
            "_Describe your work, or type **auto** to use the commits/issues above._",
            validator=validators.yesterday_work,
            next=SessionState.STANDUP_TODAY,
        ),
    ),
)

STANDUP_TODAY = Flow(
    state=SessionState.STANDUP_TODAY,
    restart_command="standup",
    cancelled_reply=replies.STANDUP_CANCELLED,
    steps=(
        Step(
            field="today",
            prompt="**What are you planning to do today?**",
            validator=validators.required_text(max_length=5000),
            next=SessionState.STANDUP_BLOCKERS,
        ),
    ),
)

STANDUP_BLOCKERS = Flow(
    state=SessionState.STANDUP_BLOCKERS,
    restart_command="standup",
    cancelled_reply=replies.STANDUP_CANCELLED,
    steps=(
        Step(
            field="blockers",
            prompt="**Any blockers or challenges?**\n\n(Type **none** if no blockers)",
            validator=validators.required_text(max_length=5000),
            skippable=True,
        ),
    ),
)

UPDATE_GITHUB = Flow(
    state=SessionState.UPDATING_GITHUB,
    restart_command="/update-github",
    cancelled_reply=replies.GITHUB_UPDATE_CANCELLED,
    steps=(
        Step(
            field="github_username",
            prompt=f"What is your GitHub username?\n\n{CANCEL_HINT}",
            validator=validators.github_login,
        ),
        Step(
            field="github_token",
            prompt="What is your GitHub Personal Access Token?\n\n"
            "_It needs read access to your events so commits can be attached to standups._",
        ),
    ),
)

UPDATE_JIRA = Flow(
    state=SessionState.UPDATING_JIRA,
    restart_command="/update-jira",
    cancelled_reply=replies.JIRA_UPDATE_CANCELLED,
    steps=(
        Step(
            field="jira_email",
            prompt=f"What is your Jira email?\n\n{CANCEL_HINT}",
            validator=validators.email,
        ),
        Step(
            field="jira_account_id",
            prompt="What is your Jira Account ID?",
        ),
        Step(
            field="jira_api_token",
            prompt="What is your Jira API Token?",
        ),
    ),
)

FLOWS: dict[SessionState, Flow] = {
    flow.state: flow
    for flow in (
        REGISTER_ORG,
        CREATE_TEAM,
        ADD_USER,
        STANDUP_YESTERDAY,
        STANDUP_TODAY,
        STANDUP_BLOCKERS,
        UPDATE_GITHUB,
        UPDATE_JIRA,
    )
}
