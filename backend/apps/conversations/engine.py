"""
Conversation engine.

Advances an active conversation by one message: validates the answer to
the pending question, stores it, and asks the next question or runs the
flow's operation. Which question is pending is read from the flow table
by (state, step), never inferred from the data collected so far.

The session always returns to IDLE once a flow's operation has been
attempted, whether it succeeded or not.

Work that calls slow collaborators (the AI summary) is not done while
the session row is locked. Such a step returns a Followup, which the
router runs after the lock is released.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from django.db import transaction

from apps.accounts import services as account_services
from apps.conversations import replies
from apps.conversations.context import ChatContext
from apps.conversations.flows import COMPLETE, FLOWS, Flow, Target, render_prompt
from apps.conversations.models import SessionState
from apps.conversations.sessions import SessionStore
from apps.conversations.validators import FieldValidationError
from apps.core.exceptions import DomainError, NotRegisteredError
from apps.core.logging import get_logger
from apps.integrations.ai import fallback_summary
from apps.organizations.services import register_organization
from apps.standups.models import Standup
from apps.standups.services import complete_standup, create_standup, today_for_standups
from apps.teams.models import Team
from apps.teams.services import create_team

logger = get_logger(__name__)


@dataclass(frozen=True)
class Followup:
    """Work to run once the session lock is released. `run` returns the reply."""

    run: Callable[[], str]
    restart_command: str


Reply = str | Followup
CompletionHandler = Callable[[ChatContext, dict[str, Any]], Reply]


class ConversationEngine:
    def __init__(self, store: SessionStore | None = None, flows: dict[SessionState, Flow] | None = None) -> None:
        self.store = store or SessionStore()
        self.flows = flows or FLOWS
        self._handlers: dict[SessionState, CompletionHandler] = {
            SessionState.REGISTERING_ORG: self._complete_register_org,
            SessionState.CREATING_TEAM: self._complete_create_team,
            SessionState.ADDING_USER: self._complete_add_user,
            SessionState.STANDUP_BLOCKERS: self._complete_standup,
            SessionState.UPDATING_GITHUB: self._complete_update_github,
            SessionState.UPDATING_JIRA: self._complete_update_jira,
        }

    def start(
        self,
        ctx: ChatContext,
        state: SessionState,
        preface: str = "",
        fields: dict[str, Any] | None = None,
    ) -> str:
        """Enter a flow with fresh data and ask its first question."""
        flow = self.flows[state]
        self.store.reset(ctx.identity)
        self.store.set_state(ctx.identity, state)
        for key, value in (fields or {}).items():
            self.store.put_field(ctx.identity, key, value)

        logger.info("conversation_started", **{"chat.state": str(state)})
        return preface + render_prompt(flow.steps[0].prompt, self.store.get_data(ctx.identity))

    def advance(self, ctx: ChatContext) -> Reply:
        """Apply one message to the identity's active conversation and return the reply."""
        session = self.store.get_or_create(ctx.identity)
        flow = self.flows.get(SessionState(session.state))
        if flow is None or session.step >= len(flow.steps):
            logger.warning(
                "conversation_position_unknown",
                **{"chat.state": session.state, "chat.step": session.step},
            )
            self.store.reset(ctx.identity)
            return replies.SOMETHING_WENT_WRONG.format(command=flow.restart_command if flow else "/help")

        keyword = ctx.command_text
        if keyword == replies.CANCEL_KEYWORD:
            self.store.reset(ctx.identity)
            logger.info("conversation_cancelled", **{"chat.state": session.state, "chat.step": session.step})
            return flow.cancelled_reply

        step_index = session.step
        step = flow.steps[step_index]
        try:
            with transaction.atomic():
                if keyword == replies.SKIP_KEYWORD:
                    if not step.skippable:
                        return f"{replies.CANNOT_SKIP}\n\n{render_prompt(step.prompt, session.data)}"
                    target = flow.next_target(step_index, skipped=True)
                else:
                    try:
                        value = step.validator(ctx.text, session.data)
                    except FieldValidationError as e:
                        return (
                            replies.FIELD_INVALID.format(message=e.message)
                            + f"\n\n{render_prompt(step.prompt, session.data)}"
                        )
                    self.store.put_field(ctx.identity, step.field, value)
                    target = flow.next_target(step_index)
                return self._move(ctx, flow, target)
        except Exception:
            logger.exception(
                "conversation_step_failed",
                **{"chat.state": session.state, "chat.step": step_index},
            )
            self.store.reset(ctx.identity)
            return replies.SOMETHING_WENT_WRONG.format(command=flow.restart_command)

    def _move(self, ctx: ChatContext, flow: Flow, target: Target) -> Reply:
        if target is COMPLETE:
            return self._complete(ctx, flow.state)

        if isinstance(target, SessionState):
            self.store.set_state(ctx.identity, target)
            next_step = self.flows[target].steps[0]
        else:
            self.store.move_to_step(ctx.identity, target)
            next_step = flow.steps[target]
        return render_prompt(next_step.prompt, self.store.get_data(ctx.identity))

    def _complete(self, ctx: ChatContext, state: SessionState) -> Reply:
        handler = self._handlers[state]
        data = self.store.get_data(ctx.identity)
        try:
            reply = handler(ctx, data)
            logger.info("conversation_completed", **{"chat.state": str(state)})
            return reply
        except DomainError as e:
            logger.info("conversation_operation_rejected", reason=str(e), **{"chat.state": str(state)})
            return replies.OPERATION_FAILED.format(message=e)
        finally:
            self.store.reset(ctx.identity)

    # Completion handlers

    def _complete_register_org(self, ctx: ChatContext, data: dict[str, Any]) -> str:
        organization = register_organization(
            name=data["org_name"],
            domain=data["domain"],
            creator_identity=ctx.identity,
            creator_name=ctx.display_name,
            creator_email=ctx.email,
        )
        return replies.ORG_CREATED.format(name=organization.name, domain=organization.domain)

    def _complete_create_team(self, ctx: ChatContext, data: dict[str, Any]) -> str:
        team = create_team(
            creator_identity=ctx.identity,
            name=data["team_name"],
            github_organization=data.get("github_org"),
            channel_ref=ctx.channel_ref,
            jira_api_url=data.get("jira_api_url"),
        )
        lead = account_services.get_user(ctx.identity)
        return replies.TEAM_CREATED.format(
            name=team.name,
            github_line=f"GitHub: **{team.github_organization}**\n" if team.github_organization else "",
            jira_line=f"Jira: **{team.jira_api_url}**\n" if team.jira_api_url else "",
            role=lead.role.upper() if lead else "TEAM_LEAD",
        )

    def _complete_add_user(self, ctx: ChatContext, data: dict[str, Any]) -> str:
        team = Team.objects.filter(id=data.get("team_id")).first()
        if team is None:
            raise DomainError("The team no longer exists.")

        github_username = data.get("github_username")
        github_token = data.get("github_token")
        jira_email = data.get("jira_email")
        jira_account_id = data.get("jira_account_id")
        jira_api_token = data.get("jira_api_token")

        with transaction.atomic():
            user = account_services.register_user(
                adder_identity=ctx.identity,
                team=team,
                new_identity=account_services.new_pending_identity(),
                new_name=data["new_user_name"],
                new_email=data["new_user_email"],
            )
            if github_username and github_token:
                account_services.update_github_credentials(user.identity, github_username, github_token)
            if jira_email and jira_account_id and jira_api_token:
                account_services.update_jira_credentials(user.identity, jira_account_id, jira_email, jira_api_token)
            user.refresh_from_db()

        return replies.USER_ADDED.format(
            name=user.name,
            email=user.email,
            team=team.name,
            github_line=f"GitHub: **{user.github_username}** ✅\n" if user.has_github else "",
            jira_line=f"Jira: **{user.jira_email}** ✅\n" if user.has_jira else "",
        )

    def _complete_standup(self, ctx: ChatContext, data: dict[str, Any]) -> Reply:
        user = account_services.get_user(ctx.identity)
        if user is None:
            raise NotRegisteredError("You need to be registered first.")

        standup = create_standup(
            user=user,
            standup_date=today_for_standups(),
            yesterday=data["yesterday"],
            today=data["today"],
            blockers=data.get("blockers"),
            github_commits=data.get("github_commits", []),
            jira_issues=data.get("jira_issues", []),
        )
        return Followup(run=lambda: self._finish_standup(standup.id), restart_command="standup")

    def _finish_standup(self, standup_id: int) -> str:
        standup = complete_standup(Standup.objects.get(id=standup_id))
        if standup.ai_summary:
            title, summary = "AI Summary", standup.ai_summary
        else:
            title = "Summary"
            summary = fallback_summary(standup.yesterday_work, standup.today_plan, standup.blockers)
        return replies.STANDUP_SUBMITTED.format(summary_title=title, summary=summary)

    def _complete_update_github(self, ctx: ChatContext, data: dict[str, Any]) -> str:
        user = account_services.update_github_credentials(ctx.identity, data["github_username"], data["github_token"])
        return replies.GITHUB_UPDATED.format(username=user.github_username)

    def _complete_update_jira(self, ctx: ChatContext, data: dict[str, Any]) -> str:
        user = account_services.update_jira_credentials(
            ctx.identity, data["jira_account_id"], data["jira_email"], data["jira_api_token"]
        )
        return replies.JIRA_UPDATED.format(email=user.jira_email)
