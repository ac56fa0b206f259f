"""
Command router.

Entry point for every inbound chat message. Messages from an identity
with an active conversation go to the ConversationEngine; everything
else is matched against the command table, first match wins.

Each message is applied while holding its identity's session lock.
Collaborator calls (GitHub, Jira, AI) happen in a Followup after the
lock is released, so a slow provider never holds the row lock.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Count, Q

from apps.accounts import permissions
from apps.accounts import services as account_services
from apps.accounts.constants import Capability
from apps.accounts.models import User
from apps.conversations import replies
from apps.conversations.context import ChatContext
from apps.conversations.engine import ConversationEngine, Followup, Reply
from apps.conversations.models import SessionState
from apps.conversations.sessions import SessionStore
from apps.core.logging import bind_contextvars, get_logger, unbind_contextvars
from apps.integrations.github import fetch_recent_commits
from apps.integrations.jira import fetch_active_issues
from apps.standups.models import Standup
from apps.standups.services import has_submitted, today_for_standups

logger = get_logger(__name__)

CommandHandler = Callable[[ChatContext, User | None], Reply]


def _enrichment(source: str, fetch: Callable[..., list[str]], *args: str | None) -> list[str]:
    """Call a best-effort collaborator; any failure degrades to no lines."""
    try:
        return list(fetch(*args))
    except Exception:
        logger.warning("standup_enrichment_failed", source=source, exc_info=True)
        return []


def _command(*phrases: str, slash: str) -> re.Pattern[str]:
    alternatives = [re.escape(slash) + r"\b.*", *(re.escape(p) for p in phrases)]
    return re.compile("|".join(f"(?:{a})" for a in alternatives), re.DOTALL)


_RE_REGISTER_ORG = _command("register org", "register organization", slash="/register-org")
_RE_CREATE_TEAM = _command("create team", slash="/create-team")
_RE_ADD_USER = _command("add user", slash="/add-user")
_RE_STANDUP = _command("standup", slash="/standup")
_RE_UPDATE_GITHUB = _command("update github", slash="/update-github")
_RE_UPDATE_JIRA = _command("update jira", slash="/update-jira")
_RE_HELP = _command("help", slash="/help")
_RE_STATUS = _command("status", "my status", slash="/status")
_RE_TEAM = _command("team", "my team", slash="/team")
_RE_ORG = _command("org", "organization", "org dashboard", slash="/org")
_RE_CANCEL = _command("cancel", slash="/cancel")


@dataclass(frozen=True)
class Command:
    name: str
    pattern: re.Pattern[str]
    handler: CommandHandler


class CommandRouter:
    """Routes chat messages to the conversation engine or a top-level command."""

    def __init__(self, store: SessionStore | None = None, engine: ConversationEngine | None = None) -> None:
        self.store = store or SessionStore()
        self.engine = engine or ConversationEngine(self.store)
        self.commands: tuple[Command, ...] = (
            Command("/register-org", _RE_REGISTER_ORG, self._register_org),
            Command("/create-team", _RE_CREATE_TEAM, self._create_team),
            Command("/add-user", _RE_ADD_USER, self._add_user),
            Command("standup", _RE_STANDUP, self._standup),
            Command("/update-github", _RE_UPDATE_GITHUB, self._update_github),
            Command("/update-jira", _RE_UPDATE_JIRA, self._update_jira),
            Command("/help", _RE_HELP, self._help),
            Command("/status", _RE_STATUS, self._status),
            Command("/team", _RE_TEAM, self._team),
            Command("/org", _RE_ORG, self._org),
            Command("/cancel", _RE_CANCEL, self._cancel),
        )

    def route(self, ctx: ChatContext) -> str:
        """Process one message and return exactly one reply."""
        bind_contextvars(**{"chat.identity": ctx.identity})
        try:
            if ctx.email:
                account_services.claim_pending_identity(ctx.identity, ctx.email)

            with self.store.locked(ctx.identity) as session:
                result = self.engine.advance(ctx) if session.is_active else self.dispatch(ctx)

            if isinstance(result, Followup):
                return self._run_followup(result)
            return result
        finally:
            unbind_contextvars("chat.identity")

    def _run_followup(self, followup: Followup) -> str:
        try:
            return followup.run()
        except Exception:
            logger.exception("command_followup_failed", command=followup.restart_command)
            return replies.SOMETHING_WENT_WRONG.format(command=followup.restart_command)

    def dispatch(self, ctx: ChatContext) -> Reply:
        """Match an idle identity's message against the command table."""
        text = ctx.command_text
        for command in self.commands:
            if not command.pattern.fullmatch(text):
                continue

            logger.info("command_received", command=command.name)
            user = account_services.get_user(ctx.identity)
            try:
                with transaction.atomic():
                    return command.handler(ctx, user)
            except Exception:
                logger.exception("command_failed", command=command.name)
                self.store.reset(ctx.identity)
                return replies.SOMETHING_WENT_WRONG.format(command=command.name)

        return replies.UNKNOWN_COMMAND

    # Flow starters

    def _register_org(self, ctx: ChatContext, user: User | None) -> str:
        if user is not None:
            return replies.ALREADY_REGISTERED.format(organization=user.organization.name)
        return self.engine.start(ctx, SessionState.REGISTERING_ORG, preface=replies.REGISTER_ORG_INTRO)

    def _create_team(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.REGISTER_FIRST
        if not permissions.can_create_team(user, user.organization):
            return replies.ONLY_ADMINS_CREATE_TEAMS
        return self.engine.start(ctx, SessionState.CREATING_TEAM, preface=replies.CREATE_TEAM_INTRO)

    def _add_user(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.REGISTER_FIRST
        if user.team is None:
            return replies.TEAM_REQUIRED_TO_ADD
        if not permissions.can_add_user_to_team(user, user.team):
            return replies.ONLY_LEADS_ADD_USERS
        return self.engine.start(
            ctx,
            SessionState.ADDING_USER,
            preface=replies.ADD_USER_INTRO,
            fields={"team_id": user.team.id},
        )

    def _standup(self, ctx: ChatContext, user: User | None) -> Reply:
        if user is None:
            return replies.REGISTER_FIRST
        if not permissions.can_submit_standup(user):
            return replies.TEAM_REQUIRED_FOR_STANDUP
        if has_submitted(user, today_for_standups()):
            return replies.STANDUP_ALREADY_SUBMITTED
        return Followup(run=lambda: self._start_standup(ctx, user), restart_command="standup")

    def _start_standup(self, ctx: ChatContext, user: User) -> str:
        """Fetch commits and issues, then open the standup under the session lock."""
        commits: list[str] = []
        if user.github_username:
            commits = _enrichment("github", fetch_recent_commits, user.github_username, user.github_token or None)
        issues: list[str] = []
        if user.has_jira and user.team.jira_api_url:
            issues = _enrichment(
                "jira",
                fetch_active_issues,
                user.jira_account_id,
                user.team.jira_api_url,
                user.jira_email,
                user.jira_api_token,
            )

        preface = replies.STANDUP_INTRO
        if commits:
            preface += replies.STANDUP_COMMITS_HEADER + "".join(f"{line}\n" for line in commits)
        if issues:
            preface += replies.STANDUP_ISSUES_HEADER + "".join(f"{line}\n" for line in issues)

        with self.store.locked(ctx.identity) as session:
            # Another message may have arrived while collaborators were called
            if session.is_active:
                return replies.CONVERSATION_IN_PROGRESS
            if has_submitted(user, today_for_standups()):
                return replies.STANDUP_ALREADY_SUBMITTED
            return self.engine.start(
                ctx,
                SessionState.STANDUP_YESTERDAY,
                preface=preface,
                fields={"github_commits": commits, "jira_issues": issues},
            )

    def _update_github(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.NOT_REGISTERED
        return self.engine.start(ctx, SessionState.UPDATING_GITHUB, preface=replies.UPDATE_GITHUB_INTRO)

    def _update_jira(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.NOT_REGISTERED
        return self.engine.start(ctx, SessionState.UPDATING_JIRA, preface=replies.UPDATE_JIRA_INTRO)

    # Informational commands

    def _help(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return (
                "**Standup Bot** 🤖\n\n"
                "**Getting Started:**\n"
                "• **/register-org** - Register your organization\n\n"
                "Once registered, you can create teams, add users, and start daily standups!"
            )

        lines = [
            "**Standup Bot** 🤖\n",
            f"Organization: **{user.organization.name}**",
            f"Your Role: **{user.role.upper()}**\n",
            "**Available Commands:**",
        ]
        if permissions.has_capability(user, Capability.MANAGE_ORGANIZATION_TEAMS):
            lines.append("• **/create-team** - Create new team")
            lines.append("• **/org** - Organization dashboard")
        if user.team is not None:
            if permissions.can_add_user_to_team(user, user.team):
                lines.append("• **/add-user** - Add team member")
            lines.append("• **standup** - Submit daily standup")
            lines.append("• **/team** - Today's team standups")
        lines.append("• **/status** - View your profile")
        lines.append("• **/update-github** - Connect GitHub")
        lines.append("• **/update-jira** - Connect Jira")
        lines.append("• **/help** - Show this message")
        lines.append("\nType **cancel** at any time to abort a conversation.")
        return "\n".join(lines)

    def _status(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.NOT_REGISTERED

        status = "**Your Profile** 👤\n\n"
        status += f"Name: **{user.name}**\n"
        status += f"Email: **{user.email or '-'}**\n"
        status += f"Organization: **{user.organization.name}**\n"
        status += f"Role: **{user.role.upper()}**\n"
        if user.team is not None:
            status += f"Team: **{user.team.name}**\n"
        if user.github_username:
            status += f"GitHub: **{user.github_username}** ✅\n"
        else:
            status += "GitHub: ❌ _Not configured_\n"
        if user.jira_email:
            status += f"Jira: **{user.jira_email}** ✅\n"
        else:
            status += "Jira: ❌ _Not configured_\n"
        if user.team is not None:
            submitted = has_submitted(user, today_for_standups())
            status += f"Today's standup: {'✅ submitted' if submitted else '⏳ pending'}\n"
        return status

    def _team(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.NOT_REGISTERED
        team = user.team
        if team is None:
            return replies.TEAM_REQUIRED_TO_VIEW
        if not permissions.can_view_team(user, team):
            return replies.CANNOT_VIEW_TEAM

        today = today_for_standups()
        submitted_ids = set(
            Standup.objects.filter(
                user__team=team,
                standup_date=today,
                status=Standup.Status.COMPLETED,
            ).values_list("user_id", flat=True)
        )
        members = list(team.members.order_by("name"))

        lines = [
            f"👥 **Team {team.name}**\n",
            f"Standups today ({today.isoformat()}): **{len(submitted_ids)}/{len(members)}**\n",
        ]
        for member in members:
            mark = "✅" if member.id in submitted_ids else "⏳"
            lead = " 🎖️" if member.identity == team.lead_identity else ""
            pending = " _(hasn't messaged me yet)_" if member.is_pending else ""
            lines.append(f"{mark} {member.name}{lead}{pending}")
        return "\n".join(lines)

    def _org(self, ctx: ChatContext, user: User | None) -> str:
        if user is None:
            return replies.NOT_REGISTERED
        organization = user.organization
        if not permissions.can_view_org_dashboard(user, organization):
            return replies.ONLY_ADMINS_VIEW_ORG

        today = today_for_standups()
        teams = organization.teams.annotate(
            member_count=Count("members", distinct=True),
            submitted_today=Count(
                "members__standups",
                filter=Q(
                    members__standups__standup_date=today,
                    members__standups__status=Standup.Status.COMPLETED,
                ),
                distinct=True,
            ),
        ).order_by("name")

        lines = [
            f"🏢 **{organization.name}**\n",
            f"Members: **{organization.users.count()}**",
            f"Teams: **{len(teams)}**\n",
        ]
        for team in teams:
            lines.append(f"• **{team.name}**: {team.submitted_today}/{team.member_count} standups today")
        if not teams:
            lines.append("No teams yet. Create one with **/create-team**.")
        return "\n".join(lines)

    def _cancel(self, ctx: ChatContext, user: User | None) -> str:
        return replies.NOTHING_TO_CANCEL
