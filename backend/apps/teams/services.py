"""
Teams services - team creation.
"""

from django.db import IntegrityError, transaction

from apps.accounts.constants import Role
from apps.accounts.models import User
from apps.accounts.permissions import can_create_team
from apps.core.exceptions import ConflictError, DomainError, NotRegisteredError, PermissionDeniedError
from apps.core.logging import get_logger
from apps.core.url_validation import SSRFError, validate_outbound_url
from apps.teams.models import Team

logger = get_logger(__name__)


def create_team(
    creator_identity: str,
    name: str,
    github_organization: str | None = None,
    channel_ref: str | None = None,
    jira_api_url: str | None = None,
) -> Team:
    """
    Create a team in the creator's organization.

    The creator becomes the team's lead and a member of it. Their role is
    promoted to team lead unless it is already higher.

    Raises:
        NotRegisteredError: The creator has no User record.
        PermissionDeniedError: The creator cannot manage teams.
        ConflictError: A team with this name exists in the organization.
        DomainError: The Jira site URL points at a private or local host.
    """
    name = name.strip()
    creator = User.objects.select_related("organization").filter(identity=creator_identity).first()
    if creator is None:
        raise NotRegisteredError("You need to register an organization first.")
    if not can_create_team(creator, creator.organization):
        raise PermissionDeniedError("Only organization admins can create teams.")
    if Team.objects.filter(organization=creator.organization, name__iexact=name).exists():
        raise ConflictError(f"Team '{name}' already exists in your organization.")
    if jira_api_url:
        try:
            validate_outbound_url(jira_api_url, resolve_dns=False)
        except SSRFError as e:
            raise DomainError(f"Jira site URL is not allowed: {e}") from e

    try:
        with transaction.atomic():
            team = Team.objects.create(
                organization=creator.organization,
                name=name,
                lead_identity=creator_identity,
                github_organization=github_organization or "",
                jira_api_url=jira_api_url or "",
                channel_ref=channel_ref or "",
            )
            creator.role = Role.promote(creator.role, Role.TEAM_LEAD)
            creator.team = team
            creator.save(update_fields=["role", "team", "updated_at"])
    except IntegrityError as e:
        raise ConflictError(f"Team '{name}' already exists in your organization.") from e

    logger.info(
        "team_created",
        team_id=team.id,
        organization_id=team.organization_id,
        lead_identity=creator_identity,
    )
    return team
