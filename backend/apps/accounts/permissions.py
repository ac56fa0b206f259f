"""
Permission checks.

Pure functions over (actor, target). An unknown actor (None) is denied
everything. Organization admins act only within their own organization;
team leads act only on the team whose lead_identity is theirs.
"""

from apps.accounts.constants import Capability
from apps.accounts.models import User
from apps.organizations.models import Organization
from apps.teams.models import Team


def has_capability(user: User | None, capability: Capability) -> bool:
    return user is not None and capability in user.capabilities


def can_create_team(user: User | None, organization: Organization) -> bool:
    return has_capability(user, Capability.MANAGE_ORGANIZATION_TEAMS) and user.organization_id == organization.id


def can_view_org_dashboard(user: User | None, organization: Organization) -> bool:
    return has_capability(user, Capability.VIEW_ORGANIZATION_TEAMS) and user.organization_id == organization.id


def can_manage_team(user: User | None, team: Team) -> bool:
    """Org admins of the team's organization, or the team's own lead."""
    if user is None:
        return False
    if has_capability(user, Capability.MANAGE_ORGANIZATION_TEAMS) and user.organization_id == team.organization_id:
        return True
    return has_capability(user, Capability.MANAGE_LED_TEAM) and team.lead_identity == user.identity


def can_add_user_to_team(user: User | None, team: Team) -> bool:
    return can_manage_team(user, team)


def can_remove_user_from_team(user: User | None, team: Team) -> bool:
    return can_manage_team(user, team)


def can_view_team(user: User | None, team: Team) -> bool:
    """Org admins of the team's organization, or any member of the team."""
    if user is None:
        return False
    if has_capability(user, Capability.VIEW_ORGANIZATION_TEAMS) and user.organization_id == team.organization_id:
        return True
    return has_capability(user, Capability.VIEW_OWN_TEAM) and user.team_id == team.id


def can_submit_standup(user: User | None) -> bool:
    return has_capability(user, Capability.SUBMIT_STANDUP) and user.team_id is not None
