"""
Roles and capabilities.

A user holds exactly one role. Permission checks go through capabilities
so that scope rules (same organization, led team, own team) live in
apps.accounts.permissions rather than in role comparisons scattered
across services.
"""

from enum import StrEnum

from django.db import models


class Role(models.TextChoices):
    """User role within an organization, ordered by authority."""

    ORG_ADMIN = "org_admin", "Organization admin"
    TEAM_LEAD = "team_lead", "Team lead"
    MEMBER = "member", "Member"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]

    @classmethod
    def promote(cls, current: str, target: str) -> "Role":
        """Return the higher of two roles. A promotion never demotes."""
        current_role, target_role = cls(current), cls(target)
        return current_role if current_role.rank >= target_role.rank else target_role


_ROLE_RANK = {
    Role.MEMBER: 0,
    Role.TEAM_LEAD: 1,
    Role.ORG_ADMIN: 2,
}


class Capability(StrEnum):
    MANAGE_ORGANIZATION_TEAMS = "manage_organization_teams"
    VIEW_ORGANIZATION_TEAMS = "view_organization_teams"
    MANAGE_LED_TEAM = "manage_led_team"
    VIEW_OWN_TEAM = "view_own_team"
    SUBMIT_STANDUP = "submit_standup"


ROLE_CAPABILITIES: dict[str, frozenset[Capability]] = {
    Role.ORG_ADMIN: frozenset(Capability),
    Role.TEAM_LEAD: frozenset(
        {
            Capability.MANAGE_LED_TEAM,
            Capability.VIEW_OWN_TEAM,
            Capability.SUBMIT_STANDUP,
        }
    ),
    Role.MEMBER: frozenset(
        {
            Capability.VIEW_OWN_TEAM,
            Capability.SUBMIT_STANDUP,
        }
    ),
}
