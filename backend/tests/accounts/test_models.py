"""
Tests for accounts models and role definitions.
"""

import pytest

from apps.accounts.constants import ROLE_CAPABILITIES, Capability, Role
from apps.accounts.models import PENDING_PREFIX

from .factories import UserFactory


class TestRole:
    """Tests for the role hierarchy."""

    def test_ranks_are_strictly_ordered(self) -> None:
        assert Role.ORG_ADMIN.rank > Role.TEAM_LEAD.rank > Role.MEMBER.rank

    @pytest.mark.parametrize(
        ("current", "target", "expected"),
        [
            (Role.MEMBER, Role.TEAM_LEAD, Role.TEAM_LEAD),
            (Role.TEAM_LEAD, Role.TEAM_LEAD, Role.TEAM_LEAD),
            (Role.ORG_ADMIN, Role.TEAM_LEAD, Role.ORG_ADMIN),
            (Role.TEAM_LEAD, Role.MEMBER, Role.TEAM_LEAD),
        ],
    )
    def test_promote_never_demotes(self, current: Role, target: Role, expected: Role) -> None:
        assert Role.promote(current, target) == expected

    def test_promote_accepts_raw_values(self) -> None:
        assert Role.promote("member", "org_admin") == Role.ORG_ADMIN


class TestCapabilities:
    """Tests for the role to capability mapping."""

    def test_every_role_has_capabilities(self) -> None:
        assert set(ROLE_CAPABILITIES) == set(Role)

    def test_org_admin_has_every_capability(self) -> None:
        assert ROLE_CAPABILITIES[Role.ORG_ADMIN] == frozenset(Capability)

    def test_capabilities_grow_with_rank(self) -> None:
        assert ROLE_CAPABILITIES[Role.MEMBER] < ROLE_CAPABILITIES[Role.TEAM_LEAD] < ROLE_CAPABILITIES[Role.ORG_ADMIN]

    def test_member_cannot_manage_anything(self) -> None:
        member_caps = ROLE_CAPABILITIES[Role.MEMBER]
        assert Capability.MANAGE_LED_TEAM not in member_caps
        assert Capability.MANAGE_ORGANIZATION_TEAMS not in member_caps


@pytest.mark.django_db
class TestUserModel:
    """Tests for User model helpers."""

    def test_pending_identity(self) -> None:
        user = UserFactory.create(identity=f"{PENDING_PREFIX}abc")

        assert user.is_pending

    def test_real_identity_not_pending(self) -> None:
        user = UserFactory.create(identity="users/1")

        assert not user.is_pending

    def test_has_github_requires_username_and_token(self) -> None:
        user = UserFactory.create(github_username="octocat")
        assert not user.has_github

        user.github_token = "ghp_x"
        assert user.has_github

    def test_has_jira_requires_all_three(self) -> None:
        user = UserFactory.create(jira_account_id="acc", jira_email="j@acme.com")
        assert not user.has_jira

        user.jira_api_token = "tok"
        assert user.has_jira

    def test_organization_follows_team(self) -> None:
        from tests.teams.factories import TeamFactory

        team = TeamFactory.create()
        user = UserFactory.create(team=team)

        assert user.organization_id == team.organization_id
