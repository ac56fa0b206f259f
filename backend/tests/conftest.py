"""
Shared pytest fixtures for all tests.

This module provides common fixtures used across multiple test modules.
Individual test modules can override these fixtures if needed.

Factories
---------
Import factories directly from their modules:

    from tests.organizations.factories import OrganizationFactory
    from tests.teams.factories import TeamFactory
    from tests.accounts.factories import UserFactory
    from tests.standups.factories import StandupFactory

Example usage:

    @pytest.mark.django_db
    def test_something(org_admin, make_ctx):
        reply = CommandRouter().route(make_ctx(org_admin.identity, "create team"))
"""

from collections.abc import Callable, Iterator

import pytest
from django.test import Client

from apps.accounts.constants import Role
from apps.accounts.models import User
from apps.conversations.context import ChatContext
from apps.conversations.router import CommandRouter
from apps.conversations.sessions import SessionStore
from apps.core.logging import clear_contextvars
from apps.organizations.models import Organization
from apps.teams.models import Team
from tests.accounts.factories import UserFactory
from tests.organizations.factories import OrganizationFactory
from tests.teams.factories import TeamFactory


@pytest.fixture(autouse=True)
def _clear_log_context() -> Iterator[None]:
    """Keep structlog context from leaking between tests."""
    clear_contextvars()
    yield
    clear_contextvars()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Example:
        def test_health(api_client):
            response = api_client.get("/api/v1/health")
            assert response.status_code == 200
    """
    return Client()


@pytest.fixture
def organization(db) -> Organization:
    return OrganizationFactory.create(name="Acme")


@pytest.fixture
def org_admin(organization: Organization) -> User:
    """Organization admin without a team."""
    return UserFactory.create(
        identity="users/admin",
        name="Ada Admin",
        email="ada@acme.com",
        role=Role.ORG_ADMIN,
        organization=organization,
    )


@pytest.fixture
def team_lead(organization: Organization) -> User:
    return UserFactory.create(
        identity="users/lead",
        name="Lee Lead",
        email="lee@acme.com",
        role=Role.TEAM_LEAD,
        organization=organization,
    )


@pytest.fixture
def team(organization: Organization, team_lead: User) -> Team:
    """Team led by `team_lead`, who is also a member of it."""
    team = TeamFactory.create(organization=organization, name="Backend", lead_identity=team_lead.identity)
    team_lead.team = team
    team_lead.save(update_fields=["team"])
    return team


@pytest.fixture
def member(team: Team) -> User:
    return UserFactory.create(
        identity="users/member",
        name="Mo Member",
        email="mo@acme.com",
        role=Role.MEMBER,
        organization=team.organization,
        team=team,
    )


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


@pytest.fixture
def router(store: SessionStore) -> CommandRouter:
    return CommandRouter(store=store)


@pytest.fixture
def make_ctx() -> Callable[..., ChatContext]:
    """
    Build a ChatContext for an identity.

    Example:
        ctx = make_ctx("users/1", "register org")
    """

    def _make(
        identity: str,
        text: str,
        display_name: str = "Test User",
        email: str | None = None,
        channel_ref: str | None = None,
    ) -> ChatContext:
        return ChatContext(
            identity=identity,
            display_name=display_name,
            text=text,
            email=email,
            channel_ref=channel_ref,
        )

    return _make


@pytest.fixture
def say(router: CommandRouter, make_ctx: Callable[..., ChatContext]) -> Callable[..., str]:
    """
    Send one message through the router and return the reply.

    Example:
        say("users/1", "register org")
        say("users/1", "Acme")
    """

    def _say(identity: str, text: str, **kwargs) -> str:
        return router.route(make_ctx(identity, text, **kwargs))

    return _say
