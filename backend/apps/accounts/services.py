"""
Accounts services - user registration and credential management.
"""

import uuid

from django.db import IntegrityError, transaction

from apps.accounts.constants import Role
from apps.accounts.models import PENDING_PREFIX, User
from apps.accounts.permissions import can_add_user_to_team
from apps.core.exceptions import ConflictError, NotRegisteredError, PermissionDeniedError
from apps.core.logging import get_logger
from apps.teams.models import Team

logger = get_logger(__name__)


def get_user(identity: str) -> User | None:
    """Look up a user by chat identity, with organization and team joined."""
    return User.objects.select_related("organization", "team").filter(identity=identity).first()


def is_registered(identity: str) -> bool:
    return User.objects.filter(identity=identity).exists()


def new_pending_identity() -> str:
    """Placeholder identity for a user added before they message the bot."""
    return f"{PENDING_PREFIX}{uuid.uuid4().hex}"


def register_user(
    adder_identity: str,
    team: Team,
    new_identity: str,
    new_name: str,
    new_email: str | None = None,
) -> User:
    """
    Add a member to a team.

    The adder must be allowed to manage the team. The new identity and
    email must not already be registered anywhere.

    Raises:
        NotRegisteredError: The adder has no User record.
        PermissionDeniedError: The adder cannot manage the team.
        ConflictError: Identity or email already registered.
    """
    adder = get_user(adder_identity)
    if adder is None:
        raise NotRegisteredError("You need to be registered first.")
    if not can_add_user_to_team(adder, team):
        raise PermissionDeniedError("Only the team lead or an organization admin can add users to this team.")

    if User.objects.filter(identity=new_identity).exists():
        raise ConflictError("User is already registered.")
    email = new_email.strip().lower() if new_email else None
    if email and User.objects.filter(email__iexact=email).exists():
        raise ConflictError(f"Email {email} is already registered.")

    try:
        with transaction.atomic():
            user = User.objects.create(
                identity=new_identity,
                name=new_name,
                email=email,
                role=Role.MEMBER,
                organization_id=team.organization_id,
                team=team,
            )
    except IntegrityError as e:
        # Concurrent registration won the race
        raise ConflictError("User is already registered.") from e

    logger.info(
        "user_registered",
        user_id=user.id,
        team_id=team.id,
        organization_id=team.organization_id,
        added_by=adder_identity,
        pending=user.is_pending,
    )
    return user


def update_github_credentials(identity: str, username: str, token: str) -> User:
    """Store the caller's own GitHub username and token."""
    user = get_user(identity)
    if user is None:
        raise NotRegisteredError("You need to be registered first.")

    user.github_username = username
    user.github_token = token
    user.save(update_fields=["github_username", "github_token", "updated_at"])
    logger.info("github_credentials_updated", user_id=user.id)
    return user


def update_jira_credentials(identity: str, account_id: str, email: str, token: str) -> User:
    """Store the caller's own Jira account id, email and API token."""
    user = get_user(identity)
    if user is None:
        raise NotRegisteredError("You need to be registered first.")

    user.jira_account_id = account_id
    user.jira_email = email
    user.jira_api_token = token
    user.save(update_fields=["jira_account_id", "jira_email", "jira_api_token", "updated_at"])
    logger.info("jira_credentials_updated", user_id=user.id)
    return user


def claim_pending_identity(identity: str, email: str | None) -> User | None:
    """
    Bind a pending user record to the real chat identity.

    Called before routing when a message arrives from an unregistered
    identity. Matches on email; returns the claimed user, or None when
    there is nothing to claim.
    """
    if not email or is_registered(identity):
        return None

    with transaction.atomic():
        user = (
            User.objects.select_for_update()
            .filter(identity__startswith=PENDING_PREFIX, email__iexact=email.strip())
            .first()
        )
        if user is None:
            return None
        user.identity = identity
        user.save(update_fields=["identity", "updated_at"])

    logger.info("pending_identity_claimed", user_id=user.id)
    return user
