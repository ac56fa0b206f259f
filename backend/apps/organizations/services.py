"""
Organizations services - registration of new organizations.
"""

from django.db import IntegrityError, transaction

from apps.accounts.constants import Role
from apps.accounts.models import User
from apps.core.exceptions import ConflictError
from apps.core.logging import get_logger
from apps.organizations.models import Organization

logger = get_logger(__name__)


def register_organization(
    name: str,
    domain: str,
    creator_identity: str,
    creator_name: str,
    creator_email: str | None = None,
) -> Organization:
    """
    Create an organization and make its creator the first org admin.

    Both records are created in one transaction: either both exist
    afterwards or neither does.

    Raises:
        ConflictError: The name is taken (case-insensitive), the creator
            already belongs to an organization, or the email is taken.
    """
    name = name.strip()
    if Organization.objects.filter(name__iexact=name).exists():
        raise ConflictError(f"Organization '{name}' already exists.")
    if User.objects.filter(identity=creator_identity).exists():
        raise ConflictError("You are already registered with an organization.")
    email = creator_email.strip().lower() if creator_email else None
    if email and User.objects.filter(email__iexact=email).exists():
        raise ConflictError(f"Email {email} is already registered.")

    try:
        with transaction.atomic():
            organization = Organization.objects.create(
                name=name,
                domain=domain,
                created_by_identity=creator_identity,
                created_by_name=creator_name,
            )
            User.objects.create(
                identity=creator_identity,
                name=creator_name,
                email=email,
                role=Role.ORG_ADMIN,
                organization=organization,
            )
    except IntegrityError as e:
        # Concurrent registration won the race
        raise ConflictError(f"Organization '{name}' already exists.") from e

    logger.info(
        "organization_registered",
        organization_id=organization.id,
        creator_identity=creator_identity,
    )
    return organization
