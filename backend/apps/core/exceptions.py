"""
Domain exceptions shared across apps.

Services raise these; the conversation engine turns them into replies.
The message of each exception is written for the chat user.
"""


class DomainError(Exception):
    """Base exception for rejected domain operations."""

    pass


class NotRegisteredError(DomainError):
    """The acting identity has no User record."""

    pass


class PermissionDeniedError(DomainError):
    """The actor lacks the role or scope for the operation."""

    pass


class ConflictError(DomainError):
    """A uniqueness rule would be violated (duplicate name, identity, email...)."""

    pass


class InvalidTransitionError(DomainError):
    """A status change is not allowed from the current status."""

    pass


class StandupAlreadySubmittedError(ConflictError):
    """A standup already exists for this user and date."""

    pass
