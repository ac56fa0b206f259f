"""
Session store - conversation state per chat identity.

Every routed message runs inside `SessionStore.locked(identity)`, which
holds a row lock on that identity's session for the duration of the
transaction. Two overlapping messages from the same person are therefore
applied one after the other, across processes. Different identities never
contend.

The expiry sweep skips rows that are currently locked, so it never
deletes a session in the middle of a mutation.
"""

import datetime
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from django.db import transaction
from django.utils import timezone

from apps.conversations.models import ConversationSession, SessionState
from apps.core.logging import get_logger

logger = get_logger(__name__)


class SessionStore:
    """Database-backed store of ConversationSession rows keyed by identity."""

    def get_or_create(self, identity: str) -> ConversationSession:
        """Return the session for an identity, creating an IDLE one if needed. Never fails."""
        session, _ = ConversationSession.objects.get_or_create(identity=identity)
        return session

    @contextmanager
    def locked(self, identity: str) -> Iterator[ConversationSession]:
        """Open a transaction holding the row lock of the identity's session."""
        with transaction.atomic():
            self.get_or_create(identity)
            yield ConversationSession.objects.select_for_update().get(identity=identity)

    def get_state(self, identity: str) -> SessionState:
        return SessionState(self.get_or_create(identity).state)

    def get_step(self, identity: str) -> int:
        return self.get_or_create(identity).step

    def is_active(self, identity: str) -> bool:
        return self.get_or_create(identity).is_active

    def set_state(self, identity: str, state: SessionState) -> None:
        """Enter a new state. The step always restarts at 0; collected data is kept."""
        session = self.get_or_create(identity)
        previous = session.state
        session.state = state
        session.step = 0
        session.last_activity = timezone.now()
        session.save(update_fields=["state", "step", "last_activity"])
        logger.debug("conversation_state_changed", from_state=previous, to_state=str(state))

    def advance_step(self, identity: str) -> int:
        session = self.get_or_create(identity)
        return self.move_to_step(identity, session.step + 1)

    def move_to_step(self, identity: str, step: int) -> int:
        """Jump to a step of the current state (used by skip targets)."""
        session = self.get_or_create(identity)
        session.step = step
        session.last_activity = timezone.now()
        session.save(update_fields=["step", "last_activity"])
        return step

    def put_field(self, identity: str, key: str, value: Any) -> None:
        session = self.get_or_create(identity)
        session.data[key] = value
        session.last_activity = timezone.now()
        session.save(update_fields=["data", "last_activity"])

    def get_field(self, identity: str, key: str, default: Any = None) -> Any:
        return self.get_or_create(identity).data.get(key, default)

    def get_data(self, identity: str) -> dict[str, Any]:
        return dict(self.get_or_create(identity).data)

    def reset(self, identity: str) -> None:
        """Return the session to IDLE with step 0 and no data."""
        session = self.get_or_create(identity)
        session.state = SessionState.IDLE
        session.step = 0
        session.data = {}
        session.last_activity = timezone.now()
        session.save(update_fields=["state", "step", "data", "last_activity"])

    def count_expired(self, now: datetime.datetime, timeout: datetime.timedelta) -> int:
        return ConversationSession.objects.filter(last_activity__lt=now - timeout).count()

    def sweep_expired(self, now: datetime.datetime, timeout: datetime.timedelta) -> int:
        """
        Delete every session untouched for longer than `timeout`.

        The only operation that deletes sessions. Rows locked by an
        in-flight message are skipped and picked up by a later sweep.

        Returns:
            Number of sessions deleted.
        """
        cutoff = now - timeout
        with transaction.atomic():
            expired_ids = list(
                ConversationSession.objects.select_for_update(skip_locked=True)
                .filter(last_activity__lt=cutoff)
                .values_list("id", flat=True)
            )
            if not expired_ids:
                return 0
            deleted, _ = ConversationSession.objects.filter(id__in=expired_ids).delete()

        logger.info("conversation_sessions_swept", deleted=deleted, cutoff=cutoff.isoformat())
        return deleted
