"""
Tests for the sweep_sessions management command.
"""

from datetime import timedelta
from io import StringIO
from unittest.mock import patch

import pytest
from django.core.management import call_command
from django.utils import timezone

from apps.conversations.management.commands.sweep_sessions import Command
from apps.conversations.models import ConversationSession
from tests.conversations.factories import ConversationSessionFactory


def run_sweep(*args: str) -> str:
    out = StringIO()
    with patch.object(Command, "_setup_signal_handlers"):
        call_command("sweep_sessions", "--once", *args, stdout=out)
    return out.getvalue()


@pytest.mark.django_db
class TestSweepSessions:
    def test_deletes_only_expired(self) -> None:
        ConversationSessionFactory.create(identity="users/old", last_activity=timezone.now() - timedelta(hours=2))
        ConversationSessionFactory.create(identity="users/new")

        output = run_sweep()

        assert "Deleted 1 expired session(s)" in output
        assert list(ConversationSession.objects.values_list("identity", flat=True)) == ["users/new"]

    def test_dry_run_keeps_sessions(self) -> None:
        ConversationSessionFactory.create(identity="users/old", last_activity=timezone.now() - timedelta(hours=2))

        output = run_sweep("--dry-run")

        assert "Would delete 1 expired session(s)" in output
        assert ConversationSession.objects.count() == 1

    def test_custom_timeout(self) -> None:
        ConversationSessionFactory.create(identity="users/idle", last_activity=timezone.now() - timedelta(minutes=10))

        assert "Deleted 0" in run_sweep()
        assert "Deleted 1" in run_sweep("--minutes", "5")

    def test_nothing_to_delete(self) -> None:
        assert "Deleted 0 expired session(s)" in run_sweep()
