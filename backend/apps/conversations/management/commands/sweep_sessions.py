"""
Sweep sessions management command.

Deletes conversation sessions whose last activity is older than the
session timeout. Runs continuously on a fixed interval, or once with
--once (for cron). Uses SELECT FOR UPDATE SKIP LOCKED, so sessions being
mutated by an in-flight message are left for the next sweep.
"""

import signal
import time
from datetime import timedelta

from django.conf import settings
from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.conversations.sessions import SessionStore
from apps.core.logging import get_logger

logger = get_logger(__name__)


class Command(BaseCommand):
    help = "Delete conversation sessions idle for longer than the session timeout"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._shutdown_requested = False

    def add_arguments(self, parser):
        parser.add_argument(
            "--once",
            action="store_true",
            help="Run one sweep and exit (default: run continuously)",
        )
        parser.add_argument(
            "--interval",
            type=float,
            default=settings.SESSION_SWEEP_INTERVAL_SECONDS,
            help=f"Seconds between sweeps (default: {settings.SESSION_SWEEP_INTERVAL_SECONDS})",
        )
        parser.add_argument(
            "--minutes",
            type=int,
            default=settings.SESSION_TIMEOUT_MINUTES,
            help=f"Idle minutes before a session expires (default: {settings.SESSION_TIMEOUT_MINUTES})",
        )
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Report how many sessions would be deleted without deleting them",
        )

    def handle(self, *args, **options):
        self._setup_signal_handlers()

        once = options["once"]
        interval = options["interval"]
        timeout = timedelta(minutes=options["minutes"])
        dry_run = options["dry_run"]
        store = SessionStore()

        logger.info("session_sweeper_started", interval=interval, timeout_minutes=options["minutes"], dry_run=dry_run)

        while not self._shutdown_requested:
            try:
                self._sweep(store, timeout, dry_run)
            except Exception:
                logger.exception("session_sweeper_error")

            if once:
                break

            self._sleep(interval)

        logger.info("session_sweeper_shutdown")

    def _sweep(self, store: SessionStore, timeout: timedelta, dry_run: bool) -> int:
        now = timezone.now()
        if dry_run:
            count = store.count_expired(now, timeout)
            self.stdout.write(f"Would delete {count} expired session(s)")
            return count

        deleted = store.sweep_expired(now, timeout)
        self.stdout.write(self.style.SUCCESS(f"Deleted {deleted} expired session(s)"))
        return deleted

    def _sleep(self, seconds: float) -> None:
        """Sleep in short slices so a shutdown signal is honoured promptly."""
        deadline = time.monotonic() + seconds
        while not self._shutdown_requested and time.monotonic() < deadline:
            time.sleep(max(0.0, min(1.0, deadline - time.monotonic())))

    def _setup_signal_handlers(self) -> None:
        """Setup graceful shutdown on SIGINT/SIGTERM."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            signal.signal(sig, self._handle_signal)

    def _handle_signal(self, signum, frame) -> None:
        logger.info("session_sweeper_signal_received", signal=signum)
        self._shutdown_requested = True
