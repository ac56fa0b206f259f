"""
Inbound message context passed from the webhook to the router.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatContext:
    """One message from one chat identity."""

    identity: str
    display_name: str
    text: str
    email: str | None = None
    channel_ref: str | None = None

    @property
    def command_text(self) -> str:
        """Trimmed, lower-cased text used for command and keyword matching."""
        return self.text.strip().lower()
