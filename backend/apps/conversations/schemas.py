"""
Inbound chat payload schemas.

Chat platforms disagree on where the sender lives: `user`, `actor`,
`sender` or `from`. All are accepted; the first one carrying an id wins.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _to_str(value: Any) -> Any:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class ChatUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    name: str | None = None
    email: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _to_str(value)


class ChatChannel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return _to_str(value)


class InboundPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    user: ChatUser | None = None
    actor: ChatUser | None = None
    sender: ChatUser | None = None
    from_: ChatUser | None = Field(default=None, alias="from")

    message: str | None = None
    text: str | None = None
    channel: ChatChannel | None = None

    @property
    def sender_user(self) -> ChatUser | None:
        for candidate in (self.user, self.actor, self.sender, self.from_):
            if candidate is not None and candidate.id:
                return candidate
        return None

    @property
    def message_text(self) -> str:
        return self.message or self.text or ""

    @property
    def channel_ref(self) -> str | None:
        return self.channel.id if self.channel else None
