"""
Inbound chat webhook.

Accepts one message per request and always answers with a JSON body
`{"text": ...}` holding the bot's reply, including when something fails.

Sender resolution, in order:
1. JSON payload with a `user` / `actor` / `sender` / `from` object
2. X-Chat-User-Id / X-Chat-User-Name / X-Chat-User-Email headers
3. Plain-text body "<id>:<name>:<email> <message>"
"""

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST
from pydantic import ValidationError

from apps.conversations import replies
from apps.conversations.context import ChatContext
from apps.conversations.router import CommandRouter
from apps.conversations.schemas import InboundPayload
from apps.core.logging import get_logger
from apps.core.schemas import TextReply

logger = get_logger(__name__)

UNKNOWN_NAME = "Unknown User"


def _reply(text: str) -> JsonResponse:
    return JsonResponse(TextReply(text=text).model_dump())


def _from_headers(request: HttpRequest, message: str, channel_ref: str | None) -> ChatContext | None:
    identity = request.headers.get("X-Chat-User-Id", "").strip()
    if not identity:
        return None
    return ChatContext(
        identity=identity,
        display_name=request.headers.get("X-Chat-User-Name", "").strip() or UNKNOWN_NAME,
        email=request.headers.get("X-Chat-User-Email", "").strip() or None,
        text=message,
        channel_ref=channel_ref,
    )


def _from_plain_text(body: str) -> ChatContext | None:
    head, _, message = body.strip().partition(" ")
    parts = head.split(":")
    if len(parts) < 3 or not parts[0]:
        return None
    return ChatContext(
        identity=parts[0],
        display_name=parts[1] or UNKNOWN_NAME,
        email=parts[2] or None,
        text=message.strip(),
    )


def parse_chat_context(request: HttpRequest) -> ChatContext | None:
    """Resolve sender and message from the request, or None if no sender can be found."""
    body = request.body.decode("utf-8", errors="replace")

    try:
        payload = InboundPayload.model_validate_json(body)
    except ValidationError:
        payload = None

    if payload is not None:
        sender = payload.sender_user
        if sender is not None:
            return ChatContext(
                identity=sender.id,
                display_name=sender.name or UNKNOWN_NAME,
                email=sender.email or None,
                text=payload.message_text,
                channel_ref=payload.channel_ref,
            )
        return _from_headers(request, payload.message_text, payload.channel_ref)

    return _from_headers(request, body.strip(), None) or _from_plain_text(body)


@csrf_exempt
@require_POST
def chat_webhook(request: HttpRequest) -> JsonResponse:
    """Route one chat message and return the reply."""
    try:
        ctx = parse_chat_context(request)
        if ctx is None:
            logger.warning("chat_webhook_unidentified_sender", content_type=request.content_type)
            return _reply(replies.UNIDENTIFIED_SENDER)

        logger.info("chat_webhook_received", **{"chat.identity": ctx.identity, "channel_ref": ctx.channel_ref})
        return _reply(CommandRouter().route(ctx))
    except Exception:
        logger.exception("chat_webhook_failed")
        return _reply(replies.WEBHOOK_FAILED)
