"""Tag relay: forwards chat messages containing a configured tag to its webhook.

For a tag "#faq" with a description, "!faq" in chat is answered with the
description instead of being relayed, and "!faq @someone" answers @someone.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from askbot.shared.models.config import BotConfig, Tag
from askbot.shared.models.events import ChatTransport, PublicMessage

if TYPE_CHECKING:
    from askbot.shared.repositories.config_store import ConfigStore

LOGGER = logging.getLogger("Relay")


class Dispatcher(Protocol):
    async def send(self, webhook: str, sender: str, text: str, forum: bool = False) -> bool: ...


@dataclass(frozen=True)
class CannedReply:
    """Reply to the message itself with the tag description."""

    text: str


@dataclass(frozen=True)
class MentionReply:
    """Plain chat message addressed to the mentioned user."""

    text: str


@dataclass(frozen=True)
class Dispatch:
    tag: Tag


Action = CannedReply | MentionReply | Dispatch


def matches(tag: Tag, text_lower: str) -> bool:
    if not tag.tag:
        return False
    phrase = tag.tag.lower()
    return (
        (phrase + " ") in text_lower
        or text_lower.endswith(phrase)
        or (bool(tag.description) and text_lower.startswith(tag.command.lower()))
    )


def mention(text: str) -> str | None:
    """Return '@user' for messages shaped like '!command @user'."""
    parts = text.split(" ", 1)
    if len(parts) != 2:
        return None
    command, user = parts
    if command.startswith("!") and user.startswith("@") and " " not in user:
        return user
    return None


def classify(text: str, tags: list[Tag]) -> list[Action]:
    """Decide what to do for every matching tag, in tag order."""
    text_lower = text.lower()
    actions: list[Action] = []
    for tag in tags:
        if not matches(tag, text_lower):
            continue
        if text_lower == tag.command.lower():
            actions.append(CannedReply(tag.description))
            continue
        user = mention(text_lower)
        if user is not None:
            actions.append(MentionReply(f"{user} {tag.description}"))
            continue
        actions.append(Dispatch(tag))
    return actions


def feedback(config: BotConfig, sender: str, success: bool) -> tuple[str, bool] | None:
    """Feedback text and whether to send it as a reply, or None when unset."""
    template = config.response_message_success if success else config.response_message_failure
    if not template:
        return None
    if config.use_reply:
        return template, True
    return f"@{sender}: {template}", False


async def say(
    transport: ChatTransport, channel: str, text: str, reply_to: str | None = None
) -> None:
    """Send to chat; a failed send is logged and dropped."""
    try:
        if reply_to:
            await transport.reply_to(channel, reply_to, text)
        else:
            await transport.send(channel, text)
    except Exception as e:
        LOGGER.error(f"Failed to send chat message: {type(e).__name__}: {e}")


class TagRelay:
    def __init__(
        self, store: ConfigStore, transport: ChatTransport, dispatcher: Dispatcher
    ) -> None:
        self.store = store
        self.transport = transport
        self.dispatcher = dispatcher

    async def handle(self, message: PublicMessage) -> bool | None:
        """Relay `message`. Returns the aggregated delivery result, None if nothing was sent."""
        # Copy out before any network call, never await under the store lock
        config = self.store.snapshot()
        channel = config.channel

        delivered: bool | None = None
        for action in classify(message.text, config.tags):
            if isinstance(action, CannedReply):
                await say(self.transport, channel, action.text, reply_to=message.message_id)
            elif isinstance(action, MentionReply):
                await say(self.transport, channel, action.text)
            else:
                ok = await self.dispatcher.send(
                    action.tag.webhook, message.sender, message.text, action.tag.is_forum
                )
                LOGGER.info(
                    f"[{action.tag.tag}] {message.sender}: {'sent' if ok else 'FAILED'}"
                )
                delivered = ok if delivered is None else delivered and ok

        if delivered is not None:
            response = feedback(config, message.sender, delivered)
            if response:
                text, as_reply = response
                await say(
                    self.transport, channel, text, reply_to=message.message_id if as_reply else None
                )
        return delivered
