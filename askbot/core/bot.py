"""Twitch bot: turns EventSub chat and whisper notifications into router events."""

from __future__ import annotations

import asyncio
import logging

import twitchio
from twitchio import eventsub
from twitchio.ext import commands

from askbot.core.router import EventRouter
from askbot.shared.models.events import PrivateMessage, PublicMessage

LOGGER: logging.Logger = logging.getLogger("Bot")


def chatter_badges(chatter: twitchio.Chatter) -> tuple[str, ...]:
    badges: list[str] = []
    if chatter.broadcaster:
        badges.append("broadcaster")
    if chatter.moderator:
        badges.append("moderator")
    return tuple(badges)


class ChannelNotFoundError(Exception):
    """The configured channel login does not exist."""


class Bot(commands.Bot):
    """Twitch transport for the relay. Sends as the bot user, joins one channel."""

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        bot_id: str,
        channel: str,
        access_token: str,
        refresh_token: str = "",
    ) -> None:
        self.channel_login = channel.lower()
        self._access_token = access_token.removeprefix("oauth:")
        self._refresh_token = refresh_token
        self._broadcasters: dict[str, twitchio.PartialUser] = {}
        self._users: dict[str, twitchio.PartialUser] = {}
        self.router: EventRouter | None = None
        self._router_task: asyncio.Task | None = None

        super().__init__(
            client_id=client_id,
            client_secret=client_secret,
            bot_id=bot_id,
            prefix="!",
        )

    def attach(self, router: EventRouter) -> None:
        self.router = router

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    async def load_tokens(self, path: str | None = None) -> None:
        # The bot token lives in the bot config, not in twitchio's token file
        await self.add_token(self._access_token, self._refresh_token)

    async def save_tokens(self, path: str | None = None) -> None:
        pass

    async def setup_hook(self) -> None:
        if self.router is not None:
            self._router_task = asyncio.create_task(self.router.run())

        try:
            await self.join(self.channel_login)
        except Exception as e:
            LOGGER.error(f"Failed to join {self.channel_login}: {type(e).__name__}: {e}")

        await self.subscribe_websocket(
            payload=eventsub.WhisperReceivedSubscription(user_id=self.bot_id)
        )
        LOGGER.info("Listening for whispers")

    async def close(self, **options) -> None:
        if self.router is not None and self._router_task is not None:
            self.router.stop()
            try:
                await asyncio.wait_for(self._router_task, timeout=10)
            except (TimeoutError, asyncio.CancelledError):
                self._router_task.cancel()
        await super().close(**options)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def event_ready(self) -> None:
        LOGGER.info("Successfully logged in as: %s", self.bot_id)

    async def event_message(self, payload: twitchio.ChatMessage) -> None:
        if payload.chatter.id == self.bot_id or self.router is None:
            return

        login = payload.chatter.name or ""
        self._users[login.lower()] = payload.chatter
        self.router.submit(
            PublicMessage(
                text=payload.text,
                message_id=str(payload.id),
                sender=login,
                badges=chatter_badges(payload.chatter),
            )
        )

    async def event_message_whisper(self, payload: twitchio.Whisper) -> None:
        if self.router is None or payload.sender is None:
            return

        login = payload.sender.name or ""
        self._users[login.lower()] = payload.sender
        self.router.submit(PrivateMessage(text=payload.text, sender=login))

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _fetch_user(self, login: str) -> twitchio.PartialUser:
        login = login.lower()
        user = self._users.get(login)
        if user is None:
            users = await self.fetch_users(logins=[login])
            if not users:
                raise ChannelNotFoundError(f"Unknown Twitch user: {login}")
            user = users[0]
            self._users[login] = user
        return user

    async def join(self, channel: str) -> None:
        broadcaster = await self._fetch_user(channel)
        await self.subscribe_websocket(
            payload=eventsub.ChatMessageSubscription(
                broadcaster_user_id=broadcaster.id, user_id=self.bot_id
            )
        )
        self._broadcasters[channel.lower()] = broadcaster
        LOGGER.info(f"Joined channel: {channel} (ID: {broadcaster.id})")

    async def send(self, channel: str, text: str) -> None:
        broadcaster = self._broadcasters.get(channel.lower()) or await self._fetch_user(channel)
        await broadcaster.send_message(message=text, sender=self.bot_id, token_for=self.bot_id)

    async def reply_to(self, channel: str, message_id: str, text: str) -> None:
        broadcaster = self._broadcasters.get(channel.lower()) or await self._fetch_user(channel)
        await broadcaster.send_message(
            message=text,
            sender=self.bot_id,
            token_for=self.bot_id,
            reply_to_message_id=message_id,
        )

    async def whisper(self, login: str, text: str) -> None:
        to_user = await self._fetch_user(login)
        bot_user = self.create_partialuser(user_id=self.bot_id)
        await bot_user.send_whisper(to_user=to_user, message=text)
