"""Inbound chat events and the outbound transport interface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


@dataclass(frozen=True)
class PublicMessage:
    text: str
    message_id: str
    sender: str  # login
    badges: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PrivateMessage:
    text: str
    sender: str  # login


class ChatTransport(Protocol):
    async def send(self, channel: str, text: str) -> None: ...

    async def reply_to(self, channel: str, message_id: str, text: str) -> None: ...

    async def whisper(self, login: str, text: str) -> None: ...

    async def join(self, channel: str) -> None: ...
