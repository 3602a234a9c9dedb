"""Shared data models for the relay and the admin panel."""

from .config import BotConfig, Tag
from .events import ChatTransport, PrivateMessage, PublicMessage

__all__ = [
    "BotConfig",
    "ChatTransport",
    "PrivateMessage",
    "PublicMessage",
    "Tag",
]
