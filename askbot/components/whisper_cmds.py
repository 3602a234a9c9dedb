"""Whisper commands for privileged users.

Usage (whisper to the bot):
    #list                   List tags
    #add <tag> <webhook>    Add a tag relaying to <webhook>
    #remove <tag>           Remove the first tag named <tag>
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from askbot.shared.models.config import BotConfig, Tag
from askbot.shared.models.events import PrivateMessage

if TYPE_CHECKING:
    from askbot.services.audit import AuditLogger
    from askbot.shared.repositories.config_store import ConfigStore

LOGGER = logging.getLogger("WhisperCmds")


@dataclass(frozen=True)
class Add:
    tag: str
    webhook: str


@dataclass(frozen=True)
class Remove:
    tag: str


@dataclass(frozen=True)
class List:
    pass


@dataclass(frozen=True)
class Nothing:
    pass


Command = Add | Remove | List | Nothing


def parse_command(text: str) -> Command:
    parts = text.split()
    if parts == ["#list"]:
        return List()
    if len(parts) == 3 and parts[0] == "#add":
        return Add(parts[1], parts[2])
    if len(parts) == 2 and parts[0] == "#remove":
        return Remove(parts[1])
    return Nothing()


def add_tag(config: BotConfig, tag: str, webhook: str) -> str:
    config.tags.append(Tag(tag=tag, webhook=webhook))
    return f"Tag added: {tag}"


def remove_tag(config: BotConfig, tag: str) -> str:
    for i, t in enumerate(config.tags):
        if t.tag == tag:
            del config.tags[i]
            break
    return f"Tag removed: {tag}"


def list_tags(config: BotConfig) -> str:
    return f"Tags: {', '.join(config.tag_names())}"


class WhisperCommands:
    def __init__(self, store: ConfigStore, audit: AuditLogger | None = None) -> None:
        self.store = store
        self.audit = audit

    async def handle(self, message: PrivateMessage) -> str | None:
        """Run the command in `message`. Returns the whisper reply, if any."""
        login = message.sender
        privileged, auto_response = self.store.read(
            lambda bc: (bc.is_privileged(login), bc.whisper_response)
        )
        if not privileged:
            return auto_response or None

        command = parse_command(message.text)
        if isinstance(command, Add):
            reply = self.store.mutate(lambda bc: add_tag(bc, command.tag, command.webhook))
        elif isinstance(command, Remove):
            reply = self.store.mutate(lambda bc: remove_tag(bc, command.tag))
        elif isinstance(command, List):
            LOGGER.info("List Tags")
            return self.store.read(list_tags)
        else:
            LOGGER.debug(f"Mod-Whisper ignored: {login}")
            return None

        LOGGER.info(f"{reply} (by {login})")
        if self.audit is not None:
            await self.audit.log(reply)
        return reply
