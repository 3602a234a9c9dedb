"""Routes inbound chat events, one at a time, in arrival order."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from askbot.core.guards import ActivationGate
from askbot.shared.models.events import ChatTransport, PrivateMessage, PublicMessage

if TYPE_CHECKING:
    from askbot.components.relay import TagRelay
    from askbot.components.whisper_cmds import WhisperCommands
    from askbot.services.audit import AuditLogger
    from askbot.shared.repositories.config_store import ConfigStore

LOGGER = logging.getLogger("Router")

Event = PublicMessage | PrivateMessage


class EventRouter:
    def __init__(
        self,
        store: ConfigStore,
        transport: ChatTransport,
        relay: TagRelay,
        whisper_cmds: WhisperCommands,
        audit: AuditLogger | None = None,
        gate: ActivationGate | None = None,
    ) -> None:
        self.store = store
        self.transport = transport
        self.relay = relay
        self.whisper_cmds = whisper_cmds
        self.audit = audit
        self.gate = gate or ActivationGate()
        self.queue: asyncio.Queue[Event | None] = asyncio.Queue()

    def submit(self, event: Event) -> None:
        self.queue.put_nowait(event)

    def stop(self) -> None:
        self.queue.put_nowait(None)

    async def run(self) -> None:
        """Drain the queue until `stop()`; one failing event never ends the loop."""
        while True:
            event = await self.queue.get()
            try:
                if event is None:
                    LOGGER.info("Event loop stopped")
                    return
                await self.handle(event)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                LOGGER.exception(f"Error handling {type(event).__name__}: {e}")
            finally:
                self.queue.task_done()

    async def handle(self, event: Event) -> None:
        if isinstance(event, PublicMessage):
            await self.handle_message(event)
        else:
            await self.handle_whisper(event)

    async def handle_message(self, message: PublicMessage) -> None:
        LOGGER.debug(f"[{message.sender}]: {message.text}")
        if self.store.read(lambda bc: bc.is_ignored(message.sender)):
            return

        toggled = self.gate.toggle(message.text, message.badges)
        if toggled is not None:
            if self.audit is not None:
                await self.audit.log(toggled)
            return

        if self.gate.activated:
            await self.relay.handle(message)

    async def handle_whisper(self, message: PrivateMessage) -> None:
        LOGGER.debug(f"[whisper {message.sender}]: {message.text}")
        reply = await self.whisper_cmds.handle(message)
        if reply is None:
            return
        try:
            await self.transport.whisper(message.sender, reply)
        except Exception as e:
            LOGGER.error(f"Failed to whisper {message.sender}: {type(e).__name__}: {e}")
