"""Best-effort audit messages (activation toggles, tag changes) to the log webhook."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from askbot.shared.repositories.config_store import ConfigStore

if TYPE_CHECKING:
    from askbot.services.webhook import WebhookDispatcher

LOGGER = logging.getLogger("Audit")


class AuditLogger:
    def __init__(
        self, store: ConfigStore, dispatcher: WebhookDispatcher, username: str = "Askbot"
    ) -> None:
        self.store = store
        self.dispatcher = dispatcher
        self.username = username

    async def log(self, message: str) -> None:
        log_webhook = self.store.read(lambda bc: bc.log_webhook)
        if not log_webhook:
            return

        if not await self.dispatcher.send(log_webhook, self.username, message, forum=False):
            LOGGER.warning(f"Audit message not delivered: {message}")
