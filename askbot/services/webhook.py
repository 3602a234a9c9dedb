"""Webhook delivery for relayed chat messages."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from askbot.services.titles import TitleResolver, thread_title

LOGGER = logging.getLogger("Webhook")


def build_payload(
    username: str,
    content: str,
    thread_name: str | None = None,
    avatar_url: str | None = None,
) -> dict[str, Any]:
    """Discord-style execute-webhook body. Unset optional fields are omitted."""
    payload: dict[str, Any] = {"username": username, "content": content}
    if avatar_url:
        payload["avatar_url"] = avatar_url
    if thread_name is not None:
        payload["thread_name"] = thread_name
    return payload


class WebhookDispatcher:
    """POSTs relay payloads. No retries; failures are logged and reported as False."""

    def __init__(
        self,
        titles: TitleResolver | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.titles = titles
        # Shared HTTP client, reuses connections across deliveries
        self._http = client or httpx.AsyncClient()

    async def close(self) -> None:
        await self._http.aclose()

    async def send(self, webhook: str, sender: str, text: str, forum: bool = False) -> bool:
        thread_name = await thread_title(text, self.titles) if forum else None
        payload = build_payload(sender, text, thread_name)

        try:
            resp = await self._http.post(webhook, json=payload)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            LOGGER.error(f"Webhook delivery failed: {type(e).__name__}: {e}")
            return False

        if resp.is_success:
            return True

        LOGGER.error(f"Webhook error: Code: {resp.status_code} Reason: {resp.reason_phrase}")
        return False
