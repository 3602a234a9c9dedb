"""Outbound services: webhook delivery, thread titles, audit log."""

from .audit import AuditLogger
from .titles import TitleLookupError, TitleResolver, find_url, strip_title, thread_title
from .webhook import WebhookDispatcher, build_payload

__all__ = [
    "AuditLogger",
    "TitleLookupError",
    "TitleResolver",
    "WebhookDispatcher",
    "build_payload",
    "find_url",
    "strip_title",
    "thread_title",
]
