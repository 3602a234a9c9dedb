"""Askbot: relays tagged Twitch chat messages to webhooks."""

__version__ = "1.2.0"
