"""Pytest configuration and shared fixtures."""

import json

import pytest

from askbot.shared.models.config import BotConfig, Tag
from askbot.shared.repositories.config_store import ConfigStore


class FakeTransport:
    """Records every outbound chat call."""

    def __init__(self):
        self.sent = []  # (channel, text)
        self.replies = []  # (channel, message_id, text)
        self.whispers = []  # (login, text)
        self.joined = []
        self.fail = False

    async def send(self, channel, text):
        if self.fail:
            raise ConnectionError("chat down")
        self.sent.append((channel, text))

    async def reply_to(self, channel, message_id, text):
        if self.fail:
            raise ConnectionError("chat down")
        self.replies.append((channel, message_id, text))

    async def whisper(self, login, text):
        if self.fail:
            raise ConnectionError("chat down")
        self.whispers.append((login, text))

    async def join(self, channel):
        self.joined.append(channel)


class FakeDispatcher:
    """Returns scripted results per webhook (default success) and records calls."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls = []  # (webhook, sender, text, forum)

    async def send(self, webhook, sender, text, forum=False):
        self.calls.append((webhook, sender, text, forum))
        return self.results.get(webhook, True)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def dispatcher():
    return FakeDispatcher()


@pytest.fixture
def bot_config():
    return BotConfig(
        channel="streamer",
        username="askbot",
        oauth_token="oauth:abc",
        mods=["mod1", "mod2"],
        ignore=["Moobot"],
        response_message_success="got it",
        response_message_failure="failed",
        whisper_response="I am a bot",
        tags=[
            Tag(tag="#question", webhook="https://hook/q"),
            Tag(tag="#clip", webhook="https://hook/clip", channel_type="forum"),
            Tag(tag="#faq", webhook="https://hook/faq", description="See the panels"),
        ],
    )


@pytest.fixture
def config_path(tmp_path, bot_config):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(bot_config.to_dict()), encoding="utf-8")
    return path


@pytest.fixture
def store(config_path):
    return ConfigStore.load(config_path)
