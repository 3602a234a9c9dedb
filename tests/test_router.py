"""Tests for event routing, the activation gate and the ignore list."""

import asyncio

import pytest

from askbot.components.relay import TagRelay
from askbot.components.whisper_cmds import WhisperCommands
from askbot.core.guards import ActivationGate, is_mod
from askbot.core.router import EventRouter
from askbot.shared.models.events import PrivateMessage, PublicMessage


class RecordingAudit:
    def __init__(self):
        self.messages = []

    async def log(self, message):
        self.messages.append(message)


def public(text, sender="viewer", badges=()):
    return PublicMessage(text=text, message_id="m1", sender=sender, badges=badges)


@pytest.fixture
def audit():
    return RecordingAudit()


@pytest.fixture
def router(store, transport, dispatcher, audit):
    return EventRouter(
        store,
        transport=transport,
        relay=TagRelay(store, transport, dispatcher),
        whisper_cmds=WhisperCommands(store, audit),
        audit=audit,
    )


class TestActivationGate:
    def test_is_mod(self):
        assert is_mod(["broadcaster"])
        assert is_mod(["subscriber", "moderator"])
        assert not is_mod(["vip", "subscriber"])

    def test_toggle_requires_privilege(self):
        gate = ActivationGate()
        assert gate.toggle("#deactivate", ["vip"]) is None
        assert gate.activated

    def test_toggle_case_insensitive_exact(self):
        gate = ActivationGate()
        assert gate.toggle("#DeActivate", ["moderator"]) == "deactivated"
        assert not gate.activated
        assert gate.toggle("#activate now", ["moderator"]) is None
        assert gate.toggle("#activate", ["broadcaster"]) == "activated"
        assert gate.activated


class TestEventRouter:
    @pytest.mark.asyncio
    async def test_deactivate_blocks_relay_until_activate(self, router, dispatcher, audit):
        await router.handle(public("#deactivate", sender="streamer", badges=("broadcaster",)))
        assert router.gate.activated is False

        await router.handle(public("#question hello"))
        assert dispatcher.calls == []

        await router.handle(public("#activate", sender="mod1", badges=("moderator",)))
        await router.handle(public("#question hello"))

        assert len(dispatcher.calls) == 1
        assert audit.messages == ["deactivated", "activated"]

    @pytest.mark.asyncio
    async def test_toggle_message_is_not_relayed(self, router, dispatcher):
        await router.handle(public("#activate", badges=("moderator",)))
        assert dispatcher.calls == []

    @pytest.mark.asyncio
    async def test_non_mod_toggle_is_treated_as_chat(self, router, dispatcher):
        await router.handle(public("#deactivate"))
        assert router.gate.activated is True

    @pytest.mark.asyncio
    async def test_ignored_sender_is_dropped(self, router, dispatcher, transport, audit):
        router.gate.activated = False

        await router.handle(public("#activate", sender="MOOBOT", badges=("moderator",)))
        assert router.gate.activated is False

        router.gate.activated = True
        await router.handle(public("#question hi", sender="moobot"))

        assert dispatcher.calls == []
        assert transport.replies == []
        assert audit.messages == []

    @pytest.mark.asyncio
    async def test_whispers_work_while_deactivated(self, router, transport):
        router.gate.activated = False

        await router.handle(PrivateMessage("#add #new https://hook", "mod1"))

        assert transport.whispers == [("mod1", "Tag added: #new")]

    @pytest.mark.asyncio
    async def test_no_whisper_reply_for_unknown_command(self, router, transport):
        await router.handle(PrivateMessage("hello", "mod1"))
        assert transport.whispers == []

    @pytest.mark.asyncio
    async def test_run_processes_in_order_and_survives_errors(self, router, transport):
        calls = []
        original = router.handle

        async def flaky(event):
            calls.append(event.text)
            if event.text == "boom":
                raise RuntimeError("boom")
            await original(event)

        router.handle = flaky
        router.submit(PrivateMessage("boom", "mod1"))
        router.submit(PrivateMessage("#list", "mod1"))
        router.stop()

        await asyncio.wait_for(router.run(), timeout=2)

        assert calls == ["boom", "#list"]
        assert transport.whispers[0][1].startswith("Tags: ")

    @pytest.mark.asyncio
    async def test_whisper_send_failure_is_contained(self, router, transport):
        transport.fail = True
        await router.handle(PrivateMessage("#list", "mod1"))
        assert transport.whispers == []
