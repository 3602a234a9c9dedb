"""Tests for configuration models and their serialisation."""

from askbot.shared.models.config import BotConfig, Tag


class TestTag:
    def test_command_form_replaces_leading_hash(self):
        assert Tag(tag="#faq", webhook="w").command == "!faq"
        assert Tag(tag="faq#1", webhook="w").command == "faq#1"

    def test_defaults(self):
        tag = Tag.from_dict({"tag": "#q", "webhook": "w"})
        assert tag.description == ""
        assert tag.channel_type == "channel"
        assert not tag.is_forum

    def test_type_alias(self):
        assert Tag.from_dict({"tag": "#q", "webhook": "w", "type": "forum"}).is_forum
        assert Tag.from_dict({"tag": "#q", "webhook": "w", "channel_type": "forum"}).is_forum

    def test_to_dict_omits_defaults(self):
        assert Tag(tag="#q", webhook="w").to_dict() == {"tag": "#q", "webhook": "w"}
        assert Tag(tag="#q", webhook="w", description="d", channel_type="forum").to_dict() == {
            "tag": "#q",
            "webhook": "w",
            "description": "d",
            "type": "forum",
        }


class TestBotConfig:
    def test_empty_mapping_gives_defaults(self):
        config = BotConfig.from_dict({})
        assert config.tags == []
        assert config.use_reply is True

    def test_to_dict_omits_empty_values(self):
        assert BotConfig(channel="c").to_dict() == {"channel": "c"}
        assert BotConfig(use_reply=False).to_dict() == {"use_reply": False}

    def test_unknown_keys_ignored(self):
        config = BotConfig.from_dict({"channel": "c", "something": 1})
        assert config.channel == "c"

    def test_ignore_is_case_insensitive(self):
        config = BotConfig(ignore=["Moobot"])
        assert config.is_ignored("moobot")
        assert config.is_ignored("MOOBOT")
        assert not config.is_ignored("viewer")

    def test_privileged_requires_mods(self):
        config = BotConfig(channel="streamer", mods=["mod1"])
        assert config.is_privileged("mod1")
        assert config.is_privileged("streamer")
        assert not config.is_privileged("viewer")

        # Without a mod list whisper commands are disabled, owner included
        assert not BotConfig(channel="streamer").is_privileged("streamer")
