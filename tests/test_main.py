"""Tests for the command line entry point."""

import json

from askbot import main as cli


def test_default_config_path():
    assert cli.parse_args([]).config == "config.json"
    assert cli.parse_args(["bot.yaml"]).config == "bot.yaml"


def test_missing_config_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    assert cli.main([str(tmp_path / "missing.json")]) == 1


def test_missing_credentials_exits_with_error(config_path, monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    for name in ("CLIENT_ID", "CLIENT_SECRET", "BOT_ID", "ADMIN_ENABLED"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(config_path.parent)
    cli.get_settings.cache_clear()
    try:
        assert cli.main([str(config_path)]) == 1
    finally:
        cli.get_settings.cache_clear()


def test_generate_dispatches_to_wizard(monkeypatch):
    import askbot.generate

    monkeypatch.setattr(cli, "setup_logging", lambda level: None)
    monkeypatch.setattr(askbot.generate, "generate", lambda: 0)
    assert cli.main(["GENERATE"]) == 0


def test_default_config_file_created(tmp_path):
    path = tmp_path / "config.json"
    cli.create_default_config_file(path)
    assert json.loads(path.read_text(encoding="utf-8")) == {"key": "askbot"}
