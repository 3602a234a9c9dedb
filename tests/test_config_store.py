"""Tests for the configuration store."""

import json
import threading

import pytest
import yaml

from askbot.shared.models.config import BotConfig, Tag
from askbot.shared.repositories.config_store import (
    ConfigLoadError,
    ConfigStore,
    ReadWriteLock,
    read_config,
    write_config,
)


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigLoadError):
        ConfigStore.load(tmp_path / "missing.json")


def test_load_malformed_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ConfigStore.load(path)


def test_load_non_mapping(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        read_config(path)


def test_yaml_config(tmp_path):
    path = tmp_path / "config.yaml"
    write_config(path, BotConfig(channel="streamer", tags=[Tag(tag="#q", webhook="w")]))

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert data == {"channel": "streamer", "tags": [{"tag": "#q", "webhook": "w"}]}
    assert read_config(path).tags[0].tag == "#q"


def test_snapshot_is_a_copy(store):
    snapshot = store.snapshot()
    snapshot.tags.clear()
    assert len(store.snapshot().tags) == 3


def test_mutate_persists(store, config_path):
    store.mutate(lambda bc: bc.tags.append(Tag(tag="#new", webhook="w")))

    data = json.loads(config_path.read_text(encoding="utf-8"))
    assert [t["tag"] for t in data["tags"]] == ["#question", "#clip", "#faq", "#new"]


def test_mutate_keeps_change_when_save_fails(tmp_path, bot_config):
    store = ConfigStore(bot_config, tmp_path / "missing-dir" / "config.json")

    store.mutate(lambda bc: bc.tags.append(Tag(tag="#new", webhook="w")))

    assert "#new" in store.snapshot().tag_names()


def test_mutate_returns_result(store):
    assert store.mutate(lambda bc: len(bc.tags)) == 3


def test_write_lock_excludes_readers():
    lock = ReadWriteLock()
    events = []

    def reader():
        with lock.read():
            events.append("read")

    with lock.write():
        t = threading.Thread(target=reader)
        t.start()
        t.join(timeout=0.2)
        assert t.is_alive()
        events.append("write-done")
    t.join(timeout=2)

    assert events == ["write-done", "read"]


def test_readers_share_lock():
    lock = ReadWriteLock()
    with lock.read():
        done = threading.Event()

        def reader():
            with lock.read():
                done.set()

        threading.Thread(target=reader).start()
        assert done.wait(timeout=2)
