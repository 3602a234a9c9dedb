"""Lock-guarded configuration store backed by a JSON or YAML file.

The relay and the admin panel share one `ConfigStore`. Readers take a shared
lock only long enough to copy what they need; writers hold the exclusive lock
across the mutation and the synchronous save, never across network I/O.
"""

from __future__ import annotations

import copy
import json
import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TypeVar

import yaml

from askbot.shared.models.config import BotConfig

LOGGER = logging.getLogger("ConfigStore")

T = TypeVar("T")

YAML_SUFFIXES = {".yaml", ".yml"}


class ConfigLoadError(Exception):
    """Configuration file is missing or malformed."""


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def read_config(path: str | Path) -> BotConfig:
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Can't read config file {path}: {e}") from e

    try:
        data = yaml.safe_load(raw) if _is_yaml(path) else json.loads(raw)
        return BotConfig.from_dict(data or {})
    except (ValueError, TypeError, AttributeError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Malformed config file {path}: {e}") from e


def write_config(path: str | Path, config: BotConfig) -> None:
    path = Path(path)
    data = config.to_dict()
    if _is_yaml(path):
        text = yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
    else:
        text = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    path.write_text(text, encoding="utf-8")


class ReadWriteLock:
    """Many concurrent readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writer:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._readers:
                self._cond.wait()
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class ConfigStore:
    def __init__(self, config: BotConfig, path: str | Path) -> None:
        self._config = config
        self.path = Path(path)
        self._lock = ReadWriteLock()

    @classmethod
    def load(cls, path: str | Path) -> ConfigStore:
        config = read_config(path)
        LOGGER.info(f"Loaded config from {path} ({len(config.tags)} tags)")
        return cls(config, path)

    def snapshot(self) -> BotConfig:
        """Deep copy of the current configuration."""
        with self._lock.read():
            return copy.deepcopy(self._config)

    def read(self, fn: Callable[[BotConfig], T]) -> T:
        """Apply `fn` under the shared lock. `fn` must not block on I/O."""
        with self._lock.read():
            return fn(self._config)

    def mutate(self, fn: Callable[[BotConfig], T]) -> T:
        """Apply `fn` under the exclusive lock, then persist.

        A failed write is logged; the in-memory change is kept.
        """
        with self._lock.write():
            result = fn(self._config)
            self._save_locked()
            return result

    def save(self) -> None:
        with self._lock.write():
            self._save_locked()

    def _save_locked(self) -> None:
        try:
            write_config(self.path, self._config)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            LOGGER.error(f"Can't write config file {self.path}: {e}")
