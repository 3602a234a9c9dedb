"""Tag service: admin operations over the shared configuration store."""

from __future__ import annotations

import logging

from askbot.shared.models.config import BotConfig, Tag
from askbot.shared.repositories.config_store import ConfigStore

logger = logging.getLogger(__name__)


class TagNotFoundError(LookupError):
    pass


class TagService:
    def __init__(self, store: ConfigStore) -> None:
        self.store = store

    def list_tags(self) -> list[Tag]:
        return self.store.snapshot().tags

    def add_tag(self, tag: Tag) -> list[Tag]:
        def _add(bc: BotConfig) -> list[Tag]:
            bc.tags.append(tag)
            return list(bc.tags)

        tags = self.store.mutate(_add)
        logger.info(f"Admin added tag: {tag.tag}")
        return tags

    def remove_tag(self, index: int) -> Tag:
        def _remove(bc: BotConfig) -> Tag:
            if not 0 <= index < len(bc.tags):
                raise TagNotFoundError(index)
            return bc.tags.pop(index)

        # mutate() persists after fn; an out-of-range index raises before that
        removed = self.store.mutate(_remove)
        logger.info(f"Admin removed tag: {removed.tag}")
        return removed

    def replace_tag(self, index: int, tag: Tag) -> Tag:
        def _replace(bc: BotConfig) -> Tag:
            if not 0 <= index < len(bc.tags):
                raise TagNotFoundError(index)
            bc.tags[index] = tag
            return tag

        replaced = self.store.mutate(_replace)
        logger.info(f"Admin updated tag #{index}: {tag.tag}")
        return replaced

    def get_responses(self) -> tuple[str, str]:
        return self.store.read(
            lambda bc: (bc.response_message_success, bc.response_message_failure)
        )

    def set_responses(self, success: str, failure: str) -> tuple[str, str]:
        def _set(bc: BotConfig) -> tuple[str, str]:
            bc.response_message_success = success
            bc.response_message_failure = failure
            return success, failure

        return self.store.mutate(_set)
