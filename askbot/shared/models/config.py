"""Bot configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CHANNEL = "channel"
FORUM = "forum"


@dataclass
class Tag:
    tag: str
    webhook: str
    description: str = ""
    channel_type: str = CHANNEL  # 'channel' | 'forum'

    @property
    def is_forum(self) -> bool:
        return self.channel_type == FORUM

    @property
    def command(self) -> str:
        """Chat command form of the tag: a leading '#' becomes '!'."""
        if self.tag.startswith("#"):
            return "!" + self.tag[1:]
        return self.tag

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Tag:
        return cls(
            tag=str(data.get("tag", "")),
            webhook=str(data.get("webhook", "")),
            description=str(data.get("description") or ""),
            channel_type=str(data.get("type") or data.get("channel_type") or CHANNEL),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"tag": self.tag, "webhook": self.webhook}
        if self.description:
            data["description"] = self.description
        if self.channel_type != CHANNEL:
            data["type"] = self.channel_type
        return data


@dataclass
class BotConfig:
    channel: str = ""
    username: str = ""
    oauth_token: str = ""
    tags: list[Tag] = field(default_factory=list)
    key: str = ""
    mods: list[str] = field(default_factory=list)
    log_webhook: str = ""
    response_message_success: str = ""
    response_message_failure: str = ""
    whisper_response: str = ""
    ignore: list[str] = field(default_factory=list)
    use_reply: bool = True

    def is_privileged(self, login: str) -> bool:
        """Whether `login` may reconfigure tags via whisper."""
        return bool(self.mods) and (login in self.mods or login == self.channel)

    def is_ignored(self, login: str) -> bool:
        login = login.lower()
        return any(name.lower() == login for name in self.ignore)

    def tag_names(self) -> list[str]:
        return [t.tag for t in self.tags]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BotConfig:
        if not isinstance(data, dict):
            raise ValueError("configuration root must be a mapping")
        use_reply = data.get("use_reply", True)
        return cls(
            channel=str(data.get("channel") or ""),
            username=str(data.get("username") or ""),
            oauth_token=str(data.get("oauth_token") or ""),
            tags=[Tag.from_dict(t) for t in data.get("tags") or []],
            key=str(data.get("key") or ""),
            mods=[str(m) for m in data.get("mods") or []],
            log_webhook=str(data.get("log_webhook") or ""),
            response_message_success=str(data.get("response_message_success") or ""),
            response_message_failure=str(data.get("response_message_failure") or ""),
            whisper_response=str(data.get("whisper_response") or ""),
            ignore=[str(i) for i in data.get("ignore") or []],
            use_reply=True if use_reply is None else bool(use_reply),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialise, omitting empty values and defaults."""
        data: dict[str, Any] = {}
        for name in ("channel", "username", "oauth_token"):
            if getattr(self, name):
                data[name] = getattr(self, name)
        if self.tags:
            data["tags"] = [t.to_dict() for t in self.tags]
        for name in (
            "key",
            "mods",
            "log_webhook",
            "response_message_success",
            "response_message_failure",
            "whisper_response",
            "ignore",
        ):
            value = getattr(self, name)
            if value:
                data[name] = list(value) if isinstance(value, list) else value
        if not self.use_reply:
            data["use_reply"] = False
        return data
