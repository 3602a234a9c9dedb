"""Chat-facing components: tag relay and whisper commands."""

from .relay import TagRelay, classify, matches, mention
from .whisper_cmds import WhisperCommands, parse_command

__all__ = [
    "TagRelay",
    "WhisperCommands",
    "classify",
    "matches",
    "mention",
    "parse_command",
]
