"""Interactive config file wizard (`askbot generate`)."""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.prompt import Confirm, Prompt

from askbot.shared.models.config import BotConfig, Tag
from askbot.shared.repositories.config_store import write_config

LOGGER = logging.getLogger("Generate")

DISCORD_WEBHOOK_PREFIX = "https://discord.com/api/webhooks/"
CONFIG_SUFFIXES = (".json", ".yaml", ".yml")

console = Console()


def prompt_validated(prompt: str, valid, error: str, allow_empty: bool = False) -> str:
    while True:
        value = Prompt.ask(prompt, default="", show_default=False).strip()
        if (allow_empty and not value) or (value and valid(value)):
            return value
        console.print(f"[red]{error}[/red]")


def prompt_required(prompt: str) -> str:
    return prompt_validated(prompt, lambda _: True, "A value is required")


def prompt_webhook(prompt: str, allow_empty: bool) -> str:
    return prompt_validated(
        prompt,
        lambda s: s.startswith(DISCORD_WEBHOOK_PREFIX),
        "Needs to be a discord webhook",
        allow_empty=allow_empty,
    )


def prompt_list(what: str) -> list[str]:
    raw = prompt_required(f"Specify a comma separated list of {what}")
    return [s.strip() for s in raw.split(",") if s.strip()]


def prompt_tags() -> list[Tag]:
    tags: list[Tag] = []
    if not Confirm.ask("Do you want to specify some tags now?", default=True):
        return tags
    while True:
        tag = Prompt.ask("Tag (empty to end the tags prompt)", default="", show_default=False)
        if not tag.strip():
            return tags
        webhook = prompt_webhook("Webhook (empty to discard the tag)", allow_empty=True)
        if webhook:
            tags.append(Tag(tag=tag.strip(), webhook=webhook))


def build_config() -> tuple[Path, BotConfig]:
    file = prompt_validated(
        "The file to write the config to",
        lambda s: s.endswith(CONFIG_SUFFIXES),
        "Needs to be a json or yaml file",
    )
    config = BotConfig(
        channel=prompt_required("The channel the bot should join"),
        username=prompt_required("The username of the bot"),
        oauth_token=prompt_required("The corresponding oauth-token"),
    )

    if Confirm.ask(
        "Do you want to specify mods, that can configure the bot via whispers?", default=False
    ):
        config.mods = prompt_list("mods")

    if Confirm.ask("Do you want to log the mod actions to a discord channel?", default=False):
        config.log_webhook = prompt_webhook("The url", allow_empty=False)

    if Confirm.ask(
        'Do you want to activate response messages of the bot (e.g. "@user: got it")?',
        default=False,
    ):
        config.response_message_success = prompt_required("The message on success")
        config.response_message_failure = prompt_required("The message on failure")

    if Confirm.ask(
        f"Do you want to specify accounts that are ignored when posting tags? "
        f"({config.username}, moobot, etc.)",
        default=False,
    ):
        config.ignore = prompt_list("accounts")

    config.tags = prompt_tags()
    config.use_reply = Confirm.ask(
        'Do you want to use the reply functionality (instead of "@username")', default=True
    )
    return Path(file), config


def generate() -> int:
    path, config = build_config()
    LOGGER.info(f"Generated config: {config.to_dict()}")

    if not Confirm.ask(f"Write the configuration to {path}", default=False):
        return 0
    if path.exists() and not Confirm.ask("File already exists, overwrite?", default=False):
        console.print("abort")
        return 0

    try:
        write_config(path, config)
    except OSError as e:
        LOGGER.error(f"Can't write config file {path}: {e}")
        return 1
    console.print(f"[green]Config written to {path}[/green]")
    return 0
