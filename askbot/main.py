"""Askbot entry point.

Usage:
    askbot [config]     Run the relay with a JSON/YAML config (default: config.json)
    askbot generate     Interactively write a new config file
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

import uvicorn

from askbot.api import create_app
from askbot.components.relay import TagRelay
from askbot.components.whisper_cmds import WhisperCommands
from askbot.core.bot import Bot
from askbot.core.config import DEFAULT_CONFIG_FILE, Settings, get_settings
from askbot.core.logging import setup_logging
from askbot.core.router import EventRouter
from askbot.services.audit import AuditLogger
from askbot.services.titles import TitleResolver
from askbot.services.webhook import WebhookDispatcher
from askbot.shared.models.config import BotConfig
from askbot.shared.repositories.config_store import ConfigLoadError, ConfigStore, write_config

LOGGER: logging.Logger = logging.getLogger("Bot")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="askbot", description="Relay tagged Twitch chat messages to webhooks"
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_FILE,
        help='config file (.json/.yaml), or "generate" to create one',
    )
    return parser.parse_args(argv)


def create_default_config_file(path: Path) -> None:
    if path.is_file():
        return
    LOGGER.info(f"Try to create config file: {path}")
    write_config(path, BotConfig(key="askbot", use_reply=True))


async def run(store: ConfigStore, settings: Settings) -> None:
    config = store.snapshot()

    titles = TitleResolver(api_key=settings.youtube_api_key)
    dispatcher = WebhookDispatcher(titles)
    audit = AuditLogger(store, dispatcher, username=settings.audit_username)

    bot = Bot(
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        bot_id=settings.bot_id,
        channel=config.channel,
        access_token=config.oauth_token,
        refresh_token=settings.bot_refresh_token,
    )
    router = EventRouter(
        store,
        transport=bot,
        relay=TagRelay(store, bot, dispatcher),
        whisper_cmds=WhisperCommands(store, audit),
        audit=audit,
    )
    bot.attach(router)

    admin_server: uvicorn.Server | None = None
    admin_task: asyncio.Task | None = None
    if settings.admin_enabled and config.key:
        LOGGER.info(f"Starting admin panel on {settings.admin_host}:{settings.admin_port}")
        admin_server = uvicorn.Server(
            uvicorn.Config(
                create_app(store, settings),
                host=settings.admin_host,
                port=settings.admin_port,
                log_config=None,
            )
        )
        admin_task = asyncio.create_task(admin_server.serve())

    try:
        async with bot:
            await bot.start(with_adapter=False)
    finally:
        if admin_server is not None and admin_task is not None:
            admin_server.should_exit = True
            await admin_task
        await dispatcher.close()
        await titles.close()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)

    if args.config.lower() == "generate":
        from askbot.generate import generate

        return generate()

    config_file = Path(args.config)
    LOGGER.info(f"Use config file: {config_file}")

    if settings.admin_enabled:
        try:
            create_default_config_file(config_file)
        except OSError as e:
            LOGGER.error(f"Can't write default config file: {e}")
            return 1

    try:
        store = ConfigStore.load(config_file)
    except ConfigLoadError as e:
        LOGGER.error(f"Error: {e}")
        return 1

    missing = settings.missing_twitch_credentials()
    if missing:
        LOGGER.error(f"Missing Twitch settings: {', '.join(missing)}")
        return 1

    try:
        asyncio.run(run(store, settings))
    except KeyboardInterrupt:
        LOGGER.warning("Shutting down due to KeyboardInterrupt...")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
