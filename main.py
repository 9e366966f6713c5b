#!/usr/bin/env python3
"""
Professor Binary - Main Entry Point

Starts the terminal chat with one of the Pokémon bots.

Usage:
    python main.py                     # default bot (DEFAULT_BOT)
    python main.py --bot pokedex-kb    # start with the knowledge-base bot

Requirements:
    - GOOGLE_API_KEY set in the environment or .env

Environment Variables:
    See pokechat/config/settings.py for configuration options
"""

import argparse
import asyncio
import sys

from loguru import logger

from pokechat.bots.registry import get_registry
from pokechat.cli.chat import ChatCLI
from pokechat.config.settings import get_settings
from pokechat.errors import MissingCredentialError, PokechatError, UnknownBotError
from pokechat.memory.chat_history import ChatHistoryManager
from pokechat.utils.logger import setup_logger


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Terminal chat with Professor Binary.")
    parser.add_argument(
        "--bot",
        help=f"Bot to start with: {', '.join(get_registry().ids())} (default: DEFAULT_BOT setting)",
    )
    return parser.parse_args(argv)


def main(argv=None):
    """
    Initialize and run the chat.

    Steps:
    1. Load configuration from environment
    2. Check the API key (fatal if missing)
    3. Resolve the starting bot (fatal if unknown)
    4. Initialize the transcript manager
    5. Start the terminal chat interface
    """
    args = parse_args(argv)

    # Load settings from environment/.env
    settings = get_settings()
    setup_logger(settings.log_level, settings.log_dir)

    try:
        settings.require_api_key()
    except MissingCredentialError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    try:
        bot = get_registry().require(args.bot or settings.default_bot)
    except UnknownBotError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    history_manager = None
    if settings.save_transcripts:
        history_manager = ChatHistoryManager(settings.data_dir)
        session_id = history_manager.new_session()
        logger.info(f"Started new session: {session_id}")

    cli = ChatCLI(get_registry(), settings, history_manager)

    try:
        asyncio.run(cli.run(bot.id))
    except PokechatError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    finally:
        if history_manager:
            history_manager.flush()

    return 0


if __name__ == "__main__":
    sys.exit(main())
