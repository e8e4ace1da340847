"""
iRdiscordbot CLI entry point.

Provides command-line interface for running the bot and utility commands.
"""

import argparse
import asyncio
import sys
from pathlib import Path

from irdiscordbot import __version__
from irdiscordbot.config.logging import get_logger, setup_logging
from irdiscordbot.config.settings import Settings, load_settings
from irdiscordbot.engine import (
    CatalogFetchError,
    CommandKind,
    InvalidWeekError,
    classify,
    parse,
    resolve_defaults,
)
from irdiscordbot.engine.replies import BUILDERS, ImageURLs


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="irdiscordbot",
        description="Discord bot posting iRacing league summaries, standings and statistics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"iRdiscordbot {__version__}",
    )

    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to .env file (default: .env in current directory)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override logging level from config",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "run",
        help="Run the Discord bot",
    )

    subparsers.add_parser(
        "config",
        help="Show current configuration",
    )

    interpret_parser = subparsers.add_parser(
        "interpret",
        help="Show how the bot would read a chat message, without Discord",
    )
    interpret_parser.add_argument(
        "message",
        help='Chat message, e.g. "!stats radical 4"',
    )
    interpret_parser.add_argument(
        "--channel",
        default="",
        help="Name of the channel the message is posted in (default: none)",
    )
    interpret_parser.add_argument(
        "--guild",
        default="",
        help="Name of the Discord server, used as team filter (default: none)",
    )
    interpret_parser.add_argument(
        "--fetch",
        action="store_true",
        help="Fetch the live series listing and print the replies that would be sent",
    )

    return parser


def cmd_config(settings: Settings) -> int:
    """Show current configuration."""
    logger = get_logger(__name__)

    logger.info("\n=== iRdiscordbot Configuration ===\n")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Log Level: {settings.log_level}")
    logger.info(f"Log File: {settings.log_file or 'None (console only)'}")
    logger.info(f"\nBot Name: {settings.bot.name}")
    logger.info(f"Bot Token: {'Set' if settings.bot.token else 'Not set'}")
    logger.info(f"Allowed Channels: {settings.bot.allowed_channel_ids or 'all'}")
    logger.info(f"\nVisualizer URL: {settings.api.visualizer_url}")
    logger.info(f"Joke URL: {settings.api.joke_url}")
    logger.info(f"HTTP Timeout: {settings.api.timeout}s")
    logger.info(f"\nHealth Endpoint: {'enabled' if settings.health.enabled else 'disabled'}")
    logger.info(f"Health Address: {settings.health.host}:{settings.health.port}")
    logger.info(f"Health Max Latency: {settings.health.max_latency_seconds}s")

    return 0


def cmd_run(settings: Settings) -> int:
    """Start the Discord bot."""
    logger = get_logger(__name__)

    if not settings.bot.token:
        logger.error(
            "Discord bot token not set. Add BOT__TOKEN=<your-token> to your .env file."
        )
        return 1

    from irdiscordbot.bot import IRacingBot

    bot = IRacingBot(settings)
    logger.info(f"Starting {settings.bot.name}...")
    # log_handler=None: disable discord.py's default logging setup and use ours
    bot.run(settings.bot.token, log_handler=None)
    return 0


async def cmd_interpret(args, settings: Settings) -> int:
    """
    Classify and parse a message the way the bot would.

    Args:
        args: Parsed command-line arguments
        settings: Application settings

    Returns:
        Exit code (0 for success, 1 for error)
    """
    logger = get_logger(__name__)

    kind = classify(args.message)
    print(f"Command: {kind.value}")
    if kind is CommandKind.UNRECOGNIZED:
        print("Not a command - the bot would stay silent.")
        return 0
    if kind is CommandKind.DUTCH_JOKE:
        print("The bot would reply with a random dutch joke.")
        return 0

    defaults = resolve_defaults(args.channel, args.guild)
    print(f"Series from channel: {defaults.series_guess or '(none)'}")
    print(f"Team from guild: {defaults.team_guess or '(none)'}")

    try:
        params = parse(args.message, kind, defaults)
    except InvalidWeekError as e:
        print(f"Reply: {e}")
        return 0

    print(f"Series filter: {params.series_filter or '(all series)'}")
    print(f"Week filter: {params.week_filter or '(current)'}")
    print(f"Team filter: {params.team_filter or '(none)'}")

    if not args.fetch:
        return 0

    from irdiscordbot.clients import VisualizerClient

    try:
        async with VisualizerClient(settings.api) as api:
            catalog = await api.fetch_series()
    except CatalogFetchError as e:
        logger.error(f"Fetching series listing failed: {e}")
        return 1

    urls = ImageURLs(settings.api.visualizer_url)
    replies = list(BUILDERS[kind](params, catalog, urls))
    print(f"\n=== {len(replies)} replies from {len(catalog)} series ===\n")
    for reply in replies:
        if reply.title:
            print(reply.title)
        print(f"  {reply.image_url}")
    return 0


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    # Load settings
    try:
        settings = load_settings(env_file=args.env_file)
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Override log level if specified
    if args.log_level:
        settings.log_level = args.log_level

    setup_logging(settings)

    # Execute command
    if args.command == "config":
        return cmd_config(settings)
    elif args.command == "run":
        return cmd_run(settings)
    elif args.command == "interpret":
        return asyncio.run(cmd_interpret(args, settings))
    else:
        # Default: show help
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
