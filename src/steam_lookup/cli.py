"""
Command-line interface for Steam Lookup.

Resolves a game or user from the command line and prints the record
as JSON.
"""

import asyncio
import json
import sys
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field

from steam_lookup.config import get_settings
from steam_lookup.errors import SteamLookupError
from steam_lookup.logger import get_logger, setup_logging

logger = get_logger(__name__, component="cli")


class CLIOutput(BaseModel):
    """Structured output for CLI commands."""

    success: bool
    command: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    data: dict[str, Any] | None = None
    error: str | None = None
    error_type: str | None = None


def print_json(output: CLIOutput) -> None:
    """Print output as formatted JSON."""
    print(json.dumps(output.model_dump(), indent=2, default=str))


def error_output(command: str, error: SteamLookupError) -> CLIOutput:
    return CLIOutput(
        success=False,
        command=command,
        error=str(error),
        error_type=type(error).__name__,
    )


async def cmd_game(query: str) -> CLIOutput:
    """Resolve a game by title or "appid:<id>"."""
    from steam_lookup.resolvers import GameResolver

    logger.info("Looking up game", query=query)

    try:
        async with GameResolver() as resolver:
            game = await resolver.resolve(query)
    except SteamLookupError as e:
        return error_output("game", e)

    return CLIOutput(success=True, command="game", data=game.model_dump())


async def cmd_user(query: str) -> CLIOutput:
    """Resolve a user by vanity name, steamID64 or profile URL."""
    from steam_lookup.resolvers import UserResolver

    logger.info("Looking up user", query=query)

    try:
        async with UserResolver() as resolver:
            user = await resolver.resolve(query)
    except SteamLookupError as e:
        return error_output("user", e)

    return CLIOutput(success=True, command="user", data=user.model_dump())


async def cmd_test_config() -> CLIOutput:
    """Test configuration loading."""
    settings = get_settings()

    return CLIOutput(
        success=True,
        command="test-config",
        data={
            "steam_base_url": settings.steam.base_url,
            "steam_store_url": settings.steam.store_url,
            "steam_search_url": settings.steam.search_url,
            "steam_lookup_url": settings.steam.lookup_url,
            "country_code": settings.steam.country_code,
            "timeout_seconds": settings.steam.timeout_seconds,
            "api_key_configured": bool(settings.steam.get_api_key()),
        },
    )


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
Steam Lookup CLI
================

Usage: steam-lookup <command> [arguments]

Commands:
  test-config                 Test configuration loading
  game <query>                Resolve a game by title or "appid:<id>"
  user <query>                Resolve a user by vanity name, steamID64 or profile URL

Examples:
  steam-lookup game "portal 2"
  steam-lookup game appid:440
  steam-lookup user https://steamcommunity.com/id/gabelogannewell
"""
    print(usage)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print_usage()
        sys.exit(1)

    setup_logging()
    command = args[0]

    try:
        if command == "test-config":
            output = asyncio.run(cmd_test_config())

        elif command in ("game", "user"):
            if len(args) < 2:
                print("Error: query required")
                sys.exit(1)
            query = " ".join(args[1:])
            handler = cmd_game if command == "game" else cmd_user
            output = asyncio.run(handler(query))

        elif command in ("help", "--help", "-h"):
            print_usage()
            return

        else:
            print(f"Unknown command: {command}")
            print_usage()
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(130)

    print_json(output)
    if not output.success:
        sys.exit(1)


if __name__ == "__main__":
    main()
