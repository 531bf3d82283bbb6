"""Administrative command-line interface."""

from __future__ import annotations

from pathlib import Path

import click
import structlog
from safir.asyncio import run_with_asyncio
from safir.click import display_help

from .config import Config
from .constants import CONFIG_PATH
from .database import (
    create_database_engine,
    initialize_registry_database,
    is_database_initialized,
)
from .factory import Factory

__all__ = [
    "has_token",
    "help",
    "init",
    "is_admin_token",
    "main",
]

_config_path_option = click.option(
    "--config-path",
    envvar="REGISTRY_TOKENS_CONFIG_PATH",
    type=click.Path(path_type=Path),
    default=Path(CONFIG_PATH),
    show_default=True,
    help="Application configuration file.",
)


def _load_config(config_path: Path) -> Config:
    """Load the configuration and set up logging."""
    config = Config.from_file(config_path)
    config.configure_logging()
    return config


async def _lookup(config: Config, value: str, *, admin: bool) -> bool:
    """Run one token lookup against the configured database."""
    logger = structlog.get_logger("registrytokens")
    engine = create_database_engine(
        config.database_url, config.database_password
    )
    try:
        if not await is_database_initialized(engine, logger):
            raise click.ClickException("Database has not been initialized")
        async with Factory.standalone(engine) as factory:
            token_service = factory.create_token_lookup_service()
            if admin:
                return await token_service.is_admin_token(value)
            else:
                return await token_service.has_token(value)
    finally:
        await engine.dispose()


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="registry-tokens", message="%(version)s")
def main() -> None:
    """Administrative command-line interface for registry-tokens."""


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@_config_path_option
@click.option(
    "--reset",
    default=False,
    is_flag=True,
    help="Drop existing tables first (destroys all data).",
)
@run_with_asyncio
async def init(*, config_path: Path, reset: bool) -> None:
    """Create the token and account tables."""
    config = _load_config(config_path)
    logger = structlog.get_logger("registrytokens")
    logger.debug("Initializing database")
    engine = create_database_engine(
        config.database_url, config.database_password
    )
    try:
        await initialize_registry_database(engine, logger, reset=reset)
    finally:
        await engine.dispose()
    logger.debug("Finished initializing database")


@main.command()
@_config_path_option
@click.argument("value")
@run_with_asyncio
async def has_token(*, config_path: Path, value: str) -> None:
    """Check whether a personal access token exists.

    Prints true or false and exits with status 1 if the token is unknown.
    """
    config = _load_config(config_path)
    found = await _lookup(config, value, admin=False)
    click.echo("true" if found else "false")
    if not found:
        raise click.exceptions.Exit(1)


@main.command()
@_config_path_option
@click.argument("value")
@run_with_asyncio
async def is_admin_token(*, config_path: Path, value: str) -> None:
    """Check whether a personal access token grants admin access.

    Prints true or false and exits with status 1 unless the token is active
    and belongs to an administrator.
    """
    config = _load_config(config_path)
    is_admin = await _lookup(config, value, admin=True)
    click.echo("true" if is_admin else "false")
    if not is_admin:
        raise click.exceptions.Exit(1)
