"""Options and helpers shared by the colsync commands."""

import sys

import click

from collectionsync.config import SyncSettings, load_dotenv_files, settings_from_env
from collectionsync.exceptions import ConfigurationError

from .utils.logging import logger


def target_options(func):
    """Options selecting which remote collection is the latest one."""
    options = [
        click.option(
            "--collection-uid",
            type=str,
            default=None,
            help="Identifier of the latest collection [env: COLLECTION_UID].",
        ),
        click.option(
            "-w",
            "--workspace",
            type=str,
            default=None,
            help="Only consider collections in this workspace [env: CS_WORKSPACE].",
        ),
        click.option(
            "--latest-name",
            type=str,
            default=None,
            help="Display name of the latest collection [env: CS_LATEST_NAME].",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_settings(**overrides) -> SyncSettings:
    """Load .env files and merge them with the environment, config file and overrides."""
    load_dotenv_files()
    return settings_from_env(overrides)


def load_settings(**overrides) -> SyncSettings:
    """Resolve settings for a command, exiting with status 1 on configuration errors."""
    try:
        return resolve_settings(**overrides)
    except ConfigurationError as e:
        logger.debug(f"Configuration error for setting '{e.setting}'")
        click.echo(click.style("[ERROR]", fg="red", bold=True) + f" {e}", err=True)
        sys.exit(1)
