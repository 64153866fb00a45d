"""Configuration: user config file, environment variables and CLI overrides.

Precedence, highest first: explicit overrides (CLI options), environment
variables, the user config file, built-in defaults.
"""

import configparser
import logging
import os
import platform
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator, model_validator

from collectionsync.constants import (
    DEFAULT_API_BASE,
    DEFAULT_BACKUP_DIR,
    DEFAULT_LATEST_NAME,
    DEFAULT_SPEC_FILE,
    DEFAULT_TIMEOUT,
    VersionSourceEnum,
)
from collectionsync.exceptions import ConfigurationError

APP_NAME = "collectionsync"

logger = logging.getLogger(__name__)

_home = os.path.expanduser("~")

xdg_config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(_home, ".config")

if platform.system() == "Darwin":
    # macOS
    config_dir = Path(f"~/Library/Application Support/{APP_NAME}").expanduser()
else:
    # Linux or others
    config_dir = Path(os.path.join(xdg_config_home, APP_NAME))


def get_config_file() -> Path:
    return config_dir / f"{APP_NAME}.cfg"


def load_dotenv_files(start: Optional[Path] = None) -> Optional[Path]:
    """Load the nearest .env file from the working directory or its parents.

    Variables already present in the environment are never overridden.

    Returns:
        The path of the loaded file, or None if no .env file was found
    """
    current_path = Path(start) if start is not None else Path.cwd()
    for parent in [current_path] + list(current_path.parents):
        dotenv_path = parent / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path=dotenv_path, override=False)
            logger.debug(f"Loaded environment from {dotenv_path}")
            return dotenv_path
    return None


class ConfigAccessor:
    """
    A dict-like accessor for the user configuration file.

    Missing sections, keys and a missing file are all treated as "not set".

    Usage:
        config = ConfigAccessor()
        value = config.get('sync', 'workspace', default=None)
    """

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path if config_path is not None else get_config_file()
        self.config = configparser.ConfigParser()
        if self.config_path.exists():
            self.config.read(self.config_path)

    def get(self, section: str, key: str, default: Any = None) -> Any:
        try:
            return self.config[section][key]
        except (KeyError, configparser.NoSectionError, configparser.NoOptionError):
            return default

    def sections(self) -> list:
        return self.config.sections()


class SyncSettings(BaseModel):
    """Validated settings for one run."""

    api_key: str
    collection_uid: str
    latest_name: str = DEFAULT_LATEST_NAME
    workspace: Optional[str] = None
    snapshot_prefix: Optional[str] = None
    version_source: VersionSourceEnum = VersionSourceEnum.siblings
    release_repo: Optional[str] = None
    github_token: Optional[str] = None
    spec_file: Path = Path(DEFAULT_SPEC_FILE)
    backup_dir: Path = Path(DEFAULT_BACKUP_DIR)
    api_base: str = DEFAULT_API_BASE
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("api_key", "collection_uid", "latest_name")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must be a non-empty string")
        return v.strip()

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be a positive number of seconds")
        return v

    @model_validator(mode="after")
    def validate_feed_config(self) -> "SyncSettings":
        if self.version_source == VersionSourceEnum.feed and not self.release_repo:
            raise ValueError(
                "version_source 'feed' requires a release repository (owner/name)"
            )
        return self


# setting -> (environment variable, config section, config key)
SETTINGS_SOURCES: Dict[str, tuple] = {
    "api_key": ("POSTMAN_API_KEY", "remote", "api_key"),
    "collection_uid": ("COLLECTION_UID", "sync", "collection_uid"),
    "latest_name": ("CS_LATEST_NAME", "sync", "latest_name"),
    "workspace": ("CS_WORKSPACE", "sync", "workspace"),
    "snapshot_prefix": ("CS_SNAPSHOT_PREFIX", "sync", "snapshot_prefix"),
    "version_source": ("CS_VERSION_SOURCE", "sync", "version_source"),
    "release_repo": ("CS_RELEASE_REPO", "sync", "release_repo"),
    "github_token": ("GITHUB_TOKEN", "remote", "github_token"),
    "spec_file": ("CS_SPEC_FILE", "sync", "spec_file"),
    "backup_dir": ("CS_BACKUP_DIR", "sync", "backup_dir"),
    "api_base": ("CS_API_BASE", "remote", "api_base"),
    "timeout": ("CS_TIMEOUT", "remote", "timeout"),
}

_REQUIRED = {
    "api_key": "Missing API credential",
    "collection_uid": "Missing collection identifier",
}


def settings_from_env(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
    config: Optional[ConfigAccessor] = None,
) -> SyncSettings:
    """
    Merge overrides, environment and config file into validated settings.

    Args:
        overrides: Values that win over everything else (None values are ignored)
        environ: Environment mapping (defaults to os.environ)
        config: Config file accessor (defaults to the user config file)

    Raises:
        ConfigurationError: If a required setting is missing or a value is invalid
    """
    overrides = overrides or {}
    environ = os.environ if environ is None else environ
    config = ConfigAccessor() if config is None else config

    values: Dict[str, Any] = {}
    for setting, (env_var, section, key) in SETTINGS_SOURCES.items():
        value = overrides.get(setting)
        if value is None or value == "":
            value = environ.get(env_var)
        if value is None or value == "":
            value = config.get(section, key)
        if value is not None and value != "":
            values[setting] = value

    for setting, message in _REQUIRED.items():
        if setting not in values:
            env_var, section, key = SETTINGS_SOURCES[setting]
            raise ConfigurationError(
                f"{message}. Set {env_var} or '{key}' in the [{section}] section "
                f"of {config.config_path}",
                setting,
            )

    try:
        return SyncSettings(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'settings'}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(f"Invalid configuration: {problems}") from e
