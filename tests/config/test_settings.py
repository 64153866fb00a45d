import os
from pathlib import Path

import pytest

from collectionsync.config import (
    ConfigAccessor,
    SyncSettings,
    get_config_file,
    load_dotenv_files,
    settings_from_env,
)
from collectionsync.constants import (
    DEFAULT_API_BASE,
    DEFAULT_LATEST_NAME,
    DEFAULT_SPEC_FILE,
    VersionSourceEnum,
)
from collectionsync.exceptions import ConfigurationError

REQUIRED_ENV = {"POSTMAN_API_KEY": "pmak-123", "COLLECTION_UID": "abc"}


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "collectionsync.cfg"
    path.write_text(
        "[sync]\n"
        "collection_uid = from-config\n"
        "workspace = Team\n"
        "\n"
        "[remote]\n"
        "api_key = config-key\n"
        "timeout = 12.5\n"
    )
    return ConfigAccessor(path)


@pytest.fixture
def empty_config(tmp_path):
    return ConfigAccessor(tmp_path / "missing.cfg")


@pytest.mark.short
class TestSettingsFromEnv:
    def test_defaults(self, empty_config):
        settings = settings_from_env(environ=REQUIRED_ENV, config=empty_config)

        assert settings.api_key == "pmak-123"
        assert settings.collection_uid == "abc"
        assert settings.latest_name == DEFAULT_LATEST_NAME
        assert settings.version_source == VersionSourceEnum.siblings
        assert settings.spec_file == Path(DEFAULT_SPEC_FILE)
        assert settings.api_base == DEFAULT_API_BASE
        assert settings.workspace is None

    def test_environment_values(self, empty_config):
        environ = {
            **REQUIRED_ENV,
            "CS_WORKSPACE": "Team",
            "CS_LATEST_NAME": "Pins API (latest)",
            "CS_TIMEOUT": "5",
            "CS_SPEC_FILE": "out/collection.json",
        }

        settings = settings_from_env(environ=environ, config=empty_config)

        assert settings.workspace == "Team"
        assert settings.latest_name == "Pins API (latest)"
        assert settings.timeout == 5.0
        assert settings.spec_file == Path("out/collection.json")

    def test_config_file_is_used_when_environment_is_silent(self, config_file):
        settings = settings_from_env(environ={}, config=config_file)

        assert settings.api_key == "config-key"
        assert settings.collection_uid == "from-config"
        assert settings.workspace == "Team"
        assert settings.timeout == 12.5

    def test_precedence(self, config_file):
        settings = settings_from_env(
            overrides={"collection_uid": "from-cli", "workspace": None},
            environ={"COLLECTION_UID": "from-env", "CS_WORKSPACE": "Env Team"},
            config=config_file,
        )

        assert settings.collection_uid == "from-cli"
        assert settings.workspace == "Env Team"
        assert settings.api_key == "config-key"

    def test_empty_environment_value_is_unset(self, config_file):
        settings = settings_from_env(environ={"COLLECTION_UID": ""}, config=config_file)

        assert settings.collection_uid == "from-config"

    @pytest.mark.parametrize(
        "environ, setting, env_var",
        [
            ({"COLLECTION_UID": "abc"}, "api_key", "POSTMAN_API_KEY"),
            ({"POSTMAN_API_KEY": "k"}, "collection_uid", "COLLECTION_UID"),
        ],
    )
    def test_missing_required_setting(self, empty_config, environ, setting, env_var):
        with pytest.raises(ConfigurationError) as excinfo:
            settings_from_env(environ=environ, config=empty_config)

        assert excinfo.value.setting == setting
        assert env_var in str(excinfo.value)

    def test_feed_requires_release_repo(self, empty_config):
        environ = {**REQUIRED_ENV, "CS_VERSION_SOURCE": "feed"}

        with pytest.raises(ConfigurationError, match="release repository"):
            settings_from_env(environ=environ, config=empty_config)

    def test_feed_with_release_repo(self, empty_config):
        environ = {
            **REQUIRED_ENV,
            "CS_VERSION_SOURCE": "feed",
            "CS_RELEASE_REPO": "owner/api-spec",
        }

        settings = settings_from_env(environ=environ, config=empty_config)

        assert settings.version_source == VersionSourceEnum.feed
        assert settings.release_repo == "owner/api-spec"

    @pytest.mark.parametrize(
        "extra",
        [{"CS_TIMEOUT": "0"}, {"CS_TIMEOUT": "soon"}, {"CS_VERSION_SOURCE": "git"}],
    )
    def test_invalid_values(self, empty_config, extra):
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            settings_from_env(environ={**REQUIRED_ENV, **extra}, config=empty_config)

    def test_uses_process_environment_by_default(self, monkeypatch, empty_config):
        for key, value in REQUIRED_ENV.items():
            monkeypatch.setenv(key, value)

        assert settings_from_env(config=empty_config).collection_uid == "abc"

    def test_blank_credential_is_rejected(self):
        with pytest.raises(ValueError):
            SyncSettings(api_key="  ", collection_uid="abc")


@pytest.mark.short
class TestConfigAccessor:
    def test_missing_file_returns_defaults(self, empty_config):
        assert empty_config.get("sync", "workspace") is None
        assert empty_config.get("sync", "workspace", "fallback") == "fallback"
        assert empty_config.sections() == []

    def test_reads_sections(self, config_file):
        assert config_file.sections() == ["sync", "remote"]
        assert config_file.get("remote", "missing") is None

    def test_default_location_follows_config_dir(self, tmp_path):
        assert get_config_file() == tmp_path / "config" / "collectionsync.cfg"
        assert ConfigAccessor().config_path == get_config_file()


@pytest.mark.short
class TestLoadDotenvFiles:
    def test_loads_nearest_parent_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CS_DOTENV_PROBE", "unset")
        monkeypatch.delenv("CS_DOTENV_PROBE")
        (tmp_path / ".env").write_text("CS_DOTENV_PROBE=loaded\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        loaded = load_dotenv_files(nested)

        assert loaded == tmp_path / ".env"
        assert os.environ["CS_DOTENV_PROBE"] == "loaded"

    def test_existing_environment_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CS_DOTENV_PROBE", "from-shell")
        (tmp_path / ".env").write_text("CS_DOTENV_PROBE=from-file\n")

        load_dotenv_files(tmp_path)

        assert os.environ["CS_DOTENV_PROBE"] == "from-shell"
