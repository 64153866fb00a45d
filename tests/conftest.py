import io
import json
import logging

import pytest

from collectionsync.config import SETTINGS_SOURCES

from tests.fakes import LATEST_NAME, InMemoryCollectionService


@pytest.fixture
def capture_logs():
    """Fixture to capture log output during tests."""
    log_stream = io.StringIO()
    handler = logging.StreamHandler(log_stream)
    logger = logging.getLogger("collectionsync")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)

    yield log_stream

    logger.removeHandler(handler)
    log_stream.close()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep the user's environment, .env files and config file out of every test."""
    for env_var, _, _ in SETTINGS_SOURCES.values():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.delenv("TIMESTAMP", raising=False)
    monkeypatch.setattr("collectionsync.config.config_dir", tmp_path / "config")
    monkeypatch.setattr("collectionsync.cli.options.load_dotenv_files", lambda: None)


@pytest.fixture
def service():
    """A service holding the latest collection and one earlier snapshot."""
    svc = InMemoryCollectionService()
    svc.add_collection(
        "abc",
        LATEST_NAME,
        {
            "info": {"name": LATEST_NAME, "_postman_id": "abc-postman"},
            "item": [{"name": "GET /v1/pins"}],
            "uid": "abc",
            "id": "abc-id",
        },
    )
    svc.add_collection("old-1", "REST API 1.0.0")
    return svc


@pytest.fixture
def new_spec():
    return {
        "info": {"name": "Generated from OpenAPI", "_postman_id": "generated"},
        "item": [{"name": "GET /v5/pins"}, {"name": "POST /v5/boards"}],
    }


@pytest.fixture
def spec_file(tmp_path, new_spec):
    path = tmp_path / "collection.json"
    path.write_text(json.dumps(new_spec))
    return path
