import logging

import pytest

from taskboard import config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "TASKBOARD_DATASET",
        "TASKBOARD_DATABASE_URL",
        "PLATFORM_DATABASE_URL",
        "TASKBOARD_PAGE_SIZE",
        "TASKBOARD_FETCH_TIMEOUT_SECONDS",
        "TASKBOARD_STORAGE_NAMESPACE",
        "TASKBOARD_LOG_LEVEL",
        "TASKBOARD_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    config.reset_config()
    yield
    config.reset_config()


def test_defaults():
    cfg = config.TaskboardConfig.from_env()
    assert cfg.dataset_source.endswith("data/tasks.json")
    assert cfg.database_url.startswith("sqlite:///")
    assert cfg.database_url.endswith("taskboard.db")
    assert cfg.page_size == 10
    assert cfg.fetch_timeout_seconds == 10
    assert cfg.storage_namespace == "default"
    assert cfg.log_level == logging.INFO
    assert cfg.log_dir is None


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TASKBOARD_DATASET", "https://example.test/tasks.json")
    monkeypatch.setenv("PLATFORM_DATABASE_URL", "sqlite:///shared.db")
    monkeypatch.setenv("TASKBOARD_PAGE_SIZE", "25")
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "debug")
    monkeypatch.setenv("TASKBOARD_STORAGE_NAMESPACE", "browser-42")
    cfg = config.TaskboardConfig.from_env()
    assert cfg.dataset_source == "https://example.test/tasks.json"
    assert cfg.database_url == "sqlite:///shared.db"
    assert cfg.page_size == 25
    assert cfg.log_level == logging.DEBUG
    assert cfg.storage_namespace == "browser-42"


def test_taskboard_db_url_beats_platform(monkeypatch):
    monkeypatch.setenv("PLATFORM_DATABASE_URL", "sqlite:///shared.db")
    monkeypatch.setenv("TASKBOARD_DATABASE_URL", "sqlite:///own.db")
    assert config.TaskboardConfig.from_env().database_url == "sqlite:///own.db"


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("TASKBOARD_PAGE_SIZE", "lots")
    monkeypatch.setenv("TASKBOARD_FETCH_TIMEOUT_SECONDS", "0")
    monkeypatch.setenv("TASKBOARD_LOG_LEVEL", "chatty")
    cfg = config.TaskboardConfig.from_env()
    assert cfg.page_size == 10
    assert cfg.fetch_timeout_seconds == 1
    assert cfg.log_level == logging.INFO


def test_get_config_is_cached():
    assert config.get_config() is config.get_config()
