# =============================================================================
# File: test_configuration.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import logging
import os

import pytest

import model_usage.logger as usage_logger
from model_usage.config import platform_paths
from model_usage.config.appsettings import AppSettings
from model_usage.config.config_loader import ConfigLoader
from model_usage.exceptions import InvalidConfigError
from model_usage.logger import configure_logging, get_logger


def test_appsettings_json_loads_into_model(clean_env):
    settings = ConfigLoader.get_app_settings()

    assert isinstance(settings, AppSettings)
    assert settings.storage.manifests_dir == "manifests"
    assert settings.storage.models_root is None
    assert settings.storage.log_paths is None
    assert settings.daemon.base_url == "http://localhost:11434"
    assert settings.app.is_production is True
    assert settings.logging.level == "INFO"


def test_development_override_is_deep_merged(clean_env):
    clean_env.setenv("MODEL_USAGE_ENV", "Development")

    settings = ConfigLoader.get_app_settings()

    assert settings.app.is_production is False
    assert settings.daemon.timeout == 10.0
    # Untouched keys of the same section survive the merge
    assert settings.daemon.base_url == "http://localhost:11434"
    assert settings.logging.level == "DEBUG"


@pytest.fixture
def restore_log_levels(monkeypatch):
    monkeypatch.setattr(usage_logger, "_configured_level", None)
    saved = {
        name: item.level
        for name, item in list(logging.root.manager.loggerDict.items())
        if isinstance(item, logging.Logger) and name.startswith("model_usage")
    }
    yield
    for name, level in saved.items():
        logging.getLogger(name).setLevel(level)


def test_development_level_reaches_package_loggers(clean_env, restore_log_levels):
    clean_env.setenv("MODEL_USAGE_ENV", "Development")
    existing = get_logger("log_scanner")

    configure_logging(ConfigLoader.get_app_settings().logging.level)

    assert existing.level == logging.DEBUG
    assert get_logger("created_after_configure").level == logging.DEBUG


def test_unknown_level_name_falls_back_to_info(restore_log_levels):
    assert configure_logging("BASIC_FORMAT") == logging.INFO
    assert get_logger("log_scanner").level == logging.INFO


def test_environment_overrides(clean_env, tmp_path):
    first = str(tmp_path / "server.log")
    second = str(tmp_path / "server-1.log")
    clean_env.setenv("OLLAMA_MODELS", str(tmp_path))
    clean_env.setenv("MODEL_USAGE_LOG_PATHS", os.pathsep.join([first, second]))
    clean_env.setenv("MODEL_USAGE_DAEMON_TIMEOUT", "2.5")
    clean_env.setenv("SERVER_PORT", "9000")

    settings = ConfigLoader.get_app_settings()

    assert settings.storage.models_root == str(tmp_path)
    assert settings.storage.log_paths == [first, second]
    assert settings.daemon.timeout == 2.5
    assert settings.server.port == 9000


@pytest.mark.parametrize(
    "env, expected",
    [
        ({"OLLAMA_HOST": "0.0.0.0:11500"}, "http://0.0.0.0:11500"),
        ({"OLLAMA_HOST": "https://models.internal/"}, "https://models.internal"),
        (
            {"OLLAMA_HOST": "ignored:1", "MODEL_USAGE_DAEMON_URL": "http://explicit:2/"},
            "http://explicit:2",
        ),
    ],
)
def test_daemon_url_resolution(clean_env, env, expected):
    for key, value in env.items():
        clean_env.setenv(key, value)

    assert ConfigLoader.get_app_settings().daemon.base_url == expected


def test_invalid_numeric_override(clean_env):
    clean_env.setenv("SERVER_PORT", "not-a-port")

    with pytest.raises(InvalidConfigError):
        ConfigLoader.get_app_settings()


class TestPlatformPaths:
    def test_default_models_root(self, monkeypatch, tmp_path):
        monkeypatch.setattr(platform_paths, "_home", lambda: str(tmp_path))

        assert platform_paths.default_models_root("Darwin") == os.path.join(
            str(tmp_path), ".ollama", "models"
        )
        assert platform_paths.default_models_root("Windows") == os.path.join(
            str(tmp_path), ".ollama"
        )
        assert platform_paths.default_models_root("Linux") == os.path.join(
            os.sep, "usr", "share", "ollama"
        )

    def test_macos_logs_newest_first(self, monkeypatch, tmp_path):
        monkeypatch.setattr(platform_paths, "_home", lambda: str(tmp_path))
        log_dir = tmp_path / ".ollama" / "logs"
        log_dir.mkdir(parents=True)
        for name in ["server-1.log", "server.log", "server-2.log", "app.log"]:
            (log_dir / name).write_text("", encoding="utf-8")

        paths = platform_paths.default_log_paths(system="Darwin")

        assert [os.path.basename(p) for p in paths] == [
            "server.log",
            "server-2.log",
            "server-1.log",
        ]

    def test_windows_logs_under_local_app_data(self, monkeypatch, tmp_path):
        monkeypatch.setenv("LOCALAPPDATA", str(tmp_path))
        (tmp_path / "Ollama").mkdir()
        (tmp_path / "Ollama" / "server.log").write_text("", encoding="utf-8")

        paths = platform_paths.default_log_paths(system="Windows")

        assert paths == [os.path.join(str(tmp_path), "Ollama", "server.log")]

    def test_linux_has_no_log_files(self):
        assert platform_paths.default_log_paths(system="Linux") == []

    def test_configured_values_win(self, tmp_path):
        settings = AppSettings()
        settings.storage.models_root = str(tmp_path)
        settings.storage.log_paths = ["b.log", "a.log"]

        assert platform_paths.resolve_models_root(settings) == str(tmp_path)
        assert platform_paths.resolve_log_paths(settings) == ["b.log", "a.log"]
