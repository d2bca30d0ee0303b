# =============================================================================
# File: conftest.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import json
import logging
import os
import tempfile

# Keep module loggers from creating ./logs during collection
os.environ.setdefault("MODEL_USAGE_LOG_PATH", tempfile.mkdtemp(prefix="model_usage_logs_"))

import pytest

from model_usage.config.appsettings import AppSettings

ENV_VARS = [
    "MODEL_USAGE_ENV",
    "OLLAMA_MODELS",
    "OLLAMA_HOST",
    "MODEL_USAGE_LOG_PATHS",
    "MODEL_USAGE_DAEMON_URL",
    "MODEL_USAGE_DAEMON_TIMEOUT",
    "SERVER_HOST",
    "SERVER_PORT",
    "MODEL_USAGE_LOG_LEVEL",
]


@pytest.fixture(autouse=True, scope="session")
def silence_noisy_loggers():
    """Raise log level for chatty module loggers during tests."""
    noisy_loggers = [
        "model_usage.config_loader",
        "model_usage.digest_index",
        "model_usage.usage_service",
        "model_usage.daemon_client",
    ]
    previous_levels = {}
    for name in noisy_loggers:
        logger = logging.getLogger(name)
        previous_levels[name] = logger.level
        logger.setLevel(logging.ERROR)

    yield

    for name, level in previous_levels.items():
        logging.getLogger(name).setLevel(level)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment override the config loader reads."""
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def models_root(tmp_path):
    root = tmp_path / "models"
    (root / "manifests").mkdir(parents=True)
    return root


@pytest.fixture
def write_manifest(models_root):
    """Write ``manifests/<registry>/<namespace>/<model>/<tag>`` with one weights layer."""

    def _write(
        namespace,
        model,
        tag,
        digest,
        size,
        registry="registry.example",
        media_type="application/vnd.ollama.image.model",
        prefix="sha256:",
    ):
        path = models_root / "manifests" / registry / namespace / model / tag
        path.parent.mkdir(parents=True, exist_ok=True)
        document = {
            "schemaVersion": 2,
            "layers": [
                {
                    "mediaType": "application/vnd.ollama.image.template",
                    "digest": "sha256:" + "f" * 64,
                    "size": 12,
                },
                {"mediaType": media_type, "digest": prefix + digest, "size": size},
            ],
        }
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_log(tmp_path):
    """Write a server log file from a list of lines."""

    def _write(name, lines):
        log_dir = tmp_path / "logs"
        log_dir.mkdir(exist_ok=True)
        path = log_dir / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture
def settings(models_root):
    s = AppSettings()
    s.storage.models_root = str(models_root)
    s.storage.log_paths = []
    s.daemon.base_url = "http://daemon.test"
    return s
