# =============================================================================
# File: test_health.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import httpx
import pytest

from helpers import DIGEST_FOO
from model_usage.services.daemon_client import DaemonClient
from model_usage.services.health_service import HealthService


def _client(settings, up=True):
    def handler(request: httpx.Request) -> httpx.Response:
        if not up:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json={"models": []})

    return DaemonClient(settings.daemon, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_healthy(settings, write_manifest, write_log):
    write_manifest("library", "foo", "latest", DIGEST_FOO, 1)
    settings.storage.log_paths = [str(write_log("server.log", ["nothing"]))]

    status = await HealthService.get_health_status(settings, client=_client(settings))

    assert status["status"] == "healthy"
    assert status["components"] == {"storage": "healthy", "daemon": "healthy"}
    assert status["details"]["storage"]["log_files"] == 1
    assert "rss_mb" in status["details"]["memory"]


@pytest.mark.asyncio
async def test_degraded_without_logs_or_daemon(settings):
    status = await HealthService.get_health_status(
        settings, client=_client(settings, up=False)
    )

    assert status["status"] == "degraded"
    assert status["components"] == {"storage": "degraded", "daemon": "unhealthy"}


@pytest.mark.asyncio
async def test_unhealthy_without_manifests(settings, tmp_path):
    settings.storage.models_root = str(tmp_path / "nowhere")

    status = await HealthService.get_health_status(settings, client=_client(settings))

    assert status["status"] == "unhealthy"
    assert status["details"]["storage"]["manifests_available"] is False


@pytest.mark.asyncio
async def test_default_client_built_from_settings(settings, monkeypatch):
    built = []

    class RecordingClient(DaemonClient):
        def __init__(self, config=None, transport=None):
            built.append(config)
            super().__init__(config, transport=_client(settings)._transport)

    monkeypatch.setattr("model_usage.services.health_service.DaemonClient", RecordingClient)

    status = await HealthService.get_health_status(settings)

    assert built == [settings.daemon]
    assert status["components"]["daemon"] == "healthy"
