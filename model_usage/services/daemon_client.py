# =============================================================================
# File: daemon_client.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Async client for the model-serving daemon's listing and delete endpoints."""

from typing import Iterable, List, Optional, Union

import httpx
from pydantic import ValidationError

from model_usage.config.appsettings import DaemonConfig
from model_usage.exceptions import (
    DaemonConnectionError,
    DaemonResponseError,
    InvalidInputError,
    ModelDeletionError,
)
from model_usage.logger import get_logger
from model_usage.models.installed_model import InstalledModel, InstalledModelList
from model_usage.utils.common_utils import split_model_names
from model_usage.utils.log_sanitizer import body_snippet, sanitize_for_log

logger = get_logger("daemon_client")

LIST_MODELS_PATH = "/api/tags"
DELETE_MODEL_PATH = "/api/delete"


class DaemonClient:
    """
    Thin wrapper over ``httpx.AsyncClient``.

    A new connection pool is opened per call; nothing is retried and any failure
    is reported to the caller.
    """

    def __init__(
        self,
        config: Optional[DaemonConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config or DaemonConfig()
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=self._transport,
        )

    async def list_models(self) -> List[InstalledModel]:
        """GET the installed-model listing."""
        async with self._client() as client:
            try:
                response = await client.get(LIST_MODELS_PATH)
            except httpx.HTTPError as e:
                logger.error("Failed to fetch models: %s", sanitize_for_log(str(e)))
                raise DaemonConnectionError(f"Failed to fetch models: {e}") from e

            try:
                response.raise_for_status()
                listing = InstalledModelList.model_validate(response.json())
            except (httpx.HTTPStatusError, ValueError, ValidationError) as e:
                logger.error("Failed to parse model list: %s", sanitize_for_log(str(e)))
                raise DaemonResponseError(f"Failed to parse model list: {e}") from e

        logger.debug("Daemon reports %d installed model(s)", len(listing.models))
        return listing.models

    async def delete_models(self, names: Union[str, Iterable[str]]) -> List[str]:
        """
        Delete each named model; ``names`` may be a comma-separated string.

        Every name is attempted. Returns the names deleted, or raises
        ModelDeletionError listing every failure once all attempts are done.
        """
        models = split_model_names(names)
        if not models:
            raise InvalidInputError("No model names given to delete")

        deleted: List[str] = []
        errors: List[str] = []
        async with self._client() as client:
            for model in models:
                logger.info("Deleting model: %s", sanitize_for_log(model))
                try:
                    response = await client.request(
                        "DELETE", DELETE_MODEL_PATH, json={"model": model}
                    )
                except httpx.HTTPError as e:
                    error_msg = f"Failed to send delete request for {model}: {e}"
                    logger.error(sanitize_for_log(error_msg, max_length=500))
                    errors.append(error_msg)
                    continue

                if not response.is_success:
                    error_msg = (
                        f"Failed to delete model {model}. "
                        f"Status: {response.status_code}, Body: {body_snippet(response.content)}"
                    )
                    logger.error(sanitize_for_log(error_msg, max_length=500))
                    errors.append(error_msg)
                else:
                    logger.info("Successfully deleted model: %s", sanitize_for_log(model))
                    deleted.append(model)

        if errors:
            raise ModelDeletionError("\n".join(errors), failures=errors)
        return deleted
