# =============================================================================
# File: usage.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import time
from typing import Optional

from fastapi import APIRouter, Depends, Query

from model_usage.logger import get_logger
from model_usage.models.delete_model_request import DeleteModelRequest
from model_usage.models.usage_response import (
    DeleteModelResponse,
    UnusedModelsResponse,
    UsageReportResponse,
)
from model_usage.services.usage_reconciler import sort_records, validate_direction
from model_usage.services.usage_service import UsageService
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("usage_router")
router = APIRouter()


def get_usage_service() -> UsageService:
    from model_usage.app_init import APP_SETTINGS

    return UsageService(APP_SETTINGS)


@router.get("/models/usage", response_model=UsageReportResponse)
async def model_usage(
    sort: Optional[str] = Query(
        None, description="Column to sort by: name, last_used, usage_count or size"
    ),
    direction: str = Query("desc", description="Sort direction: asc or desc"),
    service: UsageService = Depends(get_usage_service),
) -> UsageReportResponse:
    """
    Usage report for every installed or previously loaded model.

    Default order is most used first, then most recently used, then by name.
    Models deleted since they were logged appear as ``<digest prefix>...-deleted``.
    """
    validate_direction(direction)
    started = time.time()
    records = await service.get_model_usage()
    if sort:
        records = sort_records(records, sort, direction)
    return UsageReportResponse(
        success=True,
        message=f"Found {len(records)} models",
        time_taken=time.time() - started,
        results=records,
    )


@router.get("/models/unused", response_model=UnusedModelsResponse)
async def unused_models(
    service: UsageService = Depends(get_usage_service),
) -> UnusedModelsResponse:
    """Installed models that never appear in the server logs."""
    started = time.time()
    names = await service.list_unused_models()
    return UnusedModelsResponse(
        success=True,
        message=f"Found {len(names)} unused models",
        time_taken=time.time() - started,
        results=names,
    )


@router.post("/models/delete", response_model=DeleteModelResponse)
async def delete_models(
    request: DeleteModelRequest,
    service: UsageService = Depends(get_usage_service),
) -> DeleteModelResponse:
    logger.info("Delete request for: %s", sanitize_for_log(", ".join(request.models)))
    started = time.time()
    deleted = await service.delete_models(request.models)
    return DeleteModelResponse(
        success=True,
        message=f"Deleted {len(deleted)} models",
        time_taken=time.time() - started,
        results=deleted,
    )
