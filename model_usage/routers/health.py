# =============================================================================
# File: health.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from fastapi import APIRouter, HTTPException

from model_usage.logger import get_logger
from model_usage.services.health_service import HealthService

logger = get_logger("health")
router = APIRouter()


@router.get("/health")
async def health_check():
    """Storage, daemon and process health."""
    from model_usage.app_init import APP_SETTINGS

    try:
        return await HealthService.get_health_status(APP_SETTINGS)
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Service unhealthy")
