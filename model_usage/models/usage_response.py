# =============================================================================
# File: usage_response.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List

from pydantic import Field

from model_usage.models.base_response import BaseResponse
from model_usage.models.usage_record import UsageRecord


class UsageReportResponse(BaseResponse):
    """
    Response model for the model usage report.
    """

    results: List[UsageRecord] = Field(
        default_factory=list,
        description="Usage records, most actively used first unless a sort was requested.",
    )


class UnusedModelsResponse(BaseResponse):
    results: List[str] = Field(
        default_factory=list,
        description="Installed model names with no recorded load.",
    )


class DeleteModelResponse(BaseResponse):
    results: List[str] = Field(
        default_factory=list, description="Model names deleted by this request."
    )
