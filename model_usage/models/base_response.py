# =============================================================================
# File: base_response.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List

from pydantic import BaseModel, Field


class BaseResponse(BaseModel):
    """
    Fields shared by every API response.
    """

    success: bool = Field(True, description="Whether the operation succeeded.")
    message: str = Field("", description="Human readable outcome.")
    time_taken: float = Field(0.0, description="Processing time in seconds.")
    warnings: List[str] = Field(
        default_factory=list, description="Non-fatal issues encountered."
    )
