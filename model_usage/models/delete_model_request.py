# =============================================================================
# File: delete_model_request.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Union

from pydantic import BaseModel, Field, field_validator

from model_usage.utils.common_utils import split_model_names


class DeleteModelRequest(BaseModel):
    """Request model for deleting installed models.

    Fields:
      - models: a single name, a comma-separated string of names, or a list
    """

    models: Union[str, List[str]] = Field(
        ..., description="Model name(s) to delete; strings may be comma-separated."
    )

    @field_validator("models")
    @classmethod
    def split_names(cls, v: Union[str, List[str]]) -> List[str]:
        names = split_model_names(v)
        if not names:
            raise ValueError("At least one model name is required")
        return names
