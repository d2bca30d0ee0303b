# =============================================================================
# File: installed_model.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class InstalledModelDetails(BaseModel):
    model_config = ConfigDict(extra="allow")

    format: Optional[str] = None
    family: Optional[str] = None
    parameter_size: Optional[str] = None
    quantization_level: Optional[str] = None


class InstalledModel(BaseModel):
    """
    One entry of the daemon's installed-model listing.
    """

    model_config = ConfigDict(extra="allow")

    name: str
    modified_at: Optional[str] = None
    size: int = Field(0, ge=0)
    digest: Optional[str] = None
    details: InstalledModelDetails = Field(default_factory=InstalledModelDetails)


class InstalledModelList(BaseModel):
    model_config = ConfigDict(extra="allow")

    models: List[InstalledModel] = Field(default_factory=list)
