# =============================================================================
# File: manifest.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

MODEL_MEDIA_TYPE = "application/vnd.ollama.image.model"


class ManifestLayer(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    media_type: str = Field(..., alias="mediaType")
    digest: str
    size: int = Field(..., ge=0)


class Manifest(BaseModel):
    """A per-tag manifest; only its layers matter here."""

    model_config = ConfigDict(extra="ignore")

    layers: List[ManifestLayer]

    def model_layer(self) -> Optional[ManifestLayer]:
        """Return the primary weights layer, if the manifest has one."""
        return next(
            (layer for layer in self.layers if layer.media_type == MODEL_MEDIA_TYPE),
            None,
        )
