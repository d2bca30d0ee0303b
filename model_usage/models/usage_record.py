# =============================================================================
# File: usage_record.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from datetime import datetime, timezone

from pydantic import BaseModel, Field

# "Never used": the Unix epoch expressed in local time
NEVER_USED = datetime.fromtimestamp(0, tz=timezone.utc).astimezone()

DELETED_SUFFIX = "...-deleted"


class DigestIndexEntry(BaseModel):
    """
    Canonical name(s) and weights size for one content digest.
    """

    digest: str = Field(..., description="Bare hex content digest of the weights layer.")
    display_name: str = Field(
        ...,
        description="Canonical model names sharing this digest, joined by ', '.",
    )
    size: int = Field(0, ge=0, description="Weights layer size in bytes.")


class UsageRecord(BaseModel):
    """
    Aggregated load statistics for one model name.
    """

    name: str = Field(..., description="Resolved model name or deleted placeholder.")
    last_used: datetime = Field(
        default=NEVER_USED,
        description="Most recent load time; the Unix epoch means never used.",
    )
    usage_count: int = Field(0, ge=0, description="Number of observed loads.")
    size: int = Field(0, ge=0, description="Size in bytes.")

    @property
    def is_deleted(self) -> bool:
        return self.name.endswith("-deleted")

    @property
    def never_used(self) -> bool:
        return self.usage_count == 0
