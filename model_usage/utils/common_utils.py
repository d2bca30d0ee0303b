# =============================================================================
# File: common_utils.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from datetime import datetime
from typing import Iterable, List, Union

from model_usage.models.usage_record import NEVER_USED

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def split_model_names(names: Union[str, Iterable[str]]) -> List[str]:
    """Split a comma-separated string (or list of such strings) into trimmed names."""
    if isinstance(names, str):
        names = [names]
    result = []
    for item in names:
        for part in item.split(","):
            part = part.strip()
            if part:
                result.append(part)
    return result


def format_bytes(num_bytes: int) -> str:
    """Format a byte count using base-1024 units with two decimals."""
    size = float(num_bytes)
    unit_index = 0
    while size >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1
    return f"{size:.2f} {_SIZE_UNITS[unit_index]}"


def format_last_used(value: datetime) -> str:
    if value == NEVER_USED:
        return "never"
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")
