# =============================================================================
# File: usage_reconciler.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

from typing import Iterable, List, Mapping

from model_usage.exceptions import InvalidInputError
from model_usage.logger import get_logger
from model_usage.models.installed_model import InstalledModel
from model_usage.models.usage_record import NEVER_USED, UsageRecord

logger = get_logger("usage_reconciler")

SORT_COLUMNS = ("name", "last_used", "usage_count", "size")
SORT_DIRECTIONS = ("asc", "desc")


def _report_order(record: UsageRecord):
    return (-record.usage_count, -record.last_used.timestamp(), record.name)


def reconcile(
    usage: Mapping[str, UsageRecord], installed: Iterable[InstalledModel]
) -> List[UsageRecord]:
    """
    Merge observed usage with the installed-model list.

    Installed models never seen in the logs get a zero-usage record. Records that
    already exist keep their observed values, size included.

    Ordering: usage_count desc, last_used desc, name asc.
    """
    merged = dict(usage)
    for model in installed:
        if model.name not in merged:
            merged[model.name] = UsageRecord(
                name=model.name,
                last_used=NEVER_USED,
                usage_count=0,
                size=model.size,
            )
    records = sorted(merged.values(), key=_report_order)
    logger.debug("Reconciled %d usage record(s)", len(records))
    return records


def find_unused(
    usage: Mapping[str, UsageRecord], installed: Iterable[InstalledModel]
) -> List[str]:
    """Installed model names absent from ``usage``, in listing order."""
    return [model.name for model in installed if model.name not in usage]


def _strip_deleted(name: str) -> str:
    return name[: -len("-deleted")] if name.endswith("-deleted") else name


def validate_direction(direction: str) -> None:
    if direction not in SORT_DIRECTIONS:
        raise InvalidInputError(
            f"Unknown sort direction '{direction}'. Expected 'asc' or 'desc'"
        )


def sort_records(
    records: Iterable[UsageRecord], column: str, direction: str = "asc"
) -> List[UsageRecord]:
    """
    Presentation sort by a single column.

    Deleted-model placeholders always follow active models, and are compared by
    name without their "-deleted" suffix.
    """
    if column not in SORT_COLUMNS:
        raise InvalidInputError(
            f"Unknown sort column '{column}'. Expected one of: {', '.join(SORT_COLUMNS)}"
        )
    validate_direction(direction)

    if column == "name":
        key = lambda r: _strip_deleted(r.name)  # noqa: E731
    else:
        key = lambda r: getattr(r, column)  # noqa: E731

    reverse = direction == "desc"
    records = list(records)
    active = sorted((r for r in records if not r.is_deleted), key=key, reverse=reverse)
    deleted = sorted((r for r in records if r.is_deleted), key=key, reverse=reverse)
    return active + deleted
