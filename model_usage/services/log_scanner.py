# =============================================================================
# File: log_scanner.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""
Turns daemon server logs into per-model load statistics.

Each log file keeps a rolling cursor: the latest timestamp seen so far in that
file, starting at the file's modification time. Every "loaded meta data" line
is attributed to the cursor's value at that point.

Recognised line shapes, checked in this order:

    time=2024-06-05T10:21:46.262-07:00 level=INFO source=...
    2024/06/05 10:21:46 routes.go:1008: INFO server config ...
    llama_model_loader: loaded meta data with 22 key-value pairs ... sha256-<64 hex>
"""

import os
import re
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional

from model_usage.exceptions import LogScanError
from model_usage.logger import get_logger
from model_usage.models.usage_record import DELETED_SUFFIX, UsageRecord
from model_usage.services.digest_index import DigestIndex
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("log_scanner")

TIME_MARKER = "time="
LOAD_MARKER = "llama_model_loader: loaded meta data"
DIGEST_MARKER = "sha256-"
DIGEST_LENGTH = 64
PLACEHOLDER_PREFIX_LENGTH = 8

SLASH_DATE_FORMAT = "%Y/%m/%d %H:%M:%S"
SLASH_DATE_LENGTH = 19
SLASH_DATE_MIN_LINE_LENGTH = 20
SLASH_DATE_SEPARATOR_OFFSETS = (4, 7)

_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})[Tt ](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?"
    r"(?:([Zz])|([+-])(\d{2}):(\d{2}))"
)
_HEX_DIGEST = re.compile(r"[0-9a-fA-F]{%d}" % DIGEST_LENGTH)

UsageMap = Dict[str, UsageRecord]


def is_rfc3339_timestamp_line(line: str) -> bool:
    return line.startswith(TIME_MARKER)


def has_slash_date_prefix(line: str) -> bool:
    """Cheap structural check for ``YYYY/MM/DD HH:MM:SS ...`` before a full parse."""
    if len(line) < SLASH_DATE_MIN_LINE_LENGTH:
        return False
    return all(line[offset] == "/" for offset in SLASH_DATE_SEPARATOR_OFFSETS)


def is_model_load_line(line: str) -> bool:
    return LOAD_MARKER in line


def parse_rfc3339(value: str) -> Optional[datetime]:
    """Parse an RFC 3339 date-time with explicit offset into local time."""
    match = _RFC3339.fullmatch(value)
    if not match:
        return None
    year, month, day, hour, minute, second, fraction, zulu, sign, off_h, off_m = (
        match.groups()
    )
    if zulu:
        tz = timezone.utc
    else:
        offset = timedelta(hours=int(off_h), minutes=int(off_m))
        if offset >= timedelta(hours=24):
            return None
        tz = timezone(-offset if sign == "-" else offset)
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    # datetime has no leap second; :60 collapses onto the last microsecond of :59
    if second == "60":
        second, microsecond = "59", 999999
    try:
        parsed = datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second),
            microsecond,
            tzinfo=tz,
        )
    except ValueError:
        return None
    return parsed.astimezone()


def parse_time_marker_line(line: str) -> Optional[datetime]:
    remainder = line[len(TIME_MARKER):].split(maxsplit=1)
    if not remainder:
        return None
    return parse_rfc3339(remainder[0])


def parse_slash_date_line(line: str) -> Optional[datetime]:
    try:
        naive = datetime.strptime(line[:SLASH_DATE_LENGTH], SLASH_DATE_FORMAT)
    except ValueError:
        return None
    # Naive values are interpreted in the local timezone
    return naive.astimezone()


def extract_digest(line: str) -> Optional[str]:
    """Return the 64-hex digest following ``sha256-``; None if absent or malformed."""
    start = line.find(DIGEST_MARKER)
    if start < 0:
        return None
    start += len(DIGEST_MARKER)
    candidate = line[start:start + DIGEST_LENGTH]
    if not _HEX_DIGEST.fullmatch(candidate):
        return None
    return candidate


def placeholder_name(digest: str) -> str:
    return f"{digest[:PLACEHOLDER_PREFIX_LENGTH]}{DELETED_SUFFIX}"


class LogEventScanner:
    """Accumulates model load events from server logs into one usage map."""

    def __init__(self, index: DigestIndex):
        self.index = index
        self.usage: UsageMap = {}

    def resolve(self, digest: str):
        """Return ``(name, size)`` for a digest, or the deleted placeholder."""
        entry = self.index.get(digest)
        if entry is None:
            return placeholder_name(digest), 0
        return entry.display_name, entry.size

    def record_load(self, digest: str, when: datetime) -> UsageRecord:
        name, size = self.resolve(digest)
        record = self.usage.get(name)
        if record is None:
            record = UsageRecord(name=name, last_used=when, usage_count=1, size=size)
            self.usage[name] = record
        else:
            record.usage_count += 1
            if when > record.last_used:
                record.last_used = when
        return record

    def scan_file(self, path: str) -> int:
        """Scan one log file; returns the number of load events found."""
        loads = 0
        try:
            with open(path, "r", encoding="utf-8", errors="replace") as f:
                cursor = datetime.fromtimestamp(os.fstat(f.fileno()).st_mtime).astimezone()
                for raw in f:
                    line = raw.rstrip("\r\n")
                    if is_rfc3339_timestamp_line(line):
                        cursor = parse_time_marker_line(line) or cursor
                    elif has_slash_date_prefix(line):
                        cursor = parse_slash_date_line(line) or cursor
                    elif is_model_load_line(line):
                        digest = extract_digest(line)
                        if digest is None:
                            logger.debug(
                                "Load marker without digest in %s", sanitize_for_log(path)
                            )
                            continue
                        self.record_load(digest, cursor)
                        loads += 1
        except OSError as e:
            raise LogScanError(
                f"Failed to read log file {path}: {e.strerror or e}", path=path
            ) from e

        logger.debug("Found %d load event(s) in %s", loads, sanitize_for_log(path))
        return loads

    def scan(self, paths: Iterable[str]) -> UsageMap:
        for path in paths:
            self.scan_file(path)
        return self.usage


def scan_logs(paths: Iterable[str], index: DigestIndex) -> UsageMap:
    """Scan ``paths`` in the given order against ``index``."""
    return LogEventScanner(index).scan(paths)
