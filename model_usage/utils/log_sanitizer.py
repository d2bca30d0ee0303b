# =============================================================================
# File: log_sanitizer.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

import re
from typing import Any

_CONTROL_CHARS = re.compile(r"[\r\n\t\x00-\x1f\x7f-\x9f]")


def sanitize_for_log(value: Any, max_length: int = 200) -> str:
    """
    Sanitize input for safe logging by replacing control characters.

    Model names, file paths and daemon response bodies all come from outside
    the process and end up in log lines.

    Args:
        value: Input value to sanitize
        max_length: Longest string emitted before truncation

    Returns:
        str: Sanitized string safe for logging
    """
    if value is None:
        return "None"

    sanitized = _CONTROL_CHARS.sub("_", str(value))

    # Limit length to prevent log flooding
    if len(sanitized) > max_length:
        sanitized = sanitized[: max_length - 3] + "..."

    return sanitized


def body_snippet(body: bytes, max_bytes: int = 500) -> str:
    """Decode a response body into a bounded, printable snippet."""
    snippet = body[:max_bytes].decode("utf-8", errors="replace")
    return snippet + "..." if len(body) > max_bytes else snippet
