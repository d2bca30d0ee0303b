# =============================================================================
# File: helpers.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

DIGEST_FOO = "a" * 64
DIGEST_BAR = "b" * 64
DIGEST_GONE = "0123456789abcdef" * 4


def load_line(digest):
    return (
        "llama_model_loader: loaded meta data with 26 key-value pairs and 291 tensors "
        f"from /usr/share/ollama/.ollama/models/blobs/sha256-{digest} (version GGUF V3 (latest))"
    )
