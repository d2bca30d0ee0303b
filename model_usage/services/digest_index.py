# =============================================================================
# File: digest_index.py
# Date: 2026-10-19
# Copyright (c) 2024 Goutam Malakar. All rights reserved.
# =============================================================================

"""Maps weights digests to the canonical model names that reference them."""

import json
import os
from pathlib import PurePath
from typing import Dict, Iterator, Optional

from pydantic import ValidationError

from model_usage.exceptions import ManifestScanError
from model_usage.logger import get_logger
from model_usage.models.manifest import Manifest, ManifestLayer
from model_usage.models.usage_record import DigestIndexEntry
from model_usage.utils.log_sanitizer import sanitize_for_log

logger = get_logger("digest_index")

DEFAULT_NAMESPACE = "library"
DIGEST_PREFIX = "sha256:"
NAME_SEPARATOR = ", "

DigestIndex = Dict[str, DigestIndexEntry]


class DigestIndexBuilder:
    """Scans ``<root>/<manifests_dir>/**`` into a digest index."""

    def __init__(self, models_root: str, manifests_dir: str = "manifests"):
        self.models_root = models_root
        self.manifest_root = os.path.join(models_root, manifests_dir)

    @staticmethod
    def canonical_name(path: str) -> Optional[str]:
        """
        Derive ``[namespace/]model:tag`` from ``.../<registry>/<namespace>/<model>/<tag>``.
        Returns None when the path has fewer than four components.
        """
        parts = PurePath(path).parts
        if len(parts) < 4:
            return None
        _registry, namespace, model, tag = parts[-4:]
        if namespace == DEFAULT_NAMESPACE:
            return f"{model}:{tag}"
        return f"{namespace}/{model}:{tag}"

    @staticmethod
    def normalize_digest(digest: str) -> str:
        if digest.startswith(DIGEST_PREFIX):
            return digest[len(DIGEST_PREFIX):]
        return digest

    @staticmethod
    def parse_model_layer(content: str) -> Optional[ManifestLayer]:
        """Return the weights layer of a manifest document, or None if it is not one."""
        try:
            manifest = Manifest.model_validate(json.loads(content))
        except (json.JSONDecodeError, ValidationError, ValueError, TypeError):
            return None
        return manifest.model_layer()

    def _iter_manifest_files(self) -> Iterator[str]:
        def _raise(err: OSError) -> None:
            raise ManifestScanError(
                f"Failed to read manifest directory {err.filename}: {err.strerror or err}",
                path=err.filename,
            ) from err

        for dirpath, dirnames, filenames in os.walk(self.manifest_root, onerror=_raise):
            # Sorted so name concatenation order is stable between runs
            dirnames.sort()
            for filename in sorted(filenames):
                path = os.path.join(dirpath, filename)
                if os.path.isfile(path):
                    yield path

    @staticmethod
    def _read_manifest(path: str) -> Optional[str]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except UnicodeDecodeError:
            logger.debug("Skipping non-UTF-8 manifest %s", sanitize_for_log(path))
            return None
        except OSError as e:
            raise ManifestScanError(
                f"Failed to read manifest file {path}: {e.strerror or e}", path=path
            ) from e

    def build(self) -> DigestIndex:
        """
        Walk the manifest tree and return ``{digest: DigestIndexEntry}``.

        Unparsable or unrelated files are skipped; unreadable directories or files
        raise ManifestScanError.
        """
        index: DigestIndex = {}

        if not os.path.exists(self.manifest_root):
            logger.warning(
                "Manifest directory does not exist: %s",
                sanitize_for_log(self.manifest_root),
            )
            return index

        for path in self._iter_manifest_files():
            content = self._read_manifest(path)
            if content is None:
                continue
            layer = self.parse_model_layer(content)
            if layer is None:
                logger.debug("No model layer in %s", sanitize_for_log(path))
                continue
            name = self.canonical_name(path)
            if name is None:
                continue

            digest = self.normalize_digest(layer.digest)
            entry = index.get(digest)
            if entry is None:
                index[digest] = DigestIndexEntry(
                    digest=digest, display_name=name, size=layer.size
                )
            else:
                # Last observed size wins for digests shared by several tags
                entry.display_name = f"{entry.display_name}{NAME_SEPARATOR}{name}"
                entry.size = layer.size

        logger.info(
            "Indexed %d model digest(s) under %s",
            len(index),
            sanitize_for_log(self.manifest_root),
        )
        return index


def build_digest_index(models_root: str, manifests_dir: str = "manifests") -> DigestIndex:
    return DigestIndexBuilder(models_root, manifests_dir).build()
