"""Centralized canonical JSON serialization.

Used everywhere a shape tree has to become a stable string: descriptor
cache keys, shape fingerprints and CLI output of parsed trees.
"""

import hashlib
import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization for byte-stable cache keys.

    Rules:
    - Sorted keys
    - Stable separators (",", ":")
    - Lists keep their order (field order is significant in a shape)
    - No ASCII escaping

    Args:
        obj: Python object to serialize

    Returns:
        Canonical JSON string
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False
    )


def canonical_sha256(obj: Any) -> str:
    """Compute SHA256 of the canonical JSON form of ``obj``.

    Returns:
        SHA256 hash as hex string (prefixed with "sha256:")
    """
    digest = hashlib.sha256(canonical_dumps(obj).encode("utf-8")).hexdigest()
    return f"sha256:{digest}"
