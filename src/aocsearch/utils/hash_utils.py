"""hash_utils.py - Byte-stable hashing for receipts.

Provides deterministic, cross-platform hashing for:
- Puzzle input text (UTF-8, line endings normalised)
- Integer numpy arrays (byte-exact)
- JSON-serializable objects (canonical key order)

All hashes use SHA256 and are stable across runs and platforms.
"""
from __future__ import annotations
import hashlib
import json
from typing import Any
import numpy as np


def sha256_bytes(b: bytes) -> str:
    """Compute SHA256 hex digest of bytes.

    Args:
        b: Input bytes

    Returns:
        Hex string (64 chars)
    """
    return hashlib.sha256(b).hexdigest()


def hash_text(text: str) -> str:
    """Hash puzzle input text.

    Notes:
        - CRLF and CR line endings are normalised to LF first, so the same
          input checked out on different platforms hashes identically
    """
    normalised = text.replace("\r\n", "\n").replace("\r", "\n")
    return sha256_bytes(normalised.encode("utf-8"))


def hash_ndarray_int(a: np.ndarray) -> str:
    """Hash integer or boolean numpy array (byte-exact).

    Args:
        a: Integer/bool numpy array

    Returns:
        SHA256 hex digest

    Raises:
        RuntimeError: If array is not integer or bool dtype
    """
    if not (np.issubdtype(a.dtype, np.integer) or a.dtype == np.bool_):
        raise RuntimeError(
            f"hash_ndarray_int requires integer dtype, got {a.dtype}"
        )
    # Shape is part of the digest: a 2x3 and a 3x2 grid must differ
    header = f"{a.dtype.str}:{a.shape}".encode("ascii")
    return sha256_bytes(header + np.ascontiguousarray(a).tobytes(order="C"))


def hash_json_canonical(obj: Any) -> str:
    """Hash JSON-serializable object with canonical serialization.

    Args:
        obj: JSON-serializable object (dict, list, primitives)

    Returns:
        SHA256 hex digest of canonical JSON representation
    """
    json_str = json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )
    return sha256_bytes(json_str.encode("utf-8"))
