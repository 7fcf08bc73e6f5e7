"""Hash utilities for MinGit."""

import hashlib
import re

from .errors import HashError


OBJECT_KINDS = ('blob', 'tree', 'commit')
OBJECT_ID_RE = re.compile(r"[0-9a-f]{40}")


def object_header(kind: str, size: int) -> bytes:
    """
    Build the header that prefixes every stored object.

    Format: <kind> <size>\0
    """
    return f"{kind} {size}\0".encode()


def hash_object(kind: str, payload: bytes) -> str:
    """
    Compute the id of an object.

    Args:
        kind: Object kind ('blob', 'tree' or 'commit')
        payload: Raw object payload

    Returns:
        40-character hex string
    """
    try:
        digest = hashlib.sha1(object_header(kind, len(payload)))
        digest.update(payload)
    except (TypeError, ValueError) as e:
        raise HashError(f"Cannot hash {kind} object: {e}") from e
    return digest.hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute the blob id of a file without storing it.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object('blob', f.read())


def is_object_id(value: str) -> bool:
    """Return True if value looks like a full 40-character hex id."""
    return OBJECT_ID_RE.fullmatch(value) is not None
