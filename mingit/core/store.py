"""Content-addressable object storage for MinGit."""

import logging
import os
import tempfile
import zlib
from pathlib import Path
from typing import Tuple

from .errors import (
    CorruptObject,
    ObjectNotFound,
    StorageIOError,
    UsageError,
)
from .hash import OBJECT_KINDS, hash_object, is_object_id, object_header

logger = logging.getLogger(__name__)

MIN_PREFIX_LENGTH = 4


class ObjectStore:
    """
    Stores compressed, immutable objects keyed by their id.

    Objects live in subdirectories named by the first 2 characters
    of the id, with the remaining 38 characters as the filename:

        objects/ab/cdef0123456789...

    Each file holds zlib(<kind> <size>\0<payload>).
    """

    def __init__(self, objects_dir: Path):
        """
        Initialize object store.

        Args:
            objects_dir: Path to the objects directory
        """
        self.objects_dir = Path(objects_dir)

    def object_path(self, object_id: str) -> Path:
        """
        Get filesystem path for an object.

        Args:
            object_id: 40-character hex id

        Returns:
            Path: Full path to object file
        """
        if not is_object_id(object_id):
            raise UsageError(f"Not a valid object id: {object_id!r}")
        return self.objects_dir / object_id[:2] / object_id[2:]

    def exists(self, object_id: str) -> bool:
        """Check whether an object is stored, without reading it."""
        return self.object_path(object_id).is_file()

    def put(self, kind: str, payload: bytes) -> str:
        """
        Store an object.

        Writing the same (kind, payload) twice is a no-op the second time.

        Args:
            kind: Object kind ('blob', 'tree' or 'commit')
            payload: Raw object payload

        Returns:
            str: 40-character hex id of the object

        Raises:
            UsageError: If kind is not a known object kind
            StorageIOError: If the object cannot be written
        """
        if kind not in OBJECT_KINDS:
            raise UsageError(f"Unknown object kind: {kind!r}")

        object_id = hash_object(kind, payload)
        path = self.object_path(object_id)

        if path.exists():
            logger.debug("Object %s already stored, skipping write", object_id)
            return object_id

        compressed = zlib.compress(object_header(kind, len(payload)) + payload)

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Cannot create object directory {path.parent}: {e}") from e

        # Whole-file write: temp file in the same directory, then rename
        try:
            tmp_fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix='.tmp_')
        except OSError as e:
            raise StorageIOError(f"Cannot write object {object_id}: {e}") from e
        try:
            with os.fdopen(tmp_fd, 'wb') as f:
                f.write(compressed)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageIOError(f"Cannot write object {object_id}: {e}") from e

        logger.debug("Stored %s %s (%d bytes)", kind, object_id, len(payload))
        return object_id

    def get(self, object_id: str) -> Tuple[str, bytes]:
        """
        Read an object.

        Args:
            object_id: 40-character hex id

        Returns:
            Tuple of (kind, payload)

        Raises:
            ObjectNotFound: If no object is stored under the id
            CorruptObject: If the object cannot be decompressed or parsed
            StorageIOError: If the object file cannot be read
        """
        path = self.object_path(object_id)

        try:
            with open(path, 'rb') as f:
                compressed = f.read()
        except FileNotFoundError as e:
            raise ObjectNotFound(f"Object {object_id} not found", object_id) from e
        except OSError as e:
            raise StorageIOError(f"Cannot read object {object_id}: {e}") from e

        try:
            content = zlib.decompress(compressed)
        except zlib.error as e:
            raise CorruptObject(f"Object {object_id} cannot be decompressed: {e}", object_id) from e

        # Parse header: <kind> <size>\0
        null_idx = content.find(b'\0')
        if null_idx == -1:
            raise CorruptObject(f"Object {object_id} has no header separator", object_id)

        header = content[:null_idx]
        payload = content[null_idx + 1:]

        try:
            kind, size_str = header.decode('ascii').split(' ', 1)
            size = int(size_str)
        except ValueError as e:
            raise CorruptObject(f"Invalid object header in {object_id}: {header!r}", object_id) from e

        if kind not in OBJECT_KINDS:
            raise CorruptObject(f"Unknown object kind {kind!r} in {object_id}", object_id)

        if len(payload) != size:
            raise CorruptObject(
                f"Object {object_id} size mismatch: header says {size}, got {len(payload)}",
                object_id,
            )

        return kind, payload

    def resolve(self, prefix: str) -> str:
        """
        Expand an abbreviated object id.

        Args:
            prefix: Full id or at least 4 leading hex characters

        Returns:
            str: Full 40-character id

        Raises:
            UsageError: If the prefix is malformed or ambiguous
            ObjectNotFound: If no stored object matches
        """
        prefix = prefix.lower()
        if is_object_id(prefix):
            return prefix

        if len(prefix) < MIN_PREFIX_LENGTH or len(prefix) > 40:
            raise UsageError(f"Object id must be 4 to 40 hex characters: {prefix!r}")
        if any(c not in '0123456789abcdef' for c in prefix):
            raise UsageError(f"Not a valid object id: {prefix!r}")

        subdir = self.objects_dir / prefix[:2]
        matches = []
        if subdir.is_dir():
            for obj_file in subdir.iterdir():
                full_id = prefix[:2] + obj_file.name
                if full_id.startswith(prefix) and is_object_id(full_id):
                    matches.append(full_id)

        if not matches:
            raise ObjectNotFound(f"Object {prefix} not found", prefix)
        if len(matches) > 1:
            raise UsageError(f"Object id {prefix} is ambiguous ({len(matches)} matches)")
        return matches[0]

    def __repr__(self) -> str:
        """String representation."""
        return f"ObjectStore(path={self.objects_dir})"
