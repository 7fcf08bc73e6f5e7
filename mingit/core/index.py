"""Index (staging area) implementation."""

import logging
import os
import struct
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import BadSignature, IndexFormatError, StorageIOError, TruncatedIndex, UsageError
from .hash import is_object_id

logger = logging.getLogger(__name__)

SIGNATURE = b'DIRC'
VERSION = 1
MODE_REGULAR = 0o100644

HEADER = struct.Struct('>4sII')     # signature, version, entry count
ENTRY_HEAD = struct.Struct('>I20sH')  # mode, binary id, path length
MAX_PATH_LENGTH = 0xFFFF


@dataclass
class IndexEntry:
    """A staged path with the id and mode of its content."""
    mode: int
    sha1: str
    path: str

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode:o} {self.sha1[:7]} {self.path})"


def encode_index(entries: List[IndexEntry]) -> bytes:
    """
    Encode entries in the binary index format.

    Format:
    - Header: 'DIRC' + version (4 bytes BE) + entry count (4 bytes BE)
    - Entries, in the given order: mode (4 bytes BE), id (20 raw bytes),
      path length (2 bytes BE), path bytes (no terminator)
    """
    content = bytearray(HEADER.pack(SIGNATURE, VERSION, len(entries)))

    for entry in entries:
        if not is_object_id(entry.sha1):
            raise UsageError(f"Not a valid object id for {entry.path}: {entry.sha1!r}")
        path = entry.path.encode()
        if len(path) > MAX_PATH_LENGTH:
            raise UsageError(f"Path too long for index ({len(path)} bytes): {entry.path}")
        content.extend(ENTRY_HEAD.pack(entry.mode, bytes.fromhex(entry.sha1), len(path)))
        content.extend(path)

    return bytes(content)


def decode_index(data: bytes) -> List[IndexEntry]:
    """
    Decode the binary index format.

    Raises:
        BadSignature: If the header signature or version is wrong
        TruncatedIndex: If the data ends before a declared record
    """
    if len(data) < HEADER.size:
        raise TruncatedIndex(f"Index header needs {HEADER.size} bytes, got {len(data)}")
    if data[:4] != SIGNATURE:
        raise BadSignature(f"Invalid index signature: {data[:4]!r}")

    _, version, count = HEADER.unpack_from(data, 0)
    if version != VERSION:
        raise BadSignature(f"Unsupported index version: {version}")

    entries = []
    offset = HEADER.size

    for i in range(count):
        if len(data) - offset < ENTRY_HEAD.size:
            raise TruncatedIndex(f"Index entry {i} is truncated at offset {offset}")
        mode, digest, path_len = ENTRY_HEAD.unpack_from(data, offset)
        offset += ENTRY_HEAD.size

        if len(data) - offset < path_len:
            raise TruncatedIndex(
                f"Index entry {i} declares a {path_len}-byte path, "
                f"only {len(data) - offset} bytes left"
            )
        try:
            path = data[offset:offset + path_len].decode()
        except UnicodeDecodeError as e:
            raise IndexFormatError(f"Index entry {i} has an invalid path: {e}") from e
        offset += path_len

        entries.append(IndexEntry(mode=mode, sha1=digest.hex(), path=path))

    return entries


class Index:
    """
    MinGit index (staging area).

    The index records the path -> (id, mode) mapping intended for the
    next snapshot. It is always read whole, changed in memory, and
    rewritten whole.
    """

    def __init__(self, repo):
        """
        Initialize index for a repository.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.entries: List[IndexEntry] = []

    @property
    def path(self) -> Path:
        return self.repo.index_file

    def load(self) -> List[IndexEntry]:
        """
        Read the index file.

        A missing index file is an empty index.

        Returns:
            List of entries in file order
        """
        try:
            data = self.path.read_bytes()
        except FileNotFoundError:
            data = None
        except OSError as e:
            raise StorageIOError(f"Cannot read index {self.path}: {e}") from e

        self.entries = decode_index(data) if data is not None else []
        return self.entries

    def save(self, entries: Optional[List[IndexEntry]] = None) -> None:
        """
        Rewrite the whole index file atomically.

        Args:
            entries: Entries to write, in order (defaults to loaded entries)
        """
        if entries is not None:
            self.entries = list(entries)

        content = encode_index(self.entries)
        directory = self.path.parent

        try:
            tmp_fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.index_')
        except OSError as e:
            raise StorageIOError(f"Cannot write index {self.path}: {e}") from e
        try:
            with os.fdopen(tmp_fd, 'wb') as f:
                f.write(content)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageIOError(f"Cannot write index {self.path}: {e}") from e

        logger.debug("Wrote index with %d entries", len(self.entries))

    def stage(self, path: str, sha1: str, mode: int = MODE_REGULAR) -> IndexEntry:
        """
        Record a path in the index.

        An existing entry for the path is replaced in place; otherwise a
        new entry is appended.

        Args:
            path: Path relative to the work tree, '/'-separated
            sha1: Id of the staged blob
            mode: File mode

        Returns:
            IndexEntry: The staged entry
        """
        if not is_object_id(sha1):
            raise UsageError(f"Not a valid object id: {sha1!r}")

        entries = self.load()
        entry = IndexEntry(mode=mode, sha1=sha1, path=path)

        for i, existing in enumerate(entries):
            if existing.path == path:
                entries[i] = entry
                break
        else:
            entries.append(entry)

        self.save(entries)
        return entry

    def add_file(self, filepath) -> str:
        """
        Store a file as a blob and stage it.

        Args:
            filepath: Path to file (absolute or relative to the work tree)

        Returns:
            str: Id of the staged blob
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = self.repo.work_tree / file_path
        file_path = file_path.resolve()

        if not file_path.exists():
            raise UsageError(f"File not found: {filepath}")
        if not file_path.is_file():
            raise UsageError(f"Not a file: {filepath}")

        try:
            rel_path = file_path.relative_to(self.repo.work_tree).as_posix()
        except ValueError:
            raise UsageError(f"File is outside the repository: {filepath}") from None

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise StorageIOError(f"Cannot read {filepath}: {e}") from e

        sha1 = self.repo.objects.put('blob', data)
        self.stage(rel_path, sha1)
        return sha1

    def get_entry(self, path: str) -> Optional[IndexEntry]:
        """Get loaded entry by path."""
        for entry in self.entries:
            if entry.path == path:
                return entry
        return None

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
