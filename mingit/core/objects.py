"""Object types for MinGit."""

import logging
import os
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .errors import MalformedCommit, StorageIOError, TruncatedTree, UsageError
from .hash import hash_object, is_object_id

logger = logging.getLogger(__name__)


MODE_FILE = '100644'
MODE_DIRECTORY = '40000'
DIRECTORY_MODES = ('40000', '040000')

DIGEST_SIZE = 20

# Names never recorded in a tree snapshot
RESERVED_NAMES = frozenset({'.mingit', '.git', '.gitignore', '.mingitignore'})


class StoredObject(ABC):
    """Base class for all MinGit objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to its payload bytes.

        Returns:
            bytes: Object payload (without the <kind> <size> header)
        """

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Load object state from payload bytes.

        Args:
            data: Object payload
        """

    @property
    def type(self) -> str:
        """
        Return object kind.

        Returns:
            str: Object kind (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object id.

        Objects are hashed with a header containing the kind and size.
        Format: <kind> <size>\0<payload>

        Returns:
            str: 40-character hex id
        """
        if self._hash is None:
            self._hash = hash_object(self.type, self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """40-character hex id of this object."""
        return self.compute_hash()


class Blob(StoredObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content

        Raises:
            StorageIOError: If the file cannot be read
        """
        try:
            with open(filepath, 'rb') as f:
                return cls(f.read())
        except OSError as e:
            raise StorageIOError(f"Cannot read file {filepath}: {e}") from e

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


@dataclass(frozen=True)
class TreeEntry:
    """
    A single (mode, name, hash) record of a tree.

    mode is '100644' for regular files and '40000' for directories;
    hash is the 40-character id of the child blob or tree.
    """
    mode: str
    name: str
    hash: str

    @property
    def is_tree(self) -> bool:
        return self.mode in DIRECTORY_MODES

    @property
    def type(self) -> str:
        """Kind of the object this entry points at."""
        return 'tree' if self.is_tree else 'blob'

    @property
    def sort_key(self) -> bytes:
        return self.name.encode()

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"


class Tree(StoredObject):
    """
    Represents one directory level.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries are written sorted by the bytes of their
    name, so the tree id depends only on its content.
    """

    def __init__(self, entries: Optional[List[TreeEntry]] = None):
        super().__init__()
        self.entries: List[TreeEntry] = list(entries or [])

    def add_entry(self, mode: str, name: str, obj_hash: str) -> None:
        """
        Add entry to tree.

        Args:
            mode: Entry mode ('100644' or '40000')
            name: Entry name (a single path segment)
            obj_hash: Id of the child object
        """
        self.entries.append(TreeEntry(mode, name, obj_hash))
        self._hash = None

    def serialize(self) -> bytes:
        """
        Encode tree entries.

        Format: <mode> <name>\0<20-byte binary id>, repeated per entry.
        Names are not deduplicated.

        Returns:
            bytes: Serialized tree data
        """
        parts = []
        for entry in sorted(self.entries, key=lambda e: e.sort_key):
            parts.append(f"{entry.mode} {entry.name}".encode())
            parts.append(b'\0')
            parts.append(bytes.fromhex(entry.hash))
        return b''.join(parts)

    def deserialize(self, data: bytes) -> None:
        """
        Decode tree entries, keeping the stored order.

        Args:
            data: Serialized tree data

        Raises:
            TruncatedTree: If the data ends in the middle of an entry
        """
        entries = []
        pos = 0

        while pos < len(data):
            null_pos = data.find(b'\0', pos)
            if null_pos == -1:
                raise TruncatedTree(f"Tree entry at offset {pos} has no name terminator")

            mode_name = data[pos:null_pos]
            space_pos = mode_name.find(b' ')
            if space_pos == -1:
                raise TruncatedTree(f"Tree entry at offset {pos} has no mode separator")

            digest = data[null_pos + 1:null_pos + 1 + DIGEST_SIZE]
            if len(digest) < DIGEST_SIZE:
                raise TruncatedTree(
                    f"Tree entry at offset {pos} needs {DIGEST_SIZE} digest bytes, "
                    f"only {len(digest)} left"
                )

            try:
                mode = mode_name[:space_pos].decode('ascii')
                name = mode_name[space_pos + 1:].decode()
            except UnicodeDecodeError as e:
                raise TruncatedTree(f"Tree entry at offset {pos} is not valid text") from e

            entries.append(TreeEntry(mode, name, digest.hex()))
            pos = null_pos + 1 + DIGEST_SIZE

        self.entries = entries
        self._hash = None

    @classmethod
    def from_directory(cls, repo, directory) -> 'Tree':
        """
        Snapshot a directory, storing every blob and subtree.

        Reserved names (the metadata directory and ignore files) and
        symbolic links are skipped. The returned tree is stored as well.

        Args:
            repo: Repository instance
            directory: Path to directory

        Returns:
            Tree: Tree object for the directory

        Raises:
            UsageError: If an entry name is not valid UTF-8
            StorageIOError: If the directory or a file cannot be read
        """
        tree = cls()

        try:
            items = list(Path(directory).iterdir())
        except OSError as e:
            raise StorageIOError(f"Cannot list directory {directory}: {e}") from e

        for item in items:
            if item.name in RESERVED_NAMES:
                continue

            try:
                item.name.encode()
            except UnicodeEncodeError as e:
                raise UsageError(f"File name is not valid UTF-8: {os.fsencode(item)!r}") from e

            if item.is_symlink():
                logger.debug("Skipping symbolic link %s", item)
                continue

            if item.is_dir():
                subtree = cls.from_directory(repo, item)
                tree.add_entry(MODE_DIRECTORY, item.name, subtree.hash)
            elif item.is_file():
                blob = Blob.from_file(str(item))
                tree.add_entry(MODE_FILE, item.name, repo.write_object(blob))

        repo.write_object(tree)
        return tree

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


_SIGNATURE_RE = re.compile(r'^(?P<name>.*?) ?<(?P<email>[^<>]*)> (?P<time>-?\d+) (?P<tz>[+-]\d{4})$')


@dataclass(frozen=True)
class Signature:
    """Author or committer line: name, contact, timestamp and UTC offset."""
    name: str
    email: str
    timestamp: int
    timezone: str = '+0000'

    @property
    def identity(self) -> str:
        return f"{self.name} <{self.email}>"

    @classmethod
    def parse(cls, line: str) -> 'Signature':
        """
        Parse "Name <email> <epoch-seconds> <+/-HHMM>".

        Raises:
            MalformedCommit: If the line does not have that shape
        """
        match = _SIGNATURE_RE.match(line)
        if not match:
            raise MalformedCommit(f"Invalid signature line: {line!r}")
        return cls(match['name'], match['email'], int(match['time']), match['tz'])

    @classmethod
    def from_identity(cls, identity: str, timestamp: int, timezone: str = '+0000') -> 'Signature':
        """Build a signature from "Name <email>"."""
        try:
            return cls.parse(f"{identity} {timestamp} {timezone}")
        except MalformedCommit as e:
            raise UsageError(f"Identity must look like 'Name <email>': {identity!r}") from e

    def __str__(self) -> str:
        return f"{self.identity} {self.timestamp} {self.timezone}"


class Commit(StoredObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of the project (tree id)
    - At most one parent commit
    - Author and committer signatures
    - Commit message
    """

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parent: Optional[str] = None
        self.author: Optional[Signature] = None
        self.committer: Optional[Signature] = None
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-id>
        parent <parent-id>  (omitted for a root commit)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'tree {self.tree}']
        if self.parent:
            lines.append(f'parent {self.parent}')
        lines.append(f'author {self.author}')
        lines.append(f'committer {self.committer}')
        lines.append('')
        lines.append(self.message)

        return ('\n'.join(lines) + '\n').encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit.

        Args:
            data: Serialized commit data

        Raises:
            MalformedCommit: If there is no tree line or a signature is invalid
        """
        try:
            content = data.decode()
        except UnicodeDecodeError as e:
            raise MalformedCommit(f"Commit is not valid UTF-8: {e}") from e

        lines = content.split('\n')

        tree = None
        parent = None
        author = None
        committer = None
        message_start = len(lines)

        for i, line in enumerate(lines):
            if not line:
                message_start = i + 1
                break

            if line.startswith('tree '):
                tree = line[5:]
            elif line.startswith('parent '):
                parent = line[7:]
            elif line.startswith('author '):
                author = Signature.parse(line[7:])
            elif line.startswith('committer '):
                committer = Signature.parse(line[10:])

        if not tree:
            raise MalformedCommit("Commit has no tree line")
        if not is_object_id(tree):
            raise MalformedCommit(f"Commit tree is not a valid object id: {tree!r}")
        if parent is not None and not is_object_id(parent):
            raise MalformedCommit(f"Commit parent is not a valid object id: {parent!r}")

        message = '\n'.join(lines[message_start:])
        if message.endswith('\n'):
            message = message[:-1]

        self.tree = tree
        self.parent = parent or None
        self.author = author
        self.committer = committer
        self.message = message
        self._hash = None

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hash: Optional[str],
        author: str,
        committer: str,
        message: str,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree_hash: Id of tree object
            parent_hash: Id of the parent commit, or None for a root commit
            author: Author name and email (e.g., "Name <email>")
            committer: Committer name and email
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset (e.g., "+0000", "-0500")

        Returns:
            Commit: New commit object
        """
        if timestamp is None:
            timestamp = int(time.time())

        commit = cls()
        commit.tree = tree_hash
        commit.parent = parent_hash or None
        commit.author = Signature.from_identity(author, timestamp, timezone)
        commit.committer = Signature.from_identity(committer, timestamp, timezone)
        commit.message = message
        return commit

    def __repr__(self) -> str:
        parent_info = f", parent={self.parent[:7]}" if self.parent else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}
