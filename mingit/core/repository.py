"""Repository handle for MinGit."""

import logging
from pathlib import Path
from typing import Optional

from .config import Config
from .errors import StorageIOError, UnexpectedObjectType, UsageError
from .objects import OBJECT_TYPES, Commit, StoredObject, Tree
from .store import ObjectStore

logger = logging.getLogger(__name__)

METADATA_DIR = '.mingit'
DEFAULT_HEAD = 'ref: refs/heads/master\n'


class Repository:
    """
    Represents a MinGit repository.

    A repository is a value carrying the work-tree root and the paths of
    the .mingit metadata directory. It is passed explicitly to every
    component rather than rediscovered from the current directory.
    """

    def __init__(self, path='.'):
        """
        Initialize repository handle.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.mingit_dir = self.work_tree / METADATA_DIR
        self.objects_dir = self.mingit_dir / 'objects'
        self.refs_dir = self.mingit_dir / 'refs'
        self.head_file = self.mingit_dir / 'HEAD'
        self.index_file = self.mingit_dir / 'index'
        self.config_file = self.mingit_dir / 'config'

        self._objects = None
        self._index = None

    @property
    def objects(self) -> ObjectStore:
        """Get ObjectStore instance."""
        if self._objects is None:
            self._objects = ObjectStore(self.objects_dir)
        return self._objects

    @property
    def index(self):
        """Get Index instance."""
        if self._index is None:
            from .index import Index
            self._index = Index(self)
        return self._index

    @property
    def config(self) -> Config:
        return Config(self.config_file)

    def init(self) -> 'Repository':
        """
        Initialize the repository layout.

        Creates the .mingit directory structure:
        .mingit/
        ├── objects/       # Object database
        ├── refs/          # Reserved for references
        └── HEAD           # Default branch pointer

        Running init on an existing repository is harmless: directories
        are kept and HEAD is only written if absent.

        Returns:
            Repository: self for method chaining
        """
        try:
            for directory in (self.mingit_dir, self.objects_dir, self.refs_dir):
                directory.mkdir(parents=True, exist_ok=True)

            if not self.head_file.exists():
                self.head_file.write_text(DEFAULT_HEAD)
        except OSError as e:
            raise StorageIOError(f"Cannot initialize repository at {self.mingit_dir}: {e}") from e

        logger.debug("Initialized repository in %s", self.mingit_dir)
        return self

    def is_initialized(self) -> bool:
        return self.objects_dir.is_dir()

    @classmethod
    def find_repository(cls, path='.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / METADATA_DIR).is_dir():
                return cls(current)

            if current == current.parent:
                return None

            current = current.parent

    def write_object(self, obj: StoredObject) -> str:
        """
        Store an object.

        Args:
            obj: Blob, Tree or Commit

        Returns:
            str: Object id
        """
        return self.objects.put(obj.type, obj.serialize())

    def read_object(self, object_id: str, expected: Optional[str] = None) -> StoredObject:
        """
        Read and decode an object.

        Args:
            object_id: 40-character hex id
            expected: Required kind, if any

        Returns:
            StoredObject: Decoded Blob, Tree or Commit

        Raises:
            UnexpectedObjectType: If expected is given and does not match
        """
        kind, payload = self.objects.get(object_id)

        if expected is not None and kind != expected:
            raise UnexpectedObjectType(object_id, expected, kind)

        obj = OBJECT_TYPES[kind]()
        obj.deserialize(payload)
        return obj

    def write_tree(self, directory=None) -> str:
        """
        Snapshot a directory of the work tree.

        Args:
            directory: Directory to snapshot (defaults to the work tree root)

        Returns:
            str: Id of the stored root tree
        """
        directory = Path(directory) if directory is not None else self.work_tree
        if not directory.is_dir():
            raise UsageError(f"Not a directory: {directory}")
        return Tree.from_directory(self, directory).hash

    def commit_tree(
        self,
        tree_id: str,
        message: str,
        parent: Optional[str] = None,
        author: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> str:
        """
        Record a commit for an existing tree.

        HEAD is not updated.

        Args:
            tree_id: Id of the tree to commit
            message: Commit message (required)
            parent: Id of the parent commit, or None for a root commit
            author: "Name <email>" identity, defaults to configured identity
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            str: Id of the new commit
        """
        if not message:
            raise UsageError("Commit message is required")

        self.read_object(tree_id, expected='tree')
        if parent:
            self.read_object(parent, expected='commit')

        identity = author or self.config.get_user_identity()
        commit = Commit.create(
            tree_hash=tree_id,
            parent_hash=parent,
            author=identity,
            committer=identity,
            message=message,
            timestamp=timestamp,
        )
        return self.write_object(commit)

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
