"""Core functionality for MinGit.

This module contains the storage engine:
- Objects (Blob, Tree, Commit) and their encodings
- The content-addressable object store
- Repository handle
- Index/staging area
- Commit history traversal
- Configuration management
- Hashing utilities
"""

from mingit.core.errors import (
    MingitError,
    UsageError,
    StorageIOError,
    HashError,
    ObjectError,
    ObjectNotFound,
    CorruptObject,
    UnexpectedObjectType,
    TruncatedTree,
    MalformedCommit,
    IndexFormatError,
    BadSignature,
    TruncatedIndex,
)
from mingit.core.objects import StoredObject, Blob, Tree, TreeEntry, Commit, Signature
from mingit.core.store import ObjectStore
from mingit.core.repository import Repository
from mingit.core.hash import hash_object, hash_file
from mingit.core.index import Index, IndexEntry
from mingit.core.history import HistoryWalker, walk_history
from mingit.core.config import Config, get_config

__all__ = [
    'MingitError',
    'UsageError',
    'StorageIOError',
    'HashError',
    'ObjectError',
    'ObjectNotFound',
    'CorruptObject',
    'UnexpectedObjectType',
    'TruncatedTree',
    'MalformedCommit',
    'IndexFormatError',
    'BadSignature',
    'TruncatedIndex',
    'StoredObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'Signature',
    'ObjectStore',
    'Repository',
    'Index',
    'IndexEntry',
    'HistoryWalker',
    'walk_history',
    'Config',
    'get_config',
    'hash_object',
    'hash_file',
]
