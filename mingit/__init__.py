"""MinGit - a minimal content-addressable version control store."""

__version__ = '0.1.0'

from mingit.core.repository import Repository
from mingit.core.objects import StoredObject, Blob, Tree, Commit

__all__ = [
    'Repository',
    'StoredObject',
    'Blob',
    'Tree',
    'Commit',
]
