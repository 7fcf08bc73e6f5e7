"""Exception hierarchy for MinGit."""

from typing import Optional


class MingitError(Exception):
    """Base class for all MinGit errors."""


class UsageError(MingitError):
    """Raised when caller-supplied arguments violate a precondition."""


class StorageIOError(MingitError):
    """Raised when a repository file or directory cannot be read or written."""


class HashError(MingitError):
    """Raised when an object digest cannot be computed."""


class ObjectError(MingitError):
    """Base class for errors tied to a specific object id."""

    def __init__(self, message: str, object_id: Optional[str] = None):
        super().__init__(message)
        self.object_id = object_id


class ObjectNotFound(ObjectError):
    """Raised when no object file exists for an id."""


class CorruptObject(ObjectError):
    """Raised when an object file cannot be decompressed or parsed."""


class UnexpectedObjectType(ObjectError):
    """Raised when an object has a different kind than the caller requires."""

    def __init__(self, object_id: str, expected: str, actual: str):
        super().__init__(
            f"Object {object_id} is a {actual}, expected {expected}",
            object_id,
        )
        self.expected = expected
        self.actual = actual


class TruncatedTree(ObjectError):
    """Raised when a tree payload ends in the middle of an entry."""


class MalformedCommit(ObjectError):
    """Raised when a commit payload lacks required header lines."""


class IndexFormatError(MingitError):
    """Base class for index decoding errors."""


class BadSignature(IndexFormatError):
    """Raised when the index file does not start with the expected header."""


class TruncatedIndex(IndexFormatError):
    """Raised when the index file ends before a declared record does."""
