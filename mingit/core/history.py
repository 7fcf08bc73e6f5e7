"""Commit history traversal."""

import logging
from typing import Iterator, Optional, Tuple

from .errors import MalformedCommit, UnexpectedObjectType
from .objects import Commit

logger = logging.getLogger(__name__)


class HistoryWalker:
    """
    Follows the parent chain from a starting commit to the root.

    Iterating yields (commit_id, Commit) pairs, newest first. The walk
    stops at the first commit without a parent. Cycles in the parent
    chain are not detected.

    Any failure (missing object, wrong kind, malformed payload) is
    raised with the offending id; pairs already yielded stay yielded.
    """

    def __init__(self, repo, start_id: str, max_count: Optional[int] = None):
        """
        Args:
            repo: Repository instance
            start_id: Id of the commit to start from
            max_count: Stop after this many commits, if given
        """
        self.repo = repo
        self.start_id = start_id
        self.max_count = max_count

    def _load(self, commit_id: str) -> Commit:
        kind, payload = self.repo.objects.get(commit_id)
        if kind != 'commit':
            raise UnexpectedObjectType(commit_id, 'commit', kind)

        commit = Commit()
        try:
            commit.deserialize(payload)
        except MalformedCommit as e:
            raise MalformedCommit(f"Commit {commit_id}: {e}", commit_id) from e
        return commit

    def __iter__(self) -> Iterator[Tuple[str, Commit]]:
        current: Optional[str] = self.start_id
        count = 0

        while current is not None:
            if self.max_count is not None and count >= self.max_count:
                return

            commit = self._load(current)
            logger.debug("Visited commit %s (parent %s)", current, commit.parent)
            yield current, commit

            count += 1
            current = commit.parent


def walk_history(repo, start_id: str, max_count: Optional[int] = None) -> Iterator[Tuple[str, Commit]]:
    """Iterate over (commit_id, Commit) pairs from start_id back to the root."""
    return iter(HistoryWalker(repo, start_id, max_count))
