"""History traversal tests."""

import pytest
from mingit.core.errors import MalformedCommit, ObjectNotFound, UnexpectedObjectType
from mingit.core.history import HistoryWalker, walk_history
from mingit.core.objects import Blob, Commit


AUTHOR = "Test User <test@example.com>"


def store_commit(repo, parent, message, tree='4b825dc642cb6eb9a060e54bf8d69288fbee4904'):
    """Store a commit without validating its references."""
    commit = Commit.create(tree, parent, AUTHOR, AUTHOR, message, timestamp=1700000000)
    return repo.write_object(commit)


def test_root_commit_yields_once(repo, commit_factory):
    (repo.work_tree / 'a.txt').write_text('a')
    root = commit_factory('root')

    history = list(HistoryWalker(repo, root))

    assert len(history) == 1
    commit_id, commit = history[0]
    assert commit_id == root
    assert commit.parent is None
    assert commit.message == 'root'


def test_chain_is_newest_first(commit_chain):
    repo, (second, first) = commit_chain

    history = list(walk_history(repo, second))

    assert [commit_id for commit_id, _ in history] == [second, first]
    assert [commit.message for _, commit in history] == ['Second commit', 'First commit']


def test_max_count(commit_chain):
    repo, (second, _) = commit_chain
    assert [commit_id for commit_id, _ in HistoryWalker(repo, second, max_count=1)] == [second]


def test_walker_is_reiterable(commit_chain):
    repo, (second, _) = commit_chain
    walker = HistoryWalker(repo, second)
    first_pass = [commit_id for commit_id, _ in walker]
    assert first_pass == [commit_id for commit_id, _ in walker]


def test_missing_parent_after_partial_output(repo):
    """Commits already yielded stay yielded; the error names the missing id."""
    missing = 'f' * 40
    child = store_commit(repo, missing, 'orphan child')

    walker = iter(HistoryWalker(repo, child))
    commit_id, _ = next(walker)
    assert commit_id == child

    with pytest.raises(ObjectNotFound) as excinfo:
        next(walker)
    assert excinfo.value.object_id == missing


def test_start_is_not_a_commit(repo):
    blob_id = repo.write_object(Blob(b'not a commit'))

    with pytest.raises(UnexpectedObjectType) as excinfo:
        list(HistoryWalker(repo, blob_id))
    assert excinfo.value.object_id == blob_id


def test_malformed_commit(repo):
    bad_id = repo.objects.put('commit', b'no tree line here\n\nmessage\n')

    with pytest.raises(MalformedCommit) as excinfo:
        list(HistoryWalker(repo, bad_id))
    assert excinfo.value.object_id == bad_id


def test_invalid_parent_id_is_malformed(repo):
    """A parent line that is not an object id fails on the commit holding it."""
    bad_id = repo.objects.put(
        'commit',
        f"tree 4b825dc642cb6eb9a060e54bf8d69288fbee4904\n"
        f"parent xyz\n"
        f"author {AUTHOR} 1 +0000\n"
        f"committer {AUTHOR} 1 +0000\n"
        f"\nbroken parent\n".encode(),
    )
    with pytest.raises(MalformedCommit) as excinfo:
        list(HistoryWalker(repo, bad_id))
    assert excinfo.value.object_id == bad_id
