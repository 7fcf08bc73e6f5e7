"""Hash utilities tests."""

import hashlib
import pytest
from mingit.core.hash import hash_object, hash_file, object_header, is_object_id


def test_hash_object_golden_vector():
    """The id of blob b'hello' is the SHA-1 of 'blob 5\\0hello'."""
    expected = hashlib.sha1(b'blob 5\x00hello').hexdigest()
    assert hash_object('blob', b'hello') == expected
    assert expected == 'b6fc4c620b67d95f953a5c1c1230aaab5db5a1b0'


def test_hash_object_empty_blob():
    """Test hashing an empty blob."""
    assert hash_object('blob', b'') == 'e69de29bb2d1d6434b8b29ae775ad8c2e48c5391'


def test_hash_object_deterministic():
    """Test hash consistency for same input."""
    assert hash_object('blob', b'hello world') == hash_object('blob', b'hello world')


def test_hash_object_depends_on_kind():
    """The same payload under different kinds has different ids."""
    assert hash_object('blob', b'data') != hash_object('tree', b'data')


def test_object_header():
    assert object_header('commit', 12) == b'commit 12\x00'


def test_hash_file(tmp_path):
    """Test hashing file contents as a blob."""
    path = tmp_path / 'hello.txt'
    path.write_bytes(b'hello')
    assert hash_file(str(path)) == hash_object('blob', b'hello')


@pytest.mark.parametrize('value,expected', [
    ('a' * 40, True),
    ('0123456789abcdef0123456789abcdef01234567', True),
    ('A' * 40, False),
    ('a' * 39, False),
    ('g' * 40, False),
    ('0x' + 'a' * 38, False),
])
def test_is_object_id(value, expected):
    assert is_object_id(value) is expected
