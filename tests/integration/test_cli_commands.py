"""Integration tests for the command line."""

import pytest
from click.testing import CliRunner
from mingit.cli.main import cli
from mingit.core.repository import Repository


@pytest.fixture
def runner():
    return CliRunner()


def run_ok(runner, args):
    result = runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    return result.output.strip()


def test_init_creates_repository(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)

    output = run_ok(runner, ['init'])

    assert 'Initialized empty MinGit repository' in output
    assert (temp_dir / '.mingit' / 'objects').is_dir()
    assert (temp_dir / '.mingit' / 'HEAD').read_text() == 'ref: refs/heads/master\n'


def test_init_twice_reinitializes(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    run_ok(runner, ['init'])
    assert 'Reinitialized' in run_ok(runner, ['init'])


def test_init_named_directory(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    run_ok(runner, ['init', 'project'])
    assert (temp_dir / 'project' / '.mingit').is_dir()


def test_command_outside_repository(runner, temp_dir, monkeypatch):
    monkeypatch.chdir(temp_dir)
    result = runner.invoke(cli, ['write-tree'])
    assert result.exit_code == 1
    assert 'Not a mingit repository' in result.output


def test_hash_object(runner, in_repo):
    (in_repo.work_tree / 'hello.txt').write_bytes(b'hello')
    assert run_ok(runner, ['hash-object', 'hello.txt']) == 'b6fc4c620b67d95f953a5c1c1230aaab5db5a1b0'


def test_add_and_ls_files(runner, in_repo):
    (in_repo.work_tree / 'b.txt').write_text('b')
    (in_repo.work_tree / 'a.txt').write_text('a')

    run_ok(runner, ['add', 'b.txt', 'a.txt'])
    run_ok(runner, ['add', 'b.txt'])

    assert run_ok(runner, ['ls-files']).splitlines() == ['b.txt', 'a.txt']

    staged = run_ok(runner, ['ls-files', '--stage']).splitlines()
    assert staged[0].startswith('100644 ')
    assert staged[0].endswith('\tb.txt')


def test_add_missing_file_fails(runner, in_repo):
    result = runner.invoke(cli, ['add', 'missing.txt'])
    assert result.exit_code == 1
    assert 'missing.txt' in result.output


def test_commit_workflow(runner, in_repo):
    (in_repo.work_tree / 'hello.txt').write_text('hello')

    tree_id = run_ok(runner, ['write-tree'])
    first = run_ok(runner, ['commit-tree', tree_id, '-m', 'initial', '--author', 'Ada <ada@example.com>'])

    (in_repo.work_tree / 'hello.txt').write_text('hello again')
    tree2 = run_ok(runner, ['write-tree'])
    second = run_ok(runner, ['commit-tree', tree2[:8], '-m', 'second', '-p', first[:8]])

    log = run_ok(runner, ['log', second])
    assert f'commit {second}' in log
    assert f'commit {first}' in log
    assert log.index(second) < log.index(first)
    assert 'Ada <ada@example.com>' in log
    assert 'initial' in log

    oneline = run_ok(runner, ['log', '--oneline', second]).splitlines()
    assert len(oneline) == 2
    assert oneline[1].endswith('initial')

    assert len(run_ok(runner, ['log', '-n', '1', '--oneline', second]).splitlines()) == 1


def test_commit_tree_requires_message(runner, in_repo):
    tree_id = run_ok(runner, ['write-tree'])
    result = runner.invoke(cli, ['commit-tree', tree_id])
    assert result.exit_code == 1
    assert 'message required' in result.output


def test_log_of_unknown_commit(runner, in_repo):
    result = runner.invoke(cli, ['log', 'f' * 40])
    assert result.exit_code == 1
    assert 'not found' in result.output


def test_ls_tree_and_cat_file(runner, in_repo):
    (in_repo.work_tree / 'src').mkdir()
    (in_repo.work_tree / 'src' / 'main.py').write_text('print("hi")\n')
    (in_repo.work_tree / 'README').write_text('readme')

    tree_id = run_ok(runner, ['write-tree'])

    listing = run_ok(runner, ['ls-tree', tree_id]).splitlines()
    assert len(listing) == 2
    assert listing[0].startswith('100644 blob ')
    assert listing[0].endswith('\tREADME')
    assert listing[1].startswith('40000 tree ')

    assert run_ok(runner, ['ls-tree', '-r', '--name-only', tree_id]).splitlines() == ['README', 'src/main.py']

    commit_id = run_ok(runner, ['commit-tree', tree_id, '-m', 'snapshot'])
    assert run_ok(runner, ['ls-tree', '--name-only', commit_id]).splitlines() == ['README', 'src']

    assert run_ok(runner, ['cat-file', '-t', commit_id]) == 'commit'
    assert run_ok(runner, ['cat-file', '-t', tree_id]) == 'tree'
    assert f'tree {tree_id}' in run_ok(runner, ['cat-file', '-p', commit_id])

    repo = Repository(in_repo.work_tree)
    blob_id = repo.read_object(tree_id).entries[0].hash
    assert run_ok(runner, ['cat-file', '-p', blob_id]) == 'readme'
    assert run_ok(runner, ['cat-file', '-s', blob_id]) == '6'


def test_cat_file_needs_one_flag(runner, in_repo):
    result = runner.invoke(cli, ['cat-file', 'abcd'])
    assert result.exit_code == 1


def test_config_commands(runner, in_repo):
    run_ok(runner, ['config', 'set', 'user.name', 'Config User'])
    run_ok(runner, ['config', 'set', 'user.email', 'config@example.com'])

    assert run_ok(runner, ['config', 'get', 'user.name']) == 'Config User'
    assert 'user.email=config@example.com' in run_ok(runner, ['config', 'list'])

    tree_id = run_ok(runner, ['write-tree'])
    commit_id = run_ok(runner, ['commit-tree', tree_id, '-m', 'configured'])
    assert 'Config User <config@example.com>' in run_ok(runner, ['cat-file', '-p', commit_id])

    run_ok(runner, ['config', 'unset', 'user.name'])
    result = runner.invoke(cli, ['config', 'get', 'user.name'])
    assert result.exit_code == 1
