"""Add and ls-files commands - manage the staging area."""

import click
from pathlib import Path
from mingit.core.errors import MingitError
from mingit.core.repository import Repository
from mingit.cli.output import success, error, info


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
def add_cmd(paths):
    """
    Add file contents to the staging area.

    Each file is stored as a blob and recorded in the index. Adding a
    path that is already staged replaces its entry.

    Examples:
        mingit add file.txt
        mingit add src/main.py docs/notes.txt
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    added = []
    failed = []

    for path in paths:
        try:
            sha1 = repo.index.add_file(Path(path).resolve())
            added.append((path, sha1))
        except MingitError as e:
            failed.append((path, str(e)))

    if added:
        click.echo(success(f"Added {len(added)} file(s) to staging area"))
        for path, sha1 in added:
            click.echo(info(f"  {sha1[:7]} {path}"))

    if failed:
        click.echo(error(f"Failed to add {len(failed)} file(s):"))
        for path, reason in failed:
            click.echo(error(f"  {path}: {reason}"))
        raise click.Abort()


@click.command('ls-files')
@click.option('-s', '--stage', 'show_stage', is_flag=True, help='Show mode and object id')
def ls_files_cmd(show_stage):
    """
    List staged paths in index order.

    Examples:
        mingit ls-files
        mingit ls-files --stage
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    try:
        entries = repo.index.load()
    except MingitError as e:
        click.echo(error(f"Error reading index: {e}"))
        raise click.Abort()

    for entry in entries:
        if show_stage:
            click.echo(f"{entry.mode:o} {entry.sha1}\t{entry.path}")
        else:
            click.echo(entry.path)
