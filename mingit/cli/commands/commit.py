"""Write-tree and commit-tree commands - record snapshots."""

import click
from mingit.core.errors import MingitError
from mingit.core.repository import Repository
from mingit.cli.output import error


@click.command('write-tree')
def write_tree_cmd():
    """
    Snapshot the working directory as a tree object.

    Every file is stored as a blob and every directory as a tree;
    the id of the root tree is printed.

    Examples:
        mingit write-tree
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    try:
        tree_id = repo.write_tree()
    except (MingitError, OSError) as e:
        click.echo(error(f"Error writing tree: {e}"))
        raise click.Abort()

    click.echo(tree_id)


@click.command('commit-tree')
@click.argument('tree')
@click.option('-m', '--message', help='Commit message')
@click.option('-p', '--parent', help='Parent commit id')
@click.option('--author', help='Author name and email (format: "Name <email>")')
def commit_tree_cmd(tree, message, parent, author):
    """
    Create a commit object for TREE and print its id.

    HEAD is left unchanged.

    Examples:
        mingit commit-tree 4b825dc -m "Initial commit"
        mingit commit-tree 9d1e0a2 -m "Second commit" -p 1a2b3c4
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    if not message:
        click.echo(error("Commit message required. Use -m \"message\""))
        raise click.Abort()

    try:
        tree_id = repo.objects.resolve(tree)
        parent_id = repo.objects.resolve(parent) if parent else None
        commit_id = repo.commit_tree(tree_id, message, parent=parent_id, author=author)
    except MingitError as e:
        click.echo(error(f"Error committing tree: {e}"))
        raise click.Abort()

    click.echo(commit_id)
