"""List tree contents and inspect raw objects."""

import click
from mingit.core.errors import MingitError
from mingit.core.objects import Tree
from mingit.core.repository import Repository
from mingit.cli.output import error
from colorama import Fore, Style


def display_tree(repo, tree_obj, prefix, recursive, name_only):
    """Display tree entries in stored order, optionally recursing."""
    for entry in tree_obj.entries:
        full_path = f"{prefix}{entry.name}"

        if recursive and entry.is_tree:
            subtree = repo.read_object(entry.hash, expected='tree')
            display_tree(repo, subtree, full_path + "/", recursive, name_only)
            continue

        if name_only:
            click.echo(full_path)
        else:
            click.echo(f"{entry.mode} {entry.type} {Fore.YELLOW}{entry.hash}{Style.RESET_ALL}\t{full_path}")


@click.command('ls-tree')
@click.option('-r', '--recursive', is_flag=True, help='Recurse into sub-trees')
@click.option('--name-only', is_flag=True, help='Show only file names')
@click.argument('treeish')
def ls_tree_cmd(recursive, name_only, treeish):
    """
    List contents of a tree object.

    TREEISH is a tree id or a commit id (its tree is listed).

    Examples:
        mingit ls-tree 4b825dc
        mingit ls-tree -r 4b825dc
        mingit ls-tree --name-only 1a2b3c4
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    try:
        object_id = repo.objects.resolve(treeish)
        obj = repo.read_object(object_id)
        if obj.type == 'commit':
            obj = repo.read_object(obj.tree, expected='tree')
        elif not isinstance(obj, Tree):
            click.echo(error(f"Not a tree-ish: {treeish}"))
            raise click.Abort()

        display_tree(repo, obj, "", recursive, name_only)
    except MingitError as e:
        click.echo(error(f"Error reading tree: {e}"))
        raise click.Abort()


@click.command('cat-file')
@click.option('-t', '--type', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', '--size', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', '--pretty', is_flag=True, help='Pretty-print object content')
@click.argument('object_hash')
def cat_file_cmd(show_type, show_size, pretty, object_hash):
    """
    Show object content, type, or size.

    Examples:
        mingit cat-file -t abc123     # Show object type
        mingit cat-file -s abc123     # Show object size
        mingit cat-file -p abc123     # Pretty-print object content
    """
    if sum([show_type, show_size, pretty]) != 1:
        click.echo(error("Use exactly one of -t, -s or -p"))
        raise click.Abort()

    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    try:
        object_id = repo.objects.resolve(object_hash)
        kind, payload = repo.objects.get(object_id)

        if show_type:
            click.echo(kind)
        elif show_size:
            click.echo(len(payload))
        elif kind == 'tree':
            tree = Tree()
            tree.deserialize(payload)
            display_tree(repo, tree, "", False, False)
        else:
            click.echo(payload, nl=False)
    except MingitError as e:
        click.echo(error(f"Error reading object: {e}"))
        raise click.Abort()
