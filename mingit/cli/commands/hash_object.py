"""Hash-object command - store a file as a blob."""

import click
from pathlib import Path
from mingit.core.errors import MingitError
from mingit.core.repository import Repository
from mingit.cli.output import error


@click.command('hash-object')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def hash_object_cmd(file):
    """
    Store FILE as a blob object and print its id.

    Examples:
        mingit hash-object README.md
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    try:
        object_id = repo.objects.put('blob', Path(file).read_bytes())
    except (MingitError, OSError) as e:
        click.echo(error(f"Error hashing object: {e}"))
        raise click.Abort()

    click.echo(object_id)
