"""Initialize a new MinGit repository."""

import click
from pathlib import Path
from mingit.core.errors import MingitError
from mingit.core.repository import Repository
from mingit.cli.output import success, error, info


@click.command('init')
@click.argument('path', default='.')
def init_cmd(path):
    """
    Initialize a MinGit repository.

    Creates a .mingit directory with the object database, refs
    directory and HEAD file. Re-running init keeps existing data.

    Examples:
        mingit init                 # Initialize in current directory
        mingit init my-project      # Initialize in my-project directory
    """
    repo_path = Path(path).resolve()
    existed = (repo_path / '.mingit').is_dir()

    try:
        if not repo_path.exists():
            repo_path.mkdir(parents=True)
            click.echo(info(f"Created directory {repo_path}"))

        repo = Repository(repo_path).init()
    except (MingitError, OSError) as e:
        click.echo(error(f"Failed to initialize repository: {e}"))
        raise click.Abort()

    if existed:
        click.echo(success(f"Reinitialized existing MinGit repository in {repo.mingit_dir}"))
    else:
        click.echo(success(f"Initialized empty MinGit repository in {repo.mingit_dir}"))
