"""Log command - show commit history."""

import click
from datetime import datetime, timedelta, timezone
from mingit.core.errors import MingitError
from mingit.core.history import HistoryWalker
from mingit.core.repository import Repository
from mingit.cli.output import error
from colorama import Fore, Style


def format_timestamp(timestamp, offset='+0000'):
    """Format Unix timestamp in its recorded UTC offset."""
    sign = -1 if offset.startswith('-') else 1
    delta = timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5]))
    dt = datetime.fromtimestamp(int(timestamp), timezone(sign * delta))
    return dt.strftime("%a %b %d %H:%M:%S %Y ") + offset


def display_commit_oneline(commit_hash, commit):
    """Display commit in one-line format."""
    message = commit.message.split('\n')[0]
    if len(message) > 60:
        message = message[:57] + "..."
    click.echo(f"{Fore.YELLOW}{commit_hash[:7]}{Style.RESET_ALL} {message}")


def display_commit_full(commit_hash, commit):
    """Display commit in full format."""
    click.echo(f"{Fore.YELLOW}commit {commit_hash}{Style.RESET_ALL}")

    if commit.parent:
        click.echo(f"Parent:    {commit.parent}")

    if commit.author:
        click.echo(f"Author:    {commit.author.identity}")
        click.echo(f"Date:      {format_timestamp(commit.author.timestamp, commit.author.timezone)}")

    if commit.committer and commit.author and commit.committer.identity != commit.author.identity:
        click.echo(f"Committer: {commit.committer.identity}")

    click.echo()
    for line in commit.message.split('\n'):
        click.echo(f"    {line}")
    click.echo()


@click.command('log')
@click.option('-n', '--max-count', type=int, help='Limit number of commits to show')
@click.option('--oneline', is_flag=True, help='Show commits in one-line format')
@click.argument('commit')
def log_cmd(max_count, oneline, commit):
    """
    Show commit history starting from COMMIT.

    Follows parent links back to the root commit.

    Examples:
        mingit log a1b2c3d            # Show history from a commit
        mingit log -n 5 a1b2c3d       # Show at most 5 commits
        mingit log --oneline a1b2c3d  # Compact one-line format
    """
    repo = Repository.find_repository()
    if not repo:
        click.echo(error("Not a mingit repository"))
        raise click.Abort()

    try:
        start = repo.objects.resolve(commit)
        for commit_hash, commit_obj in HistoryWalker(repo, start, max_count):
            if oneline:
                display_commit_oneline(commit_hash, commit_obj)
            else:
                display_commit_full(commit_hash, commit_obj)
    except MingitError as e:
        click.echo(error(f"Error reading history: {e}"))
        raise click.Abort()
