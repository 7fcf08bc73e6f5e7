"""CLI commands for MinGit."""

from mingit.cli.commands.init import init_cmd
from mingit.cli.commands.hash_object import hash_object_cmd
from mingit.cli.commands.add import add_cmd, ls_files_cmd
from mingit.cli.commands.commit import write_tree_cmd, commit_tree_cmd
from mingit.cli.commands.log import log_cmd
from mingit.cli.commands.ls_tree import ls_tree_cmd, cat_file_cmd
from mingit.cli.commands.config import config_cmd

__all__ = ['init_cmd', 'hash_object_cmd', 'add_cmd', 'ls_files_cmd',
           'write_tree_cmd', 'commit_tree_cmd', 'log_cmd',
           'ls_tree_cmd', 'cat_file_cmd', 'config_cmd']
