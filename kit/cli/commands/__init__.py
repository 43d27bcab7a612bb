"""CLI commands for Kit."""

from kit.cli.commands.init import init_cmd
from kit.cli.commands.add import add_cmd
from kit.cli.commands.commit import commit_cmd
from kit.cli.commands.config import config_cmd
from kit.cli.commands.status import status_cmd
from kit.cli.commands.log import log_cmd
from kit.cli.commands.branch import branch_cmd
from kit.cli.commands.tag import tag_cmd
from kit.cli.commands.checkout import checkout_cmd
from kit.cli.commands.reset import reset_cmd
from kit.cli.commands.merge import merge_cmd
from kit.cli.commands.diff import diff_cmd
from kit.cli.commands.objects import (hash_object_cmd, cat_file_cmd, ls_tree_cmd,
                                      write_tree_cmd, commit_tree_cmd)

__all__ = ['init_cmd', 'add_cmd', 'commit_cmd', 'config_cmd', 'status_cmd', 'log_cmd',
           'branch_cmd', 'tag_cmd', 'checkout_cmd', 'reset_cmd', 'merge_cmd', 'diff_cmd',
           'hash_object_cmd', 'cat_file_cmd', 'ls_tree_cmd', 'write_tree_cmd', 'commit_tree_cmd']
