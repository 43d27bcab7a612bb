"""Diff engine for comparing tree snapshots."""

from dataclasses import dataclass
from typing import List, Mapping, Optional

from colorama import Fore, Style

from kit.operations.tree import TreeBuilder

NEW = 'new'
DELETED = 'deleted'
CHANGED = 'changed'


@dataclass
class TreeChange:
    """A path that differs between two snapshots."""
    path: str
    status: str
    old_hash: Optional[str] = None
    new_hash: Optional[str] = None

    @property
    def old_short(self) -> Optional[str]:
        return self.old_hash[:7] if self.old_hash else None

    @property
    def new_short(self) -> Optional[str]:
        return self.new_hash[:7] if self.new_hash else None

    def __repr__(self) -> str:
        if self.status == CHANGED:
            return f"TreeChange({self.path} {self.old_short}..{self.new_short})"
        return f"TreeChange({self.status} {self.path})"


def diff_snapshots(old: Mapping[str, str], new: Mapping[str, str]) -> List[TreeChange]:
    """
    Compare two path -> blob hash snapshots.

    Args:
        old: Snapshot A (e.g. a commit's flattened tree)
        new: Snapshot B (e.g. another commit or the working tree)

    Returns:
        Changes sorted by path: new (absent in A), deleted (absent in B),
        changed (present in both with differing hashes)
    """
    changes = []

    for path in sorted(set(old) | set(new)):
        old_hash = old.get(path)
        new_hash = new.get(path)

        if old_hash == new_hash:
            continue

        if old_hash is None:
            changes.append(TreeChange(path, NEW, new_hash=new_hash))
        elif new_hash is None:
            changes.append(TreeChange(path, DELETED, old_hash=old_hash))
        else:
            changes.append(TreeChange(path, CHANGED, old_hash, new_hash))

    return changes


class DiffEngine:
    """
    Engine for computing diffs between commits and the working tree.

    Comparison is by blob hash only; content-level patches are not produced.
    """

    def __init__(self, repo):
        """
        Initialize diff engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.trees = TreeBuilder(repo)

    def diff_commits(self, old_commit: Optional[str], new_commit: Optional[str]) -> List[TreeChange]:
        """
        Compare two commits. None on either side means the working tree.

        Args:
            old_commit: Commit hash for side A, or None for the working tree
            new_commit: Commit hash for side B, or None for the working tree

        Returns:
            List of TreeChange
        """
        return diff_snapshots(self._snapshot(old_commit), self._snapshot(new_commit))

    def diff_refs(self, refs: List[str]) -> List[TreeChange]:
        """
        Diff by reference names.

        No refs compares HEAD with the working tree, one ref compares it
        with HEAD, two refs compare the first with the second.

        Raises:
            InvalidReference: If a ref does not resolve
        """
        ref_mgr = self.repo.refs

        if not refs:
            return self.diff_commits(ref_mgr.head_commit(), None)
        if len(refs) == 1:
            return self.diff_commits(ref_mgr.resolve_or_fail(refs[0]), ref_mgr.head_commit())
        return self.diff_commits(ref_mgr.resolve_or_fail(refs[0]), ref_mgr.resolve_or_fail(refs[1]))

    def _snapshot(self, commit_hash: Optional[str]):
        if commit_hash is None:
            return self.trees.working_tree_hashes()
        return self.trees.flatten_commit(commit_hash)

    def format_diff(self, changes: List[TreeChange], color: bool = True) -> str:
        """
        Format changes as diff headers.

        Args:
            changes: List of TreeChange
            color: Whether to use color output

        Returns:
            Formatted diff string
        """
        output = []

        for change in changes:
            output.append(f"diff --kit a/{change.path} b/{change.path}")
            if change.status == NEW:
                line = "new file"
                tint = Fore.GREEN
            elif change.status == DELETED:
                line = "deleted file"
                tint = Fore.RED
            else:
                line = f"index {change.old_short}..{change.new_short}"
                tint = Fore.CYAN

            output.append(f"{tint}{line}{Style.RESET_ALL}" if color else line)

        return '\n'.join(output)
