"""Merge operations for Kit.

A merge records a commit with two parents, HEAD first, whose tree is the
current index. File contents are never combined and conflicts are never
detected; the merge base is computed for reporting only.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from kit.core.errors import RefNotFound
from kit.operations.history import CommitGraph
from kit.operations.tree import TreeBuilder

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Result of a merge operation."""
    head_hash: str
    other_hash: str
    merge_base: Optional[str] = None
    commit_hash: Optional[str] = None
    message: str = ""

    @property
    def up_to_date(self) -> bool:
        return self.commit_hash is None

    def __repr__(self) -> str:
        if self.up_to_date:
            return "MergeResult(up-to-date)"
        return f"MergeResult({self.commit_hash[:7]}, base={self.merge_base[:7] if self.merge_base else None})"


class MergeEngine:
    """Handles merge operations for Kit."""

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.graph = CommitGraph(repo)

    def merge(self, ref: str, author: Optional[str] = None,
              timestamp: Optional[int] = None) -> MergeResult:
        """
        Merge a reference into HEAD.

        Args:
            ref: Branch, tag or commit hash to merge
            author: "Name <email>"; defaults to the configured identity
            timestamp: Unix seconds (defaults to now)

        Returns:
            MergeResult; up_to_date is set when both sides are the same commit

        Raises:
            InvalidReference: If ref does not resolve
            RefNotFound: If HEAD has no commit yet
            EmptyStagingArea: If the index is empty
        """
        refs = self.repo.refs
        other_hash = refs.resolve_or_fail(ref)

        head_hash = refs.head_commit()
        if head_hash is None:
            raise RefNotFound('HEAD')

        if head_hash == other_hash:
            return MergeResult(head_hash, other_hash, head_hash, message="Already up to date")

        base = self.graph.merge_base(head_hash, other_hash)
        tree_hash = TreeBuilder(self.repo).from_index(self.repo.index.read())

        message = f"Merge branch '{ref}'"
        commit_hash = self.graph.create_commit(
            tree_hash,
            parents=[head_hash, other_hash],
            author=author,
            message=message,
            timestamp=timestamp
        )
        refs.update_head(commit_hash)

        logger.debug("Merged %s into %s as %s (base %s)",
                     other_hash[:7], head_hash[:7], commit_hash[:7], base[:7] if base else None)
        return MergeResult(head_hash, other_hash, base, commit_hash, message)
