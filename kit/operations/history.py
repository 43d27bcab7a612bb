"""Commit creation and history traversal."""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from kit.core.config import format_identity, get_config
from kit.core.errors import MissingCommitMessage, MissingTreeArgument
from kit.core.objects import Commit

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    Pure computation layer over the commit DAG.

    Holds no state of its own; everything is read from the object store
    and the refs of the repository it wraps.
    """

    def __init__(self, repo):
        """
        Initialize commit graph.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def default_author(self) -> str:
        """Identity from configuration, falling back to the OS user."""
        return format_identity(*get_config(self.repo).get_user_identity())

    def create_commit(
        self,
        tree_hash: Optional[str],
        parents: Sequence[str] = (),
        author: Optional[str] = None,
        message: Optional[str] = None,
        timestamp: Optional[int] = None
    ) -> str:
        """
        Create and store a commit object.

        Args:
            tree_hash: Root tree of the snapshot
            parents: Ordered parent hashes, first parent being the mainline
            author: "Name <email>"; defaults to the configured identity
            message: Commit message
            timestamp: Unix seconds (defaults to now); offset is always +0000

        Returns:
            str: Commit hash

        Raises:
            MissingTreeArgument: If tree_hash is empty
            MissingCommitMessage: If message is empty
        """
        if not tree_hash:
            raise MissingTreeArgument()
        if not message:
            raise MissingCommitMessage(tree_hash)

        commit = Commit.create(
            tree_hash=tree_hash,
            parent_hashes=list(parents),
            author=author or self.default_author(),
            message=message,
            timestamp=timestamp
        )
        commit_hash = self.repo.write_object(commit)
        logger.debug("Created commit %s with %d parent(s)", commit_hash[:7], len(commit.parents))
        return commit_hash

    def read_commit(self, commit_hash: str) -> Commit:
        return self.repo.read_object(commit_hash, expected='commit')

    def parents_of(self, commit_hash: str) -> List[str]:
        """
        Parent hashes of a commit, in order.

        Returns:
            Empty list for a root commit
        """
        return list(self.read_commit(commit_hash).parents)

    def ancestors(self, commit_hash: str) -> List[str]:
        """
        Walk first parents from a commit down to its root.

        Only the first parent is followed, so commits reachable solely
        through the second parent of a merge are not included.

        Args:
            commit_hash: Starting commit (included in the result)

        Returns:
            Hashes in traversal order, newest first, without duplicates
        """
        seen = set()
        order = []
        current: Optional[str] = commit_hash

        while current and current not in seen:
            seen.add(current)
            order.append(current)
            parents = self.parents_of(current)
            current = parents[0] if parents else None

        return order

    def merge_base(self, commit_a: str, commit_b: str) -> Optional[str]:
        """
        Find a common ancestor of two commits.

        Returns the first first-parent ancestor of commit_a that is also a
        first-parent ancestor of commit_b. This is a simplification: it is
        not guaranteed to be the lowest common ancestor in a DAG with merges.

        Returns:
            Commit hash, or None if the histories do not meet
        """
        ancestors_b = set(self.ancestors(commit_b))
        for candidate in self.ancestors(commit_a):
            if candidate in ancestors_b:
                return candidate
        return None

    def log(self, start_hash: Optional[str]) -> Iterator[Tuple[str, Commit]]:
        """
        Yield (hash, commit) pairs following first parents, newest first.

        Args:
            start_hash: Commit to start from; None yields nothing
        """
        current = start_hash
        while current:
            commit = self.read_commit(current)
            yield current, commit
            current = commit.parents[0] if commit.parents else None
