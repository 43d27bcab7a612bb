"""Recording the staged snapshot as a new commit."""

import logging
from typing import Optional

from kit.operations.history import CommitGraph
from kit.operations.tree import TreeBuilder

logger = logging.getLogger(__name__)


def commit_index(repo, message: str, author: Optional[str] = None,
                 timestamp: Optional[int] = None) -> str:
    """
    Commit the current index on top of HEAD and advance HEAD.

    The index is left as is, since it matches the new commit.

    Args:
        repo: Repository instance
        message: Commit message
        author: "Name <email>"; defaults to the configured identity
        timestamp: Unix seconds (defaults to now)

    Returns:
        str: New commit hash

    Raises:
        EmptyStagingArea: If nothing is staged
        MissingCommitMessage: If message is empty
    """
    tree_hash = TreeBuilder(repo).from_index(repo.index.read())

    parent = repo.refs.head_commit()
    parents = [parent] if parent else []

    commit_hash = CommitGraph(repo).create_commit(
        tree_hash,
        parents=parents,
        author=author,
        message=message,
        timestamp=timestamp
    )
    repo.refs.update_head(commit_hash)

    logger.debug("Committed %s on %s", commit_hash[:7], repo.refs.current_branch() or 'detached HEAD')
    return commit_hash
