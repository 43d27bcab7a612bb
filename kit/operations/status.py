"""Working tree status: reconciling HEAD, the index and the working tree."""

from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from kit.operations.tree import TreeBuilder


@dataclass
class StatusReport:
    """
    Classification of paths across the three snapshots.

    Each list is sorted and holds a path at most once.
    """
    branch: Optional[str] = None
    head_commit: Optional[str] = None
    staged: List[str] = field(default_factory=list)
    modified: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def detached(self) -> bool:
        return self.branch is None

    @property
    def no_commits(self) -> bool:
        return self.head_commit is None

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.modified or self.deleted or self.untracked)

    def __repr__(self) -> str:
        return (f"StatusReport(staged={len(self.staged)}, modified={len(self.modified)}, "
                f"deleted={len(self.deleted)}, untracked={len(self.untracked)})")


def classify(
    head_tree: Mapping[str, str],
    index: Mapping[str, str],
    working_tree: Mapping[str, str]
) -> StatusReport:
    """
    Classify paths given three path -> blob hash snapshots.

    Args:
        head_tree: Flattened tree of the HEAD commit (empty without commits)
        index: Staged hashes
        working_tree: Hashes of the files currently on disk

    Returns:
        StatusReport with branch information left unset
    """
    report = StatusReport()

    for path, staged_hash in index.items():
        if head_tree.get(path) != staged_hash:
            report.staged.append(path)

        working_hash = working_tree.get(path)
        if working_hash is not None and working_hash != staged_hash:
            report.modified.append(path)

    deleted = {path for path in head_tree if path not in index}
    deleted.update(path for path in index if path not in working_tree)
    report.deleted = sorted(deleted)

    report.untracked = [
        path for path in working_tree
        if path not in index and path not in head_tree
    ]

    report.staged.sort()
    report.modified.sort()
    report.untracked.sort()
    return report


class StatusEngine:
    """Gathers the three snapshots of a repository and classifies them."""

    def __init__(self, repo):
        """
        Initialize status engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.trees = TreeBuilder(repo)

    def status(self) -> StatusReport:
        """
        Compute the status of the repository. Nothing is written.

        Returns:
            StatusReport including the current branch and HEAD commit
        """
        head_commit = self.repo.refs.head_commit()

        report = classify(
            self.trees.flatten_commit(head_commit),
            self.repo.index.hashes(),
            self.trees.working_tree_hashes()
        )
        report.branch = self.repo.refs.current_branch()
        report.head_commit = head_commit
        return report
