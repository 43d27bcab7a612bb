"""Checkout and reset: moving HEAD and syncing the working tree."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from kit.core.index import IndexEntry
from kit.core.objects import FILE_MODE
from kit.operations.tree import TreeBuilder
from kit.utils.fs import iter_working_files

logger = logging.getLogger(__name__)

SOFT = 'soft'
MIXED = 'mixed'
HARD = 'hard'
RESET_MODES = (SOFT, MIXED, HARD)


@dataclass
class CheckoutResult:
    """Outcome of a checkout or reset."""
    commit_hash: str
    branch: Optional[str] = None
    written: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    @property
    def detached(self) -> bool:
        return self.branch is None

    def __repr__(self) -> str:
        target = self.branch or self.commit_hash[:7]
        return f"CheckoutResult({target}, written={len(self.written)}, removed={len(self.removed)})"


def _remove_files(repo, paths: Iterable[str]) -> List[str]:
    """Delete working-tree files and any directories left empty."""
    removed = []

    for rel_path in sorted(paths):
        target = repo.work_tree / rel_path
        if not target.is_file():
            continue
        target.unlink()
        removed.append(rel_path)

        parent = target.parent
        while parent != repo.work_tree and not any(parent.iterdir()):
            parent.rmdir()
            parent = parent.parent

    return removed


def _write_index_from_tree(repo, files) -> None:
    repo.index.write({
        path: IndexEntry(path=path, mode=FILE_MODE, sha1=blob_hash)
        for path, blob_hash in files.items()
    })


def checkout(repo, ref: str) -> CheckoutResult:
    """
    Switch the working tree, index and HEAD to a commit.

    Files tracked by the previous HEAD or the index that the target commit
    lacks are removed; untracked files are left alone. HEAD is attached when
    ref names a branch and detached otherwise.

    Args:
        repo: Repository instance
        ref: Branch, tag or commit hash

    Returns:
        CheckoutResult

    Raises:
        InvalidReference: If ref does not resolve
        UnexpectedObjectType: If ref resolves to something other than a commit
    """
    refs = repo.refs
    commit_hash = refs.resolve_or_fail(ref)
    commit = repo.read_object(commit_hash, expected='commit')

    trees = TreeBuilder(repo)
    files = trees.flatten(commit.tree)
    contents = trees.read_blobs(files)
    previously_tracked = set(trees.flatten_commit(refs.head_commit()))
    previously_tracked.update(repo.index.hashes())

    removed = _remove_files(repo, previously_tracked - set(files))
    trees.write_files(contents)
    _write_index_from_tree(repo, files)

    if ref != 'HEAD' and refs.branch_exists(ref):
        refs.attach_head(ref)
        branch = ref
    else:
        refs.set_head_detached(commit_hash)
        branch = None

    logger.debug("Checked out %s (%d written, %d removed)", commit_hash[:7], len(files), len(removed))
    return CheckoutResult(commit_hash, branch, sorted(files), removed)


def reset(repo, ref: str = 'HEAD', mode: str = MIXED) -> CheckoutResult:
    """
    Move the current branch (or detached HEAD) to a commit.

    Modes:
        soft: only HEAD moves
        mixed: HEAD moves and the index is cleared
        hard: HEAD moves, the index is cleared, and the working tree is
              replaced by exactly the commit's files

    Args:
        repo: Repository instance
        ref: Branch, tag, commit hash or 'HEAD'
        mode: One of 'soft', 'mixed', 'hard'

    Returns:
        CheckoutResult

    Raises:
        ValueError: If mode is unknown
        InvalidReference: If ref does not resolve
    """
    if mode not in RESET_MODES:
        raise ValueError(f"Unknown reset mode: {mode}")

    refs = repo.refs
    commit_hash = refs.resolve_or_fail(ref)
    commit = repo.read_object(commit_hash, expected='commit')
    result = CheckoutResult(commit_hash)

    if mode == HARD:
        trees = TreeBuilder(repo)
        files = trees.flatten(commit.tree)
        contents = trees.read_blobs(files)
        on_disk = {rel_path for rel_path, _ in iter_working_files(repo.work_tree, repo.kit_dir.name)}
        result.removed = _remove_files(repo, on_disk - set(files))
        trees.write_files(contents)
        result.written = sorted(files)

    if mode != SOFT:
        repo.index.clear()

    # HEAD moves only once the working tree and index are in place
    refs.update_head(commit_hash)
    result.branch = refs.current_branch()

    logger.debug("Reset (%s) to %s", mode, commit_hash[:7])
    return result
