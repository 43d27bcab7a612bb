"""Reference management for Kit."""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

from kit.utils.fs import atomic_write

from .errors import BranchCheckedOut, InvalidReference, RefNotFound
from .hash import is_valid_hash

logger = logging.getLogger(__name__)

SYMREF_PREFIX = 'ref: '
HEADS_PREFIX = 'refs/heads/'
TAGS_PREFIX = 'refs/tags/'
DEFAULT_BRANCH = 'main'


def is_valid_ref_name(name: str) -> bool:
    """
    Check that a branch or tag name stays inside its namespace.

    Names may nest with '/', but must not be empty or absolute, and no
    component may be empty, '.' or '..'.
    """
    if not name or '\\' in name or '\0' in name:
        return False
    return all(part not in ('', '.', '..') for part in name.split('/'))


class RefManager:
    """
    Manages references (branches, tags, HEAD).

    HEAD is either attached ("ref: refs/heads/<branch>") or detached
    (a raw commit hash). Branches and tags are files under refs/heads
    and refs/tags holding one newline-terminated hash. Tags are always
    direct, never symbolic.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.kit_dir = repo.kit_dir
        self.heads_dir = repo.heads_dir
        self.tags_dir = repo.tags_dir
        self.head_file = repo.head_file

    def _ref_path(self, directory: Path, name: str) -> Path:
        if not is_valid_ref_name(name):
            raise InvalidReference(name)
        return directory / name

    def _read_file(self, path: Path) -> Optional[str]:
        try:
            content = path.read_text().strip()
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError):
            return None
        return content or None

    def _read_hash(self, directory: Path, name: str) -> Optional[str]:
        if not is_valid_ref_name(name):
            return None
        content = self._read_file(directory / name)
        if content is None or not is_valid_hash(content):
            return None
        return content

    def _write_file(self, path: Path, content: str) -> None:
        atomic_write(path, (content + '\n').encode())

    def read_head(self) -> Optional[str]:
        """Raw HEAD content, or None when there is no HEAD file."""
        return self._read_file(self.head_file)

    def current_branch(self) -> Optional[str]:
        """
        Get the current branch name.

        Returns:
            Branch name when HEAD is attached, 'main' when the repository has
            no HEAD file, None when HEAD is detached
        """
        content = self.read_head()
        if content is None:
            return DEFAULT_BRANCH

        if content.startswith(SYMREF_PREFIX + HEADS_PREFIX):
            return content[len(SYMREF_PREFIX + HEADS_PREFIX):]

        return None

    def is_detached(self) -> bool:
        """Check whether HEAD holds a raw commit hash."""
        content = self.read_head()
        return content is not None and not content.startswith(SYMREF_PREFIX)

    def head_commit(self) -> Optional[str]:
        """
        Dereference HEAD to a commit hash.

        Returns:
            Commit hash, or None if the branch HEAD points to has no commits
        """
        content = self.read_head()
        if content is None:
            return None

        if content.startswith(SYMREF_PREFIX):
            target = content[len(SYMREF_PREFIX):]
            if not target.startswith(HEADS_PREFIX):
                return None
            return self._read_hash(self.heads_dir, target[len(HEADS_PREFIX):])

        return content if is_valid_hash(content) else None

    def branch_commit(self, branch: str) -> Optional[str]:
        """Hash a branch points to, or None if the branch does not exist."""
        return self._read_hash(self.heads_dir, branch)

    def tag_commit(self, tag: str) -> Optional[str]:
        """Hash a tag points to, or None if the tag does not exist."""
        return self._read_hash(self.tags_dir, tag)

    def branch_exists(self, branch: str) -> bool:
        return is_valid_ref_name(branch) and (self.heads_dir / branch).is_file()

    def resolve(self, ref: str) -> Optional[str]:
        """
        Resolve a reference to a commit hash.

        'HEAD' resolves to the HEAD commit. Otherwise tries, in order, a
        branch name, a tag name, then a literal 40-hex hash that already
        exists in the object store.

        Args:
            ref: Reference string

        Returns:
            Commit hash, or None if nothing matches
        """
        if ref == 'HEAD':
            return self.head_commit()

        branch_hash = self.branch_commit(ref)
        if branch_hash:
            return branch_hash

        tag_hash = self.tag_commit(ref)
        if tag_hash:
            return tag_hash

        if is_valid_hash(ref) and self.repo.object_exists(ref):
            return ref

        return None

    def resolve_or_fail(self, ref: str) -> str:
        """
        Resolve a reference that must exist.

        Raises:
            InvalidReference: If resolve() finds nothing
        """
        commit_hash = self.resolve(ref)
        if commit_hash is None:
            raise InvalidReference(ref)
        return commit_hash

    def update_branch(self, branch: str, commit_hash: str) -> None:
        """Point a branch at a commit, creating it if needed."""
        self._write_file(self._ref_path(self.heads_dir, branch), commit_hash)
        logger.debug("Branch %s -> %s", branch, commit_hash[:7])

    def set_head_detached(self, commit_hash: str) -> None:
        """Point HEAD directly at a commit."""
        self._write_file(self.head_file, commit_hash)
        logger.debug("HEAD detached at %s", commit_hash[:7])

    def attach_head(self, branch: str) -> None:
        """Point HEAD at a branch."""
        self._ref_path(self.heads_dir, branch)
        self._write_file(self.head_file, f'{SYMREF_PREFIX}{HEADS_PREFIX}{branch}')
        logger.debug("HEAD attached to %s", branch)

    def update_head(self, commit_hash: str) -> None:
        """
        Advance HEAD to a new commit.

        When attached (or when there is no HEAD file yet) the branch moves;
        when detached, HEAD itself is rewritten.
        """
        if self.is_detached():
            self.set_head_detached(commit_hash)
        else:
            self.update_branch(self.current_branch(), commit_hash)

    def create_branch(self, branch: str, commit_hash: str) -> bool:
        """
        Create a new branch.

        Returns:
            True if created, False if it already exists
        """
        if self.branch_exists(branch):
            return False
        self.update_branch(branch, commit_hash)
        return True

    def delete_branch(self, branch: str) -> None:
        """
        Delete a branch.

        Raises:
            BranchCheckedOut: If HEAD is attached to the branch
            RefNotFound: If the branch does not exist
        """
        if not self.is_detached() and self.current_branch() == branch:
            raise BranchCheckedOut(branch)

        branch_path = self._ref_path(self.heads_dir, branch)
        if not branch_path.is_file():
            raise RefNotFound(HEADS_PREFIX + branch)

        branch_path.unlink()
        logger.debug("Deleted branch %s", branch)

    def create_tag(self, tag: str, commit_hash: str) -> bool:
        """
        Create a tag pointing directly at a commit.

        Returns:
            True if created, False if it already exists
        """
        tag_path = self._ref_path(self.tags_dir, tag)
        if tag_path.is_file():
            return False
        self._write_file(tag_path, commit_hash)
        logger.debug("Tag %s -> %s", tag, commit_hash[:7])
        return True

    def delete_tag(self, tag: str) -> None:
        """
        Delete a tag.

        Raises:
            RefNotFound: If the tag does not exist
        """
        tag_path = self._ref_path(self.tags_dir, tag)
        if not tag_path.is_file():
            raise RefNotFound(TAGS_PREFIX + tag)
        tag_path.unlink()

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            Sorted list of (branch_name, commit_hash) tuples
        """
        return self._list(self.heads_dir)

    def list_tags(self) -> List[Tuple[str, str]]:
        """
        List all tags.

        Returns:
            Sorted list of (tag_name, commit_hash) tuples
        """
        return self._list(self.tags_dir)

    def _list(self, directory: Path) -> List[Tuple[str, str]]:
        if not directory.exists():
            return []

        refs = []
        for ref_file in directory.rglob('*'):
            if ref_file.is_file() and not ref_file.name.startswith('.'):
                refs.append((ref_file.relative_to(directory).as_posix(), ref_file.read_text().strip()))

        return sorted(refs)
