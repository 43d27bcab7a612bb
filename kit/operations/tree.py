"""Tree building, flattening and materialization."""

import logging
import shutil
from collections import defaultdict
from pathlib import Path, PurePosixPath
from typing import Dict, Mapping, Optional, Union

from kit.core.errors import EmptyStagingArea, PathConflict
from kit.core.hash import hash_blob
from kit.core.index import IndexEntry
from kit.core.objects import DIR_MODE, FILE_MODE, Blob, Tree
from kit.utils.fs import iter_working_files

logger = logging.getLogger(__name__)


class TreeBuilder:
    """
    Converts staged entries or a live directory into tree objects.

    Both entry points produce the same canonical tree for the same set of
    paths and contents: entries sorted by name, files as '100644',
    subdirectories as '40000', empty directories omitted.
    """

    def __init__(self, repo):
        """
        Initialize tree builder.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def from_index(self, entries: Mapping[str, IndexEntry]) -> str:
        """
        Build and store the tree hierarchy for a flat set of index entries.

        Directories are built deepest first; each directory combines its
        own files with the hashes of its already-built subdirectories.

        Args:
            entries: Mapping of path to index entry

        Returns:
            str: Root tree hash

        Raises:
            EmptyStagingArea: If entries is empty
            PathConflict: If a path is staged both as a file and as a directory
        """
        if not entries:
            raise EmptyStagingArea()

        trees: Dict[str, Tree] = defaultdict(Tree)

        for path in sorted(entries):
            entry = entries[path]
            parts = PurePosixPath(path).parts

            # Register every ancestor so intermediate directories exist
            for i in range(len(parts)):
                trees['/'.join(parts[:i])]

            trees['/'.join(parts[:-1])].add_entry(entry.mode, entry.sha1, parts[-1])

        clashes = sorted(set(entries) & set(trees))
        if clashes:
            raise PathConflict(clashes[0])

        for dir_path in sorted(trees, key=lambda p: p.count('/') if p else -1, reverse=True):
            if not dir_path:
                continue
            tree_hash = self.repo.write_object(trees[dir_path])
            parent, _, name = dir_path.rpartition('/')
            trees[parent].add_entry(DIR_MODE, tree_hash, name)

        root_hash = self.repo.write_object(trees[''])
        logger.debug("Built tree %s from %d index entries", root_hash[:7], len(entries))
        return root_hash

    def from_working_tree(self, root: Optional[Union[str, Path]] = None) -> Optional[str]:
        """
        Store every file below root as a blob and build the tree for it.

        Args:
            root: Directory to snapshot (defaults to the work tree)

        Returns:
            str: Tree hash, or None if the directory holds no files
        """
        root = Path(root) if root else self.repo.work_tree
        tree = Tree()

        for item in sorted(root.iterdir()):
            if item.name == self.repo.kit_dir.name:
                continue

            if item.is_file():
                blob_hash = self.repo.write_object(Blob.from_file(str(item)))
                tree.add_entry(FILE_MODE, blob_hash, item.name)

            elif item.is_dir():
                subtree_hash = self.from_working_tree(item)
                if subtree_hash:
                    tree.add_entry(DIR_MODE, subtree_hash, item.name)

        if not tree.entries and root != self.repo.work_tree:
            return None

        return self.repo.write_object(tree)

    def flatten(self, tree_hash: str) -> Dict[str, str]:
        """
        Recursively list every file in a stored tree.

        Args:
            tree_hash: Root tree hash

        Returns:
            Mapping of posix path to blob hash
        """
        files: Dict[str, str] = {}
        stack = [(tree_hash, '')]

        while stack:
            current, prefix = stack.pop()
            tree = self.repo.read_object(current, expected='tree')
            for entry in tree.entries:
                path = f"{prefix}{entry.name}"
                if entry.type == 'tree':
                    stack.append((entry.hash, f"{path}/"))
                else:
                    files[path] = entry.hash

        return files

    def flatten_commit(self, commit_hash: Optional[str]) -> Dict[str, str]:
        """Flattened tree of a commit; empty mapping when commit_hash is None."""
        if not commit_hash:
            return {}
        commit = self.repo.read_object(commit_hash, expected='commit')
        return self.flatten(commit.tree)

    def working_tree_hashes(self) -> Dict[str, str]:
        """
        Hash every working-tree file as a blob without storing it.

        Returns:
            Mapping of posix path to blob hash
        """
        return {
            rel_path: hash_blob(file_path.read_bytes())
            for rel_path, file_path in iter_working_files(self.repo.work_tree, self.repo.kit_dir.name)
        }

    def read_blobs(self, files: Mapping[str, str]) -> Dict[str, bytes]:
        """
        Load the content of every blob in a flattened tree.

        Raises:
            ObjectNotFound: If a blob is missing
            UnexpectedObjectType: If a path points at something other than a blob
        """
        return {
            rel_path: self.repo.read_object(blob_hash, expected='blob').data
            for rel_path, blob_hash in files.items()
        }

    def write_files(self, contents: Mapping[str, bytes], dest: Optional[Union[str, Path]] = None) -> None:
        """
        Write file contents below a directory.

        Existing files at the same paths are overwritten. Anything standing
        in the way of a target path is removed first: a file where a parent
        directory must go, or a directory where a file must go. Other files
        are left alone.

        Args:
            contents: Mapping of posix path to file content
            dest: Target directory (defaults to the work tree)
        """
        dest = Path(dest) if dest else self.repo.work_tree

        for rel_path in sorted(contents):
            target = dest / rel_path
            _make_room(dest, target)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(contents[rel_path])

    def materialize(self, tree_hash: str, dest: Optional[Union[str, Path]] = None) -> Dict[str, str]:
        """
        Write the files of a stored tree into a directory.

        Every blob is read before the directory is touched, so a missing
        object leaves it unchanged.

        Args:
            tree_hash: Tree to write out
            dest: Target directory (defaults to the work tree)

        Returns:
            Mapping of written posix path to blob hash
        """
        files = self.flatten(tree_hash)
        self.write_files(self.read_blobs(files), dest)

        logger.debug("Materialized %d files from tree %s", len(files), tree_hash[:7])
        return files


def _make_room(root: Path, target: Path) -> None:
    """Clear non-directories on the way to target, and a directory at target."""
    for parent in reversed(target.relative_to(root).parents):
        if str(parent) == '.':
            continue
        path = root / parent
        if path.is_symlink() or (path.exists() and not path.is_dir()):
            path.unlink()

    if target.is_dir() and not target.is_symlink():
        shutil.rmtree(target)
