"""Typed failures raised by the Kit core.

Every failure carries the offending identifier (object hash, path, or
reference name) so callers can report it without re-deriving context.
"""

from typing import Optional


class KitError(Exception):
    """Base class for all Kit failures."""

    def __init__(self, message: str, identifier: Optional[str] = None):
        super().__init__(message)
        self.identifier = identifier


class ObjectNotFound(KitError):
    """Requested hash has no backing object file."""

    def __init__(self, obj_hash: str):
        super().__init__(f"Object not found: {obj_hash}", obj_hash)


class CorruptObject(KitError):
    """Decompression failure or malformed frame, header, or tree entry."""

    def __init__(self, identifier: str, reason: str):
        super().__init__(f"Corrupt object {identifier}: {reason}", identifier)
        self.reason = reason


class UnexpectedObjectType(KitError):
    """Object exists but is not of the type the caller required."""

    def __init__(self, obj_hash: str, expected: str, actual: str):
        super().__init__(f"Object {obj_hash} is a {actual}, not a {expected}", obj_hash)
        self.expected = expected
        self.actual = actual


class RefNotFound(KitError):
    """Branch or tag file missing when it is required to exist."""

    def __init__(self, ref_name: str):
        super().__init__(f"Reference not found: {ref_name}", ref_name)


class InvalidReference(KitError):
    """Reference resolves to nothing, or names a path outside its namespace."""

    def __init__(self, ref: str):
        super().__init__(f"Not a valid reference: {ref}", ref)


class BranchCheckedOut(KitError):
    """Refusal to delete the branch HEAD is attached to."""

    def __init__(self, branch: str):
        super().__init__(f"Cannot delete branch '{branch}' checked out at HEAD", branch)


class EmptyStagingArea(KitError):
    """Attempt to build a tree from an index with no entries."""

    def __init__(self, index_path: Optional[str] = None):
        super().__init__("Nothing to commit (staging area is empty)", index_path)


class MissingCommitMessage(KitError):
    """Commit creation without a message."""

    def __init__(self, tree_hash: Optional[str] = None):
        super().__init__("Commit message required", tree_hash)


class MissingTreeArgument(KitError):
    """Commit creation without a tree hash."""

    def __init__(self):
        super().__init__("Tree hash required")


class PathConflict(KitError):
    """A staged path is both a file and the parent directory of another path."""

    def __init__(self, path: str):
        super().__init__(f"Path is staged as both a file and a directory: {path}", path)
