"""Core functionality for Kit.

This module contains the core data structures:
- Kit objects (Blob, Tree, Commit)
- Repository management and the object store
- Index/staging area
- Reference management
- Configuration and user identity
- Hashing, framing and compression
- The failure taxonomy

For history, tree building, status and diff, see kit.operations
"""

from kit.core.errors import (KitError, ObjectNotFound, CorruptObject, UnexpectedObjectType,
                             RefNotFound, InvalidReference, BranchCheckedOut, EmptyStagingArea,
                             MissingCommitMessage, MissingTreeArgument, PathConflict)
from kit.core.objects import KitObject, Blob, Tree, TreeEntry, Commit
from kit.core.repository import Repository
from kit.core.hash import hash_object, hash_file, hash_blob, frame, unframe
from kit.core.compression import compress, decompress
from kit.core.index import Index, IndexEntry
from kit.core.refs import RefManager
from kit.core.config import Config, get_config, format_identity

__all__ = [
    'KitError',
    'ObjectNotFound',
    'CorruptObject',
    'UnexpectedObjectType',
    'RefNotFound',
    'InvalidReference',
    'BranchCheckedOut',
    'EmptyStagingArea',
    'MissingCommitMessage',
    'MissingTreeArgument',
    'PathConflict',
    'KitObject',
    'Blob',
    'Tree',
    'TreeEntry',
    'Commit',
    'Repository',
    'Index',
    'IndexEntry',
    'RefManager',
    'Config',
    'get_config',
    'format_identity',
    'hash_object',
    'hash_file',
    'hash_blob',
    'frame',
    'unframe',
    'compress',
    'decompress',
]
