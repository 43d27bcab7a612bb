"""Operations module for high-level Kit operations.

This module contains the logic built on top of kit.core:
- Tree building and materialization
- Commit graph traversal and merge bases
- Status computation
- Diff computation
- Commit, checkout, reset and merge
"""

from kit.operations.tree import TreeBuilder
from kit.operations.history import CommitGraph
from kit.operations.status import StatusEngine, StatusReport, classify
from kit.operations.diff import DiffEngine, TreeChange, diff_snapshots
from kit.operations.commit import commit_index
from kit.operations.checkout import CheckoutResult, checkout, reset
from kit.operations.merge import MergeEngine, MergeResult

__all__ = [
    'TreeBuilder',
    'CommitGraph',
    'StatusEngine', 'StatusReport', 'classify',
    'DiffEngine', 'TreeChange', 'diff_snapshots',
    'commit_index',
    'CheckoutResult', 'checkout', 'reset',
    'MergeEngine', 'MergeResult',
]
