"""Utilities module for common helper functions.

This module contains:
- Whole-file replacement writes
- Working-tree listing (files outside the metadata directory)
"""

from kit.utils.fs import atomic_write, iter_working_files

__all__ = [
    'atomic_write', 'iter_working_files',
]
