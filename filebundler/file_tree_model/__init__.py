"""Domain model for lazily loaded filesystem trees.

This package contains non-UI tree primitives:
- file/directory node datatypes with owned children
- name-based visibility filtering
- the loader that lists directories on first expansion
"""

from __future__ import annotations

from .filtering import DEFAULT_EXCLUDE_PATTERNS, PathFilterConfig, should_skip
from .loader import DirectoryChild, FilesystemError, TreeLoader, list_directory_children
from .types import DirectoryNode, FileNode, TreeNode

__all__ = [
    "DirectoryNode",
    "FileNode",
    "TreeNode",
    "DEFAULT_EXCLUDE_PATTERNS",
    "PathFilterConfig",
    "should_skip",
    "DirectoryChild",
    "FilesystemError",
    "TreeLoader",
    "list_directory_children",
]
