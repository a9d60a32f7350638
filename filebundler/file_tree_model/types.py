"""Domain datatypes for lazily loaded file/directory tree nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(eq=False)
class FileNode:
    """Leaf node for one regular (or non-directory) filesystem entry."""

    path: Path
    name: str

    @property
    def is_dir(self) -> bool:
        return False


@dataclass(eq=False)
class DirectoryNode:
    """Directory node whose children are listed on first expansion.

    ``children`` stays empty and ``populated`` stays ``False`` until a loader
    has listed the directory successfully.
    """

    path: Path
    name: str
    children: list["TreeNode"] = field(default_factory=list)
    populated: bool = False

    @property
    def is_dir(self) -> bool:
        return True


TreeNode = DirectoryNode | FileNode


__all__ = [
    "FileNode",
    "DirectoryNode",
    "TreeNode",
]
