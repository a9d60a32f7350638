"""Tree row datatypes used by listing renderers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..file_tree_model import TreeNode
from ..selection import SelectionMark


@dataclass(frozen=True)
class TreeRow:
    """One visible row of the materialized tree listing."""

    node: TreeNode
    depth: int
    mark: SelectionMark
    expanded: bool = False

    @property
    def path(self) -> Path:
        return self.node.path

    @property
    def is_dir(self) -> bool:
        return self.node.is_dir
