"""Flatten the loaded tree into visible rows with derived selection marks."""

from __future__ import annotations

from pathlib import Path

from ..file_tree_model import DirectoryNode
from ..selection import SelectionStore, subtree_selection_mark
from .types import TreeRow


def build_tree_rows(
    root: DirectoryNode,
    store: SelectionStore,
    expanded: set[Path] | None = None,
) -> list[TreeRow]:
    """Build rows for ``root`` and the children of expanded directories.

    ``expanded=None`` treats every populated directory as expanded. Nothing is
    listed from disk; unpopulated directories render collapsed.
    """

    def is_open(node: DirectoryNode) -> bool:
        if not node.populated:
            return False
        return expanded is None or node.path in expanded

    rows: list[TreeRow] = []

    def walk(node: DirectoryNode, depth: int) -> None:
        for child in node.children:
            child_open = isinstance(child, DirectoryNode) and is_open(child)
            rows.append(
                TreeRow(
                    node=child,
                    depth=depth,
                    mark=subtree_selection_mark(child, store),
                    expanded=child_open,
                )
            )
            if child_open:
                walk(child, depth + 1)

    root_open = is_open(root)
    rows.append(TreeRow(node=root, depth=0, mark=subtree_selection_mark(root, store), expanded=root_open))
    if root_open:
        walk(root, 1)
    return rows


__all__ = ["build_tree_rows"]
