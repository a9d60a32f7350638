"""Recursive select/deselect of every file below a directory.

A subtree toggle first decides its direction by scanning the (lazily
populated) subtree: if any file below is selected the whole subtree is
deselected, otherwise every file is selected. The decision is then applied
in a second depth-first pass.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from pathlib import Path

from ..file_tree_model import DirectoryNode, FilesystemError, TreeLoader, TreeNode
from .store import SelectionStore

logger = logging.getLogger(__name__)


class SelectionMark(enum.Enum):
    """Derived selection state of a tree node."""

    NONE = "none"
    PARTIAL = "partial"
    ALL = "all"


@dataclass(frozen=True)
class SubtreeToggle:
    """Outcome of one ``toggle_subtree`` call."""

    selecting: bool
    files: int
    failed: tuple[Path, ...] = ()


def _try_populate(loader: TreeLoader, node: DirectoryNode, failed: list[Path]) -> bool:
    try:
        loader.populate(node)
    except FilesystemError as exc:
        logger.info("skipping unreadable directory %s: %s", node.path, exc)
        if node.path not in failed:
            failed.append(node.path)
        return False
    return True


def any_selected_below(
    node: DirectoryNode,
    store: SelectionStore,
    loader: TreeLoader,
    failed: list[Path],
) -> bool:
    """Return whether any file under ``node`` is selected, populating as it goes.

    The scan stops at the first selected file; directories after it are left
    for the apply pass to populate.
    """
    for child in node.children:
        if isinstance(child, DirectoryNode):
            if not _try_populate(loader, child, failed):
                continue
            if any_selected_below(child, store, loader, failed):
                return True
        elif store.is_selected(child.path):
            return True
    return False


def apply_to_subtree(
    node: DirectoryNode,
    store: SelectionStore,
    loader: TreeLoader,
    selecting: bool,
    failed: list[Path],
) -> int:
    """Add or remove every file under ``node``; return how many files were visited."""
    visited = 0
    for child in node.children:
        if isinstance(child, DirectoryNode):
            if not _try_populate(loader, child, failed):
                continue
            visited += apply_to_subtree(child, store, loader, selecting, failed)
        elif selecting:
            store.add(child.path)
            visited += 1
        else:
            store.remove(child.path)
            visited += 1
    return visited


class SelectionPropagator:
    """Applies directory-level toggles to a ``SelectionStore``."""

    def __init__(self, store: SelectionStore, loader: TreeLoader) -> None:
        self.store = store
        self.loader = loader

    def toggle_subtree(self, node: TreeNode) -> SubtreeToggle:
        """Select or deselect every file below ``node``.

        A file node is toggled on its own. For a directory, failure to list
        ``node`` itself raises ``FilesystemError`` before any selection change;
        unreadable nested directories are skipped and reported in ``failed``.
        """
        if not isinstance(node, DirectoryNode):
            selected = self.store.toggle(node.path)
            return SubtreeToggle(selecting=selected, files=1)

        self.loader.populate(node)
        failed: list[Path] = []
        selecting = not any_selected_below(node, self.store, self.loader, failed)
        files = apply_to_subtree(node, self.store, self.loader, selecting, failed)
        logger.debug(
            "%s %d file(s) under %s",
            "selected" if selecting else "deselected",
            files,
            node.path,
        )
        return SubtreeToggle(selecting=selecting, files=files, failed=tuple(failed))


def subtree_selection_mark(node: TreeNode, store: SelectionStore) -> SelectionMark:
    """Derive the selection mark of ``node`` from already-loaded descendants.

    No directory is listed here. Unpopulated directories count as having no
    files, so a directory with no known files is ``NONE``.
    """
    if not isinstance(node, DirectoryNode):
        return SelectionMark.ALL if store.is_selected(node.path) else SelectionMark.NONE

    selected = 0
    unselected = 0
    stack: list[DirectoryNode] = [node]
    while stack:
        current = stack.pop()
        for child in current.children:
            if isinstance(child, DirectoryNode):
                stack.append(child)
            elif store.is_selected(child.path):
                selected += 1
            else:
                unselected += 1
        if selected and unselected:
            return SelectionMark.PARTIAL
    if selected:
        return SelectionMark.ALL
    return SelectionMark.NONE


__all__ = [
    "SelectionMark",
    "SubtreeToggle",
    "SelectionPropagator",
    "any_selected_below",
    "apply_to_subtree",
    "subtree_selection_mark",
]
