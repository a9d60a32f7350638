"""Lazy directory population for the file tree.

Directories are listed once, on first expansion, and only when the whole
listing succeeds are the children attached to the node.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .filtering import PathFilterConfig, should_skip
from .types import DirectoryNode, FileNode, TreeNode

logger = logging.getLogger(__name__)


class FilesystemError(Exception):
    """A directory could not be listed (unreadable, missing, or changed mid-scan)."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory entry as reported by the listing."""

    name: str
    path: Path
    is_dir: bool


def list_directory_children(
    directory: Path,
    filter_config: PathFilterConfig,
) -> tuple[list[DirectoryChild], OSError | None]:
    """List visible children of ``directory`` in filesystem order.

    Returns ``(children, scan_error)``. ``scan_error`` is set, and ``children``
    is empty, when the directory or any of its entries could not be read.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if should_skip(name, filter_config):
                    continue
                children.append(
                    DirectoryChild(
                        name=name,
                        path=Path(child.path),
                        is_dir=child.is_dir(follow_symlinks=False),
                    )
                )
    except OSError as exc:
        return [], exc
    return children, None


def _node_for_child(child: DirectoryChild) -> TreeNode:
    if child.is_dir:
        return DirectoryNode(path=child.path, name=child.name)
    return FileNode(path=child.path, name=child.name)


class TreeLoader:
    """Materializes directory children on demand, honoring a ``PathFilterConfig``."""

    def __init__(self, filter_config: PathFilterConfig | None = None) -> None:
        self.filter_config = filter_config or PathFilterConfig()

    def load_tree(self, root_path: Path | str) -> DirectoryNode:
        """Build and populate the root node for ``root_path``."""
        try:
            root = Path(root_path).resolve()
        except OSError as exc:
            raise FilesystemError(Path(root_path), str(exc)) from exc
        if not root.is_dir():
            raise FilesystemError(root, "not a directory")
        node = DirectoryNode(path=root, name=root.name or str(root))
        self.populate(node)
        return node

    def populate(self, node: DirectoryNode) -> None:
        """List ``node`` once and attach its visible children.

        Already populated nodes are left alone. On failure the node keeps its
        previous (empty, unpopulated) state and ``FilesystemError`` is raised
        so the caller may retry later.
        """
        if not isinstance(node, DirectoryNode):
            raise TypeError(f"cannot populate non-directory node: {node.path}")
        if node.populated:
            return

        children, scan_error = list_directory_children(node.path, self.filter_config)
        if scan_error is not None:
            logger.debug("listing %s failed: %s", node.path, scan_error)
            reason = scan_error.strerror or str(scan_error)
            raise FilesystemError(node.path, reason) from scan_error

        node.children = [_node_for_child(child) for child in children]
        node.populated = True

    def populate_subtree(self, node: DirectoryNode) -> list[Path]:
        """Populate ``node`` and every directory below it.

        Returns the paths of directories that could not be listed; their
        subtrees are skipped while siblings continue.
        """
        failed: list[Path] = []
        try:
            self.populate(node)
        except FilesystemError:
            failed.append(node.path)
            return failed
        for child in node.children:
            if isinstance(child, DirectoryNode):
                failed.extend(self.populate_subtree(child))
        return failed


__all__ = [
    "FilesystemError",
    "DirectoryChild",
    "list_directory_children",
    "TreeLoader",
]
