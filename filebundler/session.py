"""One browsing session: a loaded tree, its selection, and export.

``BrowsingSession`` is the command surface a presentation layer drives. It
owns exactly one ``SelectionStore``; nothing here is global.
"""

from __future__ import annotations

import os
from pathlib import Path

from .bundle import BundleDocument, BundleExporter
from .config import BundlerConfig
from .file_tree_model import DirectoryNode, FileNode, TreeLoader, TreeNode
from .selection import SelectionPropagator, SelectionStore, SubtreeToggle
from .selection.store import PathLike
from .tree_model import TreeRow, build_tree_rows


def _tree_path(path: PathLike) -> Path:
    # Resolve only the parents: the tree keeps symlinks as their own nodes.
    target = Path(os.path.abspath(path))
    if target.parent == target:
        return target
    return target.parent.resolve() / target.name


class BrowsingSession:
    def __init__(self, config: BundlerConfig | None = None) -> None:
        self.config = config or BundlerConfig()
        self.store = SelectionStore()
        self.loader = TreeLoader(self.config.filter_config())
        self.propagator = SelectionPropagator(self.store, self.loader)
        self.exporter = BundleExporter(max_file_size=self.config.max_file_size)
        self.root: DirectoryNode | None = None
        self.expanded: set[Path] = set()

    def load_tree(self, root_path: PathLike) -> DirectoryNode:
        """Load ``root_path`` as a fresh tree.

        The previous tree, expansion state and selection are discarded only
        once the new root has been listed.
        """
        root = self.loader.load_tree(root_path)
        self.root = root
        self.expanded = {root.path}
        self.store.clear()
        return root

    def _require_root(self) -> DirectoryNode:
        if self.root is None:
            raise RuntimeError("no tree loaded")
        return self.root

    def expand(self, node: DirectoryNode) -> None:
        """Populate ``node`` on first use and mark it expanded.

        Raises ``FilesystemError`` with tree and expansion state unchanged.
        """
        self.loader.populate(node)
        self.expanded.add(node.path)

    def collapse(self, node: DirectoryNode) -> None:
        self.expanded.discard(node.path)

    def find_node(self, path: PathLike) -> TreeNode | None:
        """Locate the node for ``path`` below the root, listing directories on the way.

        A symlink inside the tree is found as its own node, never as its target.
        """
        root = self._require_root()
        target = _tree_path(path)
        try:
            parts = target.relative_to(root.path).parts
        except ValueError:
            # A symlinked alias of the root itself.
            try:
                parts = Path(path).resolve().relative_to(root.path).parts
            except ValueError:
                return None

        node: TreeNode = root
        for part in parts:
            if not isinstance(node, DirectoryNode):
                return None
            self.loader.populate(node)
            node = next((child for child in node.children if child.name == part), None)
            if node is None:
                return None
        return node

    def toggle_file(self, path: PathLike) -> bool:
        """Toggle one file path; return whether it is now selected.

        Directories are never stored, so toggling one changes nothing and
        returns ``False``. Use ``toggle_subtree`` for them.
        """
        node = self.find_node(path) if self.root is not None else None
        if isinstance(node, FileNode):
            return self.store.toggle(node.path)
        if node is not None:
            return False
        target = _tree_path(path)
        if target.is_dir() and not target.is_symlink():
            return False
        return self.store.toggle(target)

    def toggle_subtree(self, node: TreeNode) -> SubtreeToggle:
        return self.propagator.toggle_subtree(node)

    def toggle(self, node: TreeNode) -> SubtreeToggle:
        """Toggle ``node`` with the semantics of its kind."""
        if isinstance(node, DirectoryNode):
            return self.toggle_subtree(node)
        return SubtreeToggle(selecting=self.store.toggle(node.path), files=1)

    def is_selected(self, path: PathLike) -> bool:
        return self.store.is_selected(path)

    def selected_paths(self) -> tuple[Path, ...]:
        return self.store.snapshot()

    def rows(self, *, all_loaded: bool = False) -> list[TreeRow]:
        """Materialize visible rows; ``all_loaded`` opens every populated directory."""
        root = self._require_root()
        return build_tree_rows(root, self.store, None if all_loaded else self.expanded)

    def export(self, root_path: PathLike | None = None, *, sort_paths: bool = False) -> BundleDocument:
        """Export the current selection snapshot relative to ``root_path``.

        Defaults to the loaded root. Raises ``ExportError`` only on fatal
        failures; unreadable files are dropped.
        """
        if root_path is None:
            root = self._require_root().path
        else:
            root = Path(root_path).resolve()
        return self.exporter.export(root, self.store.snapshot(), sort_paths=sort_paths)


__all__ = ["BrowsingSession"]
