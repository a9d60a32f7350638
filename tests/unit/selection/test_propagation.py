"""Tests for recursive directory toggles and derived selection marks."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from filebundler.file_tree_model import (
    DirectoryNode,
    FileNode,
    FilesystemError,
    PathFilterConfig,
    TreeLoader,
    list_directory_children,
)
from filebundler.selection import SelectionMark, SelectionPropagator, SelectionStore, subtree_selection_mark


def _make_tree(root: Path) -> None:
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "src" / "main.py").write_text("main\n", encoding="utf-8")
    (root / "src" / "pkg" / "mod.py").write_text("mod\n", encoding="utf-8")
    (root / "src" / "pkg" / "util.py").write_text("util\n", encoding="utf-8")
    (root / "empty" / "nested").mkdir(parents=True)
    (root / "README").write_text("readme\n", encoding="utf-8")


def _src_files(root: Path) -> set[Path]:
    return {root / "src" / "main.py", root / "src" / "pkg" / "mod.py", root / "src" / "pkg" / "util.py"}


def _child(node: DirectoryNode, name: str):
    return next(child for child in node.children if child.name == name)


class SelectionPropagatorTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        _make_tree(self.root)
        self.store = SelectionStore()
        self.loader = TreeLoader()
        self.propagator = SelectionPropagator(self.store, self.loader)
        self.tree = self.loader.load_tree(self.root)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_toggle_selects_every_file_and_populates_nested_directories(self) -> None:
        src = _child(self.tree, "src")
        self.assertFalse(src.populated)

        result = self.propagator.toggle_subtree(src)

        self.assertTrue(result.selecting)
        self.assertEqual(result.files, 3)
        self.assertEqual(result.failed, ())
        self.assertEqual(set(self.store.snapshot()), _src_files(self.root))
        self.assertTrue(src.populated)
        self.assertTrue(_child(src, "pkg").populated)

    def test_toggle_deselects_everything_when_any_file_is_selected(self) -> None:
        self.store.add(self.root / "src" / "pkg" / "mod.py")
        self.store.add(self.root / "README")

        result = self.propagator.toggle_subtree(_child(self.tree, "src"))

        self.assertFalse(result.selecting)
        self.assertEqual(self.store.snapshot(), (self.root / "README",))

    def test_toggle_twice_on_unselected_subtree_restores_empty_selection(self) -> None:
        src = _child(self.tree, "src")
        self.propagator.toggle_subtree(src)
        self.propagator.toggle_subtree(src)
        self.assertEqual(self.store.snapshot(), ())

    def test_directories_are_never_stored(self) -> None:
        self.propagator.toggle_subtree(self.tree)

        stored = set(self.store.snapshot())
        self.assertTrue(all(path.is_file() for path in stored))
        self.assertNotIn(self.root / "src", stored)
        self.assertNotIn(self.root / "src" / "pkg", stored)
        self.assertEqual(stored, _src_files(self.root) | {self.root / "README"})

    def test_subtree_without_files_is_a_no_op(self) -> None:
        self.store.add(self.root / "README")

        result = self.propagator.toggle_subtree(_child(self.tree, "empty"))

        self.assertEqual(result.files, 0)
        self.assertEqual(self.store.snapshot(), (self.root / "README",))

    def test_file_node_uses_single_toggle(self) -> None:
        readme = _child(self.tree, "README")
        self.assertIsInstance(readme, FileNode)

        first = self.propagator.toggle_subtree(readme)
        second = self.propagator.toggle_subtree(readme)

        self.assertTrue(first.selecting)
        self.assertFalse(second.selecting)
        self.assertEqual(self.store.snapshot(), ())

    def test_unreadable_directory_raises_and_leaves_selection_unchanged(self) -> None:
        self.store.add(self.root / "README")
        src = _child(self.tree, "src")

        with mock.patch(
            "filebundler.file_tree_model.loader.list_directory_children",
            return_value=([], PermissionError(13, "Permission denied")),
        ):
            with self.assertRaises(FilesystemError):
                self.propagator.toggle_subtree(src)

        self.assertEqual(self.store.snapshot(), (self.root / "README",))
        self.assertFalse(src.populated)

    def test_unreadable_nested_directory_is_skipped_while_siblings_apply(self) -> None:
        pkg = self.root / "src" / "pkg"

        def listing(directory: Path, filter_config: PathFilterConfig):
            if directory == pkg:
                return [], PermissionError(13, "Permission denied")
            return list_directory_children(directory, filter_config)

        with mock.patch("filebundler.file_tree_model.loader.list_directory_children", side_effect=listing):
            result = self.propagator.toggle_subtree(_child(self.tree, "src"))

        self.assertTrue(result.selecting)
        self.assertEqual(result.failed, (pkg,))
        self.assertEqual(self.store.snapshot(), (self.root / "src" / "main.py",))


class SubtreeSelectionMarkTests(unittest.TestCase):
    def test_marks_follow_loaded_descendants(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            _make_tree(root)
            store = SelectionStore()
            loader = TreeLoader()
            tree = loader.load_tree(root)
            src = _child(tree, "src")

            self.assertEqual(subtree_selection_mark(src, store), SelectionMark.NONE)

            loader.populate_subtree(src)
            store.add(root / "src" / "main.py")
            self.assertEqual(subtree_selection_mark(src, store), SelectionMark.PARTIAL)
            self.assertEqual(subtree_selection_mark(_child(src, "main.py"), store), SelectionMark.ALL)

            SelectionPropagator(store, loader).toggle_subtree(src)
            SelectionPropagator(store, loader).toggle_subtree(src)
            self.assertEqual(subtree_selection_mark(src, store), SelectionMark.ALL)

    def test_unpopulated_directory_reads_as_none_without_listing(self) -> None:
        store = SelectionStore()
        node = DirectoryNode(path=Path("/does/not/exist"), name="exist")

        with mock.patch("filebundler.file_tree_model.loader.list_directory_children") as listing:
            self.assertEqual(subtree_selection_mark(node, store), SelectionMark.NONE)
        listing.assert_not_called()


if __name__ == "__main__":
    unittest.main()
