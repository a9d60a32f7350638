"""Tests for name-based tree visibility rules."""

from __future__ import annotations

import unittest

from filebundler.file_tree_model import PathFilterConfig, should_skip


class ShouldSkipTests(unittest.TestCase):
    def test_hidden_names_and_exact_excludes_are_skipped(self) -> None:
        config = PathFilterConfig(include_hidden=False, exclude_patterns=(".git", "node_modules"))

        self.assertTrue(should_skip(".git", config))
        self.assertTrue(should_skip("node_modules", config))
        self.assertTrue(should_skip(".env", config))
        self.assertFalse(should_skip("README.md", config))

    def test_hidden_names_are_kept_when_hidden_files_are_included(self) -> None:
        config = PathFilterConfig(include_hidden=True, exclude_patterns=(".git",))

        self.assertFalse(should_skip(".env", config))
        self.assertTrue(should_skip(".git", config))

    def test_exclude_patterns_match_whole_names_only(self) -> None:
        config = PathFilterConfig(include_hidden=True, exclude_patterns=("build", "*.pyc"))

        self.assertTrue(should_skip("build", config))
        self.assertFalse(should_skip("build.py", config))
        self.assertFalse(should_skip("rebuild", config))
        self.assertFalse(should_skip("module.pyc", config))
        self.assertTrue(should_skip("*.pyc", config))

    def test_default_config_includes_hidden_and_skips_vcs_and_node_modules(self) -> None:
        config = PathFilterConfig()

        self.assertFalse(should_skip(".env", config))
        self.assertTrue(should_skip(".git", config))
        self.assertTrue(should_skip("node_modules", config))


if __name__ == "__main__":
    unittest.main()
