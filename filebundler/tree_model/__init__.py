"""Materialized tree listing: visible rows, selection marks and row formatting."""

from __future__ import annotations

from .build import build_tree_rows
from .rendering import format_tree_row
from .types import TreeRow

__all__ = [
    "TreeRow",
    "build_tree_rows",
    "format_tree_row",
]
