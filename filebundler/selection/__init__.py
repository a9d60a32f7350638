"""Selection state: the path set and directory-level propagation rules."""

from __future__ import annotations

from .propagation import (
    SelectionMark,
    SelectionPropagator,
    SubtreeToggle,
    any_selected_below,
    apply_to_subtree,
    subtree_selection_mark,
)
from .rwlock import ReadWriteLock
from .store import SelectionStore

__all__ = [
    "ReadWriteLock",
    "SelectionStore",
    "SelectionMark",
    "SelectionPropagator",
    "SubtreeToggle",
    "any_selected_below",
    "apply_to_subtree",
    "subtree_selection_mark",
]
