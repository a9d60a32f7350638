"""Formatting helpers for tree listing rows."""

from __future__ import annotations

from ..selection import SelectionMark
from ..ui_theme import DEFAULT_THEME, UITheme
from .types import TreeRow

_MARK_TEXT = {
    SelectionMark.ALL: "[x]",
    SelectionMark.PARTIAL: "[-]",
    SelectionMark.NONE: "[ ]",
}


def _mark_color(mark: SelectionMark, theme: UITheme) -> str:
    if mark is SelectionMark.ALL:
        return theme.mark_selected
    if mark is SelectionMark.PARTIAL:
        return theme.mark_partial
    return theme.mark_unselected


def format_tree_row(row: TreeRow, theme: UITheme | None = None) -> str:
    """Render one tree row as ANSI-styled display text."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    mark = f"{_mark_color(row.mark, active_theme)}{_MARK_TEXT[row.mark]}{reset}"
    indent = "  " * row.depth
    if row.is_dir:
        marker = "▾ " if row.expanded else "▸ "
        name = f"{row.node.name}/"
        return f"{mark} {indent}{active_theme.tree_marker}{marker}{reset}{active_theme.tree_dir}{name}{reset}"

    # Align file names under the parent directory arrow column.
    return f"{mark} {indent}  {active_theme.tree_file}{row.node.name}{reset}"


__all__ = ["format_tree_row"]
