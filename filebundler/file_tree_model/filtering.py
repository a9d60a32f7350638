"""Name-based visibility rules applied while listing directories."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_EXCLUDE_PATTERNS: tuple[str, ...] = (".git", "node_modules")


@dataclass(frozen=True)
class PathFilterConfig:
    """Visibility settings consulted by ``should_skip``."""

    include_hidden: bool = True
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS


def should_skip(name: str, config: PathFilterConfig) -> bool:
    """Return whether an entry called ``name`` is hidden from the tree.

    Dotfiles are skipped unless ``include_hidden`` is set. Exclude patterns
    match whole names only; there is no glob expansion.
    """
    if not config.include_hidden and name.startswith("."):
        return True
    return name in config.exclude_patterns


__all__ = [
    "DEFAULT_EXCLUDE_PATTERNS",
    "PathFilterConfig",
    "should_skip",
]
