"""Authoritative set of file paths marked for export."""

from __future__ import annotations

import os
from pathlib import Path

from .rwlock import ReadWriteLock

PathLike = str | os.PathLike[str]


def _selection_key(path: PathLike) -> Path | None:
    # Path("") collapses to ".", so both spellings count as empty.
    raw = os.fspath(path)
    if raw in ("", "."):
        return None
    return Path(raw)


class SelectionStore:
    """Thread-safe, insertion-ordered set of selected file paths.

    Only file paths belong here; directory selection is derived from the
    files below a directory. Reads share the lock, each mutation holds it
    exclusively for a single dict operation.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        # dict keeps insertion order, which is the snapshot order.
        self._paths: dict[Path, None] = {}

    def add(self, path: PathLike) -> None:
        key = _selection_key(path)
        if key is None:
            return
        with self._lock.write():
            self._paths[key] = None

    def remove(self, path: PathLike) -> None:
        """Drop ``path`` if present; empty paths are ignored."""
        key = _selection_key(path)
        if key is None:
            return
        with self._lock.write():
            self._paths.pop(key, None)

    def toggle(self, path: PathLike) -> bool:
        """Flip membership of ``path`` and return whether it is now selected.

        Empty paths are never stored and report ``False``.
        """
        key = _selection_key(path)
        if key is None:
            return False
        with self._lock.write():
            if key in self._paths:
                del self._paths[key]
                return False
            self._paths[key] = None
            return True

    def clear(self) -> None:
        with self._lock.write():
            self._paths.clear()

    def is_selected(self, path: PathLike) -> bool:
        key = Path(path)
        with self._lock.read():
            return key in self._paths

    def snapshot(self) -> tuple[Path, ...]:
        """Return a point-in-time copy of the selection in insertion order."""
        with self._lock.read():
            return tuple(self._paths)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, os.PathLike)):
            return False
        return self.is_selected(path)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._paths)


__all__ = ["SelectionStore"]
