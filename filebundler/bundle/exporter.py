"""Build bundle documents from a selection snapshot.

Per-file problems (a file deleted or made unreadable after it was selected)
only drop that file from the bundle. The export as a whole fails only when
the document itself cannot be built.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from .types import BundleDocument, FileRecord

logger = logging.getLogger(__name__)

LARGE_SELECTION_BYTES = 10 * 1024 * 1024


class ExportError(Exception):
    """The bundle document could not be produced at all."""


def relative_to_root(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` in POSIX form, or ``path`` itself when outside."""
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def _read_record(path: Path, root: Path, max_file_size: int | None) -> FileRecord | None:
    try:
        stat = path.stat()
    except OSError as exc:
        logger.debug("skipping %s: stat failed: %s", path, exc)
        return None
    if max_file_size is not None and stat.st_size > max_file_size:
        logger.debug("skipping %s: %d bytes exceeds limit %d", path, stat.st_size, max_file_size)
        return None
    try:
        content = path.read_bytes()
    except OSError as exc:
        logger.debug("skipping %s: read failed: %s", path, exc)
        return None
    return FileRecord(
        path=path,
        size=int(stat.st_size),
        modified=datetime.fromtimestamp(stat.st_mtime).astimezone(),
        relative_path=relative_to_root(path, root),
        content=content,
    )


class BundleExporter:
    """Reads the files named by a snapshot into a ``BundleDocument``."""

    def __init__(self, max_file_size: int | None = None) -> None:
        self.max_file_size = max_file_size

    def export(
        self,
        root_path: Path | str,
        snapshot: Iterable[Path | str],
        *,
        sort_paths: bool = False,
    ) -> BundleDocument:
        """Export ``snapshot`` in order (or path order with ``sort_paths``).

        Unreadable entries are skipped. Raises ``ExportError`` only when the
        document cannot be allocated.
        """
        root = Path(root_path)
        paths = [Path(p) for p in snapshot]
        if sort_paths:
            paths.sort()
        try:
            records: list[FileRecord] = []
            for path in paths:
                record = _read_record(path, root, self.max_file_size)
                if record is not None:
                    records.append(record)
            document = BundleDocument(
                root_path=root,
                created=datetime.now().astimezone(),
                files=tuple(records),
            )
        except MemoryError as exc:
            raise ExportError(f"out of memory while bundling {len(paths)} file(s)") from exc
        skipped = len(paths) - len(document.files)
        if skipped:
            logger.info("bundled %d file(s), skipped %d", len(document.files), skipped)
        return document


def selection_summary(paths: Iterable[Path | str]) -> tuple[int, int]:
    """Return ``(file_count, total_bytes)`` for ``paths``; unstatable files add no bytes."""
    count = 0
    total = 0
    for path in paths:
        count += 1
        try:
            total += os.stat(path).st_size
        except OSError:
            continue
    return count, total


def format_size(size: int) -> str:
    """Format a byte count as ``B``, ``KB`` or ``MB``."""
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


__all__ = [
    "LARGE_SELECTION_BYTES",
    "ExportError",
    "BundleExporter",
    "relative_to_root",
    "selection_summary",
    "format_size",
]
