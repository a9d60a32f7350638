"""Bundle document datatypes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class FileRecord:
    """One exported file: metadata plus raw content bytes."""

    path: Path
    size: int
    modified: datetime
    relative_path: str
    content: bytes


@dataclass(frozen=True)
class BundleDocument:
    """Point-in-time export of a selection rooted at ``root_path``."""

    root_path: Path
    created: datetime
    files: tuple[FileRecord, ...] = ()


__all__ = [
    "FileRecord",
    "BundleDocument",
]
