"""Markdown bundle serialization with fenced content blocks."""

from __future__ import annotations

import re
from functools import lru_cache

from pygments.lexers import get_lexer_for_filename
from pygments.util import ClassNotFound

from .types import BundleDocument, FileRecord

_BACKTICK_RUN_RE = re.compile(rb"`+")


@lru_cache(maxsize=512)
def fence_language(filename: str) -> str:
    """Return the Pygments alias for ``filename``, or ``""`` when unknown."""
    try:
        lexer = get_lexer_for_filename(filename)
    except ClassNotFound:
        return ""
    return lexer.aliases[0] if lexer.aliases else ""


def _fence_for(content: bytes) -> bytes:
    """Return a backtick fence longer than any backtick run inside ``content``."""
    longest = max((len(m.group(0)) for m in _BACKTICK_RUN_RE.finditer(content)), default=0)
    return b"`" * max(3, longest + 1)


def _file_section(record: FileRecord) -> list[bytes]:
    fence = _fence_for(record.content)
    lang = fence_language(record.path.name).encode("utf-8")
    header = (
        f"## {record.relative_path}\n\n"
        f"- path: `{record.path}`\n"
        f"- size: {record.size}\n"
        f"- modified: {record.modified.isoformat(timespec='seconds')}\n\n"
    )
    return [header.encode("utf-8"), fence + lang + b"\n", record.content, b"\n" + fence + b"\n\n"]


def serialize_markdown(document: BundleDocument) -> bytes:
    header = (
        f"# File bundle: {document.root_path}\n\n"
        f"Generated {document.created.isoformat(timespec='seconds')}, "
        f"{len(document.files)} file(s).\n\n"
    )
    parts: list[bytes] = [header.encode("utf-8")]
    for record in document.files:
        parts.extend(_file_section(record))
    return b"".join(parts)


__all__ = [
    "fence_language",
    "serialize_markdown",
]
