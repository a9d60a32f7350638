"""Bundle export: snapshot reading and document serialization."""

from __future__ import annotations

from .exporter import (
    LARGE_SELECTION_BYTES,
    BundleExporter,
    ExportError,
    format_size,
    relative_to_root,
    selection_summary,
)
from .markdown_format import fence_language, serialize_markdown
from .types import BundleDocument, FileRecord
from .xml_format import serialize_xml

OUTPUT_FORMATS = ("xml", "markdown")


def serialize_bundle(document: BundleDocument, fmt: str = "xml") -> bytes:
    """Serialize ``document`` in one of ``OUTPUT_FORMATS``."""
    if fmt == "xml":
        return serialize_xml(document)
    if fmt == "markdown":
        return serialize_markdown(document)
    raise ValueError(f"unknown bundle format: {fmt!r}")


__all__ = [
    "OUTPUT_FORMATS",
    "LARGE_SELECTION_BYTES",
    "BundleDocument",
    "FileRecord",
    "BundleExporter",
    "ExportError",
    "format_size",
    "relative_to_root",
    "selection_summary",
    "fence_language",
    "serialize_bundle",
    "serialize_markdown",
    "serialize_xml",
]
