"""XML-flavored bundle serialization.

Metadata text is escaped; file content is written byte-for-byte so the
bundle carries exactly what is on disk.
"""

from __future__ import annotations

from datetime import datetime
from xml.sax.saxutils import escape

from .types import BundleDocument, FileRecord


def _timestamp(value: datetime) -> str:
    return value.isoformat(timespec="seconds")


def _text(value: object) -> bytes:
    return escape(str(value)).encode("utf-8")


def _file_entry(record: FileRecord) -> list[bytes]:
    return [
        b"        <File>\n",
        b"            <Path>" + _text(record.path) + b"</Path>\n",
        b"            <Size>" + _text(record.size) + b"</Size>\n",
        b"            <Modified>" + _text(_timestamp(record.modified)) + b"</Modified>\n",
        b"            <Relative_Path>" + _text(record.relative_path) + b"</Relative_Path>\n",
        b"            <Content>\n",
        record.content,
        b"\n            </Content>\n",
        b"        </File>\n",
    ]


def serialize_xml(document: BundleDocument) -> bytes:
    parts: list[bytes] = [
        b"<FileBundle>\n",
        b"    <metadata>\n",
        b"        <root_directory>" + _text(document.root_path) + b"</root_directory>\n",
        b"        <created>" + _text(_timestamp(document.created)) + b"</created>\n",
        b"    </metadata>\n",
        b"    <Files>\n",
    ]
    for record in document.files:
        parts.extend(_file_entry(record))
    parts.append(b"    </Files>\n")
    parts.append(b"</FileBundle>")
    return b"".join(parts)


__all__ = ["serialize_xml"]
