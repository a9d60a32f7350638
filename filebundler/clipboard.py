"""System clipboard sink for finished bundles."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys


def _clipboard_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if os.name == "nt":
        return [["clip"]]
    return [
        ["wl-copy"],
        ["xclip", "-selection", "clipboard"],
        ["xsel", "--clipboard", "--input"],
    ]


def copy_bytes_to_clipboard(data: bytes) -> bool:
    """Best-effort clipboard copy across macOS, Windows, and common Linux tools."""
    if not data:
        return False

    for command in _clipboard_commands():
        if shutil.which(command[0]) is None:
            continue
        try:
            proc = subprocess.run(command, input=data, check=False)
        except OSError:
            continue
        if proc.returncode == 0:
            return True
    return False


__all__ = ["copy_bytes_to_clipboard"]
