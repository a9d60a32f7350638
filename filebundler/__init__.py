"""Public package surface for filebundler.

Exports ``main`` for programmatic CLI invocation.
The selection engine lives in ``filebundler.session``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
