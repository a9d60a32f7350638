"""Module entrypoint for ``python -m filebundler``.

All argument parsing and session setup happen in ``filebundler.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
