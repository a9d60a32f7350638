"""Command-line front door for filebundler.

Loads a directory tree, applies toggles given on the command line, and
either prints the tree with selection marks or writes the bundle to
stdout, a file, or the clipboard.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from .bundle import LARGE_SELECTION_BYTES, OUTPUT_FORMATS, ExportError, format_size, selection_summary, serialize_bundle
from .clipboard import copy_bytes_to_clipboard
from .config import BundlerConfig, load_bundler_config, save_bundler_config
from .file_tree_model import FilesystemError
from .session import BrowsingSession
from .tree_model import format_tree_row
from .ui_theme import available_theme_names, resolve_theme


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Select files from a directory tree and bundle them into one document."
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to current directory.")
    parser.add_argument(
        "-t",
        "--toggle",
        action="append",
        default=[],
        metavar="PATH",
        help="Toggle a file, or every file below a directory. Repeatable; applied in order.",
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default=None, help="Bundle format.")
    sink = parser.add_mutually_exclusive_group()
    sink.add_argument("-o", "--output", metavar="FILE", help="Write the bundle to FILE instead of stdout.")
    sink.add_argument("--copy", action="store_true", help="Copy the bundle to the system clipboard.")
    sink.add_argument("--list", action="store_true", help="Print the loaded tree with selection marks and exit.")
    parser.add_argument(
        "--hidden",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show dotfiles in the tree.",
    )
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Hide entries with exactly this name (adds to configured excludes).",
    )
    parser.add_argument("--max-file-size", type=_positive_int, default=None, help="Skip files larger than N bytes.")
    parser.add_argument("--sort", action="store_true", help="Export files in path order instead of selection order.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output for --list.")
    parser.add_argument("--save-config", action="store_true", help="Persist the effective settings as defaults.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped files and directories.")
    return parser


def _effective_config(args: argparse.Namespace, base: BundlerConfig) -> BundlerConfig:
    changes: dict[str, object] = {}
    if args.hidden is not None:
        changes["include_hidden"] = args.hidden
    if args.exclude:
        extra = tuple(name for name in args.exclude if name not in base.exclude_patterns)
        changes["exclude_patterns"] = base.exclude_patterns + extra
    if args.max_file_size is not None:
        changes["max_file_size"] = args.max_file_size
    if args.format is not None:
        changes["output_format"] = args.format
    if args.theme is not None:
        changes["theme"] = args.theme
    return dataclasses.replace(base, **changes)


def _apply_toggles(session: BrowsingSession, targets: list[str]) -> None:
    for raw in targets:
        node = session.find_node(raw)
        if node is None:
            raise SystemExit(f"Not in tree: {raw}")
        result = session.toggle(node)
        for failed in result.failed:
            print(f"Could not read directory: {failed}", file=sys.stderr)


def _print_tree(session: BrowsingSession, config: BundlerConfig, no_color: bool) -> None:
    theme = resolve_theme(config.theme, no_color=no_color)
    for row in session.rows(all_loaded=True):
        sys.stdout.write(format_tree_row(row, theme) + "\n")


def _write_bundle(data: bytes, args: argparse.Namespace, file_count: int) -> None:
    if args.copy:
        if not copy_bytes_to_clipboard(data):
            raise SystemExit("Could not copy bundle to clipboard.")
        print(f"Bundled {file_count} file(s) to clipboard.", file=sys.stderr)
        return
    if args.output:
        try:
            Path(args.output).write_bytes(data)
        except OSError as exc:
            raise SystemExit(f"Could not write bundle: {exc}") from exc
        print(f"Bundled {file_count} file(s) to {args.output}.", file=sys.stderr)
        return
    sys.stdout.flush()
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments, build the selection, and emit the bundle.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used.
    """
    args = _build_parser().parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = _effective_config(args, load_bundler_config())
    if args.save_config:
        save_bundler_config(config)

    if default_path is None:
        default_path = Path.cwd()
    path = Path(args.path or default_path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    session = BrowsingSession(config)
    try:
        session.load_tree(path)
        _apply_toggles(session, args.toggle)
    except FilesystemError as exc:
        raise SystemExit(f"Error loading directory: {exc}") from exc

    if args.list:
        _print_tree(session, config, args.no_color)
        return

    selected = session.selected_paths()
    if not selected:
        raise SystemExit("No files selected. Select files before bundling.")

    count, total = selection_summary(selected)
    if total > LARGE_SELECTION_BYTES:
        print(f"Warning: large selection, {count} file(s), {format_size(total)}.", file=sys.stderr)

    try:
        document = session.export(sort_paths=args.sort)
        data = serialize_bundle(document, config.output_format)
    except (ExportError, MemoryError) as exc:
        raise SystemExit(f"Error generating bundle: {exc}") from exc
    _write_bundle(data, args, len(document.files))


if __name__ == "__main__":
    main()
