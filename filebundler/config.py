"""Persistent JSON config helpers.

Stores tree visibility rules, the export size limit, output format and
theme name. All access is defensive: malformed or missing config falls back
to defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from .file_tree_model import DEFAULT_EXCLUDE_PATTERNS, PathFilterConfig

APP_NAME = "filebundler"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME

DEFAULT_MAX_FILE_SIZE = 100 * 1024 * 1024
DEFAULT_OUTPUT_FORMAT = "xml"


@dataclass(frozen=True)
class BundlerConfig:
    """Settings for one browsing session."""

    include_hidden: bool = True
    exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDE_PATTERNS
    max_file_size: int | None = DEFAULT_MAX_FILE_SIZE
    output_format: str = DEFAULT_OUTPUT_FORMAT
    theme: str | None = None

    def filter_config(self) -> PathFilterConfig:
        return PathFilterConfig(
            include_hidden=self.include_hidden,
            exclude_patterns=self.exclude_patterns,
        )


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Filesystem errors are ignored so a read-only config directory never
    breaks a bundling run.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError:
        pass


def _load_exclude_patterns(value: object) -> tuple[str, ...]:
    """Keep only non-empty string patterns; anything else means defaults."""
    if not isinstance(value, list):
        return DEFAULT_EXCLUDE_PATTERNS
    return tuple(item for item in value if isinstance(item, str) and item)


def _load_max_file_size(value: object) -> int | None:
    """``null`` disables the limit; booleans and non-positive values fall back."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return DEFAULT_MAX_FILE_SIZE
    return value


def _load_theme(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_bundler_config() -> BundlerConfig:
    """Build a ``BundlerConfig`` from persisted values with strict validation."""
    data = load_config()
    include_hidden = data.get("include_hidden")
    output_format = data.get("output_format")
    return BundlerConfig(
        include_hidden=include_hidden if isinstance(include_hidden, bool) else True,
        exclude_patterns=_load_exclude_patterns(data.get("exclude_patterns")),
        max_file_size=_load_max_file_size(data.get("max_file_size", DEFAULT_MAX_FILE_SIZE)),
        output_format=output_format if output_format in ("xml", "markdown") else DEFAULT_OUTPUT_FORMAT,
        theme=_load_theme(data.get("theme")),
    )


def save_bundler_config(config: BundlerConfig) -> None:
    """Persist ``config``, keeping unrelated keys already in the file."""
    data = load_config()
    data["include_hidden"] = bool(config.include_hidden)
    data["exclude_patterns"] = list(config.exclude_patterns)
    data["max_file_size"] = config.max_file_size
    data["output_format"] = config.output_format
    if config.theme:
        data["theme"] = config.theme
    else:
        data.pop("theme", None)
    save_config(data)
