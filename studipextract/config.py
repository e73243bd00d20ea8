"""
Extractor configuration.

All selector paths below are tied to one specific Stud.IP page template
(the Uni Passau installation). They are not general parsing rules: if
the portal markup changes, override them here or via a JSON config file
instead of editing the extractors.

Selectors use soupsieve syntax. Paths that start at the context node use
":scope >" (the equivalent of a leading ">" in jQuery/Sizzle).
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from studipextract.errors import ConfigError


# ---------------------------------------------------------------------------
# Portal constants
# ---------------------------------------------------------------------------

# Spacer image used by the downloads page to indent folder contents
INSET_IMAGE_URL = "https://studip.uni-passau.de/studip/pictures/forumleer.gif"

# Every downloads row carries two spacer images regardless of depth.
# Empirically fixed for this single page layout, not derived.
LEVEL_OFFSET = 2

# Data rows have icon, name and link/time print-head cells
MIN_CONTENT_CELLS = 3

# Seminar rows need MORE than this many cells; header/footer rows are narrower
MIN_SEMINAR_CELLS = 4


class MissingSegmentPolicy(str, Enum):
    """
    What to do with a seminar row whose anchor lacks a name/description segment.
    """

    SKIP = "skip"
    RAISE = "raise"


# ---------------------------------------------------------------------------
# Selector sets
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DownloadSelectors:
    rows: str = (
        "#content > table > tbody > tr:nth-of-type(2) > td:nth-of-type(2)"
        " > table > tbody > tr > td > table"
    )
    content: str = ":scope > tbody > tr > td.printhead"
    insets: str = f':scope > tbody > tr > td.blank img[src="{INSET_IMAGE_URL}"]'
    info: str = "a"
    link: str = "span a"
    time: str = "span a ~ span"


@dataclass(frozen=True)
class SeminarSelectors:
    rows: str = "#content > table:first-of-type > tbody > tr"
    cells: str = ":scope > td"
    info: str = ":scope > td:nth-of-type(4) > a:first-of-type"
    segments: str = "font"


@dataclass(frozen=True)
class ExtractorConfig:
    downloads: DownloadSelectors = field(default_factory=DownloadSelectors)
    seminars: SeminarSelectors = field(default_factory=SeminarSelectors)
    level_offset: int = LEVEL_OFFSET
    min_content_cells: int = MIN_CONTENT_CELLS
    min_seminar_cells: int = MIN_SEMINAR_CELLS
    missing_segment: MissingSegmentPolicy = MissingSegmentPolicy.SKIP


DEFAULT_CONFIG = ExtractorConfig()


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

_INT_KEYS = ("level_offset", "min_content_cells", "min_seminar_cells")


def _override_selectors(base: Any, section: str, data: Any) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"'{section}' must be an object", context={"section": section})

    known = {f.name for f in fields(base)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(
            f"Unknown selector(s) in '{section}': {', '.join(unknown)}",
            context={"section": section, "keys": unknown},
        )

    for key, value in data.items():
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(
                f"Selector '{section}.{key}' must be a non-empty string",
                context={"section": section, "key": key},
            )
    return replace(base, **data)


def config_from_dict(data: Dict[str, Any], base: ExtractorConfig = DEFAULT_CONFIG) -> ExtractorConfig:
    """
    Build a config from a plain dict, overriding only the keys present.

    Example:
        {"level_offset": 3, "seminars": {"rows": "#content > table > tr"}}
    """
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")

    allowed = {"downloads", "seminars", "missing_segment", *_INT_KEYS}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"Unknown config key(s): {', '.join(unknown)}", context={"keys": unknown})

    changes: Dict[str, Any] = {}

    if "downloads" in data:
        changes["downloads"] = _override_selectors(base.downloads, "downloads", data["downloads"])
    if "seminars" in data:
        changes["seminars"] = _override_selectors(base.seminars, "seminars", data["seminars"])

    for key in _INT_KEYS:
        if key not in data:
            continue
        value = data[key]
        # bool is an int subclass, but "level_offset": true is certainly a mistake
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ConfigError(f"'{key}' must be a non-negative integer", context={"key": key, "value": value})
        changes[key] = value

    if "missing_segment" in data:
        try:
            changes["missing_segment"] = MissingSegmentPolicy(data["missing_segment"])
        except ValueError:
            choices = ", ".join(p.value for p in MissingSegmentPolicy)
            raise ConfigError(
                f"'missing_segment' must be one of: {choices}",
                context={"value": data["missing_segment"]},
            ) from None

    return replace(base, **changes)


def load_config(path: str | Path) -> ExtractorConfig:
    """
    Load an ExtractorConfig from a JSON file.

    Raises ConfigError for invalid JSON or invalid values, OSError if the
    file cannot be read.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}", context={"path": str(path)}) from exc
    return config_from_dict(data)
