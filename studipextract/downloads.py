"""
Download tree extraction.

The downloads page renders the folder tree as one small table per entry,
all nested inside the layout table. Depth is not marked up explicitly:
it is only visible as a number of spacer images in front of the entry.

Rules:
- a candidate row needs at least MIN_CONTENT_CELLS "printhead" cells,
  otherwise it is a separator/spacer row
- name, link and timestamp must all resolve, otherwise the row is dropped
- level = number of spacer images - LEVEL_OFFSET
"""

from __future__ import annotations

from typing import Optional

from studipextract.config import DEFAULT_CONFIG, ExtractorConfig
from studipextract.errors import SkipReason
from studipextract.model import DownloadEntry, ExtractionResult
from studipextract.selector import Node, SelectorEngine


def _first(engine: SelectorEngine, selector: str, context: Node) -> Optional[Node]:
    found = engine.select(selector, context)
    return found[0] if found else None


def parse_download_row(
    row: Node,
    engine: SelectorEngine,
    config: ExtractorConfig = DEFAULT_CONFIG,
) -> tuple[Optional[DownloadEntry], Optional[SkipReason]]:
    """
    Turn one candidate row into a DownloadEntry.

    Returns (entry, None) on success, (None, reason) if the row is skipped.
    """
    sel = config.downloads

    content = engine.select(sel.content, row)
    if len(content) < config.min_content_cells:
        return None, SkipReason.ROW_INELIGIBLE

    insets = engine.select(sel.insets, row)
    level = len(insets) - config.level_offset
    if level < 0:
        return None, SkipReason.ROW_INELIGIBLE

    info = _first(engine, sel.info, content[1])
    link = _first(engine, sel.link, content[2])
    time = _first(engine, sel.time, content[2])
    if info is None or link is None or time is None:
        return None, SkipReason.FIELD_UNRESOLVED

    entry = DownloadEntry(
        display_name=info.inner_text,
        url=link.href,
        last_modified=time.inner_text.strip(),
        level=level,
    )
    return entry, None


def extract_downloads(
    document: Node,
    engine: SelectorEngine,
    config: ExtractorConfig = DEFAULT_CONFIG,
) -> ExtractionResult:
    """
    Extract all download entries from a downloads page, in document order.

    Never raises for unexpected markup: a page without the expected layout
    simply yields an empty result (candidates == 0).
    """
    result = ExtractionResult()

    rows = engine.select(config.downloads.rows, document)
    result.candidates = len(rows)

    for row in rows:
        entry, reason = parse_download_row(row, engine, config)
        if entry is None:
            result.skip(reason)
            continue
        result.records.append(entry)

    return result
