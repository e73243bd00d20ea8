"""
Seminar list extraction.

Each data row of the "Meine Veranstaltungen" table links to the seminar
in its 4th cell. The anchor holds two <font> elements: the first is the
seminar name, the second its description (semester, institute).
"""

from __future__ import annotations

from typing import Optional

from studipextract.config import DEFAULT_CONFIG, ExtractorConfig, MissingSegmentPolicy
from studipextract.errors import RowExtractionError, SkipReason
from studipextract.model import ExtractionResult, SeminarEntry
from studipextract.selector import Node, SelectorEngine


def _unresolved(index: int, field: str, config: ExtractorConfig) -> SkipReason:
    if config.missing_segment is MissingSegmentPolicy.RAISE:
        raise RowExtractionError(
            f"Seminar row {index}: could not resolve {field}",
            context={"row": index, "field": field},
        )
    return SkipReason.FIELD_UNRESOLVED


def parse_seminar_row(
    row: Node,
    engine: SelectorEngine,
    config: ExtractorConfig = DEFAULT_CONFIG,
    index: int = 0,
) -> tuple[Optional[SeminarEntry], Optional[SkipReason]]:
    """
    Turn one candidate row into a SeminarEntry.

    Returns (entry, None) on success, (None, reason) if the row is skipped.
    Raises RowExtractionError for a wide row with a broken anchor when
    config.missing_segment is RAISE.
    """
    sel = config.seminars

    if len(engine.select(sel.cells, row)) <= config.min_seminar_cells:
        return None, SkipReason.ROW_INELIGIBLE

    found = engine.select(sel.info, row)
    if not found:
        return None, _unresolved(index, "link", config)
    info = found[0]

    segments = engine.select(sel.segments, info)
    if len(segments) < 1:
        return None, _unresolved(index, "name", config)
    if len(segments) < 2:
        return None, _unresolved(index, "description", config)

    entry = SeminarEntry(
        url=info.href,
        name=segments[0].inner_text,
        description=segments[1].inner_text,
    )
    return entry, None


def extract_seminars(
    document: Node,
    engine: SelectorEngine,
    config: ExtractorConfig = DEFAULT_CONFIG,
) -> ExtractionResult:
    """
    Extract all seminars from the seminar list page, in document order.
    """
    result = ExtractionResult()

    rows = engine.select(config.seminars.rows, document)
    result.candidates = len(rows)

    for index, row in enumerate(rows):
        entry, reason = parse_seminar_row(row, engine, config, index=index)
        if entry is None:
            result.skip(reason)
            continue
        result.records.append(entry)

    return result
