"""
Parsing front-end (saved HTML -> records / JSON).

- Reads a downloads or seminars page that was saved to disk
- Builds the document with BeautifulSoup
- Runs the matching extractor
- Optionally writes the JSON array to a file

Fetching the pages (and logging in to the portal) happens elsewhere.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

from studipextract.config import DEFAULT_CONFIG, ExtractorConfig
from studipextract.downloads import extract_downloads
from studipextract.model import ExtractionResult
from studipextract.selector import DEFAULT_PARSER, Node, SelectorEngine, SoupEngine, load_document
from studipextract.seminars import extract_seminars
from studipextract.serialize import serialize


# ---------------------------------------------------------------------------
# Page kinds
# ---------------------------------------------------------------------------

Extractor = Callable[[Node, SelectorEngine, ExtractorConfig], ExtractionResult]

EXTRACTORS: Dict[str, Extractor] = {
    "downloads": extract_downloads,
    "seminars": extract_seminars,
}


def _extractor_for(kind: str) -> Extractor:
    try:
        return EXTRACTORS[kind]
    except KeyError:
        raise ValueError(f"Unknown page kind {kind!r} (expected one of: {', '.join(EXTRACTORS)})") from None


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_html(
    html: str,
    kind: str,
    base_url: Optional[str] = None,
    config: ExtractorConfig = DEFAULT_CONFIG,
    parser: str = DEFAULT_PARSER,
) -> ExtractionResult:
    """
    Parse one page given as an HTML string.
    """
    extractor = _extractor_for(kind)
    document = load_document(html, base_url=base_url, parser=parser)
    return extractor(document, SoupEngine(), config)


def parse_file(
    path: str | Path,
    kind: str,
    base_url: Optional[str] = None,
    config: ExtractorConfig = DEFAULT_CONFIG,
    parser: str = DEFAULT_PARSER,
) -> ExtractionResult:
    """
    Parse one saved HTML page from disk.

    Raises OSError if the file cannot be read.
    """
    html = Path(path).read_text(encoding="utf-8")
    return parse_html(html, kind, base_url=base_url, config=config, parser=parser)


def write_json(result: ExtractionResult, out_path: str | Path) -> int:
    """
    Write the records of result as a JSON array. Returns number of records written.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(serialize(result.records, indent=2), encoding="utf-8")
    return len(result.records)
