"""
Unit tests for the download tree extractor.

Extraction contract:
- rows with fewer than 3 printhead cells never produce an entry
- rows with unresolved name/link/time are skipped, not raised
- level = number of spacer images - 2
- output keeps document order
"""

import unittest
from dataclasses import replace
from pathlib import Path

from studipextract.config import DEFAULT_CONFIG, INSET_IMAGE_URL
from studipextract.downloads import extract_downloads
from studipextract.errors import SkipReason
from studipextract.selector import SoupEngine, load_document

FIXTURES = Path(__file__).resolve().parent / "fixtures"
BASE_URL = "https://studip.uni-passau.de/studip/"


def _row(name: str = "Datei", insets: int = 2, printheads: bool = True, time: str = "01.01.2014 - 10:00") -> str:
    spacer = "".join(f'<td class="blank"><img src="{INSET_IMAGE_URL}"></td>' for _ in range(insets))
    if not printheads:
        return f"<tr><td><table><tbody><tr>{spacer}<td class=\"printhead\"></td></tr></tbody></table></td></tr>"
    time_span = f"<span>{time}</span>" if time else ""
    return (
        "<tr><td><table><tbody><tr>"
        f"{spacer}"
        '<td class="printhead"><img src="icon.png"></td>'
        f'<td class="printhead"><a href="open.php">{name}</a></td>'
        f'<td class="printhead"><span><a href="sendfile.php?file_id={name}">x</a>{time_span}</span></td>'
        "</tr></tbody></table></td></tr>"
    )


def _page(*rows: str) -> str:
    return (
        '<div id="content"><table><tbody>'
        "<tr><td>head</td></tr>"
        f"<tr><td></td><td><table><tbody>{''.join(rows)}</tbody></table></td></tr>"
        "</tbody></table></div>"
    )


def _extract(html: str, config=DEFAULT_CONFIG, base_url=None):
    return extract_downloads(load_document(html, base_url=base_url), SoupEngine(), config)


class TestDownloadFixture(unittest.TestCase):
    def setUp(self) -> None:
        html = (FIXTURES / "downloads.html").read_text(encoding="utf-8")
        self.result = _extract(html, base_url=BASE_URL)

    def test_entries_in_document_order(self) -> None:
        names = [e.display_name for e in self.result.records]
        self.assertEqual(names, ["Vorlesungsfolien", "Kapitel 1 (Einführung)", "Übungsblatt 1"])

    def test_fields(self) -> None:
        folder = self.result.records[0]
        self.assertEqual(folder.url, BASE_URL + "folder.php?cid=abc&folder_id=f1")
        self.assertEqual(folder.last_modified, "26.08.2013 - 20:38")
        self.assertEqual(folder.level, 0)

    def test_levels(self) -> None:
        # the forumstrich.gif spacer must not be counted
        self.assertEqual([e.level for e in self.result.records], [0, 1, 0])

    def test_skip_counts(self) -> None:
        self.assertEqual(self.result.candidates, 5)
        self.assertEqual(self.result.skip_count(SkipReason.ROW_INELIGIBLE), 1)
        self.assertEqual(self.result.skip_count(SkipReason.FIELD_UNRESOLVED), 1)
        self.assertEqual(self.result.skip_count(), self.result.candidates - len(self.result.records))


class TestDownloadRows(unittest.TestCase):
    def test_baseline_insets_give_level_zero(self) -> None:
        result = _extract(_page(_row(insets=2)))
        self.assertEqual(result.records[0].level, 0)

    def test_one_extra_inset_gives_level_one(self) -> None:
        result = _extract(_page(_row(insets=3)))
        self.assertEqual(result.records[0].level, 1)

    def test_row_without_printheads_is_ineligible(self) -> None:
        result = _extract(_page(_row(printheads=False), _row("A")))
        self.assertEqual([e.display_name for e in result.records], ["A"])
        self.assertEqual(result.skip_count(SkipReason.ROW_INELIGIBLE), 1)

    def test_missing_time_skips_row(self) -> None:
        result = _extract(_page(_row("A", time=""), _row("B")))
        self.assertEqual([e.display_name for e in result.records], ["B"])
        self.assertEqual(result.skip_count(SkipReason.FIELD_UNRESOLVED), 1)

    def test_too_few_insets_is_ineligible(self) -> None:
        # would give level -1
        result = _extract(_page(_row(insets=1)))
        self.assertEqual(result.records, [])
        self.assertEqual(result.skip_count(SkipReason.ROW_INELIGIBLE), 1)

    def test_level_offset_is_configurable(self) -> None:
        config = replace(DEFAULT_CONFIG, level_offset=1)
        result = _extract(_page(_row(insets=3)), config=config)
        self.assertEqual(result.records[0].level, 2)

    def test_relative_href_without_base_url(self) -> None:
        result = _extract(_page(_row("A")))
        self.assertEqual(result.records[0].url, "sendfile.php?file_id=A")

    def test_unexpected_layout_yields_empty_result(self) -> None:
        result = _extract("<html><body><p>Bitte melden Sie sich an</p></body></html>")
        self.assertEqual(result.records, [])
        self.assertEqual(result.candidates, 0)
        self.assertEqual(result.skip_count(), 0)


if __name__ == "__main__":
    unittest.main()
