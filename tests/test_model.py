"""
Unit tests for the derived helpers on DownloadEntry and SeminarEntry.

None of these helpers change the serialized output; they only read the
URL parameters and text fields the portal already provides.
"""

import unittest
from dataclasses import FrozenInstanceError
from datetime import datetime

from studipextract.errors import SkipReason
from studipextract.model import DownloadEntry, ExtractionResult, SeminarEntry


class TestDownloadEntry(unittest.TestCase):
    def test_file_name_from_url_parameter(self) -> None:
        entry = DownloadEntry(
            "Kapitel 1",
            "https://x/sendfile.php?file_id=d1&file_name=Kapitel%201%20%28Einf%FChrung%29.pdf",
            "",
            0,
        )
        self.assertEqual(entry.file_name, "Kapitel_1_Einfuehrung.pdf")
        self.assertEqual(entry.file_id, "d1")
        self.assertFalse(entry.is_folder)

    def test_file_name_falls_back_to_display_name(self) -> None:
        entry = DownloadEntry("Große Übung: Teil 2", "https://x/folder.php?folder_id=f9", "", 0)
        self.assertEqual(entry.file_name, "Grosse_Uebung_Teil_2")
        self.assertTrue(entry.is_folder)
        self.assertEqual(entry.file_id, "f9")

    def test_display_name_is_not_percent_decoded(self) -> None:
        entry = DownloadEntry("Folie%20100%", "https://x/folder.php?folder_id=f9", "", 0)
        self.assertEqual(entry.file_name, "Folie%20100%")

    def test_is_changed(self) -> None:
        self.assertTrue(DownloadEntry("a", "https://x/s?file_id=1&newestOnly=true", "", 0).is_changed)
        self.assertFalse(DownloadEntry("a", "https://x/s?file_id=1", "", 0).is_changed)

    def test_last_modified_at(self) -> None:
        entry = DownloadEntry("a", "u", "26.08.2013 - 20:38", 0)
        self.assertEqual(entry.last_modified_at(), datetime(2013, 8, 26, 20, 38))

    def test_last_modified_at_invalid_returns_none(self) -> None:
        self.assertIsNone(DownloadEntry("a", "u", "gestern", 0).last_modified_at())

    def test_entries_are_immutable(self) -> None:
        entry = DownloadEntry("a", "u", "t", 0)
        with self.assertRaises(FrozenInstanceError):
            entry.level = 3  # type: ignore[misc]


class TestSeminarEntry(unittest.TestCase):
    def test_name_parts(self) -> None:
        s = SeminarEntry("https://x/seminar_main.php?auswahl=a1b2", "5793 Vorlesung: Programmierung II", "SoSe 2014, Informatik")
        self.assertEqual(s.course_number, "5793")
        self.assertEqual(s.course_type, "Vorlesung")
        self.assertEqual(s.title, "Programmierung II")
        self.assertEqual(s.period, "SoSe 2014")
        self.assertEqual(s.selection_id, "a1b2")

    def test_name_without_type(self) -> None:
        s = SeminarEntry("https://x/y", "Sprechstunde", "WiSe 2013/14")
        self.assertEqual(s.course_number, "Sprechstunde")
        self.assertEqual(s.course_type, "Sprechstunde")
        self.assertEqual(s.title, "Sprechstunde")
        self.assertEqual(s.period, "WiSe 2013/14")
        self.assertIsNone(s.selection_id)


class TestExtractionResult(unittest.TestCase):
    def test_skip_counts(self) -> None:
        result = ExtractionResult()
        result.skip(SkipReason.ROW_INELIGIBLE)
        result.skip(SkipReason.ROW_INELIGIBLE)
        result.skip(SkipReason.FIELD_UNRESOLVED)
        self.assertEqual(result.skip_count(SkipReason.ROW_INELIGIBLE), 2)
        self.assertEqual(result.skip_count(SkipReason.FIELD_UNRESOLVED), 1)
        self.assertEqual(result.skip_count(), 3)


if __name__ == "__main__":
    unittest.main()
