"""
Central data model definitions used across the project.

This module defines the records produced by one extraction pass:
- DownloadEntry: one row of the Stud.IP "Dateien" (downloads) tree
- SeminarEntry: one row of the "Meine Veranstaltungen" (seminars) list
- ExtractionResult: the ordered records plus counters for skipped rows

Records are immutable. The JSON field names (camelCase) are produced by
to_dict() so that the Python attribute names can stay snake_case.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Union
from urllib.parse import parse_qsl, urlsplit

from studipextract.errors import SkipReason


# ---------------------------------------------------------------------------
# Portal constants
# ---------------------------------------------------------------------------

PARAM_NEWEST_ONLY = "newestOnly"
PARAM_FILE_ID = "file_id"
PARAM_FOLDER_ID = "folder_id"
PARAM_FILE_NAME = "file_name"
PARAM_SEMINAR_SELECTION = "auswahl"

# The portal encodes file names as ISO-8859-1 in its query strings
URL_ENCODING = "iso-8859-1"

# e.g. "26.08.2013 - 20:38"
LAST_MODIFIED_FORMAT = "%d.%m.%Y - %H:%M"

FILE_NAME_REPLACEMENTS = (
    (" ", "_"),
    ("ä", "ae"),
    ("ö", "oe"),
    ("ü", "ue"),
    ("Ä", "Ae"),
    ("Ö", "Oe"),
    ("Ü", "Ue"),
    ("ß", "ss"),
    (":", ""),
    ("(", ""),
    (")", ""),
    ("/", ""),
    ("\\", ""),
)


def _url_params(url: str) -> Dict[str, str]:
    # last occurrence wins
    return dict(parse_qsl(urlsplit(url).query, keep_blank_values=True, encoding=URL_ENCODING))


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DownloadEntry:
    """
    Represents one file or folder row of the downloads page.

    level is the nesting depth inside the folder tree (0 = top level).
    """

    display_name: str
    url: str
    last_modified: str
    level: int

    def to_dict(self) -> Dict[str, Union[str, int]]:
        return {
            "displayName": self.display_name,
            "url": self.url,
            "lastModified": self.last_modified,
            "level": self.level,
        }

    @property
    def url_params(self) -> Dict[str, str]:
        return _url_params(self.url)

    @property
    def is_folder(self) -> bool:
        return PARAM_FOLDER_ID in self.url_params

    @property
    def is_changed(self) -> bool:
        return self.url_params.get(PARAM_NEWEST_ONLY, "").lower() == "true"

    @property
    def file_id(self) -> Optional[str]:
        params = self.url_params
        return params.get(PARAM_FILE_ID) or params.get(PARAM_FOLDER_ID)

    @property
    def file_name(self) -> str:
        """
        File system safe name of this entry.

        Uses the file_name URL parameter if present, otherwise the display name.
        Only the URL parameter is percent-decoded (as ISO-8859-1). The display
        name is rendered text and is taken as-is, so a literal "%20" in a
        title stays "%20".
        """
        name = self.url_params.get(PARAM_FILE_NAME) or self.display_name
        for old, new in FILE_NAME_REPLACEMENTS:
            name = name.replace(old, new)
        return name

    def last_modified_at(self) -> Optional[datetime]:
        """
        Parse last_modified into a datetime, or None if it has an unexpected format.
        """
        try:
            return datetime.strptime(self.last_modified, LAST_MODIFIED_FORMAT)
        except ValueError:
            return None


@dataclass(frozen=True)
class SeminarEntry:
    """
    Represents one course the user is subscribed to.

    name usually looks like "5793 Vorlesung: Programmierung II" and
    description like "SoSe 2014, Informatik".
    """

    url: str
    name: str
    description: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "url": self.url,
            "name": self.name,
            "description": self.description,
        }

    @property
    def selection_id(self) -> Optional[str]:
        return _url_params(self.url).get(PARAM_SEMINAR_SELECTION)

    @property
    def course_number(self) -> str:
        return self.name.split(" ", 1)[0]

    @property
    def course_type(self) -> str:
        start = self.name.find(" ") + 1
        end = self.name.find(": ", start)
        if start == 0 or end < 0:
            return self.course_number
        return self.name[start:end]

    @property
    def title(self) -> str:
        _, sep, rest = self.name.partition(": ")
        return rest if sep else self.name

    @property
    def period(self) -> str:
        return self.description.split(",", 1)[0]


Record = Union[DownloadEntry, SeminarEntry]


# ---------------------------------------------------------------------------
# Pass result
# ---------------------------------------------------------------------------


@dataclass
class ExtractionResult:
    """
    Outcome of one best-effort extraction pass.

    records keeps document order. Rows that did not yield a record are
    counted in skipped, keyed by the reason they were dropped.
    """

    records: List[Record] = field(default_factory=list)
    candidates: int = 0
    skipped: Counter = field(default_factory=Counter)

    def skip(self, reason: SkipReason) -> None:
        self.skipped[reason] += 1

    def skip_count(self, reason: Optional[SkipReason] = None) -> int:
        if reason is None:
            return sum(self.skipped.values())
        return self.skipped[reason]
