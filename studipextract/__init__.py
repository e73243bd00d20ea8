"""
studipextract: pull download trees and seminar lists out of saved Stud.IP pages.
"""

from studipextract.downloads import extract_downloads
from studipextract.model import DownloadEntry, ExtractionResult, SeminarEntry
from studipextract.selector import SoupEngine, load_document
from studipextract.seminars import extract_seminars
from studipextract.serialize import serialize

__all__ = [
    "DownloadEntry",
    "ExtractionResult",
    "SeminarEntry",
    "SoupEngine",
    "extract_downloads",
    "extract_seminars",
    "load_document",
    "serialize",
]
