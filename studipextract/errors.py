"""
Error and skip taxonomy for extraction passes.

Rows that do not fit the expected markup are normally dropped and
counted (see SkipReason). Exceptions are only raised for problems the
caller asked to hear about: invalid configuration, or a seminar row with
a missing text segment when the "raise" policy is selected.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class SkipReason(str, Enum):
    # candidate row failed a shape/width guard (spacers, headers, footers)
    ROW_INELIGIBLE = "row_ineligible"
    # a required sub-selection inside an eligible row found nothing
    FIELD_UNRESOLVED = "field_unresolved"


class ExtractionError(Exception):
    """Base class for extraction related issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class RowExtractionError(ExtractionError):
    """Raised when an eligible row lacks a required field and skipping was not requested."""


class ConfigError(ExtractionError, ValueError):
    """Raised when an extractor configuration is malformed."""
