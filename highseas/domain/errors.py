"""
highseas.domain.errors - Exception hierarchy.

A record that matches nothing is not an error (callers get ``None``);
these cover data that cannot be used and upstream calls that failed.
"""

from __future__ import annotations

from typing import Optional


class HighSeasError(Exception):
    """Base class for every error raised by the data layer."""


class MalformedRecordError(HighSeasError):
    """A required field is absent or cannot be coerced."""

    def __init__(self, record_id: Optional[str], field: str, reason: str = "missing") -> None:
        self.record_id = record_id
        self.field = field
        self.reason = reason
        super().__init__(f"record {record_id or '<no id>'}: field {field!r} is {reason}")


class AirtableError(HighSeasError):
    """An Airtable request failed (HTTP error or transport failure)."""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.table = table
        self.status_code = status_code
        super().__init__(message)
