"""CSV row writer.

Header first, then one record per row. Tags are joined with TAGS_SEPARATOR,
records end with "\n". The text layer sits on the caller's binary stream
and is detached on close so the stream stays open.
"""

from __future__ import annotations
import contextlib
import csv
import io
import logging
from typing import BinaryIO
from .base import RowWriter, WriteError, WriterInitError
from ..pipeline.context import ROW_FIELDS, Row

log = logging.getLogger("solution_corpus.writers.csv")

TAGS_SEPARATOR = "; "

def join_tags(tags) -> str:
    return TAGS_SEPARATOR.join(tags)

def split_tags(value: str) -> list:
    """Inverse of join_tags for tags that do not contain the separator."""
    return value.split(TAGS_SEPARATOR) if value else []

class CSVRowWriter(RowWriter):
    name = "csv"

    def __init__(self, stream: BinaryIO):
        super().__init__(stream)
        try:
            self._text = io.TextIOWrapper(stream, encoding="utf-8", newline="")
        except (AttributeError, OSError, ValueError) as e:
            raise WriterInitError(f"stream is not a writable binary stream: {e}") from e
        self._cw = csv.writer(self._text, lineterminator="\n")
        try:
            self._cw.writerow(ROW_FIELDS)
            self._text.flush()
        except (csv.Error, OSError, ValueError) as e:
            log.error(f"Failed to write CSV header: {e}")
            with contextlib.suppress(OSError, ValueError):
                self._text.detach()
            raise WriterInitError(f"failed to write CSV header: {e}") from e

    def _write(self, row: Row) -> None:
        try:
            self._cw.writerow([
                str(row.id),
                row.title,
                row.difficulty,
                row.description,
                join_tags(row.tags),
                row.language,
                row.solution,
            ])
        except (csv.Error, OSError, ValueError) as e:
            raise WriteError(f"failed to write CSV record for id={row.id}: {e}") from e

    def _finalize(self) -> None:
        try:
            self._text.flush()
        finally:
            self._text.detach()
