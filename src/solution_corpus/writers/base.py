"""Row writer interface.

A writer wraps a binary stream owned by the caller. It never closes that
stream; `close()` only finalizes the format (flush buffers, write footers).

Contract:
- write_row(row) raises WriteError if that row could not be written; a
  buffering writer may lose earlier accepted rows with it, the error carries
  the total in `lost_rows` and they are taken back out of `rows_written`
- close() is idempotent and best-effort: failures are logged, not raised
- constructors raise WriterInitError when the format cannot be set up
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import BinaryIO, Optional
from ..pipeline.context import Row

log = logging.getLogger("solution_corpus.writers")

class WriteError(Exception):
    """Rows could not be serialized or written.

    `lost_rows` counts every row the failure dropped, the current one included.
    """

    def __init__(self, message: str, lost_rows: int = 1):
        super().__init__(message)
        self.lost_rows = lost_rows

class WriterInitError(Exception):
    """The writer could not be constructed (header, schema, ...)."""

class RowWriter(ABC):
    name: str

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.rows_written = 0
        self.rows_lost = 0     # accepted by write_row, dropped by a later flush
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def write_row(self, row: Row) -> None:
        if self._closed:
            raise WriteError(f"{self.name} writer is closed")
        try:
            self._write(row)
        except WriteError as e:
            self._discard(e.lost_rows - 1)
            raise
        self.rows_written += 1

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._finalize()
        except WriteError as e:
            self._discard(e.lost_rows)
            log.error(f"Error during {self.name} writer close: {e}")
        except Exception as e:
            log.error(f"Error during {self.name} writer close: {e}")

    def _discard(self, n: int) -> None:
        self.rows_written -= n
        self.rows_lost += n

    @abstractmethod
    def _write(self, row: Row) -> None:
        """Serialize one row. Must raise WriteError on failure."""
        raise NotImplementedError

    def _finalize(self) -> None:
        """Flush/finish the format. Exceptions are logged by close()."""

    def __enter__(self) -> "RowWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        self.close()
        return None
