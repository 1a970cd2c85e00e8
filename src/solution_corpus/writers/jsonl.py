from __future__ import annotations
import json
from typing import BinaryIO
from .base import RowWriter, WriteError
from ..pipeline.context import Row

class JSONLRowWriter(RowWriter):
    """One JSON object per line; tags stay a JSON array. No buffering of its own."""
    name = "json"

    def __init__(self, stream: BinaryIO):
        super().__init__(stream)

    def _write(self, row: Row) -> None:
        try:
            line = json.dumps(row.as_dict(), ensure_ascii=False) + "\n"
            self.stream.write(line.encode("utf-8"))
        except (TypeError, ValueError, OSError) as e:
            raise WriteError(f"failed to write JSON record for id={row.id}: {e}") from e
