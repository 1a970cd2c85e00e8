"""Writer registry.

The set of output formats is closed: OutputFormat lists them and _WRITERS
maps each one to its factory. Adding a format means one enum member, one
writer class and one entry here; the walker never changes.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, BinaryIO, Callable, Dict, List, Union
from .base import RowWriter
from .parquet import ParquetRowWriter
from .csv_writer import CSVRowWriter
from .jsonl import JSONLRowWriter

class OutputFormat(str, Enum):
    PARQUET = "parquet"
    CSV = "csv"
    JSON = "json"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Union[str, "OutputFormat"]) -> "OutputFormat":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unsupported format: {value}. Available: {list_formats()}"
            ) from None

_WRITERS: Dict[OutputFormat, Callable[..., RowWriter]] = {
    OutputFormat.PARQUET: lambda stream, row_group_size=1000, **_: ParquetRowWriter(stream, row_group_size=row_group_size),
    OutputFormat.CSV: lambda stream, **_: CSVRowWriter(stream),
    OutputFormat.JSON: lambda stream, **_: JSONLRowWriter(stream),
}

def list_formats() -> List[str]:
    return [f.value for f in OutputFormat]

def make_writer(fmt: Union[str, OutputFormat], stream: BinaryIO, **options: Any) -> RowWriter:
    """Build the writer for `fmt` on top of an open binary stream.

    Options are format specific (e.g. row_group_size for parquet); options a
    writer does not take are dropped.

    Raises:
        ValueError: unknown format
        WriterInitError: the writer could not be set up
    """
    return _WRITERS[OutputFormat.parse(fmt)](stream, **options)
