"""Parquet row writer.

Rows are checked against the schema as they arrive (so a bad row fails on
its own write_row call) and buffered into record batches. Every
`row_group_size` rows the buffer becomes one row group. close() writes the
remaining rows and the footer; without it the file is unreadable.

A failed row group drops every row in it. The WriteError raised for it
carries that count in `lost_rows`.
"""

from __future__ import annotations
import logging
from typing import BinaryIO, List
import pyarrow as pa
import pyarrow.parquet as pq
from .base import RowWriter, WriteError, WriterInitError
from ..pipeline.context import Row

log = logging.getLogger("solution_corpus.writers.parquet")

SCHEMA_VERSION = "v1"

def rows_schema() -> pa.Schema:
    return pa.schema([
        pa.field("id", pa.int64(), nullable=False),
        pa.field("title", pa.string(), nullable=False),
        pa.field("difficulty", pa.string(), nullable=False),
        pa.field("description", pa.string(), nullable=False),
        pa.field("tags", pa.list_(pa.string()), nullable=False),
        pa.field("language", pa.string(), nullable=False),
        pa.field("solution", pa.string(), nullable=False),
    ], metadata={"schema_version": SCHEMA_VERSION})

class ParquetRowWriter(RowWriter):
    name = "parquet"

    def __init__(self, stream: BinaryIO, *, row_group_size: int = 1000, compression: str = "zstd"):
        super().__init__(stream)
        if row_group_size <= 0:
            raise WriterInitError(f"row_group_size must be positive, got {row_group_size}")
        self.row_group_size = row_group_size
        self.schema = rows_schema()
        self._pending: List[pa.RecordBatch] = []
        try:
            self._pw = pq.ParquetWriter(stream, self.schema, compression=compression)
        except Exception as e:
            log.error(f"Failed to create parquet writer: {e}")
            raise WriterInitError(f"failed to create parquet writer: {e}") from e

    def _write(self, row: Row) -> None:
        try:
            batch = pa.RecordBatch.from_pylist([row.as_dict()], schema=self.schema)
        except (pa.ArrowException, TypeError, ValueError, OverflowError) as e:
            raise WriteError(f"row id={row.id} language={row.language} does not match schema: {e}") from e
        self._pending.append(batch)
        if len(self._pending) >= self.row_group_size:
            self._flush()

    def _flush(self) -> None:
        if not self._pending:
            return
        batches, self._pending = self._pending, []
        table = pa.Table.from_batches(batches, schema=self.schema).combine_chunks()
        try:
            self._pw.write_table(table)
        except (pa.ArrowException, OSError) as e:
            raise WriteError(
                f"failed to write row group, lost {table.num_rows} rows: {e}",
                lost_rows=table.num_rows,
            ) from e

    def _finalize(self) -> None:
        try:
            self._flush()
        except WriteError:
            try:
                self._pw.close()
            except Exception as e:
                log.error(f"Failed to close parquet writer after a lost row group: {e}")
            raise
        self._pw.close()
