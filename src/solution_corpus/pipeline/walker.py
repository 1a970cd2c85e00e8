"""Tree walker: problem directories -> rows -> writer.

Walk order is depth-first with each directory's entries sorted by name, so
the output is identical across runs on an unchanged tree.

A directory is a problem directory when it holds METADATA_FILE. For each one:
1. parse `<id>.<title>` from the directory name
2. extract difficulty/tags/description from the metadata document
3. emit one row per `Solution.<ext>` file with a known extension

Failure handling (log and continue unless noted):
- directory scoped, the directory is counted as failed and yields no rows:
  bad directory name, bad metadata, unlistable directory, no solution file
  with a known extension
- file scoped, siblings continue: unknown extension, unreadable file,
  WriteError from the writer (a lost parquet row group moves its earlier
  rows from rows_written to write_failures)
- fatal, raised to the caller: root missing / not a directory, OSError while
  listing a directory during the walk
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Iterator, List, Optional
from tqdm import tqdm
from .context import Row
from ..sources.languages import LanguageResolver
from ..sources.metadata import MetadataError, MetadataExtractor, ProblemMetadata
from ..sources.problem_dir import ProblemDirError, parse_problem_dir
from ..writers.base import RowWriter, WriteError
from ..writers.registry import make_writer

if TYPE_CHECKING:
    from ..config import ConvertConfig

log = logging.getLogger("solution_corpus.walker")

METADATA_FILE = "README_EN.md"
SOLUTION_PREFIX = "Solution."

class DirectoryError(Exception):
    """Problem directory could not produce rows (listing failed, no solutions)."""

_DIRECTORY_ERRORS = (ProblemDirError, MetadataError, DirectoryError)

@dataclass
class WalkStats:
    processed: int = 0        # problem directories seen (failed ones included)
    failed: int = 0           # problem directories that hit a directory-scoped error
    rows_written: int = 0
    write_failures: int = 0
    skipped_files: int = 0    # Solution.* files skipped (unknown extension, unreadable)

    def discard_rows(self, n: int) -> None:
        """Move rows counted as written to write_failures."""
        self.rows_written -= n
        self.write_failures += n

def check_root(root: str) -> None:
    """Raise if the walk root is missing or not a directory."""
    if not os.path.exists(root):
        raise FileNotFoundError(f"root directory does not exist: {root}")
    if not os.path.isdir(root):
        raise NotADirectoryError(f"root is not a directory: {root}")

def _sorted_entries(path: str) -> List[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: e.name)

class SolutionWalker:
    def __init__(
        self,
        root: str,
        writer: RowWriter,
        *,
        resolver: Optional[LanguageResolver] = None,
        extractor: Optional[MetadataExtractor] = None,
        metadata_file: str = METADATA_FILE,
        solution_prefix: str = SOLUTION_PREFIX,
        log_every: int = 100,
        progress: bool = False,
    ):
        self.root = root
        self.writer = writer
        self.resolver = resolver or LanguageResolver()
        self.extractor = extractor or MetadataExtractor()
        self.metadata_file = metadata_file
        self.solution_prefix = solution_prefix
        self.log_every = log_every
        self.progress = progress
        self.stats = WalkStats()

    def walk(self) -> WalkStats:
        check_root(self.root)
        self.stats = WalkStats()
        root_metadata = os.path.join(self.root, self.metadata_file)

        bar = tqdm(unit="dir", desc="problems", disable=not self.progress)
        try:
            for path in self._iter_files(self.root):
                if os.path.basename(path) != self.metadata_file or path == root_metadata:
                    continue
                self._visit(os.path.dirname(path))
                bar.update(1)
        finally:
            bar.close()
            log.info(f"Processing complete. Processed: {self.stats.processed}, Failed: {self.stats.failed}")
        return self.stats

    def _iter_files(self, top: str) -> Iterator[str]:
        for entry in _sorted_entries(top):
            if entry.is_dir(follow_symlinks=False):
                yield from self._iter_files(entry.path)
            else:
                yield entry.path

    def _visit(self, problem_dir: str) -> None:
        try:
            self.process_dir(problem_dir)
        except _DIRECTORY_ERRORS as e:
            self.stats.failed += 1
            log.warning(f"Error processing {os.path.basename(problem_dir)}: {e}")

        self.stats.processed += 1
        if self.stats.processed % self.log_every == 0:
            log.info(f"Processed {self.stats.processed} directories...")

    def process_dir(self, problem_dir: str) -> int:
        """Emit the rows of one problem directory; return how many were written.

        Raises ProblemDirError, MetadataError or DirectoryError when the
        directory as a whole has to be skipped.
        """
        dir_name = os.path.basename(problem_dir)
        problem_id, title = parse_problem_dir(dir_name)
        meta = self.extractor.extract_file(os.path.join(problem_dir, self.metadata_file))

        try:
            entries = _sorted_entries(problem_dir)
        except OSError as e:
            raise DirectoryError(f"error reading directory: {e}") from e

        recognized = 0
        written = 0
        for entry in entries:
            if entry.is_dir() or not entry.name.startswith(self.solution_prefix):
                continue
            ext = os.path.splitext(entry.name)[1]
            language = self.resolver.resolve(ext)
            if language is None:
                log.warning(f"Unknown language for solution file {dir_name}/{entry.name}: {ext}")
                self.stats.skipped_files += 1
                continue
            recognized += 1
            row = self._make_row(problem_id, title, meta, language, entry, dir_name)
            if row is None:
                self.stats.skipped_files += 1
                continue
            try:
                self.writer.write_row(row)
            except WriteError as e:
                # rows accepted earlier and dropped with this one were counted as written
                self.stats.discard_rows(e.lost_rows - 1)
                self.stats.write_failures += 1
                log.error(f"Error writing record {dir_name}/{entry.name}: {e}")
                continue
            self.stats.rows_written += 1
            written += 1

        if recognized == 0:
            raise DirectoryError("no solution files found")
        return written

    def _make_row(self, problem_id: int, title: str, meta: ProblemMetadata, language: str, entry: os.DirEntry, dir_name: str) -> Optional[Row]:
        try:
            with open(entry.path, "r", encoding="utf-8", errors="replace", newline="") as f:
                content = f.read()
        except OSError as e:
            log.warning(f"Error reading solution file {dir_name}/{entry.name}: {e}")
            return None

        return Row(
            id=problem_id,
            title=title,
            difficulty=meta.difficulty,
            description=meta.description,
            tags=list(meta.tags),
            language=language,
            solution=content,
        )

def convert(config: "ConvertConfig", stream: BinaryIO, *, progress: bool = False) -> WalkStats:
    """Run one conversion of `config.root` into an already-open binary stream.

    The writer is created once and closed on every exit path. A bad root is
    reported before the writer touches the stream. Rows dropped by the final
    flush on close are moved from rows_written to write_failures.
    """
    check_root(config.root)
    extractor = MetadataExtractor(config.strategy)
    with make_writer(config.format, stream, row_group_size=config.row_group_size) as writer:
        walker = SolutionWalker(
            config.root,
            writer,
            resolver=LanguageResolver(),
            extractor=extractor,
            metadata_file=config.metadata_file,
            log_every=config.log_every,
            progress=progress,
        )
        stats = walker.walk()
        lost_before_close = writer.rows_lost
        writer.close()
        stats.discard_rows(writer.rows_lost - lost_before_close)
    return stats
