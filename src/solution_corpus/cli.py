"""CLI entrypoint.

    solution-corpus --repo ../leetcode --convert csv --output leetcode-solutions
    solution-corpus --config configs/convert.yaml --progress

Flags override values from --config. The walk root is
`<repo>/<solutions-dir>` (default `solution`), the output file is
`<output>.<format>` in the current directory.

Exit codes: 0 done (per-directory failures are only logged), 1 fatal error
during the run, 2 invalid configuration (nothing is created).
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional
from rich.console import Console
from rich.table import Table
from rich import box
from .config import ConfigError, ConvertConfig, load_config
from .logging_ import setup_logging
from .pipeline.walker import WalkStats, check_root, convert
from .sources.metadata import MetadataStrategy
from .writers.base import WriterInitError
from .writers.registry import list_formats

log = logging.getLogger("solution_corpus.cli")

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="solution-corpus", description="Convert a solutions tree into one dataset file.")
    p.add_argument("--config", help="YAML config file (keys of ConvertConfig, optionally under 'convert:')")
    p.add_argument("--repo", dest="repo_path", help="Path to the solutions repository (default: .)")
    p.add_argument("--convert", dest="output_format", help=f"Output format: {', '.join(list_formats())} (default: parquet)")
    p.add_argument("--output", dest="output_name", help="Base output filename (default: leetcode-solutions)")
    p.add_argument("--solutions-dir", dest="solutions_dir", help="Directory under --repo to walk (default: solution)")
    p.add_argument("--metadata-strategy", dest="metadata_strategy",
                   help=f"README layout: {', '.join(s.value for s in MetadataStrategy)} (default: frontmatter)")
    p.add_argument("--log-file", dest="log_file", help="Also write logs to this file")
    p.add_argument("--progress", action="store_true", help="Show a progress bar")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return p

def resolve_config(args: argparse.Namespace) -> ConvertConfig:
    base = load_config(args.config) if args.config else ConvertConfig()
    overrides = {
        "repo_path": args.repo_path,
        "output_format": args.output_format,
        "output_name": args.output_name,
        "solutions_dir": args.solutions_dir,
        "metadata_strategy": args.metadata_strategy,
        "log_file": args.log_file,
    }
    return base.merged(overrides).validate()

def print_summary(stats: WalkStats, output_path: str, console: Optional[Console] = None) -> None:
    console = console or Console()
    table = Table(title="[bold]Conversion Summary[/bold]", box=box.ROUNDED, border_style="green")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Output", output_path)
    table.add_row("Directories processed", f"{stats.processed:,}")
    table.add_row("Directories failed", f"{stats.failed:,}")
    table.add_row("Rows written", f"{stats.rows_written:,}")
    table.add_row("Row write failures", f"{stats.write_failures:,}")
    table.add_row("Files skipped", f"{stats.skipped_files:,}")
    console.print(table)

def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except OSError as e:
        log.warning(f"Could not remove incomplete output {path}: {e}")

def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        cfg = resolve_config(args)
    except (ConfigError, OSError) as e:
        print(f"Invalid arguments: {e}", file=sys.stderr)
        return 2

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=cfg.log_file)

    try:
        check_root(cfg.root)
    except OSError as e:
        log.error(f"Error walking directory: {e}")
        return 1

    out_path = cfg.output_path
    log.info(f"Converting {cfg.root} -> {out_path} (format={cfg.format.value}, metadata={cfg.strategy.value})")
    try:
        f = open(out_path, "wb")
    except OSError as e:
        log.error(f"Failed to create output file: {e}")
        return 1

    try:
        with f:
            stats = convert(cfg, f, progress=args.progress)
    except WriterInitError as e:
        log.error(f"Failed to create writer: {e}")
        _remove_quietly(out_path)
        return 1
    except OSError as e:
        log.error(f"Error walking directory: {e}")
        _remove_quietly(out_path)
        return 1

    print_summary(stats, out_path)
    return 0

if __name__ == "__main__":
    sys.exit(main())
