"""solution_corpus

Converts a tree of per-problem solution directories into one tabular dataset
(Parquet, CSV or JSON lines). One row per (problem, language) pair.

Public API surface:
- solution_corpus.cli.main : CLI entrypoint
- solution_corpus.pipeline.walker.convert : run a conversion into an open stream
- solution_corpus.writers.registry.make_writer : pick a row writer by format
- solution_corpus.sources.metadata.extract_metadata : parse one README
"""
__all__ = ["__version__"]
__version__ = "0.3.0"
