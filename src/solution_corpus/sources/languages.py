"""Solution file extension -> canonical language label.

The table is immutable and injected into LanguageResolver so tests (and
other corpora) can use their own mapping.
"""

from __future__ import annotations
from types import MappingProxyType
from typing import List, Mapping, Optional

EXTENSION_TO_LANGUAGE: Mapping[str, str] = MappingProxyType({
    ".c": "C",
    ".cj": "Cangjie",
    ".cpp": "C++",
    ".cs": "C#",
    ".dart": "Dart",
    ".go": "Go",
    ".java": "Java",
    ".js": "JavaScript",
    ".kt": "Kotlin",
    ".nim": "Nim",
    ".php": "PHP",
    ".py": "Python",
    ".rb": "Ruby",
    ".rs": "Rust",
    ".scala": "Scala",
    ".sh": "Bash",
    ".sql": "SQL",
    ".swift": "Swift",
    ".ts": "TypeScript",
})

class LanguageResolver:
    """Resolves an extension (with its leading dot) to a language label."""

    def __init__(self, table: Optional[Mapping[str, str]] = None):
        table = EXTENSION_TO_LANGUAGE if table is None else table
        for ext in table:
            if not ext.startswith(".") or len(ext) < 2:
                raise ValueError(f"Extension must start with '.': {ext!r}")
        self._table: Mapping[str, str] = MappingProxyType(dict(table))

    def resolve(self, ext: str) -> Optional[str]:
        """Return the language label, or None if the extension is unknown."""
        return self._table.get(ext)

    def languages(self) -> List[str]:
        return sorted(set(self._table.values()))

    def __contains__(self, ext: object) -> bool:
        return ext in self._table
