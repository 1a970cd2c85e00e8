"""Core data model.

Row is the unit of output: one (problem, language) pair. Rows are built
per solution file, handed to a RowWriter and dropped.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

ROW_FIELDS = ("id", "title", "difficulty", "description", "tags", "language", "solution")

@dataclass(frozen=True)
class Row:
    # identity (from the directory name)
    id: int
    title: str

    # metadata document
    difficulty: str = ""
    description: str = ""
    tags: List[str] = field(default_factory=list)

    # solution file
    language: str = ""
    solution: str = ""

    def as_dict(self) -> Dict[str, Any]:
        """Field mapping in canonical column order. Tags are copied."""
        return {
            "id": self.id,
            "title": self.title,
            "difficulty": self.difficulty,
            "description": self.description,
            "tags": list(self.tags),
            "language": self.language,
            "solution": self.solution,
        }
