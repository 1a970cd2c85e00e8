"""Problem metadata extraction.

A problem README carries difficulty, tags and the problem statement. The
corpus has used two layouts over its lifetime:

- frontmatter (default): a YAML header between `---` lines, then the
  statement between `<!-- description:start -->` and
  `<!-- description:end -->` comment markers. Structure is load-bearing here,
  so a missing header or missing/out-of-order markers is an error.
- badges: `![Medium]` / `![Hash Table]` image badges above a
  `## Description` heading, statement runs until the next `## ` heading.
  Tolerant: no heading means an empty description.

The strategy is chosen once per run. Both are never tried on the same
document: a badge like `![Medium]` can legitimately appear inside a
frontmatter-style statement.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

import yaml

FRONTMATTER_DELIM = "---"
DESC_START = "<!-- description:start -->"
DESC_END = "<!-- description:end -->"
DESC_HEADING = "## Description"

DIFFICULTIES = ("Easy", "Medium", "Hard")

_BADGE_RE = re.compile(r"!\[([^\]]+)\]")

class MetadataError(ValueError):
    """Metadata document is missing, unreadable or malformed."""

class MetadataStrategy(str, Enum):
    FRONTMATTER = "frontmatter"
    BADGES = "badges"

    @classmethod
    def parse(cls, value: Union[str, "MetadataStrategy"]) -> "MetadataStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown metadata strategy: {value}. "
                f"Available: {[s.value for s in cls]}"
            ) from None

@dataclass(frozen=True)
class ProblemMetadata:
    difficulty: str = ""
    tags: List[str] = field(default_factory=list)
    description: str = ""

def _lines(text: str) -> List[str]:
    # split on \n only: str.splitlines also breaks on \x0c and \u2028
    return text.lstrip("\ufeff").replace("\r\n", "\n").split("\n")

def _normalize_difficulty(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, dict)):
        raise MetadataError(f"difficulty must be a scalar, got {type(value).__name__}")
    label = str(value).strip()
    for d in DIFFICULTIES:
        if label.lower() == d.lower():
            return d
    return ""

def _normalize_tags(value: Any) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MetadataError(f"tags must be a list, got {type(value).__name__}")
    tags = []
    for t in value:
        if t is None or isinstance(t, (list, dict)):
            raise MetadataError(f"invalid tag entry: {t!r}")
        tags.append(str(t))
    return tags

def _split_frontmatter(lines: List[str]) -> Tuple[List[str], int]:
    """Return (header lines, index of the closing delimiter)."""
    start = 0
    while start < len(lines) and not lines[start].strip():
        start += 1
    if start == len(lines) or lines[start].rstrip() != FRONTMATTER_DELIM:
        raise MetadataError("frontmatter start delimiter not found")
    for i in range(start + 1, len(lines)):
        if lines[i].rstrip() == FRONTMATTER_DELIM:
            return lines[start + 1:i], i
    raise MetadataError("frontmatter end delimiter not found")

def _marked_description(lines: List[str], offset: int) -> str:
    start_idx = -1
    end_idx = -1
    for i in range(offset, len(lines)):
        line = lines[i]
        if DESC_START in line:
            start_idx = i
        if DESC_END in line:
            end_idx = i
            break

    if start_idx == -1 or end_idx == -1:
        raise MetadataError("description markers not found")

    if start_idx == end_idx:
        line = lines[start_idx]
        head = line.find(DESC_START) + len(DESC_START)
        tail = line.find(DESC_END, head)
        if tail == -1:
            raise MetadataError("description end marker precedes start marker")
        return line[head:tail].strip()

    return "\n".join(lines[start_idx + 1:end_idx]).strip()

def extract_frontmatter(text: str) -> ProblemMetadata:
    lines = _lines(text)
    header, end = _split_frontmatter(lines)

    try:
        data = yaml.safe_load("\n".join(header))
    except yaml.YAMLError as e:
        raise MetadataError(f"failed to parse metadata: {e}") from e
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MetadataError(f"frontmatter must be a mapping, got {type(data).__name__}")

    return ProblemMetadata(
        difficulty=_normalize_difficulty(data.get("difficulty")),
        tags=_normalize_tags(data.get("tags")),
        description=_marked_description(lines, end + 1),
    )

def extract_badges(text: str) -> ProblemMetadata:
    difficulty = ""
    tags: List[str] = []
    desc_lines: Optional[List[str]] = None

    for line in _lines(text):
        if desc_lines is None:
            if line.strip() == DESC_HEADING:
                desc_lines = []
                continue
            for label in _BADGE_RE.findall(line):
                label = label.strip()
                if label in DIFFICULTIES:
                    difficulty = label
                else:
                    tags.append(label)
        else:
            if line.startswith("## "):
                break
            desc_lines.append(line)

    description = "\n".join(desc_lines).strip() if desc_lines else ""
    return ProblemMetadata(difficulty=difficulty, tags=tags, description=description)

_STRATEGIES = {
    MetadataStrategy.FRONTMATTER: extract_frontmatter,
    MetadataStrategy.BADGES: extract_badges,
}

def extract_metadata(text: str, strategy: Union[str, "MetadataStrategy"] = MetadataStrategy.FRONTMATTER) -> ProblemMetadata:
    return _STRATEGIES[MetadataStrategy.parse(strategy)](text)

class MetadataExtractor:
    """Reads README files from disk with one fixed strategy."""

    def __init__(self, strategy: Union[str, "MetadataStrategy"] = MetadataStrategy.FRONTMATTER):
        self.strategy = MetadataStrategy.parse(strategy)

    def extract(self, text: str) -> ProblemMetadata:
        return extract_metadata(text, self.strategy)

    def extract_file(self, path: str) -> ProblemMetadata:
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise MetadataError(f"failed to read metadata: {e}") from e
        return self.extract(text)
