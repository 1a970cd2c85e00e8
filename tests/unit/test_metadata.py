import pytest

from conftest import LRU_README
from solution_corpus.sources.metadata import (
    MetadataError,
    MetadataExtractor,
    MetadataStrategy,
    extract_badges,
    extract_frontmatter,
    extract_metadata,
)

# frontmatter

def test_frontmatter_lru_cache() -> None:
    meta = extract_frontmatter(LRU_README)

    assert meta.difficulty == "Medium"
    assert meta.tags == ["Design", "Hash Table", "Linked List"]
    assert meta.description.startswith("<p>Design a data structure")
    assert meta.description.endswith("<code>LRUCache</code> class.</p>")

def test_frontmatter_flow_style_tags_keep_order() -> None:
    doc = "---\ndifficulty: Hard\ntags: [Hash Table, Linked List, Design]\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n"
    meta = extract_frontmatter(doc)
    assert meta.tags == ["Hash Table", "Linked List", "Design"]
    assert meta.difficulty == "Hard"
    assert meta.description == "x"

def test_frontmatter_crlf_and_missing_keys() -> None:
    doc = "---\r\ncomments: true\r\n---\r\n<!-- description:start -->\r\n  Body  \r\n<!-- description:end -->\r\n"
    meta = extract_frontmatter(doc)
    assert meta.difficulty == ""
    assert meta.tags == []
    assert meta.description == "Body"

def test_frontmatter_unknown_difficulty_is_empty() -> None:
    doc = "---\ndifficulty: Impossible\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n"
    assert extract_frontmatter(doc).difficulty == ""

def test_frontmatter_difficulty_case_is_normalized() -> None:
    doc = "---\ndifficulty: easy\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n"
    assert extract_frontmatter(doc).difficulty == "Easy"

def test_frontmatter_markers_on_one_line() -> None:
    doc = "---\ndifficulty: Easy\n---\n<!-- description:start --> Short one <!-- description:end -->\n"
    assert extract_frontmatter(doc).description == "Short one"

def test_frontmatter_empty_description() -> None:
    doc = "---\ndifficulty: Easy\n---\n<!-- description:start -->\n\n<!-- description:end -->\n"
    assert extract_frontmatter(doc).description == ""

def test_frontmatter_last_start_marker_before_end_wins() -> None:
    doc = (
        "---\ndifficulty: Easy\n---\n"
        "<!-- description:start -->\nold\n"
        "<!-- description:start -->\nnew\n"
        "<!-- description:end -->\n"
    )
    assert extract_frontmatter(doc).description == "new"

def test_frontmatter_badge_text_inside_description_is_kept() -> None:
    doc = "---\ndifficulty: Easy\n---\n<!-- description:start -->\n![Medium] is just text here\n<!-- description:end -->\n"
    meta = extract_frontmatter(doc)
    assert meta.difficulty == "Easy"
    assert meta.description == "![Medium] is just text here"

@pytest.mark.parametrize(
    "doc, message",
    [
        ("difficulty: Easy\n<!-- description:start -->\nx\n<!-- description:end -->\n", "start delimiter"),
        ("# Title\n---\ndifficulty: Easy\n---\n", "start delimiter"),
        ("---\ndifficulty: Easy\n<!-- description:start -->\nx\n<!-- description:end -->\n", "end delimiter"),
        ("", "start delimiter"),
        ("---\ntags: [a, b\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n", "failed to parse metadata"),
        ("---\n- a\n- b\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n", "must be a mapping"),
        ("---\ntags: Array\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n", "tags must be a list"),
        ("---\ndifficulty: [Easy]\n---\n<!-- description:start -->\nx\n<!-- description:end -->\n", "difficulty must be a scalar"),
        ("---\ndifficulty: Easy\n---\nno markers at all\n", "markers not found"),
        ("---\ndifficulty: Easy\n---\n<!-- description:start -->\nx\n", "markers not found"),
        ("---\ndifficulty: Easy\n---\n<!-- description:end -->\nx\n<!-- description:start -->\n", "markers not found"),
        ("---\ndifficulty: Easy\n---\n<!-- description:end --> x <!-- description:start -->\n", "precedes"),
    ],
)
def test_frontmatter_failures(doc, message) -> None:
    with pytest.raises(MetadataError, match=message):
        extract_frontmatter(doc)

def test_markers_inside_frontmatter_are_ignored() -> None:
    doc = "---\ndifficulty: Easy\n# <!-- description:start -->\n---\nbody\n<!-- description:end -->\n"
    with pytest.raises(MetadataError, match="markers not found"):
        extract_frontmatter(doc)

# badges

BADGE_README = """# [1. Two Sum](https://leetcode.com/problems/two-sum)

![Easy](https://img.shields.io/badge/Easy-green) ![Array](https://img.shields.io/badge/Array-blue)
![Hash Table](https://img.shields.io/badge/Hash%20Table-blue)

## Description

Given an array of integers `nums` and an integer `target`.

### Example 1

```
Input: nums = [2,7,11,15], target = 9
```

## Solutions

![Hard] after the heading is ignored
"""

def test_badges_two_sum() -> None:
    meta = extract_badges(BADGE_README)

    assert meta.difficulty == "Easy"
    assert meta.tags == ["Array", "Hash Table"]
    assert meta.description.startswith("Given an array of integers")
    assert "### Example 1" in meta.description
    assert meta.description.endswith("```")
    assert "Solutions" not in meta.description

def test_badges_last_difficulty_wins_and_duplicates_kept() -> None:
    doc = "![Easy] ![Tree] ![Hard] ![Tree]\n## Description\nbody\n"
    meta = extract_badges(doc)
    assert meta.difficulty == "Hard"
    assert meta.tags == ["Tree", "Tree"]

def test_badges_without_heading_have_empty_description() -> None:
    meta = extract_badges("![Medium] ![Graph]\nSome text\n")
    assert meta.difficulty == "Medium"
    assert meta.tags == ["Graph"]
    assert meta.description == ""

def test_badges_description_runs_to_end_of_document() -> None:
    assert extract_badges("## Description\n\n  line one\nline two\n\n").description == "line one\nline two"

def test_badges_empty_document() -> None:
    meta = extract_badges("")
    assert (meta.difficulty, meta.tags, meta.description) == ("", [], "")

# dispatch + files

def test_extract_metadata_dispatches_on_strategy() -> None:
    assert extract_metadata(LRU_README).difficulty == "Medium"
    assert extract_metadata(BADGE_README, "badges").difficulty == "Easy"
    assert extract_metadata(BADGE_README, MetadataStrategy.BADGES).tags == ["Array", "Hash Table"]

def test_frontmatter_strategy_does_not_fall_back_to_badges() -> None:
    with pytest.raises(MetadataError):
        extract_metadata(BADGE_README, MetadataStrategy.FRONTMATTER)

def test_unknown_strategy() -> None:
    with pytest.raises(ValueError, match="Unknown metadata strategy"):
        MetadataExtractor("yaml")

def test_extract_file(tmp_path) -> None:
    path = tmp_path / "README_EN.md"
    path.write_text(LRU_README, encoding="utf-8")
    meta = MetadataExtractor().extract_file(str(path))
    assert meta.tags == ["Design", "Hash Table", "Linked List"]

def test_extract_missing_file(tmp_path) -> None:
    with pytest.raises(MetadataError, match="failed to read metadata"):
        MetadataExtractor().extract_file(str(tmp_path / "README_EN.md"))

def test_extract_undecodable_file(tmp_path) -> None:
    path = tmp_path / "README_EN.md"
    path.write_bytes(b"---\ndifficulty: \xff\xfe\n---\n")
    with pytest.raises(MetadataError, match="failed to read metadata"):
        MetadataExtractor().extract_file(str(path))
