"""Shared fixtures: small on-disk solution trees."""

import io
from pathlib import Path
from typing import Dict, Optional

import pytest

LRU_README = """---
comments: true
difficulty: Medium
edit_url: https://github.com/doocs/leetcode/edit/main/solution/0100-0199/0146.LRU%20Cache/README_EN.md
tags:
    - Design
    - Hash Table
    - Linked List
---

<!-- problem:start -->

# [146. LRU Cache](https://leetcode.com/problems/lru-cache)

## Description

<!-- description:start -->

<p>Design a data structure that follows the constraints of a <strong>Least Recently Used (LRU) cache</strong>.</p>

<p>Implement the <code>LRUCache</code> class.</p>

<!-- description:end -->

## Solutions
"""

TWO_SUM_README = """---
difficulty: Easy
tags: [Array, Hash Table]
---

# [1. Two Sum](https://leetcode.com/problems/two-sum)

<!-- description:start -->
Given an array of integers <code>nums</code> and an integer <code>target</code>, return indices of the two numbers.
<!-- description:end -->
"""

class FullDiskStream(io.BytesIO):
    """Accepts the first `limit` bytes, then fails every write like a full disk."""

    def __init__(self, limit: int):
        super().__init__()
        self.limit = limit

    def write(self, data) -> int:
        if self.tell() + len(data) > self.limit:
            raise OSError(28, "No space left on device")
        return super().write(data)

def write_problem(parent: Path, name: str, readme: Optional[str], solutions: Dict[str, str]) -> Path:
    problem = parent / name
    problem.mkdir(parents=True, exist_ok=True)
    if readme is not None:
        (problem / "README_EN.md").write_text(readme, encoding="utf-8")
    for fname, content in solutions.items():
        (problem / fname).write_text(content, encoding="utf-8")
    return problem

@pytest.fixture
def solution_root(tmp_path: Path) -> Path:
    """repo/solution with two well-formed problems in two range buckets."""
    root = tmp_path / "repo" / "solution"
    root.mkdir(parents=True)
    (root / "README_EN.md").write_text("# Index\n", encoding="utf-8")
    write_problem(root / "0000-0099", "0001.Two Sum", TWO_SUM_README, {
        "Solution.py": "class Solution:\n    def twoSum(self, nums, target):\n        pass\n",
    })
    write_problem(root / "0100-0199", "146.LRU-Cache", LRU_README, {
        "Solution.py": "class LRUCache:\n    pass\n",
        "Solution.go": "type LRUCache struct{}\n",
    })
    return root
