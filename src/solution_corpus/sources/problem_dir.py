"""Problem directory names: `<digits>.<title>`, e.g. `0146.LRU Cache`."""

from __future__ import annotations
import re
from typing import Tuple

_DIR_RE = re.compile(r"(\d+)\.(.+)")

# ids are stored as int64 in parquet; every format gets the same bound
MAX_PROBLEM_ID = 2**63 - 1

class ProblemDirError(ValueError):
    """Directory name does not have the `<id>.<title>` shape."""

def parse_problem_dir(name: str) -> Tuple[int, str]:
    m = _DIR_RE.fullmatch(name)
    if m is None:
        raise ProblemDirError(f"title does not match: {name}")
    problem_id = int(m.group(1))
    if problem_id <= 0:
        raise ProblemDirError(f"problem id must be positive: {name}")
    if problem_id > MAX_PROBLEM_ID:
        raise ProblemDirError(f"problem id out of range: {name}")
    return problem_id, m.group(2)
