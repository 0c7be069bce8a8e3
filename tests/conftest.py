"""Test setup for tipsdoc."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


SAMPLE_DOCUMENT = """\
# SQL tips and tricks

A collection of tips.

## Contents

- [Use a leading comma](#use-a-leading-comma)
- [Anti-joins are your friend](#anti-joins-are-your-friend)
- [Missing tip](#non-existent-tip)

## Formatting

### Use a leading comma

Put commas first so a column is easy to comment out.

```sql
SELECT
    employee_id
    , employee_name
FROM employees
```

| employee_id | employee_name |
| --- | --- |
| 1 | Ann |
| 2 | Bob |

## Data wrangling

### Anti-joins are your friend

See [the comma tip](#use-a-leading-comma) and [nowhere](#nowhere).

```sql
SELECT v.video_id
FROM videos AS v
LEFT JOIN video_content AS vc ON v.video_id = vc.video_id
WHERE vc.video_id IS NULL
```

## Common mistakes

### Be aware of NOT IN with NULLs

```sql
SELECT 1 FROM t WHERE 1 NOT IN (SELECT NULL)
```
"""


@pytest.fixture
def sample_text() -> str:
    """A small tips document with one broken table of contents link."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def sample_path(tmp_path: Path, sample_text: str) -> Path:
    path = tmp_path / "README.md"
    path.write_text(sample_text, encoding="utf-8")
    return path
