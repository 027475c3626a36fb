# wspcheck/schema/model.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class RetentionSpec:
    seconds_per_point: int
    retention_seconds: int  # total history, not a point count


@dataclass(frozen=True)
class Schema:
    name: str
    pattern_raw: str = ""
    pattern: Optional[re.Pattern] = None  # None never matches
    retentions: Tuple[RetentionSpec, ...] = ()
    line_no: int = 0  # line of the [header]; earlier sections win


@dataclass
class SchemaCount:
    schema: Schema
    count: int = field(default=0)
