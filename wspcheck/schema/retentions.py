# wspcheck/schema/retentions.py
from __future__ import annotations

from typing import Iterable, List

from .duration import from_human, to_human
from .errors import InvalidDuration, InvalidRetentionList, InvalidRetentionPair
from .model import RetentionSpec


def parse_retention_pair(pair: str) -> RetentionSpec:
    """Parse one "resolution:retention" pair like "10s:6h"."""
    parts = pair.split(":")
    if len(parts) != 2:
        raise InvalidRetentionPair(f"invalid retention pair {pair!r}")
    try:
        res = from_human(parts[0])
    except InvalidDuration as e:
        raise InvalidRetentionPair(f"invalid resolution in {pair!r}: {e}") from e
    try:
        ret = from_human(parts[1])
    except InvalidDuration as e:
        raise InvalidRetentionPair(f"invalid retention in {pair!r}: {e}") from e
    # retention is ideally a multiple of resolution; not enforced
    return RetentionSpec(seconds_per_point=res, retention_seconds=ret)


def parse_retention_list(raw: str) -> List[RetentionSpec]:
    """Parse "10s:6h, 1m:7d" into specs, keeping file order."""
    out: List[RetentionSpec] = []
    for p in (raw or "").split(","):
        p = p.strip()
        if not p:
            continue
        out.append(parse_retention_pair(p))
    if not out:
        raise InvalidRetentionList(f"no retentions parsed from {raw!r}")
    return out


def format_retention(spec: RetentionSpec) -> str:
    return f"{to_human(spec.seconds_per_point)}:{to_human(spec.retention_seconds)}"


def format_retention_list(specs: Iterable[RetentionSpec]) -> str:
    return ",".join(format_retention(s) for s in specs)
