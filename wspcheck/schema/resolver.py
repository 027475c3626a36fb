# wspcheck/schema/resolver.py
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from ..storage.paths import metric_from_path
from .model import RetentionSpec, Schema, SchemaCount


def _first_match(metric: str, schemas: Sequence[Schema]) -> Optional[int]:
    """Index of the first schema (top-to-bottom) whose pattern matches anywhere in the metric."""
    for i, s in enumerate(schemas):
        if s.pattern is None:
            continue
        if s.pattern.search(metric):
            return i
    return None


def resolve_schema(metric: str, schemas: Sequence[Schema]) -> Optional[Schema]:
    """
    First schema (top-to-bottom) whose pattern matches anywhere in the metric.
    Patterns may overlap, so this stays a plain ordered scan.
    None means nothing matched; callers report that as its own outcome.
    """
    i = _first_match(metric, schemas)
    return None if i is None else schemas[i]


def retentions_equal(a: Sequence[RetentionSpec], b: Sequence[RetentionSpec]) -> bool:
    """Tiers must agree in count, order and value; a reordered list is a mismatch."""
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if x.seconds_per_point != y.seconds_per_point or x.retention_seconds != y.retention_seconds:
            return False
    return True


def count_definitions(schemas: Sequence[Schema], root: str, files: Iterable[str]) -> List[SchemaCount]:
    """Count how many files resolve to each schema. Unmatched files are not counted."""
    counts = [SchemaCount(schema=s) for s in schemas]
    for f in files:
        i = _first_match(metric_from_path(root, f), schemas)
        if i is not None:
            counts[i].count += 1
    return counts
