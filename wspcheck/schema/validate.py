# wspcheck/schema/validate.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from ..storage.paths import metric_from_path
from ..storage.whisper_reader import StorageReadError, read_retentions
from .model import RetentionSpec, Schema
from .resolver import resolve_schema, retentions_equal

RetentionReader = Callable[[str], Sequence[RetentionSpec]]


class Outcome(str, Enum):
    OK = "OK"
    MISMATCH = "MISMATCH"
    NOMATCH = "NOMATCH"
    ERROR = "ERROR"


@dataclass(frozen=True)
class MetricCheck:
    metric: str
    path: str
    outcome: Outcome
    expected: Tuple[RetentionSpec, ...] = ()
    actual: Tuple[RetentionSpec, ...] = ()
    schema_name: Optional[str] = None
    detail: str = ""


def check_metric(
    schemas: Sequence[Schema],
    root: str,
    path: str,
    reader: RetentionReader = read_retentions,
) -> MetricCheck:
    metric = metric_from_path(root, path)
    matched = resolve_schema(metric, schemas)
    if matched is None:
        return MetricCheck(metric=metric, path=path, outcome=Outcome.NOMATCH, detail="no schema matched")

    try:
        actual = tuple(reader(path))
    except StorageReadError as e:
        return MetricCheck(
            metric=metric,
            path=path,
            outcome=Outcome.ERROR,
            expected=matched.retentions,
            schema_name=matched.name,
            detail=f"failed to open: {e.cause}",
        )

    if retentions_equal(actual, matched.retentions):
        outcome, detail = Outcome.OK, f"matched schema[{matched.name}]"
    else:
        outcome, detail = Outcome.MISMATCH, f"schema[{matched.name}]"
    return MetricCheck(
        metric=metric,
        path=path,
        outcome=outcome,
        expected=matched.retentions,
        actual=actual,
        schema_name=matched.name,
        detail=detail,
    )


def check_retentions(
    schemas: Sequence[Schema],
    root: str,
    files: Iterable[str],
    reader: RetentionReader = read_retentions,
) -> List[MetricCheck]:
    """One verdict per file; a file that cannot be read does not stop the batch."""
    return [check_metric(schemas, root, f, reader) for f in files]


def has_failures(checks: Iterable[MetricCheck]) -> bool:
    return any(c.outcome in (Outcome.MISMATCH, Outcome.ERROR) for c in checks)
