# wspcheck/report/tables.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence, Union

import yaml
from rich.table import Table
from rich.text import Text

from ..schema.duration import to_human
from ..schema.model import Schema, SchemaCount
from ..schema.retentions import format_retention_list
from ..schema.validate import MetricCheck, Outcome
from ..storage.whisper_reader import WhisperInfo

NO_PATTERN = "<none>"

_STATUS_STYLE = {
    Outcome.OK: "green",
    Outcome.MISMATCH: "bold red",
    Outcome.NOMATCH: "yellow",
    Outcome.ERROR: "bold magenta",
}


def info_table(wi: WhisperInfo) -> Table:
    t = Table(box=None, header_style="bold")
    for col in ("archive", "seconds/point", "#points", "retention", "max age (sec)"):
        t.add_column(col, justify="right" if col != "retention" else "left")
    for i, a in enumerate(wi.archives):
        t.add_row(str(i), str(a.seconds_per_point), str(a.points), to_human(a.retention_seconds), str(a.retention_seconds))
    return t


def check_table(checks: Iterable[MetricCheck]) -> Table:
    t = Table(box=None, header_style="bold")
    for col in ("status", "metric", "expected", "actual", "detail"):
        t.add_column(col)
    for c in checks:
        if c.outcome in (Outcome.NOMATCH, Outcome.ERROR):
            expected, actual = "-", "-"
        elif c.outcome is Outcome.MISMATCH:
            expected = f"expected:{format_retention_list(c.expected)}"
            actual = f"got:{format_retention_list(c.actual)}"
        else:
            expected, actual = format_retention_list(c.expected), format_retention_list(c.actual)
        # plain Text cells: "schema[name]" must not be read as markup
        t.add_row(
            Text(c.outcome.value, style=_STATUS_STYLE[c.outcome]),
            Text(c.metric),
            Text(expected),
            Text(actual),
            Text(c.detail),
        )
    return t


def count_lines(counts: Sequence[SchemaCount]) -> List[str]:
    # a section without a pattern never matches; make that visible
    return [f"[{c.schema.name}] {c.schema.pattern_raw or NO_PATTERN} > {c.count}" for c in counts]


def _check_to_dict(c: MetricCheck) -> dict:
    return {
        "metric": c.metric,
        "path": c.path,
        "status": c.outcome.value,
        "schema": c.schema_name,
        "expected": format_retention_list(c.expected),
        "actual": format_retention_list(c.actual),
        "detail": c.detail,
    }


def checks_to_yaml(checks: Iterable[MetricCheck]) -> str:
    return yaml.safe_dump([_check_to_dict(c) for c in checks], sort_keys=False)


def write_check_report(checks: Iterable[MetricCheck], path: Union[str, Path]) -> None:
    Path(path).write_text(checks_to_yaml(checks), encoding="utf-8")


def schemas_to_yaml(schemas: Iterable[Schema]) -> str:
    rows = [
        {
            "name": s.name,
            "pattern": s.pattern_raw or None,
            "retentions": format_retention_list(s.retentions),
            "line": s.line_no,
        }
        for s in schemas
    ]
    return yaml.safe_dump(rows, sort_keys=False)
