# wspcheck/schema/loader.py
"""
Parser for Graphite's storage-schemas.conf:

    [name]
    pattern = REGEX
    retentions = 10s:6h, 1m:7d

The file is read top to bottom and the resulting list keeps that order,
so the first matching section wins during resolution.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from .errors import InvalidEncoding, InvalidPattern, InvalidRetentionList, InvalidRetentions
from .model import Schema
from .retentions import parse_retention_list

logger = logging.getLogger(__name__)


@dataclass
class _SectionState:
    """Accumulator for the section currently being read."""
    name: str = ""
    pattern: str = ""
    retentions: str = ""
    line_no: int = 0

    def reset(self) -> None:
        self.name = ""
        self.pattern = ""
        self.retentions = ""
        self.line_no = 0


def _flush(state: _SectionState, out: List[Schema]) -> None:
    if not state.name:
        return
    if not state.pattern and not state.retentions:
        logger.debug("skipping empty section [%s] (line %d)", state.name, state.line_no)
        state.reset()
        return

    compiled: Optional[re.Pattern] = None
    if state.pattern:
        try:
            compiled = re.compile(state.pattern)
        except re.error as e:
            raise InvalidPattern(state.name, state.pattern, e) from e

    specs = []
    if state.retentions:
        try:
            specs = parse_retention_list(state.retentions)
        except InvalidRetentionList as e:
            raise InvalidRetentions(state.name, e) from e

    out.append(
        Schema(
            name=state.name,
            pattern_raw=state.pattern,
            pattern=compiled,
            retentions=tuple(specs),
            line_no=state.line_no,
        )
    )
    state.reset()


def _process_line(state: _SectionState, out: List[Schema], line_no: int, line: str) -> None:
    trim = line.strip()
    # '#' starts a comment anywhere on the line, even inside a value
    if "#" in trim:
        trim = trim[: trim.index("#")].strip()
    if not trim:
        return

    if trim.startswith("[") and trim.endswith("]"):
        _flush(state, out)
        state.name = trim[1:-1].strip()
        state.line_no = line_no
        return

    if "=" in trim:
        key, _, val = trim.partition("=")
        key = key.strip().lower()
        if key == "pattern":
            state.pattern = val.strip()
        elif key == "retentions":
            state.retentions = val.strip()
        # other keys are ignored


def _physical_lines(text: str) -> List[str]:
    # only "\n" ends a line; str.splitlines() would also break on \f, \v, \x85 ...
    return [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]


def parse_storage_schemas(text: str) -> List[Schema]:
    """
    Parse policy text into schemas in declaration order.
    All or nothing: a bad pattern or retention list raises and nothing is returned.
    """
    state = _SectionState()
    schemas: List[Schema] = []
    for line_no, line in enumerate(_physical_lines(text), start=1):
        _process_line(state, schemas, line_no, line)
    _flush(state, schemas)
    return schemas


def load_storage_schemas(path: Union[str, Path]) -> List[Schema]:
    # bytes, so "\r" is not turned into a line break by universal newlines
    raw = Path(path).read_bytes()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(str(path), e) from e
    schemas = parse_storage_schemas(text)
    logger.debug("loaded %d schema(s) from %s", len(schemas), path)
    return schemas
