# wspcheck/storage/whisper_reader.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import whisper

from ..schema.model import RetentionSpec

logger = logging.getLogger(__name__)


class StorageReadError(Exception):
    """A whisper file could not be opened or its header decoded."""

    def __init__(self, path: str, cause: object):
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


@dataclass(frozen=True)
class ArchiveInfo:
    seconds_per_point: int
    points: int

    @property
    def retention_seconds(self) -> int:
        return self.seconds_per_point * self.points


@dataclass
class WhisperInfo:
    path: str
    aggregation_method: str
    x_files_factor: float
    max_retention: int
    archives: List[ArchiveInfo] = field(default_factory=list)

    def retentions(self) -> Tuple[RetentionSpec, ...]:
        return tuple(
            RetentionSpec(seconds_per_point=a.seconds_per_point, retention_seconds=a.retention_seconds)
            for a in self.archives
        )


def read_info(path: str) -> WhisperInfo:
    try:
        header = whisper.info(path)
    except (whisper.WhisperException, OSError) as e:
        raise StorageReadError(path, e) from e
    # whisper.info() swallows IOError and hands back None
    if header is None:
        raise StorageReadError(path, "unable to read whisper header")
    logger.debug("%s: %d archive(s)", path, len(header["archives"]))
    return WhisperInfo(
        path=path,
        aggregation_method=str(header["aggregationMethod"]),
        x_files_factor=float(header["xFilesFactor"]),
        max_retention=int(header["maxRetention"]),
        archives=[ArchiveInfo(int(a["secondsPerPoint"]), int(a["points"])) for a in header["archives"]],
    )


def read_retentions(path: str) -> Tuple[RetentionSpec, ...]:
    """Archive tiers of a whisper file, finest first, as stored on disk."""
    return read_info(path).retentions()
