# wspcheck/storage/paths.py
from __future__ import annotations

import os
from typing import List

from ..config import WHISPER_EXT
from ..log import warn


def metric_from_path(root: str, full: str) -> str:
    """
    Convert a filesystem path to a Graphite metric name relative to root,
    e.g. /var/lib/graphite/whisper/servers/web01/cpu.wsp -> servers.web01.cpu

    Purely textual: case and repeated separators are left alone.
    """
    root, full = os.fspath(root), os.fspath(full)
    try:
        if os.path.isabs(root) != os.path.isabs(full):
            raise ValueError(f"cannot make {full!r} relative to {root!r}")
        rel = os.path.relpath(full, root)
    except ValueError:
        # degrade to the raw path rather than fail
        rel = full
    if rel.endswith(WHISPER_EXT):
        rel = rel[: -len(WHISPER_EXT)]
    if rel.startswith(os.sep):
        rel = rel[len(os.sep):]
    return rel.replace(os.sep, ".")


def _is_whisper(name: str) -> bool:
    return name.lower().endswith(WHISPER_EXT)


def find_whisper_files(root: str) -> List[str]:
    """Walk root and return every *.wsp file. Unreadable directories are skipped with a warning."""
    root = os.fspath(root)
    if os.path.isfile(root):
        return [root] if _is_whisper(root) else []

    def _skip(e: OSError) -> None:
        warn(f"skipping {e.filename}: {e.strerror or e}")

    out: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_skip):
        dirnames.sort()
        for name in sorted(filenames):
            if _is_whisper(name):
                out.append(os.path.join(dirpath, name))
    return out
