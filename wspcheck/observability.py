# wspcheck/observability.py
from __future__ import annotations

import os
import logging

from rich.logging import RichHandler

from .log import console

# Enable verbose logging if WSPCHECK_VERBOSE is truthy (not "", "0", "false")
_VERB = os.getenv("WSPCHECK_VERBOSE", "").strip().lower()
VERBOSE = _VERB not in ("", "0", "false", "no")


def setup_logging(verbose: bool = VERBOSE) -> None:
    """Route module loggers (schema loader, whisper reader) through rich on stderr."""
    if not verbose:
        return
    root = logging.getLogger()
    # once per process, even if imported again
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=console, show_path=False)
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG)


# Initialize on import (safe side-effects)
setup_logging()
