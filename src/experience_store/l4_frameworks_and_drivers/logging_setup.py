"""Logging setup: stderr always, a debug file on request. stdout stays free for JSON responses."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'


def setup_logging(level: str = 'INFO', log_file: Path | None = None) -> None:
    """Configure the ``exs`` logger tree. Safe to call more than once."""
    root = logging.getLogger('exs')
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    root.setLevel(logging.DEBUG)
    root.propagate = False

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(level.upper())
    stream.setFormatter(logging.Formatter(_FORMAT))
    root.addHandler(stream)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(file_handler)
        root.info('Debug logging started → %s', log_file)
