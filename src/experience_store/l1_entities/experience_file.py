"""L1 entity: the closed set of files a session directory may own."""

from __future__ import annotations

import enum
import re

MANIFEST_FILENAME = 'manifest.json'
STAGING_FILENAME = 'summary.json'
NOTES_FILENAME = 'notes.json'

_BATCH_PREFIX = 'conversations_'
_BATCH_SUFFIX = '.json'
_BATCH_RE = re.compile(r'^conversations_(\d+)\.json$')


class ExperienceFileKind(enum.Enum):
    MANIFEST = 'manifest'
    BATCH = 'batch'
    NOTES = 'notes'


def batch_filename(batch_number: int) -> str:
    """Filename for *batch_number*, zero-padded to width 3 (``conversations_007.json``)."""
    return f'{_BATCH_PREFIX}{batch_number:03d}{_BATCH_SUFFIX}'


def parse_batch_number(filename: str) -> int | None:
    """Return the batch number embedded in *filename*, or None if it is not a batch file."""
    match = _BATCH_RE.match(filename)
    if match is None:
        return None
    return int(match.group(1))


def classify(filename: str) -> ExperienceFileKind | None:
    """Select the file kind from its name. The staging file and strangers map to None."""
    if filename == MANIFEST_FILENAME:
        return ExperienceFileKind.MANIFEST
    if filename == NOTES_FILENAME:
        return ExperienceFileKind.NOTES
    if parse_batch_number(filename) is not None:
        return ExperienceFileKind.BATCH
    return None


def sorted_batch_files(filenames: list[str]) -> list[str]:
    """Batch filenames from *filenames*, ordered by numeric batch number."""
    batches = [name for name in filenames if parse_batch_number(name) is not None]
    return sorted(batches, key=lambda name: (parse_batch_number(name), name))
