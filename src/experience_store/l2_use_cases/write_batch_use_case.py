"""Use cases: write one numbered conversation batch, or the free-form notes file."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from experience_store.l1_entities.errors import SchemaError
from experience_store.l1_entities.experience import BatchFile, ConversationRecord
from experience_store.l1_entities.experience_file import NOTES_FILENAME, batch_filename
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository

log = logging.getLogger('exs.export')


@dataclass(frozen=True)
class BatchWriteResult:
    file_path: str
    processed_count: int
    file_size: int
    success: bool = True


@dataclass(frozen=True)
class NotesWriteResult:
    file_path: str
    file_size: int
    success: bool = True


class WriteBatchUseCase:
    """Writes ``conversations_NNN.json``; rewriting a batch number replaces the earlier file."""

    def __init__(self, repository: ExperienceRepository) -> None:
        self._repo = repository

    def execute(self, session_id: str, batch_number: int, records: list[ConversationRecord]) -> BatchWriteResult:
        directory = self._repo.session_dir(session_id)
        if batch_number < 1:
            raise SchemaError(f'batch_number must be >= 1, got {batch_number}')

        batch = BatchFile(batch_number=batch_number, count=len(records), records=records)
        path = directory / batch_filename(batch_number)
        size = self._repo.write_json(path, batch.model_dump(mode='json', exclude_unset=True))
        log.info(
            'Batch %d written for session %s (%d records, %d bytes)',
            batch_number,
            session_id,
            len(records),
            size,
        )
        return BatchWriteResult(file_path=str(path), processed_count=len(records), file_size=size)


class WriteNotesUseCase:
    """Writes ``notes.json``. The content is opaque; only non-null objects are accepted."""

    def __init__(self, repository: ExperienceRepository) -> None:
        self._repo = repository

    def execute(self, session_id: str, notes: dict[str, Any]) -> NotesWriteResult:
        directory = self._repo.session_dir(session_id)
        if not isinstance(notes, dict):
            raise SchemaError(f'notes must be a JSON object, got {type(notes).__name__}')

        path = directory / NOTES_FILENAME
        size = self._repo.write_json(path, notes)
        log.info('Notes written for session %s (%d bytes)', session_id, size)
        return NotesWriteResult(file_path=str(path), file_size=size)
