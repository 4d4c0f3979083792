"""Use case: reconstruct a session's lifecycle state purely from its directory listing."""

from __future__ import annotations

import logging

from experience_store.l1_entities.experience_file import MANIFEST_FILENAME, parse_batch_number
from experience_store.l1_entities.session_status import NO_FURTHER_BATCHES, SessionState, SessionStatus
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository

log = logging.getLogger('exs.status')


def derive_status(directory_path: str, exists: bool, files: list[str]) -> SessionStatus:
    """Map a directory listing to a SessionStatus.

    - absent directory           -> NOT_FOUND, next batch 1
    - manifest present           -> COMPLETED, next batch -1
    - otherwise next batch = max(embedded batch numbers, 0) + 1; gaps are not
      filled, so batches 1 and 5 give 6. No files -> INITIALIZING, else IN_PROGRESS.
    """
    if not exists:
        return SessionStatus(status=SessionState.NOT_FOUND, directory_path=directory_path, next_batch_number=1)

    if MANIFEST_FILENAME in files:
        return SessionStatus(
            status=SessionState.COMPLETED,
            directory_path=directory_path,
            created_files=files,
            next_batch_number=NO_FURTHER_BATCHES,
        )

    numbers = [n for n in (parse_batch_number(f) for f in files) if n is not None]
    next_batch = max(numbers, default=0) + 1
    state = SessionState.IN_PROGRESS if files else SessionState.INITIALIZING
    return SessionStatus(
        status=state,
        directory_path=directory_path,
        created_files=files,
        next_batch_number=next_batch,
    )


class SessionStatusUseCase:
    def __init__(self, repository: ExperienceRepository) -> None:
        self._repo = repository

    def execute(self, session_id: str) -> SessionStatus:
        directory = self._repo.session_dir(session_id)
        exists = self._repo.exists(directory)
        files = self._repo.list_files(directory) if exists else []
        status = derive_status(str(directory), exists, files)
        log.debug(
            'Session %s: %s, %d files, next batch %d',
            session_id,
            status.status.value,
            len(files),
            status.next_batch_number,
        )
        return status
