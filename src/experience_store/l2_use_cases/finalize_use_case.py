"""Use case: aggregate a session's batches into the manifest and retire the staging record."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from experience_store.l1_entities.errors import AggregationError, StagingMissingError
from experience_store.l1_entities.experience import BatchFile, Manifest, ManifestFiles, StagingRecord
from experience_store.l1_entities.experience_file import (
    MANIFEST_FILENAME,
    NOTES_FILENAME,
    STAGING_FILENAME,
    sorted_batch_files,
)
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository

log = logging.getLogger('exs.finalize')


@dataclass(frozen=True)
class FinalizeResult:
    directory_path: str
    manifest_path: str
    total_files: int
    total_size: int
    file_list: list[str] = field(default_factory=list)
    total_conversations: int = 0
    success: bool = True


class FinalizeSessionUseCase:
    """Turns an in-progress session into a completed one.

    All batches are parsed before anything is written, so a corrupt batch leaves
    the directory untouched. Writing the manifest and deleting the staging file
    are two separate steps; a crash between them is repaired by calling this
    again, which rebuilds the same manifest from the leftover staging file.
    Calling it on a completed session without a staging file changes nothing.
    """

    def __init__(self, repository: ExperienceRepository, protocol_version: str) -> None:
        self._repo = repository
        self._protocol_version = protocol_version

    def execute(self, session_id: str) -> FinalizeResult:
        directory = self._repo.session_dir(session_id)
        files = self._repo.list_files(directory)
        manifest_path = directory / MANIFEST_FILENAME

        if STAGING_FILENAME not in files:
            if MANIFEST_FILENAME in files:
                log.info('Session %s already finalized; nothing to repair', session_id)
                return self._result(directory, manifest_path)
            raise StagingMissingError(f'No staging record for session {session_id!r}; call init first')

        staging = self._read_staging(directory / STAGING_FILENAME)
        batch_files = sorted_batch_files(files)
        total = sum(self._count_records(directory / name) for name in batch_files)

        manifest = Manifest(
            protocol_version=self._protocol_version,
            name=staging.summary.name,
            context=staging.summary.context,
            summary=staging.summary.summary,
            flow=staging.summary.flow,
            topics=staging.summary.topics,
            files=ManifestFiles(
                conversations=batch_files,
                notes=NOTES_FILENAME if NOTES_FILENAME in files else None,
            ),
            total_conversations=total,
            session_id=staging.session_id,
            created_at=staging.created_at,
            metadata=staging.metadata,
        )
        self._repo.write_json(manifest_path, manifest.model_dump(mode='json'))
        self._repo.delete(directory / STAGING_FILENAME)
        log.info(
            'Session %s finalized: %d batches, %d conversations, notes=%s',
            session_id,
            len(batch_files),
            total,
            manifest.files.notes is not None,
        )
        return self._result(directory, manifest_path, total)

    def _read_staging(self, path: Path) -> StagingRecord:
        try:
            return StagingRecord.model_validate(self._repo.read_json(path))
        except FileNotFoundError as e:
            raise StagingMissingError(f'Staging record disappeared: {path.name}') from e
        except (ValueError, ValidationError) as e:
            raise AggregationError(f'Unreadable staging record {path.name}: {e}', path.name) from e

    def _count_records(self, path: Path) -> int:
        try:
            batch = BatchFile.model_validate(self._repo.read_json(path))
        except (FileNotFoundError, ValueError, ValidationError) as e:
            log.error('Cannot aggregate %s: %s', path.name, e)
            raise AggregationError(f'Unreadable batch file {path.name}: {e}', path.name) from e
        return batch.actual_count

    def _result(self, directory: Path, manifest_path: Path, total: int | None = None) -> FinalizeResult:
        file_list = self._repo.list_files(directory)
        if total is None:
            total = self._recorded_total(manifest_path)
        return FinalizeResult(
            directory_path=str(directory),
            manifest_path=str(manifest_path),
            total_files=len(file_list),
            total_size=self._repo.directory_size(directory),
            file_list=file_list,
            total_conversations=total,
        )

    def _recorded_total(self, manifest_path: Path) -> int:
        try:
            return Manifest.model_validate(self._repo.read_json(manifest_path)).total_conversations
        except (ValueError, ValidationError):
            return 0
