"""Use case: start a session by creating its directory and staging record."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from experience_store.l1_entities.experience import ExperienceSummary, StagingRecord
from experience_store.l1_entities.experience_file import STAGING_FILENAME
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository

log = logging.getLogger('exs.export')


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class InitResult:
    session_id: str
    directory_path: str
    expected_files: dict[str, int] = field(default_factory=dict)
    success: bool = True


class InitSessionUseCase:
    """Creates ``<root>/<prefix><id>/summary.json``. The id is checked before anything touches disk."""

    def __init__(self, repository: ExperienceRepository, clock: Callable[[], datetime] = _utc_now) -> None:
        self._repo = repository
        self._clock = clock

    def execute(
        self,
        summary: ExperienceSummary,
        metadata: dict[str, Any] | None = None,
        session_id: str | None = None,
    ) -> InitResult:
        session_id = session_id or uuid.uuid4().hex
        directory = self._repo.session_dir(session_id)

        staging = StagingRecord(
            session_id=session_id,
            created_at=self._clock().isoformat(),
            summary=summary,
            metadata=metadata or {},
        )
        self._repo.write_json(directory / STAGING_FILENAME, staging.model_dump(mode='json'))
        log.info('Session %s initialized at %s', session_id, directory)

        return InitResult(
            session_id=session_id,
            directory_path=str(directory),
            expected_files={'manifest': 1, 'conversation_batches': 0, 'notes': 1},
        )
