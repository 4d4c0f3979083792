"""Use case: discover completed sessions under a storage root."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from experience_store.l1_entities.errors import StorageError
from experience_store.l1_entities.experience_file import MANIFEST_FILENAME
from experience_store.l1_entities.listing import DirectorySummary, ExperienceEntry, ExperienceFilter
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository
from experience_store.l2_use_cases.utils.validation_engine import parse_manifest

log = logging.getLogger('exs.list')


@dataclass(frozen=True)
class ListResult:
    experiences: list[ExperienceEntry] = field(default_factory=list)
    directory_summaries: list[DirectorySummary] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    success: bool = True


class ListExperiencesUseCase:
    """Lists every subdirectory with a schema-valid manifest.

    A directory whose manifest is missing, unreadable, or malformed is skipped
    with a warning; one bad session never fails the whole listing.
    """

    def __init__(self, repository: ExperienceRepository) -> None:
        self._repo = repository

    def execute(self, root: Path | None = None, criteria: ExperienceFilter | None = None) -> ListResult:
        root = root or self._repo.base_dir
        if not self._repo.exists(root):
            return ListResult(warnings=[f'Base directory does not exist: {root}'])

        entries: list[ExperienceEntry] = []
        summaries: list[DirectorySummary] = []
        warnings: list[str] = []
        for directory in self._repo.list_subdirectories(root):
            entry, reason = self._load_entry(directory)
            if entry is None:
                warnings.append(f'{directory.name} does not contain a valid {MANIFEST_FILENAME}: {reason}')
                continue
            if criteria is not None and not criteria.matches(entry):
                continue
            entries.append(entry)
            summaries.append(
                DirectorySummary(
                    directory=entry.directory_path,
                    summary=f'{entry.name}: {entry.summary}',
                    file_count=len(self._repo.list_files(directory)),
                )
            )

        log.debug('Listed %s: %d sessions, %d skipped', root, len(entries), len(warnings))
        return ListResult(experiences=entries, directory_summaries=summaries, warnings=warnings)

    def _load_entry(self, directory: Path) -> tuple[ExperienceEntry | None, str]:
        try:
            raw = self._repo.read_json(directory / MANIFEST_FILENAME)
        except FileNotFoundError:
            return None, 'file does not exist'
        except (ValueError, StorageError) as e:
            return None, f'invalid JSON ({e})'

        manifest, errors = parse_manifest(raw)
        if manifest is None:
            return None, '; '.join(f'{err.field}: {err.message}' for err in errors)

        return (
            ExperienceEntry(
                protocol_version=manifest.protocol_version,
                directory_path=str(directory),
                name=manifest.name,
                context=manifest.context,
                summary=manifest.summary,
                flow=manifest.flow,
                topics=manifest.topics,
                total_conversations=manifest.total_conversations,
                session_id=manifest.session_id,
                created_at=manifest.created_at,
            ),
            '',
        )
