"""Use case: validate a session directory before a reader consumes it."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from experience_store.l1_entities.errors import StorageError
from experience_store.l1_entities.experience_file import MANIFEST_FILENAME, classify
from experience_store.l1_entities.validation_report import ValidationReport
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository
from experience_store.l2_use_cases.utils.validation_engine import manifest_failure_report, parse_manifest, validate

log = logging.getLogger('exs.validate')


class ValidateExperienceUseCase:
    """Reads the manifest and every file it names, then runs the validation layers."""

    def __init__(self, repository: ExperienceRepository) -> None:
        self._repo = repository

    def execute(self, directory: Path) -> ValidationReport:
        try:
            manifest = self._repo.read_json(directory / MANIFEST_FILENAME)
        except FileNotFoundError:
            log.info('No manifest in %s', directory)
            return manifest_failure_report('File does not exist')
        except (ValueError, StorageError) as e:
            log.info('Unreadable manifest in %s: %s', directory, e)
            return manifest_failure_report(f'Invalid JSON: {e}')

        files: dict[str, Any] = {}
        unreadable: dict[str, str] = {}
        parsed, _ = parse_manifest(manifest)
        for filename in parsed.files.owned() if parsed is not None else []:
            # Only fixed session file names are opened.
            if classify(filename) is None:
                unreadable[filename] = f'Not a session file name: {filename}'
                continue
            try:
                files[filename] = self._repo.read_json(directory / filename)
            except FileNotFoundError:
                continue
            except (ValueError, StorageError) as e:
                unreadable[filename] = f'Invalid JSON: {e}'

        report = validate(manifest, files, unreadable=unreadable)
        log.info(
            'Validated %s: valid=%s, %d errors, %d warnings',
            directory,
            report.valid,
            len(report.errors),
            len(report.warnings),
        )
        return report
