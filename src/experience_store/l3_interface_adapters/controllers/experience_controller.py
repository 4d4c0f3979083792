"""ExperienceController: the request/response surface over the use cases.

Every operation takes a plain dict (as decoded from whatever transport carries
it) and returns a JSON-ready dict with a ``success`` flag. Domain errors and
malformed requests become failure responses carrying ``error`` and ``code``;
nothing here keeps state between calls.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from experience_store.l1_entities.errors import ExperienceStoreError, SchemaError
from experience_store.l1_entities.experience import ConversationRecord, ExperienceSummary
from experience_store.l1_entities.listing import ExperienceFilter
from experience_store.l2_use_cases.finalize_use_case import FinalizeSessionUseCase
from experience_store.l2_use_cases.init_session_use_case import InitSessionUseCase
from experience_store.l2_use_cases.list_experiences_use_case import ListExperiencesUseCase
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository
from experience_store.l2_use_cases.session_status_use_case import SessionStatusUseCase
from experience_store.l2_use_cases.validate_experience_use_case import ValidateExperienceUseCase
from experience_store.l2_use_cases.write_batch_use_case import WriteBatchUseCase, WriteNotesUseCase

log = logging.getLogger('exs.controller')

Response = dict[str, Any]


class InitRequest(BaseModel):
    session_id: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    summary: ExperienceSummary


class WriteBatchRequest(BaseModel):
    session_id: str
    batch_number: int = Field(ge=1)
    records: list[ConversationRecord]


class WriteNotesRequest(BaseModel):
    session_id: str
    notes: dict[str, Any]


class SessionRequest(BaseModel):
    session_id: str


class ListRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    root: str | None = None
    criteria: ExperienceFilter | None = Field(default=None, alias='filter')


class ValidateRequest(BaseModel):
    directory_path: str = Field(min_length=1)


def _to_dict(result: Any) -> Response:
    if isinstance(result, BaseModel):
        return result.model_dump(mode='json')
    data = dataclasses.asdict(result)
    # asdict leaves nested pydantic models untouched
    return {k: _jsonable(v) for k, v in data.items()}


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode='json')
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    return value


class ExperienceController:
    """Maps operation requests to use cases and use case outcomes to responses."""

    def __init__(self, repository: ExperienceRepository, protocol_version: str) -> None:
        self._init_uc = InitSessionUseCase(repository)
        self._batch_uc = WriteBatchUseCase(repository)
        self._notes_uc = WriteNotesUseCase(repository)
        self._finalize_uc = FinalizeSessionUseCase(repository, protocol_version)
        self._status_uc = SessionStatusUseCase(repository)
        self._list_uc = ListExperiencesUseCase(repository)
        self._validate_uc = ValidateExperienceUseCase(repository)

        self._operations: dict[str, Callable[[dict[str, Any]], Response]] = {
            'init': self.init,
            'write_batch': self.write_batch,
            'write_notes': self.write_notes,
            'finalize': self.finalize,
            'status': self.status,
            'list': self.list_experiences,
            'validate': self.validate,
        }

    @property
    def operations(self) -> list[str]:
        return list(self._operations)

    def dispatch(self, operation: str, request: dict[str, Any]) -> Response:
        handler = self._operations.get(operation)
        if handler is None:
            return self._failure(operation, SchemaError(f'Unknown operation: {operation}'))
        return handler(request)

    def init(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            req = InitRequest.model_validate(request)
            return self._init_uc.execute(req.summary, req.metadata, req.session_id)

        return self._call('init', run)

    def write_batch(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            req = WriteBatchRequest.model_validate(request)
            return self._batch_uc.execute(req.session_id, req.batch_number, req.records)

        return self._call('write_batch', run)

    def write_notes(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            req = WriteNotesRequest.model_validate(request)
            return self._notes_uc.execute(req.session_id, req.notes)

        return self._call('write_notes', run)

    def finalize(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            return self._finalize_uc.execute(SessionRequest.model_validate(request).session_id)

        return self._call('finalize', run)

    def status(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            status = self._status_uc.execute(SessionRequest.model_validate(request).session_id)
            return {'success': True, **status.model_dump(mode='json')}

        return self._call('status', run)

    def list_experiences(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            req = ListRequest.model_validate(request)
            root = Path(req.root) if req.root else None
            return self._list_uc.execute(root, req.criteria)

        return self._call('list', run)

    def validate(self, request: dict[str, Any]) -> Response:
        def run() -> Any:
            req = ValidateRequest.model_validate(request)
            report = self._validate_uc.execute(Path(req.directory_path))
            return {'success': True, **report.model_dump(mode='json')}

        return self._call('validate', run)

    def _call(self, operation: str, run: Callable[[], Any]) -> Response:
        try:
            result = run()
        except ValidationError as e:
            return self._failure(operation, SchemaError(f'Invalid {operation} request: {e}'))
        except ExperienceStoreError as e:
            return self._failure(operation, e)
        return result if isinstance(result, dict) else _to_dict(result)

    @staticmethod
    def _failure(operation: str, error: ExperienceStoreError) -> Response:
        log.warning('%s failed [%s]: %s', operation, error.code, error)
        return {'success': False, 'error': str(error), 'code': error.code}
