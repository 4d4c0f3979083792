"""L1 entity: session lifecycle state derived from a directory listing."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field

NO_FURTHER_BATCHES = -1


class SessionState(enum.Enum):
    NOT_FOUND = 'not_found'
    INITIALIZING = 'initializing'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'


class SessionStatus(BaseModel):
    status: SessionState
    directory_path: str
    created_files: list[str] = Field(default_factory=list)
    next_batch_number: int = Field(description=f'Next batch to write; {NO_FURTHER_BATCHES} once completed')
