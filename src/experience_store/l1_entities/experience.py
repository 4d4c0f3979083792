"""Experience record Pydantic models: the persisted JSON shapes, no I/O.

Every model tolerates unknown fields so that files written by a newer writer
still load in an older reader.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ConversationRecord(BaseModel):
    """One user/response exchange. Content is carried, never interpreted."""

    model_config = ConfigDict(extra='allow')

    user: str
    response: str
    rationale: str | None = None


class BatchFile(BaseModel):
    """Contents of ``conversations_NNN.json``."""

    model_config = ConfigDict(extra='allow')

    batch_number: int = Field(ge=1)
    count: int = Field(ge=0, description='Declared record count, written by the batch writer')
    records: list[ConversationRecord]

    @property
    def actual_count(self) -> int:
        return len(self.records)


class ExperienceSummary(BaseModel):
    """Writer-supplied summary captured at init and copied into the manifest."""

    model_config = ConfigDict(extra='allow')

    name: str
    context: str
    summary: str = ''
    flow: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)


class StagingRecord(BaseModel):
    """Contents of the transient ``summary.json``; consumed once by finalize."""

    model_config = ConfigDict(extra='allow')

    session_id: str
    created_at: str
    summary: ExperienceSummary
    metadata: dict[str, Any] = Field(default_factory=dict)


class ManifestFiles(BaseModel):
    model_config = ConfigDict(extra='allow')

    conversations: list[str]
    notes: str | None = None

    def owned(self) -> list[str]:
        """Every filename the manifest claims, batches first."""
        names = list(self.conversations)
        if self.notes:
            names.append(self.notes)
        return names


class Manifest(BaseModel):
    """Contents of ``manifest.json``; its presence marks a session completed."""

    model_config = ConfigDict(extra='allow')

    protocol_version: str
    name: str
    context: str
    summary: str
    flow: list[str]
    topics: list[str]
    files: ManifestFiles
    total_conversations: int = Field(ge=0)
    session_id: str | None = None
    created_at: str | None = None
    metadata: dict[str, Any] | None = None
