"""Listing entities: per-session discovery entries and the filter applied to them."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class ExperienceEntry(BaseModel):
    """Summary fields of one completed session, as extracted from its manifest."""

    protocol_version: str
    directory_path: str
    name: str
    context: str
    summary: str
    flow: list[str] = Field(default_factory=list)
    topics: list[str] = Field(default_factory=list)
    total_conversations: int
    session_id: str | None = None
    created_at: str | None = None


class DirectorySummary(BaseModel):
    directory: str
    summary: str
    file_count: int


class ExperienceFilter(BaseModel):
    """All conditions are ANDed; an unset condition always passes."""

    name: str | None = None
    context: str | None = None
    topics: list[str] = Field(default_factory=list)
    min_conversations: int | None = Field(default=None, ge=0)
    max_conversations: int | None = Field(default=None, ge=0)
    created_after: datetime | None = None
    created_before: datetime | None = None

    def matches(self, entry: ExperienceEntry) -> bool:
        if self.name and self.name.lower() not in entry.name.lower():
            return False
        if self.context and self.context.lower() not in entry.context.lower():
            return False
        if self.topics:
            wanted = {t.casefold() for t in self.topics}
            if not wanted & {t.casefold() for t in entry.topics}:
                return False
        if self.min_conversations is not None and entry.total_conversations < self.min_conversations:
            return False
        if self.max_conversations is not None and entry.total_conversations > self.max_conversations:
            return False
        return self._matches_dates(entry)

    def _matches_dates(self, entry: ExperienceEntry) -> bool:
        # Sessions without a creation timestamp are never excluded by a date bound.
        if entry.created_at is None or (self.created_after is None and self.created_before is None):
            return True
        try:
            created = parse_timestamp(entry.created_at)
        except ValueError:
            return True
        if self.created_after is not None and created < _aware(self.created_after):
            return False
        if self.created_before is not None and created > _aware(self.created_before):
            return False
        return True


def _aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)
