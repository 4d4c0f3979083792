"""Tests for the listing filter."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from experience_store.l1_entities.listing import ExperienceEntry, ExperienceFilter, parse_timestamp


@pytest.fixture
def entry() -> ExperienceEntry:
    return ExperienceEntry(
        protocol_version='1.0.0',
        directory_path='/tmp/experience_s1',
        name='Parser Helper',
        context='Compiler work',
        summary='s',
        topics=['Parsing', 'testing'],
        total_conversations=12,
        created_at='2026-03-14T09:30:00+00:00',
    )


class TestExperienceFilter:
    def test_empty_filter_matches(self, entry):
        assert ExperienceFilter().matches(entry)

    def test_name_substring_case_insensitive(self, entry):
        assert ExperienceFilter(name='parser').matches(entry)
        assert not ExperienceFilter(name='linker').matches(entry)

    def test_context_substring(self, entry):
        assert ExperienceFilter(context='COMPILER').matches(entry)
        assert not ExperienceFilter(context='frontend').matches(entry)

    def test_topics_intersection(self, entry):
        assert ExperienceFilter(topics=['parsing', 'cooking']).matches(entry)
        assert not ExperienceFilter(topics=['cooking']).matches(entry)

    def test_topics_are_whole_words_not_substrings(self, entry):
        assert not ExperienceFilter(topics=['pars']).matches(entry)

    def test_conversation_range(self, entry):
        assert ExperienceFilter(min_conversations=12, max_conversations=12).matches(entry)
        assert not ExperienceFilter(min_conversations=13).matches(entry)
        assert not ExperienceFilter(max_conversations=11).matches(entry)

    def test_date_range(self, entry):
        assert ExperienceFilter(created_after=datetime(2026, 3, 1, tzinfo=timezone.utc)).matches(entry)
        assert not ExperienceFilter(created_after=datetime(2026, 4, 1, tzinfo=timezone.utc)).matches(entry)
        assert not ExperienceFilter(created_before=datetime(2026, 3, 1, tzinfo=timezone.utc)).matches(entry)

    def test_naive_dates_treated_as_utc(self, entry):
        assert ExperienceFilter(created_before=datetime(2026, 3, 15)).matches(entry)

    def test_missing_created_at_passes_date_filters(self, entry):
        undated = entry.model_copy(update={'created_at': None})
        assert ExperienceFilter(created_after=datetime(2030, 1, 1, tzinfo=timezone.utc)).matches(undated)


class TestParseTimestamp:
    def test_z_suffix(self):
        assert parse_timestamp('2026-03-14T09:30:00Z') == datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)

    def test_naive_becomes_utc(self):
        assert parse_timestamp('2026-03-14T09:30:00').tzinfo is timezone.utc
