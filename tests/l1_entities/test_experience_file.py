"""Tests for file naming and file-kind classification."""

from __future__ import annotations

from experience_store.l1_entities.experience_file import (
    ExperienceFileKind,
    batch_filename,
    classify,
    parse_batch_number,
    sorted_batch_files,
)


class TestBatchFilename:
    def test_zero_padded_to_three(self):
        assert batch_filename(1) == 'conversations_001.json'
        assert batch_filename(42) == 'conversations_042.json'

    def test_wider_numbers_keep_all_digits(self):
        assert batch_filename(1000) == 'conversations_1000.json'

    def test_parse_roundtrip(self):
        assert parse_batch_number(batch_filename(7)) == 7

    def test_parse_rejects_other_names(self):
        assert parse_batch_number('conversations_abc.json') is None
        assert parse_batch_number('conversations_001.json.bak') is None
        assert parse_batch_number('notes.json') is None


class TestClassify:
    def test_known_kinds(self):
        assert classify('manifest.json') is ExperienceFileKind.MANIFEST
        assert classify('notes.json') is ExperienceFileKind.NOTES
        assert classify('conversations_003.json') is ExperienceFileKind.BATCH

    def test_staging_and_strangers_are_unclassified(self):
        assert classify('summary.json') is None
        assert classify('README.md') is None

    def test_member_count(self):
        assert len(ExperienceFileKind) == 3


class TestSortedBatchFiles:
    def test_numeric_not_lexicographic(self):
        names = ['conversations_1000.json', 'conversations_002.json', 'conversations_999.json']
        assert sorted_batch_files(names) == [
            'conversations_002.json',
            'conversations_999.json',
            'conversations_1000.json',
        ]

    def test_ignores_non_batch_files(self):
        names = ['summary.json', 'conversations_001.json', 'notes.json']
        assert sorted_batch_files(names) == ['conversations_001.json']
