"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import pytest

from experience_store.l1_entities.config import AppConfig
from experience_store.l1_entities.experience import ConversationRecord, ExperienceSummary
from experience_store.l3_interface_adapters.controllers.experience_controller import ExperienceController
from experience_store.l3_interface_adapters.gateways.file_experience_gateway import FileExperienceGateway
from experience_store.l4_frameworks_and_drivers.infra_config import build_app_config

FIXED_NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_records(n: int, prefix: str = 'q') -> list[ConversationRecord]:
    return [ConversationRecord(user=f'{prefix}{i}', response=f'a{i}', rationale=f'r{i}') for i in range(1, n + 1)]


def read_json(path: Path) -> Any:
    return json.loads(path.read_text(encoding='utf-8'))


def write_json(path: Path, data: Any) -> None:
    path.write_text(json.dumps(data, indent=2), encoding='utf-8')


# --- Standard Fixtures ---


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    d = tmp_path / 'experiences'
    d.mkdir()
    return d


@pytest.fixture
def gateway(storage_dir: Path) -> FileExperienceGateway:
    return FileExperienceGateway(storage_dir)


@pytest.fixture
def default_config(storage_dir: Path) -> AppConfig:
    return build_app_config({'storage': {'base_directory': str(storage_dir)}})


@pytest.fixture
def controller(gateway: FileExperienceGateway) -> ExperienceController:
    return ExperienceController(gateway, protocol_version='1.0.0')


@pytest.fixture
def sample_summary() -> ExperienceSummary:
    return ExperienceSummary(
        name='Test Writer',
        context='Pairing on a parser rewrite',
        summary='Rewrote the tokenizer and fixed error recovery.',
        flow=['read grammar', 'rewrite tokenizer', 'add tests'],
        topics=['parsing', 'testing'],
    )


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
protocol_version: "2.0.0"
storage:
  base_directory: "./test_experiences"
  directory_prefix: "exp_"
  max_file_size: 4096
logging:
  level: "DEBUG"
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
