"""Dependency container — composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from experience_store.l1_entities.config import AppConfig
from experience_store.l2_use_cases.ports.experience_repository import ExperienceRepository
from experience_store.l3_interface_adapters.controllers.experience_controller import ExperienceController
from experience_store.l3_interface_adapters.gateways.file_experience_gateway import FileExperienceGateway
from experience_store.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

        storage = config.storage
        self.repository: ExperienceRepository = FileExperienceGateway(
            Path(storage.base_directory),
            directory_prefix=storage.directory_prefix,
            max_file_size=storage.max_file_size,
        )
        self.controller = ExperienceController(self.repository, config.protocol_version)

    @staticmethod
    def config_loader() -> YamlConfigLoader:
        return YamlConfigLoader()
