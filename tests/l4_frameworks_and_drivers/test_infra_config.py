"""Tests for application defaults and config assembly."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from experience_store.l3_interface_adapters.gateways.paths import DATA_DIR
from experience_store.l4_frameworks_and_drivers.infra_config import APP_CONFIG_DEFAULTS, build_app_config


class TestBuildAppConfig:
    def test_defaults(self):
        cfg = build_app_config({})
        assert cfg.protocol_version == '1.0.0'
        assert cfg.storage.base_directory == str(DATA_DIR / 'experiences')
        assert cfg.storage.directory_prefix == 'experience_'
        assert cfg.storage.max_file_size == 10 * 1024 * 1024
        assert cfg.logging.level == 'INFO'
        assert cfg.logging.file is None

    def test_partial_override(self):
        cfg = build_app_config({'storage': {'directory_prefix': 'exp_'}})
        assert cfg.storage.directory_prefix == 'exp_'
        assert cfg.storage.max_file_size == 10 * 1024 * 1024

    def test_defaults_not_mutated(self):
        build_app_config({'storage': {'directory_prefix': 'exp_'}, 'logging': {'level': 'DEBUG'}})
        assert APP_CONFIG_DEFAULTS['storage']['directory_prefix'] == 'experience_'
        assert APP_CONFIG_DEFAULTS['logging']['level'] == 'INFO'

    def test_from_yaml_file(self, sample_config_yaml):
        from experience_store.l3_interface_adapters.gateways.yaml_config_loader import YamlConfigLoader

        cfg = build_app_config(YamlConfigLoader().load_raw(str(sample_config_yaml)))
        assert cfg.protocol_version == '2.0.0'
        assert cfg.storage.base_directory == './test_experiences'
        assert cfg.storage.max_file_size == 4096

    def test_bad_type_rejected(self):
        with pytest.raises(ValidationError):
            build_app_config({'storage': {'max_file_size': 'lots'}})
