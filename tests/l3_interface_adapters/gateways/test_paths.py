"""Tests for shared path constants."""

from __future__ import annotations

from pathlib import Path

from experience_store.l3_interface_adapters.gateways.paths import CONFIG_DIR, DATA_DIR, DEFAULT_CONFIG_PATHS


class TestPaths:
    def test_dirs_are_paths(self):
        assert isinstance(CONFIG_DIR, Path)
        assert isinstance(DATA_DIR, Path)

    def test_config_dir_name(self):
        assert CONFIG_DIR.name == 'experience-store'

    def test_default_config_paths(self):
        assert [p.name for p in DEFAULT_CONFIG_PATHS] == ['config.yaml', 'config.yml']
        for p in DEFAULT_CONFIG_PATHS:
            assert p.parent == CONFIG_DIR
