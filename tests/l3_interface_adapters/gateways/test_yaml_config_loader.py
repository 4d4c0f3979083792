"""Tests for YAML config loader gateway."""

from __future__ import annotations

from pathlib import Path

import pytest

from experience_store.l3_interface_adapters.gateways import paths
from experience_store.l3_interface_adapters.gateways.yaml_config_loader import (
    YamlConfigLoader,
    deep_merge,
    read_yaml_mapping,
)


class TestYamlConfigLoader:
    def test_load_raw_from_yaml(self, sample_config_yaml: Path):
        raw = YamlConfigLoader().load_raw(str(sample_config_yaml))
        assert raw['protocol_version'] == '2.0.0'
        assert raw['storage']['directory_prefix'] == 'exp_'
        assert raw['storage']['max_file_size'] == 4096
        assert raw['logging']['level'] == 'DEBUG'

    def test_load_nonexistent_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            YamlConfigLoader().load_raw(str(tmp_path / 'nonexistent.yaml'))

    def test_overrides_deep_merge(self, sample_config_yaml: Path):
        raw = YamlConfigLoader().load_raw(
            str(sample_config_yaml),
            overrides={'storage': {'base_directory': '/srv/exp'}},
        )
        assert raw['storage']['base_directory'] == '/srv/exp'
        assert raw['storage']['directory_prefix'] == 'exp_'

    def test_empty_yaml_is_empty_dict(self, tmp_path: Path):
        p = tmp_path / 'empty.yaml'
        p.write_text('', encoding='utf-8')
        assert YamlConfigLoader().load_raw(str(p)) == {}

    def test_non_mapping_rejected(self, tmp_path: Path):
        p = tmp_path / 'list.yaml'
        p.write_text('- a\n- b\n', encoding='utf-8')
        with pytest.raises(ValueError, match='mapping'):
            read_yaml_mapping(p)

    def test_invalid_yaml_rejected(self, tmp_path: Path):
        p = tmp_path / 'bad.yaml'
        p.write_text('storage: [unclosed\n', encoding='utf-8')
        with pytest.raises(ValueError, match='not valid YAML'):
            YamlConfigLoader().load_raw(str(p))

    def test_preserves_extra_keys(self, tmp_path: Path):
        p = tmp_path / 'extra.yaml'
        p.write_text('writer:\n  default_name: "ci"\n', encoding='utf-8')
        assert YamlConfigLoader().load_raw(str(p))['writer'] == {'default_name': 'ci'}


class TestDefaultConfigResolution:
    _MINIMAL_CONFIG = 'protocol_version: "1.1.0"\n'

    def test_first_existing_search_path_wins(self, tmp_path: Path):
        (tmp_path / 'config.yml').write_text(self._MINIMAL_CONFIG, encoding='utf-8')
        loader = YamlConfigLoader([tmp_path / 'config.yaml', tmp_path / 'config.yml'])
        assert loader.locate() == tmp_path / 'config.yml'
        assert loader.load_raw()['protocol_version'] == '1.1.0'

    def test_uses_default_config_paths(self, tmp_path: Path, monkeypatch):
        config_dir = tmp_path / 'experience-store'
        config_dir.mkdir()
        (config_dir / 'config.yaml').write_text(self._MINIMAL_CONFIG, encoding='utf-8')
        monkeypatch.setattr(paths, 'DEFAULT_CONFIG_PATHS', [config_dir / 'config.yaml', config_dir / 'config.yml'])

        assert YamlConfigLoader().load_raw()['protocol_version'] == '1.1.0'

    def test_no_default_config_returns_empty(self, tmp_path: Path):
        loader = YamlConfigLoader([tmp_path / 'nonexistent' / 'config.yaml'])
        assert loader.locate() is None
        assert loader.load_raw() == {}

    def test_no_default_config_with_overrides(self, tmp_path: Path):
        loader = YamlConfigLoader([])
        assert loader.load_raw(overrides={'logging': {'level': 'ERROR'}}) == {'logging': {'level': 'ERROR'}}


def test_deep_merge_replaces_non_dict_values():
    base = {'a': {'b': 1, 'c': [1]}, 'd': 1}
    deep_merge(base, {'a': {'c': [2]}, 'd': {'e': 1}})
    assert base == {'a': {'b': 1, 'c': [2]}, 'd': {'e': 1}}
