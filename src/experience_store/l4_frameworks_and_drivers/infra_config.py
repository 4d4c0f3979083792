"""Application defaults — lives in L4, not domain."""

from __future__ import annotations

import copy

from experience_store.l1_entities.config import AppConfig
from experience_store.l3_interface_adapters.gateways.paths import DATA_DIR
from experience_store.l3_interface_adapters.gateways.path_resolver import DEFAULT_DIRECTORY_PREFIX
from experience_store.l3_interface_adapters.gateways.yaml_config_loader import deep_merge

APP_CONFIG_DEFAULTS: dict = {
    'protocol_version': '1.0.0',
    'storage': {
        'base_directory': str(DATA_DIR / 'experiences'),
        'directory_prefix': DEFAULT_DIRECTORY_PREFIX,
        'max_file_size': 10 * 1024 * 1024,
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


def build_app_config(raw: dict) -> AppConfig:
    """Merge *raw* user overrides on top of defaults, then validate."""
    merged = copy.deepcopy(APP_CONFIG_DEFAULTS)
    deep_merge(merged, raw)
    return AppConfig.model_validate(merged)
