"""Gateway: YAML configuration loader — reads config files into plain dicts."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import yaml

from experience_store.l3_interface_adapters.gateways import paths


class YamlConfigLoader:
    """Finds and reads the YAML config, then layers overrides on top.

    Validation against ``AppConfig`` happens after defaults are merged in L4,
    so everything returned here is still a raw dict.
    """

    def __init__(self, search_paths: Iterable[Path] | None = None) -> None:
        self._search_paths = list(search_paths) if search_paths is not None else None

    @property
    def search_paths(self) -> list[Path]:
        return self._search_paths if self._search_paths is not None else list(paths.DEFAULT_CONFIG_PATHS)

    def locate(self, config_path: str | None = None) -> Path | None:
        """Explicit path if given (must exist), else the first existing search path."""
        if config_path is not None:
            path = Path(config_path).expanduser()
            if not path.is_file():
                raise FileNotFoundError(f'Config file not found: {path}')
            return path
        return next((p for p in self.search_paths if p.is_file()), None)

    def load_raw(
        self,
        config_path: str | None = None,
        overrides: dict | None = None,
    ) -> dict:
        """Return the file's data with *overrides* deep-merged in; ``{}`` when no file exists."""
        path = self.locate(config_path)
        data = read_yaml_mapping(path) if path is not None else {}
        if overrides:
            deep_merge(data, overrides)
        return data


def read_yaml_mapping(path: Path) -> dict:
    """Parse *path*; an empty file is ``{}``, anything but a mapping is a ValueError."""
    try:
        data = yaml.safe_load(path.read_text(encoding='utf-8'))
    except yaml.YAMLError as e:
        raise ValueError(f'Config file {path} is not valid YAML: {e}') from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f'Config file {path} must contain a mapping, got {type(data).__name__}')
    return data


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base
