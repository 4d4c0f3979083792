"""Gateway: file-based experience storage — implements ExperienceRepository port."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from experience_store.l1_entities.errors import StorageError
from experience_store.l3_interface_adapters.gateways.path_resolver import (
    DEFAULT_DIRECTORY_PREFIX,
    resolve_session_dir,
)

log = logging.getLogger('exs.gateway')


def dump_json(data: Any) -> str:
    """Canonical on-disk form; equal data always serializes to identical text."""
    return json.dumps(data, indent=2, ensure_ascii=False) + '\n'


class FileExperienceGateway:
    """Reads and writes session directories under a storage root."""

    def __init__(
        self,
        base_dir: Path,
        *,
        directory_prefix: str = DEFAULT_DIRECTORY_PREFIX,
        max_file_size: int | None = None,
    ) -> None:
        self._base_dir = Path(base_dir).expanduser()
        self._prefix = directory_prefix
        self._max_file_size = max_file_size

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def session_dir(self, session_id: str) -> Path:
        return resolve_session_dir(self._base_dir, session_id, self._prefix)

    def ensure_dir(self, directory: Path) -> None:
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f'Failed to create directory {directory}: {e}') from e

    def exists(self, directory: Path) -> bool:
        return directory.is_dir()

    def list_files(self, directory: Path) -> list[str]:
        if not directory.is_dir():
            return []
        try:
            return sorted(p.name for p in directory.iterdir() if p.is_file())
        except OSError as e:
            raise StorageError(f'Failed to list {directory}: {e}') from e

    def list_subdirectories(self, root: Path) -> list[Path]:
        if not root.is_dir():
            return []
        try:
            return sorted(p for p in root.iterdir() if p.is_dir())
        except OSError as e:
            raise StorageError(f'Failed to list {root}: {e}') from e

    def write_json(self, path: Path, data: Any) -> int:
        payload = dump_json(data).encode('utf-8')
        if self._max_file_size is not None and len(payload) > self._max_file_size:
            raise StorageError(f'{path.name} would be {len(payload)} bytes; the limit is {self._max_file_size}')
        self.ensure_dir(path.parent)
        try:
            path.write_bytes(payload)
        except OSError as e:
            raise StorageError(f'Failed to write {path}: {e}') from e
        log.debug('Wrote %s (%d bytes)', path, len(payload))
        return len(payload)

    def read_json(self, path: Path) -> Any:
        try:
            text = path.read_text(encoding='utf-8')
        except FileNotFoundError:
            raise
        except OSError as e:
            raise StorageError(f'Failed to read {path}: {e}') from e
        except UnicodeDecodeError as e:
            raise ValueError(f'{path.name} is not UTF-8 text: {e}') from e
        return json.loads(text)

    def delete(self, path: Path) -> bool:
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f'Failed to delete {path}: {e}') from e
        log.debug('Deleted %s', path)
        return True

    def directory_size(self, directory: Path) -> int:
        if not directory.is_dir():
            return 0
        try:
            return sum(p.stat().st_size for p in directory.iterdir() if p.is_file())
        except OSError as e:
            raise StorageError(f'Failed to size {directory}: {e}') from e
