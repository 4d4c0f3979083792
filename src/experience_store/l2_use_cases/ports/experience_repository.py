"""Port: filesystem access for session directories."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol


class ExperienceRepository(Protocol):
    """Abstract storage for session directories and their JSON files."""

    @property
    def base_dir(self) -> Path: ...

    def session_dir(self, session_id: str) -> Path:
        """Resolve *session_id* to its directory. Raises InvalidIdentifierError."""
        ...

    def exists(self, directory: Path) -> bool: ...

    def list_files(self, directory: Path) -> list[str]:
        """Sorted regular-file names in *directory*; empty if it does not exist."""
        ...

    def list_subdirectories(self, root: Path) -> list[Path]: ...

    def write_json(self, path: Path, data: Any) -> int:
        """Serialize *data* to *path*, creating its directory and replacing any prior content.

        Returns bytes written. Nothing touches disk when the payload is refused.
        """
        ...

    def read_json(self, path: Path) -> Any:
        """Parse *path*. Raises FileNotFoundError if absent, ValueError if not JSON."""
        ...

    def delete(self, path: Path) -> bool:
        """Remove *path* if present. Returns whether a file was removed."""
        ...

    def directory_size(self, directory: Path) -> int: ...
