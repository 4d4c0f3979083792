"""Session id → directory mapping; the only guard against path traversal."""

from __future__ import annotations

from pathlib import Path

from experience_store.l1_entities.errors import InvalidIdentifierError

DEFAULT_DIRECTORY_PREFIX = 'experience_'

_FORBIDDEN = ('/', '\\', '..', '\x00')


def validate_session_id(session_id: str) -> str:
    """Return *session_id* unchanged, or raise InvalidIdentifierError."""
    if not session_id or any(token in session_id for token in _FORBIDDEN):
        raise InvalidIdentifierError(f'Invalid session_id; it cannot contain path characters: {session_id!r}')
    return session_id


def resolve_session_dir(base_dir: Path, session_id: str, prefix: str = DEFAULT_DIRECTORY_PREFIX) -> Path:
    """Absolute ``<base_dir>/<prefix><session_id>``. Pure: nothing is created or read."""
    validate_session_id(session_id)
    return Path(base_dir).expanduser().resolve() / f'{prefix}{session_id}'
