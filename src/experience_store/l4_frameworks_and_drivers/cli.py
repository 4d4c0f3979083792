"""CLI entry point for experience-store."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import click

from experience_store import __version__

_DATETIME_FORMATS = ['%Y-%m-%d', '%Y-%m-%dT%H:%M:%S', '%Y-%m-%dT%H:%M:%S%z']


def _parse_meta(pairs: tuple[str, ...]) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dict."""
    meta: dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition('=')
        if not sep or not key:
            raise click.BadParameter(f'expected KEY=VALUE, got {pair!r}', param_hint='--meta')
        meta[key] = value
    return meta


def _read_json(stream: Any, what: str) -> Any:
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f'{what} is not valid JSON: {e}') from e


def _emit(response: dict[str, Any], *, ok: bool | None = None) -> None:
    click.echo(json.dumps(response, indent=2, ensure_ascii=False))
    if not (response.get('success', False) if ok is None else ok):
        sys.exit(1)


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(dir_okay=False),
    help='Path to YAML config file.',
)
@click.option(
    '-s',
    '--storage-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Storage root holding the session directories.',
)
@click.option(
    '--log-level',
    default=None,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR'], case_sensitive=False),
    help='Log level for stderr output.',
)
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config_path, storage_dir, log_level):
    """experience-store -- write, finalize, discover and validate experience records."""
    from experience_store.l4_frameworks_and_drivers.container import (  # noqa: PLC0415 -- deferred: not needed for --help
        DependencyContainer,
    )
    from experience_store.l4_frameworks_and_drivers.infra_config import (  # noqa: PLC0415 -- deferred: not needed for --help
        build_app_config,
    )
    from experience_store.l4_frameworks_and_drivers.logging_setup import (  # noqa: PLC0415 -- deferred: not needed for --help
        setup_logging,
    )

    overrides: dict = {}
    if storage_dir:
        overrides['storage'] = {'base_directory': storage_dir}
    if log_level:
        overrides['logging'] = {'level': log_level.upper()}

    try:
        raw = DependencyContainer.config_loader().load_raw(config_path, overrides=overrides or None)
        config = build_app_config(raw)
    except (FileNotFoundError, ValueError) as e:
        # pydantic's ValidationError is a ValueError too
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)

    setup_logging(config.logging.level, Path(config.logging.file) if config.logging.file else None)
    ctx.obj = DependencyContainer(config)


@cli.command('init')
@click.option('--session-id', default=None, help='Session id; a random one is generated when omitted.')
@click.option('--name', required=True, help='Name of the writer.')
@click.option('--context', required=True, help='Context the experience happened in.')
@click.option('--summary', default='', help='Free-text summary of the experience.')
@click.option('--flow', multiple=True, help='One step of the experience flow (repeatable).')
@click.option('--topic', multiple=True, help='Main topic (repeatable).')
@click.option('--meta', multiple=True, help='Free-form metadata as KEY=VALUE (repeatable).')
@click.pass_obj
def init_cmd(container, session_id, name, context, summary, flow, topic, meta):
    """Create a session directory and stage its summary."""
    request = {
        'session_id': session_id,
        'metadata': _parse_meta(meta),
        'summary': {
            'name': name,
            'context': context,
            'summary': summary,
            'flow': list(flow),
            'topics': list(topic),
        },
    }
    _emit(container.controller.init(request))


@cli.command('write-batch')
@click.argument('session_id')
@click.argument('batch_number', type=int)
@click.argument('records_file', type=click.File('r', encoding='utf-8'))
@click.pass_obj
def write_batch_cmd(container, session_id, batch_number, records_file):
    """Write RECORDS_FILE (a JSON list, '-' for stdin) as batch BATCH_NUMBER."""
    records = _read_json(records_file, 'RECORDS_FILE')
    request = {'session_id': session_id, 'batch_number': batch_number, 'records': records}
    _emit(container.controller.write_batch(request))


@cli.command('write-notes')
@click.argument('session_id')
@click.argument('notes_file', type=click.File('r', encoding='utf-8'))
@click.pass_obj
def write_notes_cmd(container, session_id, notes_file):
    """Write NOTES_FILE (a JSON object, '-' for stdin) as the session notes."""
    notes = _read_json(notes_file, 'NOTES_FILE')
    _emit(container.controller.write_notes({'session_id': session_id, 'notes': notes}))


@cli.command('finalize')
@click.argument('session_id')
@click.pass_obj
def finalize_cmd(container, session_id):
    """Aggregate batches into manifest.json and remove the staging record."""
    _emit(container.controller.finalize({'session_id': session_id}))


@cli.command('status')
@click.argument('session_id')
@click.pass_obj
def status_cmd(container, session_id):
    """Report the session state and the next batch number to write."""
    _emit(container.controller.status({'session_id': session_id}))


@cli.command('list')
@click.option('--root', default=None, type=click.Path(file_okay=False), help='Directory to scan instead of storage.')
@click.option('--name', default=None, help='Substring match on the writer name.')
@click.option('--context', default=None, help='Substring match on the context.')
@click.option('--topic', multiple=True, help='Keep sessions sharing at least one topic (repeatable).')
@click.option('--min-conversations', type=click.IntRange(min=0), default=None)
@click.option('--max-conversations', type=click.IntRange(min=0), default=None)
@click.option('--created-after', type=click.DateTime(formats=_DATETIME_FORMATS), default=None)
@click.option('--created-before', type=click.DateTime(formats=_DATETIME_FORMATS), default=None)
@click.pass_obj
def list_cmd(container, root, name, context, topic, min_conversations, max_conversations, created_after, created_before):
    """List completed sessions, optionally filtered."""
    criteria = {
        'name': name,
        'context': context,
        'topics': list(topic),
        'min_conversations': min_conversations,
        'max_conversations': max_conversations,
        'created_after': created_after.isoformat() if created_after else None,
        'created_before': created_before.isoformat() if created_before else None,
    }
    _emit(container.controller.list_experiences({'root': root, 'filter': criteria}))


@cli.command('validate')
@click.argument('directory', type=click.Path(file_okay=False))
@click.pass_obj
def validate_cmd(container, directory):
    """Validate DIRECTORY; exits non-zero unless the record is valid."""
    response = container.controller.validate({'directory_path': directory})
    _emit(response, ok=response.get('success', False) and response.get('valid', False))
