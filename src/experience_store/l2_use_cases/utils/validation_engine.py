"""Layered validation of a finalized experience record.

Layers, each callable on its own:

- ``check_schema``     required-field shape of the manifest and every supplied file
- ``check_semantics``  per batch, declared ``count`` vs actual records (warnings)
- ``check_cross_file`` sum over listed batches vs ``total_conversations`` (warning)
- ``check_presence``   every file the manifest owns was supplied

Syntax (JSON parsing) happens before this module is reached: parsed content is
passed in ``files`` and files that failed to parse are passed in ``unreadable``.
A record is valid iff the schema and presence layers pass; count drift is
reported, never fatal.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from experience_store.l1_entities.experience import BatchFile, Manifest
from experience_store.l1_entities.experience_file import MANIFEST_FILENAME, ExperienceFileKind, classify
from experience_store.l1_entities.validation_report import FieldError, FileValidation, LayerResult, ValidationReport


def _field_errors(exc: ValidationError) -> list[FieldError]:
    return [
        FieldError(
            field='/' + '/'.join(str(part) for part in err['loc']),
            message=err['msg'],
            value=err.get('input'),
        )
        for err in exc.errors()
    ]


def parse_manifest(manifest: Any) -> tuple[Manifest | None, list[FieldError]]:
    try:
        return Manifest.model_validate(manifest), []
    except ValidationError as e:
        return None, _field_errors(e)


def _parse_batch(content: Any) -> BatchFile | None:
    try:
        return BatchFile.model_validate(content)
    except ValidationError:
        return None


def validate_file(filename: str, content: Any) -> FileValidation:
    """Schema check for a single file, dispatched on its kind."""
    kind = classify(filename)
    result = FileValidation(file=filename, kind=kind)

    if kind is ExperienceFileKind.MANIFEST:
        _, result.errors = parse_manifest(content)
    elif kind is ExperienceFileKind.BATCH:
        try:
            BatchFile.model_validate(content)
        except ValidationError as e:
            result.errors = _field_errors(e)
    elif kind is ExperienceFileKind.NOTES:
        # Free-form by design: anything but null is acceptable.
        if content is None:
            result.errors = [FieldError(field='notes', message='Notes content cannot be null')]
    else:
        result.errors = [FieldError(field='filename', message=f'Unknown file type: {filename}', value=filename)]

    result.valid = not result.errors
    return result


def check_schema(
    manifest: Any,
    files: Mapping[str, Any],
    unreadable: Mapping[str, str] | None = None,
) -> LayerResult:
    layer = LayerResult()
    _, manifest_errors = parse_manifest(manifest)
    for err in manifest_errors:
        layer.errors.append(f'{MANIFEST_FILENAME} {err.field}: {err.message}')

    for filename, content in files.items():
        fv = validate_file(filename, content)
        layer.file_validations.append(fv)
        layer.errors.extend(f'{filename} {err.field}: {err.message}' for err in fv.errors)

    for filename, reason in (unreadable or {}).items():
        fv = FileValidation(
            file=filename,
            kind=classify(filename),
            valid=False,
            errors=[FieldError(field='syntax', message=reason)],
        )
        layer.file_validations.append(fv)
        layer.errors.append(f'{filename}: {reason}')

    layer.valid = not layer.errors
    return layer


def check_semantics(files: Mapping[str, Any]) -> LayerResult:
    layer = LayerResult()
    for filename, content in files.items():
        if classify(filename) is not ExperienceFileKind.BATCH:
            continue
        batch = _parse_batch(content)
        if batch is None or batch.count == batch.actual_count:
            continue
        layer.warnings.append(
            f'{filename}: conversation count mismatch: declared {batch.count}, found {batch.actual_count}'
        )
    layer.valid = not layer.warnings
    return layer


def check_cross_file(manifest: Manifest, files: Mapping[str, Any]) -> LayerResult:
    layer = LayerResult()
    found = 0
    for filename in manifest.files.conversations:
        batch = _parse_batch(files[filename]) if filename in files else None
        if batch is not None:
            found += batch.actual_count
    if found != manifest.total_conversations:
        layer.warnings.append(
            f'Total conversation count mismatch: manifest says {manifest.total_conversations}, found {found}'
        )
    layer.valid = not layer.warnings
    return layer


def check_presence(
    manifest: Manifest,
    files: Mapping[str, Any],
    unreadable: Mapping[str, str] | None = None,
) -> LayerResult:
    layer = LayerResult()
    supplied = set(files) | set(unreadable or {})
    layer.missing_files = [name for name in manifest.files.owned() if name not in supplied]
    layer.errors = [f'Missing file: {name}' for name in layer.missing_files]
    layer.valid = not layer.missing_files
    return layer


def validate(
    manifest: Any,
    files: Mapping[str, Any],
    *,
    unreadable: Mapping[str, str] | None = None,
) -> ValidationReport:
    """Run every layer and fold the outcomes into one report."""
    schema = check_schema(manifest, files, unreadable)
    semantic = check_semantics(files)
    parsed, _ = parse_manifest(manifest)

    # Cross-file and presence need a trustworthy file map; skip them on a broken manifest.
    if parsed is not None:
        cross_file = check_cross_file(parsed, files)
        presence = check_presence(parsed, files, unreadable)
    else:
        cross_file = LayerResult(valid=False)
        presence = LayerResult(valid=False, errors=['Presence not checked: manifest is invalid'])

    return ValidationReport(
        valid=schema.valid and presence.valid,
        manifest_valid=parsed is not None,
        schema_valid=schema.valid,
        semantic_valid=semantic.valid,
        cross_file_valid=cross_file.valid,
        presence_valid=presence.valid,
        file_validations=schema.file_validations,
        missing_files=presence.missing_files,
        errors=schema.errors + presence.errors,
        warnings=semantic.warnings + cross_file.warnings,
    )


def manifest_failure_report(reason: str) -> ValidationReport:
    """Report for a directory whose manifest is absent or is not JSON."""
    return ValidationReport(
        valid=False,
        manifest_valid=False,
        schema_valid=False,
        semantic_valid=True,
        cross_file_valid=False,
        presence_valid=False,
        file_validations=[
            FileValidation(
                file=MANIFEST_FILENAME,
                kind=ExperienceFileKind.MANIFEST,
                valid=False,
                errors=[FieldError(field='syntax', message=reason)],
            )
        ],
        errors=[f'{MANIFEST_FILENAME}: {reason}'],
    )
