"""Validation report models; transient, never persisted."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from experience_store.l1_entities.experience_file import ExperienceFileKind


class FieldError(BaseModel):
    field: str
    message: str
    value: Any = None


class FileValidation(BaseModel):
    file: str
    kind: ExperienceFileKind | None = None
    valid: bool = True
    errors: list[FieldError] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class LayerResult(BaseModel):
    """Outcome of a single validation layer."""

    valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    file_validations: list[FileValidation] = Field(default_factory=list)
    missing_files: list[str] = Field(default_factory=list)


class ValidationReport(BaseModel):
    valid: bool
    manifest_valid: bool
    schema_valid: bool
    semantic_valid: bool
    cross_file_valid: bool
    presence_valid: bool
    file_validations: list[FileValidation] = Field(default_factory=list)
    missing_files: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
