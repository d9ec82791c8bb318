"""Validation of incoming manuals and sections.

A :class:`DocumentValidator` runs an ordered list of checks and concatenates
their messages. The structural check comes first; checks that read fields
the schema guarantees are skipped when the structure is invalid, while slug
checks always run.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, TypeVar

from marshmallow import Schema

from features.manuals.application.dto import PublishManualInput, PublishSectionInput
from features.manuals.application.schemas import ManualSchema, SectionSchema
from features.manuals.domain.safety import SafetyScanner
from features.manuals.domain.slug import SlugValidator

DocumentT = TypeVar("DocumentT")

SECTION_ID_MISMATCH_MESSAGE = "Slug in URL and Section ID must match, ignoring case"


@dataclass(frozen=True)
class ValidationCheck(Generic[DocumentT]):
    name: str
    run: Callable[[DocumentT], list[str]]
    structural: bool = False
    requires_valid_structure: bool = False


class DocumentValidator(Generic[DocumentT]):
    """Runs validation checks in order and aggregates their messages."""

    def __init__(self, checks: Iterable[ValidationCheck[DocumentT]]) -> None:
        self.checks = tuple(checks)

    def validate(self, document: DocumentT) -> list[str]:
        messages: list[str] = []
        structure_valid = True
        for check in self.checks:
            if check.requires_valid_structure and not structure_valid:
                continue
            found = check.run(document)
            if check.structural and found:
                structure_valid = False
            messages.extend(found)
        return messages


def schema_messages(schema: Schema, attributes: Any) -> list[str]:
    """Validate *attributes* with a marshmallow schema and flatten its errors."""

    errors = schema.validate(attributes)
    return list(_flatten_errors(errors))


def _flatten_errors(errors: Any, path: str = "") -> Iterable[str]:
    if isinstance(errors, Mapping):
        for key, value in errors.items():
            if key == "_schema":
                child = path
            elif isinstance(key, int):
                child = f"{path}[{key}]"
            else:
                child = f"{path}.{key}" if path else str(key)
            yield from _flatten_errors(value, child)
    elif isinstance(errors, (list, tuple)):
        for message in errors:
            yield from _flatten_errors(message, path)
    else:
        yield f"{path or 'document'}: {errors}"


def _section_id(attributes: Mapping[str, Any]) -> str:
    return str(attributes["details"]["section_id"])


def build_manual_validator(
    *,
    scanner: SafetyScanner | None = None,
    slug_validator: SlugValidator | None = None,
    schema: Schema | None = None,
) -> DocumentValidator[PublishManualInput]:
    scanner = scanner or SafetyScanner()
    slug_validator = slug_validator or SlugValidator()
    schema = schema or ManualSchema()

    return DocumentValidator(
        [
            ValidationCheck(
                "structure",
                lambda doc: schema_messages(schema, doc.attributes),
                structural=True,
            ),
            ValidationCheck("slug", lambda doc: slug_validator.validate(doc.slug, "Slug")),
            ValidationCheck(
                "safety",
                lambda doc: scanner.scan(doc.attributes),
                requires_valid_structure=True,
            ),
        ]
    )


def build_section_validator(
    *,
    scanner: SafetyScanner | None = None,
    slug_validator: SlugValidator | None = None,
    schema: Schema | None = None,
) -> DocumentValidator[PublishSectionInput]:
    scanner = scanner or SafetyScanner()
    slug_validator = slug_validator or SlugValidator()
    schema = schema or SectionSchema()

    def _slugs(doc: PublishSectionInput) -> list[str]:
        return slug_validator.validate(doc.manual_slug, "Manual slug") + slug_validator.validate(
            doc.section_slug, "Section slug"
        )

    def _section_id_matches(doc: PublishSectionInput) -> list[str]:
        if doc.section_slug.lower() != _section_id(doc.attributes).lower():
            return [SECTION_ID_MISMATCH_MESSAGE]
        return []

    return DocumentValidator(
        [
            ValidationCheck(
                "structure",
                lambda doc: schema_messages(schema, doc.attributes),
                structural=True,
            ),
            ValidationCheck("slug", _slugs),
            ValidationCheck(
                "safety",
                lambda doc: scanner.scan(doc.attributes),
                requires_valid_structure=True,
            ),
            ValidationCheck(
                "section_id",
                _section_id_matches,
                requires_valid_structure=True,
            ),
        ]
    )


__all__ = [
    "DocumentValidator",
    "SECTION_ID_MISMATCH_MESSAGE",
    "ValidationCheck",
    "build_manual_validator",
    "build_section_validator",
    "schema_messages",
]
