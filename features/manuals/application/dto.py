"""Manuals publishing application layer DTOs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True)
class PublishManualInput:
    slug: str
    attributes: Mapping[str, Any]


@dataclass(slots=True)
class PublishSectionInput:
    manual_slug: str
    section_slug: str
    attributes: Mapping[str, Any]


@dataclass(slots=True)
class PublishResult:
    """Status code and body answered by the publishing API."""

    code: int
    body: Any = None


@dataclass(slots=True)
class PublishOutcome:
    result: PublishResult
    base_path: str
    govuk_url: str
