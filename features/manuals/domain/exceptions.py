"""Exceptions raised by the manuals publishing feature."""
from __future__ import annotations

from typing import Any, Iterable


class ManualsError(Exception):
    """Base class for manuals publishing errors."""


class DocumentValidationError(ManualsError):
    """The incoming manual or section failed validation."""

    def __init__(self, errors: Iterable[str]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(self.errors) or "document is invalid")


class PublishingApiError(ManualsError):
    """The publishing API answered with an error status."""

    def __init__(self, status_code: int, body: Any = None) -> None:
        super().__init__(f"Publishing API returned {status_code}")
        self.status_code = status_code
        self.body = body


class PublishingApiUnavailableError(ManualsError):
    """The publishing API could not be reached."""


class OrganisationLookupError(ManualsError):
    """An organisation could not be resolved because the lookup failed."""
