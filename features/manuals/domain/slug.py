"""Slug validation for manuals and sections."""

from __future__ import annotations

import re

SLUG_PATTERN = r"^[a-z0-9][a-z0-9-]*[a-z0-9]$"


class SlugValidator:
    """Checks that URL slugs use lowercase letters, digits and inner hyphens."""

    _PATTERN = re.compile(SLUG_PATTERN)
    _SINGLE_CHARACTER = re.compile(r"[a-z0-9]")

    def validate(self, slug: str | None, label: str = "Slug") -> list[str]:
        if self.is_valid(slug):
            return []
        return [f"{label} should match the pattern: {SLUG_PATTERN}"]

    @classmethod
    def is_valid(cls, slug: str | None) -> bool:
        if not isinstance(slug, str) or not slug:
            return False
        # one alphanumeric character is a valid slug on its own
        if len(slug) == 1:
            return bool(cls._SINGLE_CHARACTER.fullmatch(slug))
        return bool(cls._PATTERN.fullmatch(slug))
