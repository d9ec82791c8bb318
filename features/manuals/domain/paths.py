"""Base path computation for published manuals and sections."""

from __future__ import annotations

GUIDANCE_PREFIX = "/guidance/"


def _join(*segments: str) -> str:
    """Join path segments with exactly one ``/`` between each pair."""

    joined = segments[0].rstrip("/")
    for segment in segments[1:]:
        joined = f"{joined}/{segment.strip('/')}"
    return joined


def manual_base_path(manual_slug: str) -> str:
    return GUIDANCE_PREFIX + manual_slug.lower()


def section_base_path(manual_slug: str, section_slug: str) -> str:
    # section slugs may come from a section_id field, which is not lowercase
    return _join(manual_base_path(manual_slug.lower()), section_slug.lower())


def govuk_url(frontend_base_url: str, base_path: str) -> str:
    return frontend_base_url.rstrip("/") + base_path


__all__ = ["GUIDANCE_PREFIX", "govuk_url", "manual_base_path", "section_base_path"]
