"""Builds publishing API content items from validated manuals and sections."""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Protocol

from features.manuals.domain.content import (
    MANUAL_FORMAT,
    SECTION_FORMAT,
    ContentItem,
    with_breadcrumb_base_paths,
    with_child_section_base_paths,
    with_manual_reference,
    with_organisations,
    with_publishing_tags,
)
from features.manuals.domain.markdown import MARKDOWN_FIELDS, MarkdownRenderer, render_markdown_fields
from features.manuals.domain.paths import manual_base_path, section_base_path

logger = logging.getLogger(__name__)


class OrganisationDirectory(Protocol):
    def find(self, slug: str) -> Mapping[str, Any] | None:
        ...


class ManualEnricher:
    def __init__(
        self,
        *,
        render: Callable[[str], str] | None = None,
        markdown_fields: Iterable[str] = MARKDOWN_FIELDS,
    ) -> None:
        self._render = render or MarkdownRenderer()
        self._markdown_fields = tuple(markdown_fields)

    def enrich(self, slug: str, attributes: Mapping[str, Any]) -> ContentItem:
        item = with_publishing_tags(
            attributes,
            base_path=manual_base_path(slug),
            document_format=MANUAL_FORMAT,
        )
        item = render_markdown_fields(item, self._render, self._markdown_fields)
        return with_child_section_base_paths(
            item, lambda section_id: section_base_path(slug, section_id)
        )


class SectionEnricher:
    """Enriches a section; the steps run in a fixed order on each other's output."""

    def __init__(
        self,
        *,
        render: Callable[[str], str] | None = None,
        markdown_fields: Iterable[str] = MARKDOWN_FIELDS,
        organisation_directory: OrganisationDirectory | None = None,
        organisation_slugs: Iterable[str] = (),
    ) -> None:
        self._render = render or MarkdownRenderer()
        self._markdown_fields = tuple(markdown_fields)
        self._organisation_directory = organisation_directory
        self._organisation_slugs = tuple(organisation_slugs)

    def enrich(self, manual_slug: str, section_slug: str, attributes: Mapping[str, Any]) -> ContentItem:
        def _section_path(section_id: str) -> str:
            return section_base_path(manual_slug, section_id)

        item = with_publishing_tags(
            attributes,
            base_path=section_base_path(manual_slug, section_slug),
            document_format=SECTION_FORMAT,
        )
        item = render_markdown_fields(item, self._render, self._markdown_fields)
        item = with_child_section_base_paths(item, _section_path)
        item = with_breadcrumb_base_paths(item, _section_path)
        item = with_manual_reference(item, manual_base_path(manual_slug))
        if self._organisation_directory is not None:
            item = with_organisations(item, self._resolve_organisations())
        return item

    def _resolve_organisations(self) -> list[Mapping[str, Any]]:
        organisations: list[Mapping[str, Any]] = []
        for slug in self._organisation_slugs:
            organisation = self._organisation_directory.find(slug)
            if organisation is None:
                logger.warning("Organisation %r could not be resolved; leaving it out", slug)
                continue
            organisations.append(organisation)
        return organisations


__all__ = ["ManualEnricher", "OrganisationDirectory", "SectionEnricher"]
