"""Content item construction helpers.

Each helper takes a content item (a plain ``dict``) and returns a new one;
nested lists and mappings that are changed are copied, the rest is shared.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

ContentItem = dict[str, Any]

MANUAL_FORMAT = "hmrc-manual"
SECTION_FORMAT = "hmrc-manual-section"
PUBLISHING_APP = "hmrc-manuals-api"
RENDERING_APP = "manuals-frontend"


def with_publishing_tags(attributes: Mapping[str, Any], *, base_path: str, document_format: str) -> ContentItem:
    """Merge the fixed tags, base path and exact route into *attributes*."""

    return {
        **attributes,
        "base_path": base_path,
        "format": document_format,
        "publishing_app": PUBLISHING_APP,
        "rendering_app": RENDERING_APP,
        "routes": [{"path": base_path, "type": "exact"}],
    }


def _details(item: Mapping[str, Any]) -> dict[str, Any]:
    return dict(item.get("details") or {})


def _with_section_base_path(entry: Mapping[str, Any], base_path_for: Callable[[str], str]) -> dict[str, Any]:
    return {**entry, "base_path": base_path_for(str(entry["section_id"]))}


def with_child_section_base_paths(item: ContentItem, base_path_for: Callable[[str], str]) -> ContentItem:
    """Stamp ``base_path`` on every child section of every child section group."""

    details = _details(item)
    groups: Iterable[Mapping[str, Any]] | None = details.get("child_section_groups")
    if groups is None:
        return item
    details["child_section_groups"] = [
        {
            **group,
            "child_sections": [
                _with_section_base_path(section, base_path_for)
                for section in group.get("child_sections") or []
            ],
        }
        for group in groups
    ]
    return {**item, "details": details}


def with_breadcrumb_base_paths(item: ContentItem, base_path_for: Callable[[str], str]) -> ContentItem:
    details = _details(item)
    breadcrumbs = details.get("breadcrumbs")
    if breadcrumbs is None:
        return item
    details["breadcrumbs"] = [_with_section_base_path(crumb, base_path_for) for crumb in breadcrumbs]
    return {**item, "details": details}


def with_manual_reference(item: ContentItem, manual_base_path: str) -> ContentItem:
    details = _details(item)
    details["manual"] = {"base_path": manual_base_path}
    return {**item, "details": details}


def with_organisations(item: ContentItem, organisations: Iterable[Mapping[str, Any]]) -> ContentItem:
    details = _details(item)
    details["organisations"] = [dict(organisation) for organisation in organisations]
    return {**item, "details": details}


__all__ = [
    "ContentItem",
    "MANUAL_FORMAT",
    "PUBLISHING_APP",
    "RENDERING_APP",
    "SECTION_FORMAT",
    "with_breadcrumb_base_paths",
    "with_child_section_base_paths",
    "with_manual_reference",
    "with_organisations",
    "with_publishing_tags",
]
