"""Markdown rendering for manual and section content.

Designated markdown fields gain an ``<field>_html`` sibling holding the
rendered HTML. The document tree is rebuilt rather than modified so that a
document can be validated and enriched independently.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, Iterable

import markdown


logger = logging.getLogger(__name__)

MARKDOWN_FIELDS: tuple[str, ...] = ("body",)


@dataclass(frozen=True)
class MarkdownContent:
    """Markdown text of a single field."""

    value: str

    def normalized(self) -> str:
        return (self.value or "").strip("\ufeff")

    def is_empty(self) -> bool:
        return not self.normalized().strip()


class MarkdownRenderer:
    """Converts markdown text into HTML."""

    def __init__(self, *, markdown_factory: Callable[[], markdown.Markdown] | None = None) -> None:
        self._markdown_factory = markdown_factory or self._default_markdown_factory

    @staticmethod
    def _default_markdown_factory() -> markdown.Markdown:
        return markdown.Markdown(
            extensions=[
                'markdown.extensions.fenced_code',
                'markdown.extensions.tables',
                'markdown.extensions.sane_lists',
            ]
        )

    def render(self, content: MarkdownContent) -> str:
        if content.is_empty():
            return ""

        engine = self._markdown_factory()
        html_output = engine.convert(content.normalized())
        logger.debug("Rendered markdown (%d chars) to HTML (%d chars)", len(content.value), len(html_output))
        return html_output

    def __call__(self, text: str) -> str:
        return self.render(MarkdownContent(text))


def render_markdown_fields(
    tree: Any,
    render: Callable[[str], str],
    fields: Iterable[str] = MARKDOWN_FIELDS,
) -> Any:
    """Return a copy of *tree* where each markdown field has an ``_html`` sibling."""

    designated = frozenset(fields)

    def _walk(node: Any) -> Any:
        if isinstance(node, Mapping):
            rendered: dict[str, Any] = {key: _walk(value) for key, value in node.items()}
            for key, value in node.items():
                if key in designated and isinstance(value, str):
                    rendered[f"{key}_html"] = render(value)
            return rendered
        if isinstance(node, Sequence) and not isinstance(node, (str, bytes, bytearray)):
            return [_walk(item) for item in node]
        return node

    return _walk(tree)


__all__ = ["MARKDOWN_FIELDS", "MarkdownContent", "MarkdownRenderer", "render_markdown_fields"]
