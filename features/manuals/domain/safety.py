"""Safety scanning of incoming documents for embedded content.

Every string in the document is inspected, whatever the field is called.
Images may only be embedded with a relative path or from one of the
allowed asset hosts; active HTML such as ``<script>`` is rejected outright.

Images are looked for in the raw text and in its rendered HTML, so that
every Markdown image form the renderer understands is covered.
"""

from __future__ import annotations

import html
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Iterable, Iterator
from urllib.parse import urlsplit

from features.manuals.domain.markdown import MarkdownRenderer

logger = logging.getLogger(__name__)

DEFAULT_ASSET_HOSTS: tuple[str, ...] = ("assets.digital.cabinet-office.gov.uk",)


class SafetyScanner:
    """Finds images hosted on disallowed sites and dangerous HTML."""

    _MARKDOWN_IMAGE_PATTERN = re.compile(
        r'!\[(?:[^\[\]]|\[[^\[\]]*\])*\]\(\s*(?:<([^>\n]*)>|([^)\s]+))(?:\s+["\'][^"\']*["\'])?\s*\)'
    )
    _IMG_TAG_PATTERN = re.compile(r'<img\b[^>]*>', re.IGNORECASE)
    _SRC_ATTRIBUTE_PATTERN = re.compile(
        r'(?<![\w-])src\s*=\s*(?:"([^"]*)"|\'([^\']*)\'|([^\s"\'>]+))', re.IGNORECASE
    )
    _DANGEROUS_TAGS = (
        'script', 'iframe', 'object', 'embed', 'applet',
        'form', 'style', 'link', 'meta', 'base', 'frame', 'frameset',
    )
    _DANGEROUS_TAG_PATTERN = re.compile(
        r'<\s*(' + '|'.join(_DANGEROUS_TAGS) + r')\b', re.IGNORECASE
    )
    _SCRIPT_URL_PATTERN = re.compile(
        r'(?:\b(?:href|src)\s*=\s*["\']?|\]\()\s*(?:javascript|vbscript):', re.IGNORECASE
    )
    # browsers drop these anywhere in a URL
    _IGNORED_URL_CHARACTERS = re.compile(r'[\t\n\r]')

    def __init__(
        self,
        asset_hosts: Iterable[str] | None = None,
        *,
        render: Callable[[str], str] | None = None,
    ) -> None:
        hosts = DEFAULT_ASSET_HOSTS if asset_hosts is None else asset_hosts
        self.asset_hosts = tuple(host.strip().lower() for host in hosts if host and host.strip())
        self._render = render or MarkdownRenderer()

    def scan(self, document: Any) -> list[str]:
        errors: list[str] = []
        for path, text in _iter_strings(document):
            errors.extend(self._scan_text(path, text))
        if errors:
            logger.info("Safety scan rejected %d value(s)", len(errors))
        return errors

    def is_allowed_image(self, url: str) -> bool:
        cleaned = self._IGNORED_URL_CHARACTERS.sub("", url).strip().replace("\\", "/")
        try:
            parts = urlsplit(cleaned)
        except ValueError:
            return False
        if not parts.scheme and not parts.netloc:
            return True
        host = (parts.hostname or "").lower()
        return parts.scheme in ("", "http", "https") and host in self.asset_hosts

    def image_urls(self, text: str) -> list[str]:
        """Return the image URLs of *text*, in order of first appearance."""

        urls = [
            angle or plain
            for angle, plain in self._MARKDOWN_IMAGE_PATTERN.findall(text)
        ]
        urls.extend(self._img_sources(text))
        if "![" in text:
            urls.extend(self._img_sources(self._render(text)))
        return list(dict.fromkeys(url.strip() for url in urls))

    def _img_sources(self, markup: str) -> Iterator[str]:
        for tag in self._IMG_TAG_PATTERN.findall(markup):
            for quoted, single_quoted, bare in self._SRC_ATTRIBUTE_PATTERN.findall(tag):
                yield html.unescape(quoted or single_quoted or bare)

    def _scan_text(self, path: str, text: str) -> list[str]:
        errors: list[str] = []
        for url in self.image_urls(text):
            if not self.is_allowed_image(url):
                errors.append(
                    f"{path} contains disallowed embedded content: "
                    f"image {url} is not hosted on {self._describe_hosts()}"
                )

        for tag in sorted({match.lower() for match in self._DANGEROUS_TAG_PATTERN.findall(text)}):
            errors.append(f"{path} contains disallowed embedded content: <{tag}> element")

        if self._SCRIPT_URL_PATTERN.search(text):
            errors.append(f"{path} contains disallowed embedded content: script URL")
        return errors

    def _describe_hosts(self) -> str:
        if not self.asset_hosts:
            return "a relative path"
        return ", ".join(self.asset_hosts) + " or a relative path"


def _iter_strings(node: Any, path: str = "") -> Iterator[tuple[str, str]]:
    """Yield ``(field path, value)`` for every string in a nested document."""

    if isinstance(node, str):
        yield path or "document", node
    elif isinstance(node, Mapping):
        for key, value in node.items():
            child = f"{path}.{key}" if path else str(key)
            yield from _iter_strings(value, child)
    elif isinstance(node, Sequence) and not isinstance(node, (bytes, bytearray)):
        for index, item in enumerate(node):
            yield from _iter_strings(item, f"{path}[{index}]")


__all__ = ["DEFAULT_ASSET_HOSTS", "SafetyScanner"]
