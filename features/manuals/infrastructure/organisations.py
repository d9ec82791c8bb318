"""Organisation lookups used when enriching sections."""
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Iterable, Mapping
from urllib.parse import quote

import requests

from features.manuals.domain.exceptions import OrganisationLookupError
from features.manuals.infrastructure.http import log_requests_and_send, normalise_timeout

HMRC_ORGANISATION: dict[str, str] = {
    "slug": "hm-revenue-customs",
    "title": "HM Revenue & Customs",
    "abbreviation": "HMRC",
    "web_url": "https://www.gov.uk/government/organisations/hm-revenue-customs",
}


def _reference(data: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": data.get("title"),
        "abbreviation": data.get("abbreviation"),
        "web_url": data.get("web_url"),
    }


class StaticOrganisationDirectory:
    """Organisation directory backed by a fixed list of entries."""

    def __init__(self, entries: Iterable[Mapping[str, Any]] = (HMRC_ORGANISATION,)) -> None:
        self._entries = {str(entry["slug"]): _reference(entry) for entry in entries}

    def find(self, slug: str) -> dict[str, Any] | None:
        entry = self._entries.get(slug)
        return dict(entry) if entry is not None else None


class OrganisationsApiClient:
    """Resolves organisations through the organisations API."""

    DEFAULT_TIMEOUT: float = 5.0

    def __init__(self, endpoint: str, *, timeout: Any = DEFAULT_TIMEOUT) -> None:
        self.endpoint = endpoint.rstrip("/")
        self._timeout = normalise_timeout(timeout, self.DEFAULT_TIMEOUT)

    def find(self, slug: str) -> dict[str, Any] | None:
        url = f"{self.endpoint}/api/organisations/{quote(slug)}"
        try:
            response = log_requests_and_send(
                "get",
                url,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise OrganisationLookupError(f"Organisations API is unavailable: {exc}") from exc

        if response.status_code == HTTPStatus.NOT_FOUND:
            return None
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            raise OrganisationLookupError(
                f"Organisations API returned {response.status_code} for {slug}"
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise OrganisationLookupError(f"Organisations API returned invalid JSON for {slug}") from exc
        if not isinstance(data, Mapping):
            raise OrganisationLookupError(f"Organisations API returned invalid JSON for {slug}")

        details = data.get("details") or {}
        return {
            "title": data.get("title"),
            "abbreviation": details.get("abbreviation", data.get("abbreviation")),
            "web_url": data.get("web_url"),
        }


__all__ = ["HMRC_ORGANISATION", "OrganisationsApiClient", "StaticOrganisationDirectory"]
