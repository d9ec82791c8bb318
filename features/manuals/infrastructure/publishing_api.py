"""Client for the publishing API content store."""
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Mapping
from urllib.parse import quote

import requests

from features.manuals.application.dto import PublishResult
from features.manuals.domain.exceptions import PublishingApiError, PublishingApiUnavailableError
from features.manuals.infrastructure.http import log_requests_and_send, normalise_timeout


class PublishingApiClient:
    """Puts content items to the publishing API, keyed by base path."""

    DEFAULT_TIMEOUT: float = 10.0

    def __init__(
        self,
        endpoint: str,
        *,
        bearer_token: str | None = None,
        timeout: Any = DEFAULT_TIMEOUT,
    ) -> None:
        self.endpoint = endpoint.rstrip("/")
        self._bearer_token = bearer_token or None
        self._timeout = normalise_timeout(timeout, self.DEFAULT_TIMEOUT)

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "PublishingApiClient":
        return cls(
            config["PUBLISHING_API_URL"],
            bearer_token=config.get("PUBLISHING_API_BEARER_TOKEN"),
            timeout=config.get("PUBLISHING_API_TIMEOUT", cls.DEFAULT_TIMEOUT),
        )

    def content_url(self, base_path: str) -> str:
        return f"{self.endpoint}/content{quote(base_path)}"

    def put_content_item(self, base_path: str, content_item: Mapping[str, Any]) -> PublishResult:
        try:
            response = log_requests_and_send(
                "put",
                self.content_url(base_path),
                headers=self._build_headers(),
                json_data=dict(content_item),
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise PublishingApiUnavailableError(str(exc)) from exc

        body = _response_body(response)
        if response.status_code >= HTTPStatus.BAD_REQUEST:
            raise PublishingApiError(response.status_code, body)
        return PublishResult(code=response.status_code, body=body)

    def _build_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if self._bearer_token:
            headers["Authorization"] = f"Bearer {self._bearer_token}"
        return headers


def _response_body(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


__all__ = ["PublishingApiClient"]
