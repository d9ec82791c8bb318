"""Publishing API client."""
from __future__ import annotations

import pytest
import requests

from features.manuals.domain.exceptions import PublishingApiError, PublishingApiUnavailableError
from features.manuals.infrastructure import publishing_api as publishing_api_module
from features.manuals.infrastructure.publishing_api import PublishingApiClient


class _DummyResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def sent(monkeypatch):
    calls = []
    responses = []

    def fake_send(method, url, **kwargs):
        calls.append({"method": method, "url": url, **kwargs})
        response = responses.pop(0) if responses else _DummyResponse(200, {"status": "ok"})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(publishing_api_module, "log_requests_and_send", fake_send)
    return calls, responses


def test_put_content_item_targets_base_path(sent):
    calls, _ = sent
    client = PublishingApiClient("http://publishing-api.test/", bearer_token="secret-token", timeout="3")

    result = client.put_content_item("/guidance/eim", {"title": "EIM"})

    assert result.code == 200
    assert result.body == {"status": "ok"}
    [call] = calls
    assert call["method"] == "put"
    assert call["url"] == "http://publishing-api.test/content/guidance/eim"
    assert call["json_data"] == {"title": "EIM"}
    assert call["timeout"] == 3.0
    assert call["headers"] == {
        "Accept": "application/json",
        "Content-Type": "application/json",
        "Authorization": "Bearer secret-token",
    }


def test_authorization_header_is_omitted_without_token(sent):
    calls, _ = sent

    PublishingApiClient("http://publishing-api.test").put_content_item("/guidance/eim", {})

    assert "Authorization" not in calls[0]["headers"]


def test_transport_failure_raises_unavailable(sent):
    _, responses = sent
    responses.append(requests.ConnectionError("connection refused"))

    with pytest.raises(PublishingApiUnavailableError):
        PublishingApiClient("http://publishing-api.test").put_content_item("/guidance/eim", {})


@pytest.mark.parametrize("status_code", [400, 422, 500, 503])
def test_error_status_raises_publishing_api_error(sent, status_code):
    _, responses = sent
    responses.append(_DummyResponse(status_code, {"error": "nope"}))

    with pytest.raises(PublishingApiError) as excinfo:
        PublishingApiClient("http://publishing-api.test").put_content_item("/guidance/eim", {})

    assert excinfo.value.status_code == status_code
    assert excinfo.value.body == {"error": "nope"}
    assert str(excinfo.value) == f"Publishing API returned {status_code}"


def test_non_json_success_body_falls_back_to_text(sent):
    _, responses = sent
    responses.append(_DummyResponse(201, None, text="created"))

    result = PublishingApiClient("http://publishing-api.test").put_content_item("/guidance/eim", {})

    assert result.code == 201
    assert result.body == "created"


def test_from_config_reads_settings(sent):
    calls, _ = sent
    client = PublishingApiClient.from_config(
        {
            "PUBLISHING_API_URL": "http://publishing-api.test",
            "PUBLISHING_API_BEARER_TOKEN": "",
            "PUBLISHING_API_TIMEOUT": "0",
        }
    )

    client.put_content_item("/guidance/eim", {})

    assert calls[0]["timeout"] is None
    assert "Authorization" not in calls[0]["headers"]
