"""Logged outbound HTTP requests."""
from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from typing import Any, Callable

import requests

logger = logging.getLogger(__name__)

_SENSITIVE_KEYWORDS = ("authorization", "token", "secret", "password", "api_key")


def _mask_sensitive_values(data: Any) -> Any:
    """Mask values whose keys look like credentials, recursively."""

    if isinstance(data, Mapping):
        masked = {}
        for key, value in data.items():
            if isinstance(key, str) and any(word in key.lower() for word in _SENSITIVE_KEYWORDS):
                masked[key] = "***"
            else:
                masked[key] = _mask_sensitive_values(value)
        return masked
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        return [_mask_sensitive_values(item) for item in data]
    return data


_SUPPORTED_METHODS = frozenset({"get", "put", "post", "delete"})


def log_requests_and_send(
    method: str,
    url: str,
    *,
    headers: Mapping[str, str] | None = None,
    params: Mapping[str, Any] | None = None,
    json_data: Any = None,
    timeout: float | None = 10,
) -> requests.Response:
    """Send a request with ``requests`` and log both directions."""

    normalized_method = method.strip().lower()
    if normalized_method not in _SUPPORTED_METHODS:
        raise ValueError(f"Unsupported HTTP method: {method}")
    req_func: Callable[..., requests.Response] = getattr(requests, normalized_method)

    request_payload = {
        "method": normalized_method,
        "headers": _mask_sensitive_values(dict(headers)) if headers else None,
        "params": params,
        "json": _mask_sensitive_values(json_data),
    }
    logger.info(
        json.dumps(request_payload, ensure_ascii=False, default=str),
        extra={"event": "requests.send", "path": url},
    )

    try:
        res = req_func(url, headers=headers, params=params, json=json_data, timeout=timeout)
    except requests.RequestException as exc:
        logger.error(
            json.dumps({"error": str(exc), "method": normalized_method}, ensure_ascii=False),
            extra={"event": "requests.error", "path": url},
            exc_info=True,
        )
        raise

    try:
        res_body = res.json()
    except ValueError:
        res_body = res.text

    response_payload = {"status_code": res.status_code, "body": _mask_sensitive_values(res_body)}
    log_callable = logger.info
    if res.status_code >= 500:
        log_callable = logger.error
    elif res.status_code >= 400:
        log_callable = logger.warning
    log_callable(
        json.dumps(response_payload, ensure_ascii=False, default=str),
        extra={"event": "requests.recv", "path": url},
    )
    return res


def normalise_timeout(value: Any, default: float = 10.0) -> float | None:
    """Convert a configured timeout into a value accepted by ``requests``.

    ``0`` disables the timeout; unparsable values fall back to *default*.
    """

    if value is None:
        return default
    if isinstance(value, str):
        value = value.strip()
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return default
    return None if numeric == 0 else numeric


__all__ = ["log_requests_and_send", "normalise_timeout"]
