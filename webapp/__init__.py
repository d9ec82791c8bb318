# webapp/__init__.py
import json
import time
from collections.abc import Mapping, Sequence
from typing import Any, Dict
from uuid import uuid4

from flask import Flask, g, request

from .extensions import api as smorest_api, init_manuals_services
from core.logging_config import configure_app_logging


_SENSITIVE_KEYWORDS = {
    "password",
    "passwd",
    "secret",
    "token",
    "access_token",
    "refresh_token",
    "api_key",
}


_MAX_LOG_PAYLOAD_BYTES = 60_000


def _is_sensitive_key(key):
    if not isinstance(key, str):
        return False
    key_lower = key.lower()
    return any(keyword in key_lower for keyword in _SENSITIVE_KEYWORDS)


def _mask_sensitive_data(data):
    """Mask sensitive values in nested mappings and lists."""

    if isinstance(data, Mapping):
        masked = {}
        for key, value in data.items():
            if _is_sensitive_key(key):
                masked[key] = "***"
            else:
                masked[key] = _mask_sensitive_data(value)
        return masked
    if isinstance(data, Sequence) and not isinstance(data, (str, bytes, bytearray)):
        return [_mask_sensitive_data(item) for item in data]
    return data


def _outline(body):
    if isinstance(body, Mapping):
        return {"keys": sorted(str(key) for key in body)}
    if isinstance(body, Sequence) and not isinstance(body, (str, bytes, bytearray)):
        return {"items": len(body)}
    return {"type": type(body).__name__}


def _loggable_payload(payload: Dict[str, Any], max_bytes: int = _MAX_LOG_PAYLOAD_BYTES) -> str:
    """Serialise *payload*, replacing an oversized ``json`` body with its outline.

    Manual sections can carry long markdown bodies; the outline keeps the
    top-level keys and the original size so the entry stays searchable.
    """

    text = json.dumps(payload, ensure_ascii=False, default=str)
    size = len(text.encode("utf-8"))
    if size <= max_bytes or payload.get("json") is None:
        return text
    outline = {**_outline(payload["json"]), "truncatedBytes": size}
    return json.dumps({**payload, "json": outline}, ensure_ascii=False, default=str)


def create_app(config_object=None, *, manuals_services=None):
    """Application factory."""
    from dotenv import load_dotenv
    from .config import Config
    from .error_handlers import register_error_handlers

    # .env is only applied to variables that are not already set
    load_dotenv()

    app = Flask(__name__)
    app.config.from_object(Config)
    if config_object is not None:
        app.config.from_object(config_object)

    configure_app_logging(app)

    smorest_api.init_app(app)
    init_manuals_services(app, manuals_services)
    register_error_handlers(app)

    from features.manuals.presentation.api import manuals_api_bp
    smorest_api.register_blueprint(manuals_api_bp)

    @app.before_request
    def start_timer():
        g.start_time = time.perf_counter()

    @app.before_request
    def log_api_request():
        req_id = str(uuid4())
        g.request_id = req_id
        input_json = request.get_json(silent=True)

        log_dict = {"method": request.method}
        if input_json is not None:
            log_dict["json"] = _mask_sensitive_data(input_json)
        serialized_payload = _loggable_payload(log_dict)
        app.logger.info(
            serialized_payload,
            extra={
                "event": "api.input",
                "request_id": req_id,
                "path": request.path,
            },
        )

    @app.after_request
    def log_api_response(response):
        resp_json = response.get_json(silent=True) if response.mimetype == "application/json" else None
        base_payload = {
            "status": response.status_code,
            "json": _mask_sensitive_data(resp_json) if resp_json is not None else None,
        }
        log_payload = _loggable_payload(base_payload)
        log_extra = {
            "event": "api.output",
            "request_id": getattr(g, "request_id", None),
            "path": request.path,
        }
        if response.status_code >= 400:
            app.logger.warning(log_payload, extra=log_extra)
        else:
            app.logger.info(log_payload, extra=log_extra)
        return response

    @app.after_request
    def add_server_timing(response):
        start = getattr(g, "start_time", None)
        if start is not None:
            duration = (time.perf_counter() - start) * 1000
            response.headers["Server-Timing"] = f"app;dur={duration:.2f}"
        return response

    return app
