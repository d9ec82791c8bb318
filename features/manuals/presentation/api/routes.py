"""Manuals publishing API routes."""
from __future__ import annotations

import json
from http import HTTPStatus
from typing import Any, Callable

from flask import current_app, jsonify, request

from features.manuals.application.dto import PublishManualInput, PublishOutcome, PublishSectionInput
from features.manuals.application.services import get_manuals_services
from features.manuals.domain.exceptions import (
    DocumentValidationError,
    OrganisationLookupError,
    PublishingApiError,
    PublishingApiUnavailableError,
)

from . import manuals_api_bp

_ERROR_RESPONSES = {
    400: {"description": "The request body is not valid JSON."},
    406: {"description": "The Accept header does not allow JSON."},
    415: {"description": "The request body is not JSON."},
    422: {"description": "The document failed validation."},
    502: {"description": "The publishing API rejected the content item."},
    503: {"description": "The publishing API is unavailable."},
}


def _json_error(errors: list[str], status: HTTPStatus):
    return jsonify({"status": "error", "errors": errors}), status


def _parse_request_body() -> tuple[Any, tuple | None]:
    """Return the parsed JSON body, or an error response for the boundary checks."""

    if not request.accept_mimetypes.accept_json and request.headers.get("Accept"):
        return None, _json_error(["Invalid Accept header"], HTTPStatus.NOT_ACCEPTABLE)
    if request.mimetype != "application/json":
        return None, _json_error(["Invalid Content-Type header"], HTTPStatus.UNSUPPORTED_MEDIA_TYPE)

    try:
        return json.loads(request.get_data(as_text=True)), None
    except ValueError as exc:
        return None, _json_error([f"Request JSON could not be parsed: {exc}"], HTTPStatus.BAD_REQUEST)


def _respond(publish: Callable[[], PublishOutcome]):
    try:
        outcome = publish()
    except DocumentValidationError as exc:
        return _json_error(exc.errors, HTTPStatus.UNPROCESSABLE_ENTITY)
    except PublishingApiUnavailableError:
        return _json_error(["Publishing API is unavailable"], HTTPStatus.SERVICE_UNAVAILABLE)
    except OrganisationLookupError as exc:
        return _json_error([str(exc)], HTTPStatus.SERVICE_UNAVAILABLE)
    except PublishingApiError as exc:
        current_app.logger.warning(
            "Publishing API rejected the content item",
            extra={"event": "manuals.publishing_api.rejected", "status": exc.status_code},
        )
        return _json_error([str(exc)], HTTPStatus.BAD_GATEWAY)

    response = jsonify({"govuk_url": outcome.govuk_url})
    response.status_code = outcome.result.code
    response.headers["Location"] = outcome.govuk_url
    return response


@manuals_api_bp.route("/hmrc-manuals/<slug>", methods=["PUT"], strict_slashes=False)
@manuals_api_bp.doc(
    summary="Publish a manual",
    responses={200: {"description": "The manual was published."}, **_ERROR_RESPONSES},
)
def publish_manual(slug: str):
    attributes, error = _parse_request_body()
    if error is not None:
        return error

    use_case = get_manuals_services().publish_manual_use_case()
    return _respond(lambda: use_case.execute(PublishManualInput(slug=slug, attributes=attributes)))


@manuals_api_bp.route(
    "/hmrc-manuals/<manual_slug>/sections/<section_slug>",
    methods=["PUT"],
    strict_slashes=False,
)
@manuals_api_bp.doc(
    summary="Publish a manual section",
    responses={200: {"description": "The section was published."}, **_ERROR_RESPONSES},
)
def publish_section(manual_slug: str, section_slug: str):
    attributes, error = _parse_request_body()
    if error is not None:
        return error

    use_case = get_manuals_services().publish_section_use_case()
    return _respond(
        lambda: use_case.execute(
            PublishSectionInput(
                manual_slug=manual_slug,
                section_slug=section_slug,
                attributes=attributes,
            )
        )
    )


@manuals_api_bp.route("/healthcheck", methods=["GET"])
@manuals_api_bp.doc(summary="Health check")
def healthcheck():
    return jsonify({"status": "ok"}), HTTPStatus.OK
