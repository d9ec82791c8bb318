"""Manual and section publishing use cases."""
from __future__ import annotations

from typing import Any, Mapping, Protocol

from core.logging_config import StructuredLogger, structured_logger
from features.manuals.application.dto import (
    PublishManualInput,
    PublishOutcome,
    PublishResult,
    PublishSectionInput,
)
from features.manuals.application.enrichment import ManualEnricher, SectionEnricher
from features.manuals.application.validation import (
    DocumentValidator,
    build_manual_validator,
    build_section_validator,
)
from features.manuals.domain.exceptions import (
    DocumentValidationError,
    PublishingApiError,
    PublishingApiUnavailableError,
)
from features.manuals.domain.paths import govuk_url, manual_base_path, section_base_path

DEFAULT_FRONTEND_BASE_URL = "https://www.gov.uk"

_log = structured_logger("features.manuals.publish")


class PublishingGateway(Protocol):
    def put_content_item(self, base_path: str, content_item: Mapping[str, Any]) -> PublishResult:
        ...


def _publish(
    gateway: PublishingGateway,
    base_path: str,
    content_item: Mapping[str, Any],
    frontend_base_url: str,
    log: StructuredLogger,
) -> PublishOutcome:
    try:
        result = gateway.put_content_item(base_path, content_item)
    except PublishingApiUnavailableError as exc:
        log.error("manuals.publish.unavailable", error=str(exc))
        raise
    except PublishingApiError as exc:
        log.error("manuals.publish.rejected", status=exc.status_code)
        raise
    log.info("manuals.publish.done", status=result.code)
    return PublishOutcome(
        result=result,
        base_path=base_path,
        govuk_url=govuk_url(frontend_base_url, base_path),
    )


class PublishManualUseCase:
    def __init__(
        self,
        gateway: PublishingGateway,
        *,
        validator: DocumentValidator[PublishManualInput] | None = None,
        enricher: ManualEnricher | None = None,
        frontend_base_url: str = DEFAULT_FRONTEND_BASE_URL,
    ) -> None:
        self.gateway = gateway
        self.validator = validator or build_manual_validator()
        self.enricher = enricher or ManualEnricher()
        self.frontend_base_url = frontend_base_url

    def execute(self, payload: PublishManualInput) -> PublishOutcome:
        log = _log.bind(manual_slug=payload.slug)
        log.info("manuals.publish.start", kind="manual")

        errors = self.validator.validate(payload)
        if errors:
            log.warning("manuals.publish.invalid", errors=errors)
            raise DocumentValidationError(errors)

        content_item = self.enricher.enrich(payload.slug, payload.attributes)
        return _publish(
            self.gateway,
            manual_base_path(payload.slug),
            content_item,
            self.frontend_base_url,
            log,
        )


class PublishSectionUseCase:
    def __init__(
        self,
        gateway: PublishingGateway,
        *,
        validator: DocumentValidator[PublishSectionInput] | None = None,
        enricher: SectionEnricher | None = None,
        frontend_base_url: str = DEFAULT_FRONTEND_BASE_URL,
    ) -> None:
        self.gateway = gateway
        self.validator = validator or build_section_validator()
        self.enricher = enricher or SectionEnricher()
        self.frontend_base_url = frontend_base_url

    def execute(self, payload: PublishSectionInput) -> PublishOutcome:
        log = _log.bind(manual_slug=payload.manual_slug, section_slug=payload.section_slug)
        log.info("manuals.publish.start", kind="section")

        errors = self.validator.validate(payload)
        if errors:
            log.warning("manuals.publish.invalid", errors=errors)
            raise DocumentValidationError(errors)

        content_item = self.enricher.enrich(payload.manual_slug, payload.section_slug, payload.attributes)
        return _publish(
            self.gateway,
            section_base_path(payload.manual_slug, payload.section_slug),
            content_item,
            self.frontend_base_url,
            log,
        )


__all__ = ["PublishManualUseCase", "PublishSectionUseCase", "PublishingGateway"]
