"""Collaborators shared by the manuals publishing use cases."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from flask import current_app

from features.manuals.application.enrichment import ManualEnricher, OrganisationDirectory, SectionEnricher
from features.manuals.application.use_cases import (
    DEFAULT_FRONTEND_BASE_URL,
    PublishingGateway,
    PublishManualUseCase,
    PublishSectionUseCase,
)
from features.manuals.application.validation import build_manual_validator, build_section_validator
from features.manuals.domain.markdown import MarkdownRenderer
from features.manuals.domain.safety import DEFAULT_ASSET_HOSTS, SafetyScanner
from features.manuals.infrastructure.organisations import OrganisationsApiClient, StaticOrganisationDirectory
from features.manuals.infrastructure.publishing_api import PublishingApiClient

EXTENSION_KEY = "manuals"


@dataclass(slots=True)
class ManualsServices:
    publishing_api: PublishingGateway
    organisation_directory: OrganisationDirectory | None = None
    organisation_slugs: tuple[str, ...] = ()
    asset_hosts: tuple[str, ...] = DEFAULT_ASSET_HOSTS
    frontend_base_url: str = DEFAULT_FRONTEND_BASE_URL
    renderer: MarkdownRenderer = field(default_factory=MarkdownRenderer)

    def publish_manual_use_case(self) -> PublishManualUseCase:
        return PublishManualUseCase(
            self.publishing_api,
            validator=build_manual_validator(scanner=SafetyScanner(self.asset_hosts)),
            enricher=ManualEnricher(render=self.renderer),
            frontend_base_url=self.frontend_base_url,
        )

    def publish_section_use_case(self) -> PublishSectionUseCase:
        return PublishSectionUseCase(
            self.publishing_api,
            validator=build_section_validator(scanner=SafetyScanner(self.asset_hosts)),
            enricher=SectionEnricher(
                render=self.renderer,
                organisation_directory=self.organisation_directory,
                organisation_slugs=self.organisation_slugs,
            ),
            frontend_base_url=self.frontend_base_url,
        )


def build_manuals_services(config: Mapping[str, Any]) -> ManualsServices:
    """Construct the collaborators described by the application config."""

    organisations_api_url = config.get("ORGANISATIONS_API_URL")
    if organisations_api_url:
        directory: OrganisationDirectory = OrganisationsApiClient(
            organisations_api_url,
            timeout=config.get("ORGANISATIONS_API_TIMEOUT", OrganisationsApiClient.DEFAULT_TIMEOUT),
        )
    else:
        directory = StaticOrganisationDirectory()

    return ManualsServices(
        publishing_api=PublishingApiClient.from_config(config),
        organisation_directory=directory,
        organisation_slugs=tuple(config.get("ORGANISATION_SLUGS") or ()),
        asset_hosts=tuple(config.get("ALLOWED_ASSET_HOSTS") or DEFAULT_ASSET_HOSTS),
        frontend_base_url=config.get("FRONTEND_BASE_URL") or DEFAULT_FRONTEND_BASE_URL,
    )


def get_manuals_services() -> ManualsServices:
    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "ManualsServices", "build_manuals_services", "get_manuals_services"]
