"""Content item enrichment for manuals and sections."""
from __future__ import annotations

import copy

from features.manuals.application.enrichment import ManualEnricher, SectionEnricher
from features.manuals.infrastructure.organisations import HMRC_ORGANISATION, StaticOrganisationDirectory


def _render(text):
    return f"<p>{text}</p>"


def test_manual_is_tagged_with_publishing_metadata(valid_manual):
    item = ManualEnricher(render=_render).enrich("employment-income-manual", valid_manual)

    assert item["base_path"] == "/guidance/employment-income-manual"
    assert item["format"] == "hmrc-manual"
    assert item["publishing_app"] == "hmrc-manuals-api"
    assert item["rendering_app"] == "manuals-frontend"
    assert item["routes"] == [{"path": "/guidance/employment-income-manual", "type": "exact"}]
    assert item["title"] == valid_manual["title"]


def test_every_child_section_gets_a_base_path(valid_manual):
    item = ManualEnricher(render=_render).enrich("employment-income-manual", valid_manual)

    sections = item["details"]["child_section_groups"][0]["child_sections"]
    assert [section["base_path"] for section in sections] == [
        "/guidance/employment-income-manual/eim00100",
        "/guidance/employment-income-manual/eim00200",
    ]
    assert sections[0]["description"] == "Overview"


def test_manual_without_child_section_groups_keeps_details_as_is(valid_manual):
    del valid_manual["details"]["child_section_groups"]

    item = ManualEnricher(render=_render).enrich("employment-income-manual", valid_manual)

    assert "child_section_groups" not in item["details"]
    assert item["details"]["change_notes"] == valid_manual["details"]["change_notes"]


def test_enrichment_does_not_mutate_the_input(valid_manual, valid_section):
    manual_before = copy.deepcopy(valid_manual)
    section_before = copy.deepcopy(valid_section)

    ManualEnricher(render=_render).enrich("employment-income-manual", valid_manual)
    SectionEnricher(render=_render).enrich("employment-income-manual", "eim00100", valid_section)

    assert valid_manual == manual_before
    assert valid_section == section_before


def test_section_is_linked_to_its_manual_and_relatives(valid_section):
    item = SectionEnricher(render=_render).enrich("employment-income-manual", "EIM00100", valid_section)

    details = item["details"]
    assert item["base_path"] == "/guidance/employment-income-manual/eim00100"
    assert item["format"] == "hmrc-manual-section"
    assert details["manual"] == {"base_path": "/guidance/employment-income-manual"}
    assert details["breadcrumbs"] == [
        {"section_id": "EIM00001", "base_path": "/guidance/employment-income-manual/eim00001"}
    ]
    assert details["child_section_groups"][0]["child_sections"][0]["base_path"] == (
        "/guidance/employment-income-manual/eim00110"
    )


def test_section_body_is_rendered_to_html(valid_section):
    item = SectionEnricher().enrich("employment-income-manual", "eim00100", valid_section)

    assert "<strong>important</strong>" in item["details"]["body_html"]
    assert item["details"]["body"] == "Some **important** text"


def test_organisations_are_attached_when_a_directory_is_configured(valid_section):
    enricher = SectionEnricher(
        render=_render,
        organisation_directory=StaticOrganisationDirectory(),
        organisation_slugs=("hm-revenue-customs", "unknown-org"),
    )

    item = enricher.enrich("employment-income-manual", "eim00100", valid_section)

    assert item["details"]["organisations"] == [
        {
            "title": HMRC_ORGANISATION["title"],
            "abbreviation": HMRC_ORGANISATION["abbreviation"],
            "web_url": HMRC_ORGANISATION["web_url"],
        }
    ]


def test_organisations_are_left_out_without_a_directory(valid_section):
    item = SectionEnricher(render=_render).enrich("employment-income-manual", "eim00100", valid_section)

    assert "organisations" not in item["details"]
