"""Slug validation and base path computation."""
from __future__ import annotations

import pytest

from features.manuals.domain.paths import govuk_url, manual_base_path, section_base_path
from features.manuals.domain.slug import SLUG_PATTERN, SlugValidator


@pytest.mark.parametrize(
    "slug",
    ["employment-income-manual", "eim", "a1", "1-2-3", "x", "7"],
)
def test_valid_slugs_pass(slug):
    assert SlugValidator().validate(slug) == []


@pytest.mark.parametrize(
    "slug",
    ["BREAK_THE_RULEZ", "-leading", "trailing-", "under_score", "Upper", "", "-", "a b", "slug\n"],
)
def test_invalid_slugs_name_the_pattern(slug):
    errors = SlugValidator().validate(slug)

    assert errors == [f"Slug should match the pattern: {SLUG_PATTERN}"]
    assert "^[a-z0-9][a-z0-9-]*[a-z0-9]$" in errors[0]


def test_label_is_used_in_message():
    errors = SlugValidator().validate("Nope", "Section slug")

    assert errors[0].startswith("Section slug should match the pattern:")


def test_none_is_not_a_valid_slug():
    assert SlugValidator.is_valid(None) is False


@pytest.mark.parametrize("slug", ["employment-income-manual", "eim", "a1"])
def test_manual_base_path_for_valid_slugs(slug):
    assert manual_base_path(slug) == "/guidance/" + slug.lower()


def test_manual_base_path_lowercases():
    assert manual_base_path("Employment-Income-Manual") == "/guidance/employment-income-manual"


def test_section_base_path_lowercases_both_segments():
    assert section_base_path("EIM", "EIM00100") == "/guidance/eim/eim00100"


def test_section_base_path_uses_a_single_separator():
    assert section_base_path("eim", "/eim00100") == "/guidance/eim/eim00100"
    assert section_base_path("eim/", "eim00100") == "/guidance/eim/eim00100"


def test_govuk_url_joins_frontend_and_base_path():
    assert (
        govuk_url("https://www.gov.uk", "/guidance/employment-income-manual")
        == "https://www.gov.uk/guidance/employment-income-manual"
    )
