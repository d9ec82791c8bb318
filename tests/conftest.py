import copy
import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("TESTING", "true")

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from features.manuals.application.dto import PublishResult  # noqa: E402
from features.manuals.application.services import ManualsServices  # noqa: E402
from features.manuals.infrastructure.organisations import StaticOrganisationDirectory  # noqa: E402


VALID_MANUAL = {
    "title": "Employment Income Manual",
    "description": "A guide to the taxation of employment income",
    "public_updated_at": "2014-01-23T00:00:00+01:00",
    "update_type": "major",
    "details": {
        "child_section_groups": [
            {
                "title": "Contents",
                "child_sections": [
                    {"section_id": "EIM00100", "title": "Introduction", "description": "Overview"},
                    {"section_id": "EIM00200", "title": "Scope"},
                ],
            }
        ],
        "change_notes": [
            {
                "section_id": "EIM00100",
                "title": "Introduction",
                "change_note": "Added introduction",
                "published_at": "2014-01-23T00:00:00+01:00",
            }
        ],
    },
}

VALID_SECTION = {
    "title": "Introduction",
    "description": "About this manual",
    "public_updated_at": "2014-01-23T00:00:00+01:00",
    "update_type": "minor",
    "details": {
        "section_id": "EIM00100",
        "body": "Some **important** text",
        "child_section_groups": [
            {"child_sections": [{"section_id": "EIM00110", "title": "Detail"}]}
        ],
        "breadcrumbs": [{"section_id": "EIM00001"}],
    },
}


class FakePublishingApi:
    """Records content items instead of sending them."""

    def __init__(self, result=None, error=None):
        self.result = result or PublishResult(code=200, body={"status": "ok"})
        self.error = error
        self.calls = []

    def put_content_item(self, base_path, content_item):
        self.calls.append((base_path, content_item))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def valid_manual():
    return copy.deepcopy(VALID_MANUAL)


@pytest.fixture
def valid_section():
    return copy.deepcopy(VALID_SECTION)


@pytest.fixture
def publishing_api():
    return FakePublishingApi()


@pytest.fixture
def app(publishing_api):
    from tests.config import TestConfig
    from webapp import create_app

    services = ManualsServices(
        publishing_api=publishing_api,
        organisation_directory=StaticOrganisationDirectory(),
        organisation_slugs=("hm-revenue-customs",),
        asset_hosts=("assets.digital.cabinet-office.gov.uk",),
        frontend_base_url="https://www.gov.uk",
    )
    return create_app(TestConfig, manuals_services=services)


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
