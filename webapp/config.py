import os

from dotenv import load_dotenv

load_dotenv()


def _env_list(name: str, default: str) -> list[str]:
    raw = os.environ.get(name, default)
    return [segment.strip() for segment in raw.split(",") if segment.strip()]


class BaseApplicationSettings:
    """Base Flask application configuration populated from the environment."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key")
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Downstream publishing API
    PUBLISHING_API_URL = os.environ.get("PUBLISHING_API_URL", "http://publishing-api.dev.gov.uk")
    PUBLISHING_API_BEARER_TOKEN = os.environ.get("PUBLISHING_API_BEARER_TOKEN", "")
    PUBLISHING_API_TIMEOUT = os.environ.get("PUBLISHING_API_TIMEOUT", "10")

    # Public site the published content is served from
    FRONTEND_BASE_URL = os.environ.get("FRONTEND_BASE_URL", "https://www.gov.uk")

    # Content safety
    ALLOWED_ASSET_HOSTS = _env_list("ALLOWED_ASSET_HOSTS", "assets.digital.cabinet-office.gov.uk")

    # Organisations attached to sections
    ORGANISATIONS_API_URL = os.environ.get("ORGANISATIONS_API_URL", "")
    ORGANISATIONS_API_TIMEOUT = os.environ.get("ORGANISATIONS_API_TIMEOUT", "5")
    ORGANISATION_SLUGS = _env_list("ORGANISATION_SLUGS", "hm-revenue-customs")

    # OpenAPI documentation
    API_TITLE = "HMRC manuals API"
    API_VERSION = "1.0.0"
    OPENAPI_VERSION = "3.0.3"
    OPENAPI_URL_PREFIX = "/api"
    OPENAPI_JSON_PATH = "openapi.json"


Config = BaseApplicationSettings
