"""Manuals publishing API blueprint."""
from __future__ import annotations

from flask_smorest import Blueprint

manuals_api_bp = Blueprint(
    "manuals_api",
    __name__,
    description="Publish HMRC manuals and manual sections",
)

from . import routes  # noqa: E402,F401

__all__ = ["manuals_api_bp"]
