from flask_smorest import Api

from features.manuals.application.services import EXTENSION_KEY, ManualsServices, build_manuals_services

api = Api()


def init_manuals_services(app, services: ManualsServices | None = None) -> ManualsServices:
    """Attach the manuals publishing collaborators to *app*."""

    services = services or build_manuals_services(app.config)
    app.extensions[EXTENSION_KEY] = services
    return services
