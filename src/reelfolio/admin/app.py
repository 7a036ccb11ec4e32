"""CMS panel: SQLAdmin views over the portfolio tables, behind admin login."""

from fastapi import FastAPI
from sqladmin import Admin

from reelfolio.admin.auth import AdminAuth
from reelfolio.admin.views import (
    AdminUserAdmin,
    ContactMessageAdmin,
    FilmAdmin,
    SiteSettingsAdmin,
)
from reelfolio.config import settings
from reelfolio.database import engine

CMS_VIEWS = [FilmAdmin, SiteSettingsAdmin, ContactMessageAdmin, AdminUserAdmin]


def create_admin_app(site_name: str = settings.site_name) -> FastAPI:
    """Build the panel app that ``main`` mounts at ``/cms``."""
    title = f"{site_name} CMS"
    app = FastAPI(title=title)
    admin = Admin(
        app,
        engine,
        authentication_backend=AdminAuth(secret_key=settings.secret_key),
        title=title,
    )
    for view in CMS_VIEWS:
        admin.add_view(view)
    return app


admin_app = create_admin_app()
