"""SQLAdmin model views for the CMS."""

from typing import Any

from pydantic import ValidationError
from sqladmin import ModelView
from starlette.requests import Request

from reelfolio.models.admin_user import AdminUser
from reelfolio.models.contact_message import ContactMessage
from reelfolio.models.film import Film
from reelfolio.models.site_settings import SiteSettings
from reelfolio.schemas.film import FilmWrite
from reelfolio.schemas.site_settings import SiteSettingsUpdate
from reelfolio.services.admin_auth import hash_password


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    where = ".".join(str(part) for part in err["loc"]) or "record"
    return f"{where}: {err['msg']}"


class FilmAdmin(ModelView, model=Film):
    name_plural = "Films"
    icon = "fa-solid fa-film"
    column_list = [
        Film.title,
        Film.slug,
        Film.release_year,
        Film.is_featured,
        Film.updated_at,
    ]
    column_searchable_list = [Film.title, Film.slug]
    column_sortable_list = [Film.title, Film.release_year]
    column_default_sort = [(Film.release_year, True)]
    form_excluded_columns = [Film.created_at, Film.updated_at]

    async def on_model_change(
        self, data: dict[str, Any], model: Film, is_created: bool, request: Request
    ) -> None:
        # Panel edits go through the same validation/sanitising as the API
        try:
            clean = FilmWrite.model_validate(data)
        except ValidationError as e:
            raise ValueError(_first_error(e)) from e
        record = clean.to_record()
        # A saved film keeps its slug unless one is typed in
        if clean.slug_derived and not is_created:
            record["slug"] = model.slug
        data.update(record)


class SiteSettingsAdmin(ModelView, model=SiteSettings):
    name = "Site Settings"
    name_plural = "Site Settings"
    icon = "fa-solid fa-sliders"
    can_create = False
    can_delete = False
    column_list = [SiteSettings.director_name, SiteSettings.tagline, SiteSettings.show_featured_section]
    form_excluded_columns = [SiteSettings.created_at, SiteSettings.updated_at]

    async def on_model_change(
        self, data: dict[str, Any], model: SiteSettings, is_created: bool, request: Request
    ) -> None:
        try:
            clean = SiteSettingsUpdate.model_validate(data)
        except ValidationError as e:
            raise ValueError(_first_error(e)) from e
        data.update(clean.model_dump())


class ContactMessageAdmin(ModelView, model=ContactMessage):
    name = "Message"
    name_plural = "Messages"
    icon = "fa-solid fa-envelope"
    can_create = False
    can_edit = False
    column_list = [
        ContactMessage.name,
        ContactMessage.email,
        ContactMessage.message,
        ContactMessage.created_at,
    ]
    column_searchable_list = [ContactMessage.name, ContactMessage.email]
    column_default_sort = [(ContactMessage.created_at, True)]


class AdminUserAdmin(ModelView, model=AdminUser):
    name = "Admin"
    name_plural = "Admins"
    icon = "fa-solid fa-user-shield"
    column_list = [AdminUser.email, AdminUser.name, AdminUser.created_at]
    column_details_exclude_list = [AdminUser.password_hash]
    form_excluded_columns = [AdminUser.created_at, AdminUser.updated_at]
    column_labels = {AdminUser.password_hash: "Password"}

    async def on_model_change(
        self, data: dict[str, Any], model: AdminUser, is_created: bool, request: Request
    ) -> None:
        password = data.get("password_hash")
        # Unchanged edits post the existing bcrypt hash back
        if password and not password.startswith("$2"):
            data["password_hash"] = hash_password(password)
