"""SQLAlchemy ORM models."""

from reelfolio.models.admin_user import AdminUser
from reelfolio.models.base import Base
from reelfolio.models.contact_message import ContactMessage
from reelfolio.models.film import Film
from reelfolio.models.site_settings import SiteSettings

__all__ = ["AdminUser", "Base", "ContactMessage", "Film", "SiteSettings"]
