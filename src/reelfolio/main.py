"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from reelfolio.admin.app import admin_app
from reelfolio.api.routes import (
    admin_auth,
    admin_films,
    admin_messages,
    admin_settings,
    contact,
    films,
    health,
    pages,
    send_email,
    site,
)
from reelfolio.config import settings
from reelfolio.database import engine

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"{settings.site_name} portfolio API starting")
    yield
    await engine.dispose()
    logger.info("Database engine disposed")


# Create FastAPI app
app = FastAPI(
    title="Reelfolio API",
    description="Director portfolio site: films, settings, contact and CMS",
    version="0.1.0",
    lifespan=lifespan,
)

# Admin sessions: signed cookie, expired by the browser and re-checked server-side
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie="reelfolio_admin",
    max_age=settings.admin_session_max_age,
    same_site="lax",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Public
app.include_router(health.router)
app.include_router(films.router, prefix="/api", tags=["films"])
app.include_router(site.router, prefix="/api", tags=["site"])
app.include_router(contact.router, prefix="/api", tags=["contact"])
app.include_router(send_email.router, prefix="/api", tags=["contact"])
app.include_router(pages.router, tags=["pages"])

# Admin
app.include_router(admin_auth.router, prefix="/api", tags=["admin"])
app.include_router(admin_films.router, prefix="/api", tags=["admin"])
app.include_router(admin_settings.router, prefix="/api", tags=["admin"])
app.include_router(admin_messages.router, prefix="/api", tags=["admin"])

app.mount("/cms", admin_app)
