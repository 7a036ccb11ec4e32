"""SQLAdmin authentication backend."""

from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request

from reelfolio.database import AsyncSessionLocal
from reelfolio.services.admin_auth import (
    InvalidCredentialsError,
    clear_session,
    issue_session,
    validate_session,
    verify_credentials,
)


class AdminAuth(AuthenticationBackend):
    """Same credential check and session rules as the admin API."""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        async with AsyncSessionLocal() as db:
            try:
                admin = await verify_credentials(
                    db,
                    str(form.get("username") or ""),
                    str(form.get("password") or ""),
                )
            except InvalidCredentialsError:
                return False
        issue_session(request.session, admin)
        return True

    async def logout(self, request: Request) -> bool:
        clear_session(request.session)
        return True

    async def authenticate(self, request: Request) -> bool:
        async with AsyncSessionLocal() as db:
            return await validate_session(db, request.session) is not None
