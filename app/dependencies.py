"""FastAPI dependency helpers."""
from collections.abc import AsyncIterator

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import get_session
from app.models import User
from services import AdminService, CompanyLookup
from services.suggestions import RemoteLookup


async def db_session() -> AsyncIterator[AsyncSession]:
    async for session in get_session():
        yield session


def settings_provider() -> Settings:
    return get_settings()


def company_lookup_provider(settings: Settings = Depends(settings_provider)) -> RemoteLookup | None:
    if not settings.company_lookup_enabled:
        return None
    return CompanyLookup(settings)


async def admin_user(
    x_user_id: str = Header(..., alias="X-User-Id"),
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_provider),
) -> User:
    return await AdminService(settings).require_admin(session, x_user_id)
