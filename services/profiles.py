"""Applicant profiles, skills and target company/role lists."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.enums import TargetKind
from app.models import User
from services.errors import ValidationError

PROFILE_FIELDS = frozenset(
    {
        "name",
        "email",
        "phone",
        "location",
        "headline",
        "summary",
        "linkedin_url",
        "portfolio_url",
        "github_url",
        "skills",
        "experience",
        "education",
    }
)

_TARGET_ATTRIBUTES = {
    TargetKind.COMPANIES: "target_companies",
    TargetKind.ROLES: "target_roles",
}


async def ensure_user(session: AsyncSession, user_id: str) -> User:
    """Load a user, creating a placeholder row the first time an id is seen."""

    result = await session.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user:
        return user

    placeholder = User(id=user_id)
    session.add(placeholder)
    await session.commit()
    await session.refresh(placeholder)
    return placeholder


def add_unique(items: list[str] | None, value: str) -> list[str]:
    cleaned = value.strip()
    if not cleaned:
        raise ValidationError("Value must not be empty")
    current = list(items or [])
    if cleaned in current:
        return current
    return [*current, cleaned]


def remove_value(items: list[str] | None, value: str) -> list[str]:
    return [item for item in items or [] if item != value]


class ProfileService:
    """Read and mutate the profile owned by a single user."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def get_profile(self, session: AsyncSession, user_id: str) -> User:
        return await ensure_user(session, user_id)

    async def update_profile(self, session: AsyncSession, user_id: str, changes: dict[str, Any]) -> User:
        user = await ensure_user(session, user_id)
        for field, value in changes.items():
            if field in PROFILE_FIELDS:
                setattr(user, field, value)
        await session.commit()
        await session.refresh(user)
        return user

    async def add_target(self, session: AsyncSession, user_id: str, kind: TargetKind, value: str) -> list[str]:
        user = await ensure_user(session, user_id)
        attribute = _TARGET_ATTRIBUTES[kind]
        setattr(user, attribute, add_unique(getattr(user, attribute), value))
        await session.commit()
        return list(getattr(user, attribute))

    async def remove_target(self, session: AsyncSession, user_id: str, kind: TargetKind, value: str) -> list[str]:
        user = await ensure_user(session, user_id)
        attribute = _TARGET_ATTRIBUTES[kind]
        setattr(user, attribute, remove_value(getattr(user, attribute), value))
        await session.commit()
        return list(getattr(user, attribute))

    async def add_skill(self, session: AsyncSession, user_id: str, skill: str) -> list[str]:
        user = await ensure_user(session, user_id)
        user.skills = add_unique(user.skills, skill)
        await session.commit()
        return list(user.skills)

    async def remove_skill(self, session: AsyncSession, user_id: str, skill: str) -> list[str]:
        user = await ensure_user(session, user_id)
        user.skills = remove_value(user.skills, skill)
        await session.commit()
        return list(user.skills)
