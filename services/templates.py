"""Cover-letter templates and placeholder rendering."""
from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.enums import TemplateType
from app.models import Template
from services.errors import NotFoundError
from services.profiles import ensure_user

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def build_placeholder_values(
    *,
    name: str | None,
    company: str,
    position: str,
    skills: Sequence[str] | None,
) -> dict[str, str]:
    return {
        "name": name or "",
        "company": company,
        "position": position,
        "skills": ", ".join(skills or []),
    }


def render_template(content: str, values: Mapping[str, str]) -> str:
    """Substitute ``{{token}}`` placeholders; tokens without a value stay verbatim."""

    def replace(match: re.Match[str]) -> str:
        token = match.group(1)
        if token in values:
            return values[token]
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(replace, content)


def extract_variables(content: str) -> list[str]:
    return list(dict.fromkeys(PLACEHOLDER_PATTERN.findall(content)))


class TemplateService:
    """CRUD for templates, keeping one default per owner and template type."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def list_templates(
        self,
        session: AsyncSession,
        user_id: str,
        template_type: TemplateType | None = None,
    ) -> list[Template]:
        stmt = select(Template).where(Template.user_id == user_id)
        if template_type is not None:
            stmt = stmt.where(Template.type == template_type)
        stmt = stmt.order_by(Template.created_at.desc(), Template.id.desc())
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def find(self, session: AsyncSession, template_id: int) -> Template | None:
        result = await session.execute(select(Template).where(Template.id == template_id))
        return result.scalar_one_or_none()

    async def get(self, session: AsyncSession, user_id: str, template_id: int) -> Template:
        template = await self.find(session, template_id)
        if template is None or template.user_id != user_id:
            raise NotFoundError("Template not found")
        return template

    async def create(
        self,
        session: AsyncSession,
        user_id: str,
        *,
        name: str,
        template_type: TemplateType,
        content: str,
        variables: list[str] | None = None,
        is_default: bool = False,
    ) -> Template:
        await ensure_user(session, user_id)
        if is_default:
            await self._clear_defaults(session, user_id, template_type)

        template = Template(
            user_id=user_id,
            name=name,
            type=template_type,
            content=content,
            variables=variables if variables is not None else extract_variables(content),
            is_default=is_default,
        )
        session.add(template)
        await session.commit()
        await session.refresh(template)
        return template

    async def update(
        self,
        session: AsyncSession,
        user_id: str,
        template_id: int,
        changes: dict[str, Any],
    ) -> Template:
        template = await self.get(session, user_id, template_id)
        if changes.get("is_default"):
            await self._clear_defaults(session, user_id, template.type, keep_id=template.id)

        for field in ("name", "content", "variables", "is_default"):
            if field in changes and changes[field] is not None:
                setattr(template, field, changes[field])
        if changes.get("content") is not None and changes.get("variables") is None:
            template.variables = extract_variables(template.content)

        await session.commit()
        await session.refresh(template)
        return template

    async def delete(self, session: AsyncSession, user_id: str, template_id: int) -> None:
        template = await self.get(session, user_id, template_id)
        await session.delete(template)
        await session.commit()

    @staticmethod
    async def _clear_defaults(
        session: AsyncSession,
        user_id: str,
        template_type: TemplateType,
        keep_id: int | None = None,
    ) -> None:
        stmt = update(Template).where(Template.user_id == user_id, Template.type == template_type)
        if keep_id is not None:
            stmt = stmt.where(Template.id != keep_id)
        await session.execute(stmt.values(is_default=False))
