"""Résumé upload, storage and default selection."""
from __future__ import annotations

import base64
import binascii
import uuid
from pathlib import Path

import aiofiles
import aiofiles.os
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.log import get_logger
from app.models import Resume
from services.errors import NotFoundError, ValidationError
from services.profiles import ensure_user

LOGGER = get_logger("resumes")

PDF_MIME_TYPE = "application/pdf"
ACCEPTED_MIME_MARKERS = ("pdf", "word", "document")


class ResumeProcessor:
    """Persist uploaded résumé files and their metadata."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def store_resume(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        name: str,
        file_data: str,
        mime_type: str,
        file_size: int | None = None,
        is_default: bool = False,
    ) -> Resume:
        if not any(marker in mime_type for marker in ACCEPTED_MIME_MARKERS):
            raise ValidationError("Please upload a PDF or Word document")

        content = self._decode(file_data)
        if len(content) > self.settings.resume_max_bytes:
            raise ValidationError("File size must be less than 10MB")

        user = await ensure_user(session, user_id)
        existing = await self.list_resumes(session, user_id)
        make_default = is_default or not existing
        if make_default:
            await self._clear_defaults(session, user_id)

        storage_path = self._build_storage_path(user_id, mime_type)
        async with aiofiles.open(storage_path, "wb") as handle:
            await handle.write(content)

        resume = Resume(
            user_id=user.id,
            name=name,
            storage_path=str(storage_path),
            mime_type=mime_type,
            file_size=file_size if file_size is not None else len(content),
            is_default=make_default,
        )
        session.add(resume)
        try:
            await session.commit()
        except SQLAlchemyError:
            await session.rollback()
            await aiofiles.os.remove(storage_path)
            raise
        await session.refresh(resume)
        LOGGER.info("Stored resume %s for user %s at %s", resume.id, user_id, storage_path)
        return resume

    async def list_resumes(self, session: AsyncSession, user_id: str) -> list[Resume]:
        stmt = (
            select(Resume)
            .where(Resume.user_id == user_id)
            .order_by(Resume.created_at.desc(), Resume.id.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def delete_resume(self, session: AsyncSession, *, user_id: str, resume_id: int) -> None:
        resume = await self._get_owned(session, user_id, resume_id)
        storage_path = Path(resume.storage_path)
        await session.delete(resume)
        await session.commit()

        if await aiofiles.os.path.exists(storage_path):
            await aiofiles.os.remove(storage_path)

    async def set_default(self, session: AsyncSession, *, user_id: str, resume_id: int) -> Resume:
        resume = await self._get_owned(session, user_id, resume_id)
        await self._clear_defaults(session, user_id)
        resume.is_default = True
        await session.commit()
        await session.refresh(resume)
        return resume

    def _build_storage_path(self, user_id: str, mime_type: str) -> Path:
        resume_dir = self.settings.resume_storage_directory / user_id
        resume_dir.mkdir(parents=True, exist_ok=True)
        extension = "pdf" if mime_type == PDF_MIME_TYPE else "doc"
        return resume_dir / f"{uuid.uuid4()}.{extension}"

    @staticmethod
    def _decode(file_data: str) -> bytes:
        try:
            return base64.b64decode(file_data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValidationError("Resume file data must be base64 encoded") from exc

    @staticmethod
    async def _get_owned(session: AsyncSession, user_id: str, resume_id: int) -> Resume:
        result = await session.execute(select(Resume).where(Resume.id == resume_id, Resume.user_id == user_id))
        resume = result.scalar_one_or_none()
        if resume is None:
            raise NotFoundError("Resume not found")
        return resume

    @staticmethod
    async def _clear_defaults(session: AsyncSession, user_id: str) -> None:
        await session.execute(update(Resume).where(Resume.user_id == user_id).values(is_default=False))
