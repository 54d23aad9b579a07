"""Job-board integrations and platform statistics for administrators."""
from __future__ import annotations

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.enums import UserRole
from app.models import Application, Job, JobBoard, User
from services.errors import ConflictError, ForbiddenError, NotFoundError
from services.profiles import ensure_user

BOARD_FIELDS = ("name", "logo_url", "website_url", "api_endpoint", "is_active")


class AdminService:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def require_admin(self, session: AsyncSession, user_id: str) -> User:
        if user_id in self.settings.admin_user_ids:
            user = await ensure_user(session, user_id)
            if user.role != UserRole.ADMIN:
                user.role = UserRole.ADMIN
                await session.commit()
            return user

        result = await session.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if user is None or user.role != UserRole.ADMIN:
            raise ForbiddenError("Admin access required")
        return user

    async def stats(self, session: AsyncSession) -> dict[str, int]:
        total_users = await session.scalar(select(func.count(User.id)))
        total_applications = await session.scalar(select(func.count(Application.id)))
        total_jobs = await session.scalar(select(func.count(Job.id)))
        average = await session.scalar(select(func.avg(JobBoard.success_rate)))
        return {
            "total_users": int(total_users or 0),
            "total_applications": int(total_applications or 0),
            "total_jobs": int(total_jobs or 0),
            "avg_success_rate": round(float(average or 0)),
        }

    async def list_boards(self, session: AsyncSession) -> list[JobBoard]:
        result = await session.execute(select(JobBoard).order_by(JobBoard.created_at.desc(), JobBoard.id.desc()))
        return list(result.scalars().all())

    async def create_board(self, session: AsyncSession, payload: dict[str, Any]) -> JobBoard:
        board = JobBoard(**payload)
        session.add(board)
        try:
            await session.commit()
        except IntegrityError as exc:
            await session.rollback()
            raise ConflictError(f"Job board slug '{payload.get('slug')}' already exists") from exc
        await session.refresh(board)
        return board

    async def update_board(self, session: AsyncSession, board_id: int, changes: dict[str, Any]) -> JobBoard:
        board = await self._get_board(session, board_id)
        for field in BOARD_FIELDS:
            if changes.get(field) is not None:
                setattr(board, field, changes[field])
        await session.commit()
        await session.refresh(board)
        return board

    async def delete_board(self, session: AsyncSession, board_id: int) -> None:
        board = await self._get_board(session, board_id)
        await session.delete(board)
        await session.commit()

    @staticmethod
    async def _get_board(session: AsyncSession, board_id: int) -> JobBoard:
        result = await session.execute(select(JobBoard).where(JobBoard.id == board_id))
        board = result.scalar_one_or_none()
        if board is None:
            raise NotFoundError("Job board not found")
        return board
