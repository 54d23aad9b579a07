"""Application lifecycle management and bulk auto-apply."""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.config import Settings
from app.enums import EXTERNAL_STATUSES, ApplicationStatus, OutcomeError
from app.log import get_logger
from app.models import Application, Job, Resume, Template
from services.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from services.profiles import ensure_user
from services.templates import build_placeholder_values, render_template

LOGGER = get_logger("applications")

OUTCOME_MESSAGES = {
    OutcomeError.ALREADY_APPLIED: "Already applied",
    OutcomeError.JOB_NOT_FOUND: "Job not found",
}

EDITABLE_FIELDS = ("cover_letter", "custom_answers", "notes", "resume_id", "template_id")


@dataclass(frozen=True)
class ApplicantContext:
    name: str | None
    skills: list[str]


@dataclass(frozen=True)
class BulkApplyOutcome:
    job_id: int
    success: bool
    error: str | None = None
    error_kind: OutcomeError | None = None

    @classmethod
    def succeeded(cls, job_id: int) -> BulkApplyOutcome:
        return cls(job_id=job_id, success=True)

    @classmethod
    def failed(cls, job_id: int, kind: OutcomeError, detail: str | None = None) -> BulkApplyOutcome:
        return cls(job_id=job_id, success=False, error=detail or OUTCOME_MESSAGES[kind], error_kind=kind)


class ApplicationSubmitter:
    """Create, submit and track applications for a single owner.

    ``bulk_apply`` walks the requested jobs strictly in order. Every per-job
    problem (duplicate, missing job, storage error) becomes an outcome record;
    only a missing resume aborts the call, and it does so before any job is
    touched.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def list_applications(self, session: AsyncSession, user_id: str) -> list[Application]:
        stmt = (
            select(Application)
            .options(selectinload(Application.job))
            .where(Application.user_id == user_id)
            .order_by(Application.created_at.desc(), Application.id.desc())
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def stats(self, session: AsyncSession, user_id: str) -> dict[str, int]:
        stmt = (
            select(Application.status, func.count(Application.id))
            .where(Application.user_id == user_id)
            .group_by(Application.status)
        )
        result = await session.execute(stmt)
        counts = {status: count for status, count in result.all()}
        return {
            "total": sum(counts.values()),
            "submitted": counts.get(ApplicationStatus.SUBMITTED, 0),
            "interviews": counts.get(ApplicationStatus.INTERVIEW, 0),
            "offers": counts.get(ApplicationStatus.OFFERED, 0),
            "rejected": counts.get(ApplicationStatus.REJECTED, 0),
            "pending": counts.get(ApplicationStatus.PENDING, 0),
            "draft": counts.get(ApplicationStatus.DRAFT, 0),
        }

    async def get(self, session: AsyncSession, user_id: str, application_id: int) -> Application:
        application = await self._load(session, application_id)
        if application is None or application.user_id != user_id:
            raise NotFoundError("Application not found")
        return application

    async def create(
        self,
        session: AsyncSession,
        user_id: str,
        *,
        job_id: int,
        resume_id: int | None = None,
        template_id: int | None = None,
        cover_letter: str | None = None,
        custom_answers: dict[str, str] | None = None,
    ) -> Application:
        await ensure_user(session, user_id)
        if job_id in await self._applied_job_ids(session, user_id):
            raise ConflictError("Already applied to this job")
        if await self._find_job(session, job_id) is None:
            raise NotFoundError("Job not found")
        if resume_id is not None:
            await self._require_resume(session, user_id, resume_id)
        if template_id is not None:
            await self._require_template(session, user_id, template_id)

        try:
            application = await self._create_application(
                session,
                user_id=user_id,
                job_id=job_id,
                resume_id=resume_id,
                template_id=template_id,
                cover_letter=cover_letter,
                custom_answers=custom_answers,
                status=ApplicationStatus.DRAFT,
            )
        except IntegrityError as exc:
            await session.rollback()
            raise ConflictError("Already applied to this job") from exc
        return await self.get(session, user_id, application.id)

    async def update(
        self,
        session: AsyncSession,
        user_id: str,
        application_id: int,
        changes: dict[str, Any],
    ) -> Application:
        application = await self.get(session, user_id, application_id)
        if changes.get("resume_id") is not None:
            await self._require_resume(session, user_id, changes["resume_id"])
        if changes.get("template_id") is not None:
            await self._require_template(session, user_id, changes["template_id"])
        for field in EDITABLE_FIELDS:
            if field in changes:
                setattr(application, field, changes[field])
        await session.commit()
        return await self.get(session, user_id, application_id)

    async def submit(self, session: AsyncSession, user_id: str, application_id: int) -> Application:
        application = await self.get(session, user_id, application_id)
        if not application.status.is_submittable:
            raise InvalidStateError("Application already submitted")
        await self._mark_submitted(session, application)
        return await self.get(session, user_id, application_id)

    async def withdraw(self, session: AsyncSession, user_id: str, application_id: int) -> Application:
        application = await self.get(session, user_id, application_id)
        if application.status.is_terminal:
            raise InvalidStateError(f"Cannot withdraw an application that is {application.status.value}")
        application.status = ApplicationStatus.WITHDRAWN
        application.last_status_update = datetime.utcnow()
        await session.commit()
        return await self.get(session, user_id, application_id)

    async def set_status(
        self,
        session: AsyncSession,
        application_id: int,
        status: ApplicationStatus,
    ) -> Application:
        """Record an employer-side status such as ``viewed`` or ``interview``."""

        if status not in EXTERNAL_STATUSES:
            raise ValidationError(f"Status {status.value} cannot be set externally")
        application = await self._load(session, application_id)
        if application is None:
            raise NotFoundError("Application not found")
        if application.status == ApplicationStatus.WITHDRAWN:
            raise InvalidStateError("Application has been withdrawn")

        application.status = status
        application.last_status_update = datetime.utcnow()
        await session.commit()
        return await self._load(session, application_id)  # type: ignore[return-value]

    async def bulk_apply(
        self,
        session: AsyncSession,
        user_id: str,
        job_ids: Sequence[int],
        resume_id: int | None,
        template_id: int | None = None,
    ) -> list[BulkApplyOutcome]:
        if resume_id is None:
            raise ValidationError("A resume is required for auto-apply")

        user = await ensure_user(session, user_id)
        applicant = ApplicantContext(name=user.name, skills=list(user.skills or []))
        await self._require_resume(session, user_id, resume_id)
        template = await self._owned_template(session, user_id, template_id)
        template_content = template.content if template else None
        resolved_template_id = template.id if template else None

        outcomes: list[BulkApplyOutcome] = []
        for job_id in job_ids:
            outcome = await self._apply_one(
                session,
                user_id=user_id,
                job_id=job_id,
                resume_id=resume_id,
                template_id=resolved_template_id,
                template_content=template_content,
                applicant=applicant,
            )
            outcomes.append(outcome)

        succeeded = sum(1 for outcome in outcomes if outcome.success)
        LOGGER.info(
            "Auto-apply for user %s finished: %d succeeded, %d failed",
            user_id,
            succeeded,
            len(outcomes) - succeeded,
        )
        return outcomes

    async def _apply_one(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        job_id: int,
        resume_id: int,
        template_id: int | None,
        template_content: str | None,
        applicant: ApplicantContext,
    ) -> BulkApplyOutcome:
        try:
            if job_id in await self._applied_job_ids(session, user_id):
                return BulkApplyOutcome.failed(job_id, OutcomeError.ALREADY_APPLIED)

            job = await self._find_job(session, job_id)
            if job is None:
                return BulkApplyOutcome.failed(job_id, OutcomeError.JOB_NOT_FOUND)

            cover_letter = ""
            if template_content is not None:
                values = build_placeholder_values(
                    name=applicant.name,
                    company=job.company,
                    position=job.title,
                    skills=applicant.skills,
                )
                cover_letter = render_template(template_content, values)

            application = await self._create_application(
                session,
                user_id=user_id,
                job_id=job_id,
                resume_id=resume_id,
                template_id=template_id,
                cover_letter=cover_letter,
                status=ApplicationStatus.PENDING,
            )
            await self._mark_submitted(session, application)
        except Exception as exc:  # pylint: disable=broad-except
            await session.rollback()
            LOGGER.warning("Auto-apply to job %s for user %s failed: %s", job_id, user_id, exc)
            return BulkApplyOutcome.failed(job_id, OutcomeError.PERSISTENCE_FAILURE, str(exc))

        return BulkApplyOutcome.succeeded(job_id)

    async def _create_application(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        job_id: int,
        status: ApplicationStatus,
        resume_id: int | None = None,
        template_id: int | None = None,
        cover_letter: str | None = None,
        custom_answers: dict[str, str] | None = None,
    ) -> Application:
        application = Application(
            user_id=user_id,
            job_id=job_id,
            resume_id=resume_id,
            template_id=template_id,
            cover_letter=cover_letter,
            custom_answers=custom_answers,
            status=status,
        )
        session.add(application)
        await session.commit()
        return application

    async def _mark_submitted(self, session: AsyncSession, application: Application) -> None:
        now = datetime.utcnow()
        application.status = ApplicationStatus.SUBMITTED
        application.applied_at = now
        application.last_status_update = now
        await session.commit()

    @staticmethod
    async def _load(session: AsyncSession, application_id: int) -> Application | None:
        stmt = (
            select(Application)
            .options(selectinload(Application.job))
            .where(Application.id == application_id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def _applied_job_ids(session: AsyncSession, user_id: str) -> set[int]:
        result = await session.execute(select(Application.job_id).where(Application.user_id == user_id))
        return set(result.scalars().all())

    @staticmethod
    async def _find_job(session: AsyncSession, job_id: int) -> Job | None:
        result = await session.execute(select(Job).where(Job.id == job_id))
        return result.scalar_one_or_none()

    @staticmethod
    async def _require_resume(session: AsyncSession, user_id: str, resume_id: int) -> Resume:
        result = await session.execute(select(Resume).where(Resume.id == resume_id, Resume.user_id == user_id))
        resume = result.scalar_one_or_none()
        if resume is None:
            raise NotFoundError("Resume not found")
        return resume

    @classmethod
    async def _require_template(cls, session: AsyncSession, user_id: str, template_id: int) -> Template:
        template = await cls._owned_template(session, user_id, template_id)
        if template is None:
            raise NotFoundError("Template not found")
        return template

    @staticmethod
    async def _owned_template(session: AsyncSession, user_id: str, template_id: int | None) -> Template | None:
        if template_id is None:
            return None
        result = await session.execute(
            select(Template).where(Template.id == template_id, Template.user_id == user_id)
        )
        return result.scalar_one_or_none()
