from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.enums import ApplicationStatus, TemplateType
from app.models import Application, Job, Resume, Template, User


async def create_user(session: AsyncSession, user_id: str = "user-1", **overrides: Any) -> User:
    values: dict[str, Any] = {"name": "Ann Lee", "skills": ["Python", "SQL"]}
    values.update(overrides)
    user = User(id=user_id, **values)
    session.add(user)
    await session.commit()
    return user


async def create_job(session: AsyncSession, **overrides: Any) -> Job:
    values: dict[str, Any] = {"title": "Backend Engineer", "company": "Acme"}
    values.update(overrides)
    job = Job(**values)
    session.add(job)
    await session.commit()
    return job


async def create_resume(session: AsyncSession, user_id: str = "user-1", **overrides: Any) -> Resume:
    values: dict[str, Any] = {"name": "cv.pdf", "storage_path": "/tmp/cv.pdf", "mime_type": "application/pdf"}
    values.update(overrides)
    resume = Resume(user_id=user_id, **values)
    session.add(resume)
    await session.commit()
    return resume


async def create_template(
    session: AsyncSession,
    user_id: str = "user-1",
    content: str = "Hi {{name}} applying to {{company}}",
    **overrides: Any,
) -> Template:
    values: dict[str, Any] = {"name": "Standard", "type": TemplateType.COVER_LETTER}
    values.update(overrides)
    template = Template(user_id=user_id, content=content, **values)
    session.add(template)
    await session.commit()
    return template


async def create_application(
    session: AsyncSession,
    job_id: int,
    user_id: str = "user-1",
    status: ApplicationStatus = ApplicationStatus.SUBMITTED,
) -> Application:
    application = Application(user_id=user_id, job_id=job_id, status=status)
    session.add(application)
    await session.commit()
    return application
