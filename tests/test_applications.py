from __future__ import annotations

import pytest

from app.enums import ApplicationStatus
from services.application import ApplicationSubmitter
from services.errors import ConflictError, InvalidStateError, NotFoundError, ValidationError
from tests.factories import create_application, create_job, create_resume, create_template, create_user

pytestmark = pytest.mark.unit


@pytest.mark.asyncio
async def test_create_starts_as_draft_with_job_loaded(session, settings) -> None:
    await create_user(session)
    job = await create_job(session, title="Platform Engineer")

    application = await ApplicationSubmitter(settings).create(session, "user-1", job_id=job.id)

    assert application.status == ApplicationStatus.DRAFT
    assert application.applied_at is None
    assert application.job.title == "Platform Engineer"


@pytest.mark.asyncio
async def test_create_rejects_second_application_for_same_job(session, settings) -> None:
    await create_user(session)
    job = await create_job(session)
    submitter = ApplicationSubmitter(settings)
    await submitter.create(session, "user-1", job_id=job.id)

    with pytest.raises(ConflictError):
        await submitter.create(session, "user-1", job_id=job.id)


@pytest.mark.asyncio
async def test_create_requires_existing_job_and_owned_resume(session, settings) -> None:
    await create_user(session)
    await create_user(session, "user-2")
    job = await create_job(session)
    foreign_resume = await create_resume(session, user_id="user-2")
    submitter = ApplicationSubmitter(settings)

    with pytest.raises(NotFoundError):
        await submitter.create(session, "user-1", job_id=4242)
    with pytest.raises(NotFoundError):
        await submitter.create(session, "user-1", job_id=job.id, resume_id=foreign_resume.id)


@pytest.mark.asyncio
async def test_submit_records_timestamp_once(session, settings) -> None:
    await create_user(session)
    job = await create_job(session)
    submitter = ApplicationSubmitter(settings)
    draft = await submitter.create(session, "user-1", job_id=job.id)

    submitted = await submitter.submit(session, "user-1", draft.id)

    assert submitted.status == ApplicationStatus.SUBMITTED
    assert submitted.applied_at is not None
    with pytest.raises(InvalidStateError):
        await submitter.submit(session, "user-1", draft.id)


@pytest.mark.asyncio
async def test_withdraw_allowed_until_terminal(session, settings) -> None:
    await create_user(session)
    open_job = await create_job(session)
    closed_job = await create_job(session)
    submitter = ApplicationSubmitter(settings)
    interviewing = await create_application(session, open_job.id, status=ApplicationStatus.INTERVIEW)
    rejected = await create_application(session, closed_job.id, status=ApplicationStatus.REJECTED)

    withdrawn = await submitter.withdraw(session, "user-1", interviewing.id)

    assert withdrawn.status == ApplicationStatus.WITHDRAWN
    assert withdrawn.last_status_update is not None
    with pytest.raises(InvalidStateError):
        await submitter.withdraw(session, "user-1", rejected.id)
    with pytest.raises(InvalidStateError):
        await submitter.withdraw(session, "user-1", interviewing.id)


@pytest.mark.asyncio
async def test_applications_are_scoped_to_their_owner(session, settings) -> None:
    await create_user(session)
    job = await create_job(session)
    application = await create_application(session, job.id)
    submitter = ApplicationSubmitter(settings)

    with pytest.raises(NotFoundError):
        await submitter.get(session, "someone-else", application.id)
    assert await submitter.list_applications(session, "someone-else") == []


@pytest.mark.asyncio
async def test_update_only_touches_editable_fields(session, settings) -> None:
    await create_user(session)
    job = await create_job(session)
    submitter = ApplicationSubmitter(settings)
    draft = await submitter.create(session, "user-1", job_id=job.id)

    updated = await submitter.update(
        session,
        "user-1",
        draft.id,
        {"notes": "Referral from Sam", "status": ApplicationStatus.OFFERED},
    )

    assert updated.notes == "Referral from Sam"
    assert updated.status == ApplicationStatus.DRAFT


@pytest.mark.asyncio
async def test_stats_count_by_status(session, settings) -> None:
    await create_user(session)
    statuses = [
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.SUBMITTED,
        ApplicationStatus.INTERVIEW,
        ApplicationStatus.OFFERED,
        ApplicationStatus.REJECTED,
        ApplicationStatus.PENDING,
        ApplicationStatus.DRAFT,
        ApplicationStatus.WITHDRAWN,
    ]
    for status in statuses:
        job = await create_job(session)
        await create_application(session, job.id, status=status)

    stats = await ApplicationSubmitter(settings).stats(session, "user-1")

    assert stats == {
        "total": 8,
        "submitted": 2,
        "interviews": 1,
        "offers": 1,
        "rejected": 1,
        "pending": 1,
        "draft": 1,
    }


@pytest.mark.asyncio
async def test_set_status_accepts_only_external_states(session, settings) -> None:
    await create_user(session)
    job = await create_job(session)
    other_job = await create_job(session)
    submitter = ApplicationSubmitter(settings)
    application = await create_application(session, job.id)
    withdrawn = await create_application(session, other_job.id, status=ApplicationStatus.WITHDRAWN)

    interviewing = await submitter.set_status(session, application.id, ApplicationStatus.INTERVIEW)

    assert interviewing.status == ApplicationStatus.INTERVIEW
    with pytest.raises(ValidationError):
        await submitter.set_status(session, application.id, ApplicationStatus.SUBMITTED)
    with pytest.raises(InvalidStateError):
        await submitter.set_status(session, withdrawn.id, ApplicationStatus.VIEWED)
    with pytest.raises(NotFoundError):
        await submitter.set_status(session, 777, ApplicationStatus.VIEWED)


@pytest.mark.asyncio
async def test_update_rejects_resume_or_template_of_another_user(session, settings) -> None:
    await create_user(session)
    await create_user(session, "user-2")
    job = await create_job(session)
    own_resume = await create_resume(session)
    foreign_resume = await create_resume(session, user_id="user-2")
    foreign_template = await create_template(session, user_id="user-2")
    submitter = ApplicationSubmitter(settings)
    draft = await submitter.create(session, "user-1", job_id=job.id)

    with pytest.raises(NotFoundError):
        await submitter.update(session, "user-1", draft.id, {"resume_id": foreign_resume.id})
    with pytest.raises(NotFoundError):
        await submitter.update(session, "user-1", draft.id, {"template_id": foreign_template.id})

    updated = await submitter.update(session, "user-1", draft.id, {"resume_id": own_resume.id})
    assert updated.resume_id == own_resume.id
    assert updated.template_id is None


@pytest.mark.asyncio
async def test_create_rejects_template_of_another_user(session, settings) -> None:
    await create_user(session)
    await create_user(session, "user-2")
    job = await create_job(session)
    foreign_template = await create_template(session, user_id="user-2")

    with pytest.raises(NotFoundError):
        await ApplicationSubmitter(settings).create(
            session, "user-1", job_id=job.id, template_id=foreign_template.id
        )
