from __future__ import annotations

import base64

import pytest
from sqlalchemy.exc import OperationalError

from services.errors import ValidationError
from services.ingestion import ResumeProcessor
from tests.factories import create_user

pytestmark = pytest.mark.unit

PDF_BYTES = base64.b64encode(b"%PDF-1.4 resume").decode()


def _stored_files(settings, user_id: str) -> list:
    directory = settings.resume_storage_directory / user_id
    return sorted(directory.glob("*")) if directory.exists() else []


@pytest.mark.asyncio
async def test_store_resume_writes_file_and_row(session, settings) -> None:
    await create_user(session, "resume-owner")

    resume = await ResumeProcessor(settings).store_resume(
        session, user_id="resume-owner", name="cv.pdf", file_data=PDF_BYTES, mime_type="application/pdf"
    )

    assert resume.is_default is True
    assert resume.file_size == len(b"%PDF-1.4 resume")
    assert [str(path) for path in _stored_files(settings, "resume-owner")] == [resume.storage_path]


@pytest.mark.asyncio
async def test_failed_commit_removes_written_file(
    session, settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    await create_user(session, "unlucky-owner")
    before = _stored_files(settings, "unlucky-owner")

    async def failing_commit() -> None:
        raise OperationalError("INSERT INTO resumes", {}, Exception("database is locked"))

    monkeypatch.setattr(session, "commit", failing_commit)

    with pytest.raises(OperationalError):
        await ResumeProcessor(settings).store_resume(
            session, user_id="unlucky-owner", name="cv.pdf", file_data=PDF_BYTES, mime_type="application/pdf"
        )

    assert _stored_files(settings, "unlucky-owner") == before


@pytest.mark.asyncio
async def test_oversized_or_undecodable_uploads_are_rejected(session, settings) -> None:
    processor = ResumeProcessor(settings.model_copy(update={"resume_max_bytes": 4}))

    with pytest.raises(ValidationError):
        await processor.store_resume(
            session, user_id="user-1", name="cv.pdf", file_data=PDF_BYTES, mime_type="application/pdf"
        )
    with pytest.raises(ValidationError):
        await processor.store_resume(
            session, user_id="user-1", name="cv.pdf", file_data="not base64!", mime_type="application/pdf"
        )
