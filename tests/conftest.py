from __future__ import annotations

import asyncio
import os
import tempfile
from collections.abc import AsyncIterator, Iterator
from pathlib import Path

_TEST_ROOT = Path(tempfile.mkdtemp(prefix="jobflow-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'test.db'}"
os.environ["DATA_DIRECTORY"] = str(_TEST_ROOT)
os.environ["RESUME_STORAGE_DIRECTORY"] = str(_TEST_ROOT / "resumes")
os.environ["SAMPLE_JOB_FILE"] = str(_TEST_ROOT / "sample_jobs.json")
os.environ["COMPANY_LOOKUP_ENABLED"] = "false"
os.environ["LLM_API_KEY"] = ""
os.environ["ADMIN_USER_IDS"] = '["admin-1"]'

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.config import Settings, get_settings  # noqa: E402
from app.database import AsyncSessionLocal, Base, engine  # noqa: E402
from app.main import app  # noqa: E402


async def reset_database() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest_asyncio.fixture
async def session() -> AsyncIterator[AsyncSession]:
    await reset_database()
    async with AsyncSessionLocal() as db_session:
        yield db_session


@pytest.fixture
def client() -> Iterator[TestClient]:
    asyncio.run(reset_database())
    app.dependency_overrides.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
