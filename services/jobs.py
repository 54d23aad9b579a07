"""Job catalog search and demo seeding."""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.enums import EmploymentType, ExperienceLevel, LocationType
from app.log import get_logger
from app.models import Job
from services.errors import NotFoundError

LOGGER = get_logger("jobs")

DEFAULT_PAGE_SIZE = 20

SAMPLE_JOBS: list[dict[str, Any]] = [
    {
        "title": "Senior Frontend Developer",
        "company": "TechCorp Inc.",
        "location": "San Francisco, CA",
        "location_type": "hybrid",
        "salary": "$150,000 - $180,000",
        "salary_min": 150000,
        "salary_max": 180000,
        "description": (
            "We are looking for a Senior Frontend Developer to join our team. You will be responsible for "
            "building and maintaining our web applications using React, TypeScript, and modern frontend "
            "technologies."
        ),
        "requirements": [
            "5+ years of experience with React",
            "Strong TypeScript skills",
            "Experience with state management",
            "Knowledge of testing frameworks",
        ],
        "benefits": ["Health insurance", "401k matching", "Remote work options", "Unlimited PTO"],
        "employment_type": "full-time",
        "experience_level": "senior",
    },
    {
        "title": "Full Stack Engineer",
        "company": "StartupXYZ",
        "location": "New York, NY",
        "location_type": "remote",
        "salary": "$120,000 - $160,000",
        "salary_min": 120000,
        "salary_max": 160000,
        "description": (
            "Join our fast-growing startup as a Full Stack Engineer. Work on exciting projects using Node.js, "
            "React, and PostgreSQL."
        ),
        "requirements": [
            "3+ years of full stack experience",
            "Node.js and React proficiency",
            "Database design skills",
            "API development experience",
        ],
        "benefits": ["Equity package", "Flexible hours", "Learning budget", "Team retreats"],
        "employment_type": "full-time",
        "experience_level": "mid",
    },
    {
        "title": "Junior Software Developer",
        "company": "Innovation Labs",
        "location": "Austin, TX",
        "location_type": "onsite",
        "salary": "$70,000 - $90,000",
        "salary_min": 70000,
        "salary_max": 90000,
        "description": "Great opportunity for a junior developer to grow their skills. Mentorship program included.",
        "requirements": [
            "CS degree or bootcamp graduate",
            "Basic programming knowledge",
            "Eagerness to learn",
            "Team player",
        ],
        "benefits": ["Mentorship program", "Training budget", "Health benefits", "Gym membership"],
        "employment_type": "full-time",
        "experience_level": "entry",
    },
    {
        "title": "DevOps Engineer",
        "company": "CloudScale",
        "location": "Seattle, WA",
        "location_type": "hybrid",
        "salary": "$140,000 - $170,000",
        "salary_min": 140000,
        "salary_max": 170000,
        "description": (
            "Looking for a DevOps Engineer to help us scale our infrastructure. Experience with AWS, "
            "Kubernetes, and CI/CD required."
        ),
        "requirements": [
            "AWS certification preferred",
            "Kubernetes experience",
            "CI/CD pipeline expertise",
            "Infrastructure as code",
        ],
        "benefits": ["Stock options", "Remote flexibility", "Conference budget", "Premium healthcare"],
        "employment_type": "full-time",
        "experience_level": "senior",
    },
    {
        "title": "Product Designer",
        "company": "DesignFirst",
        "location": "Los Angeles, CA",
        "location_type": "remote",
        "salary": "$110,000 - $140,000",
        "salary_min": 110000,
        "salary_max": 140000,
        "description": "We need a talented Product Designer to create beautiful and intuitive user experiences.",
        "requirements": [
            "Figma expertise",
            "User research experience",
            "Design system knowledge",
            "Prototyping skills",
        ],
        "benefits": ["Creative freedom", "Design tools budget", "Flexible schedule", "Health & dental"],
        "employment_type": "full-time",
        "experience_level": "mid",
    },
    {
        "title": "Data Scientist",
        "company": "DataDriven Co",
        "location": "Boston, MA",
        "location_type": "hybrid",
        "salary": "$130,000 - $160,000",
        "salary_min": 130000,
        "salary_max": 160000,
        "description": "Join our data science team to build ML models and derive insights from large datasets.",
        "requirements": [
            "Python and SQL proficiency",
            "ML/AI experience",
            "Statistics background",
            "Communication skills",
        ],
        "benefits": ["Research time", "Conference attendance", "Competitive salary", "Parental leave"],
        "employment_type": "full-time",
        "experience_level": "mid",
    },
]

_ENUM_FIELDS = {
    "location_type": LocationType,
    "employment_type": EmploymentType,
    "experience_level": ExperienceLevel,
}


@dataclass
class JobFilters:
    search: str | None = None
    location: str | None = None
    location_type: LocationType | None = None
    employment_type: EmploymentType | None = None
    experience_level: ExperienceLevel | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    limit: int = DEFAULT_PAGE_SIZE
    offset: int = 0


class JobCatalog:
    """Search active job listings and load demo data."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def list_jobs(self, session: AsyncSession, filters: JobFilters) -> tuple[list[Job], int]:
        conditions = [Job.is_active.is_(True)]

        if filters.search:
            pattern = f"%{filters.search}%"
            conditions.append(
                or_(Job.title.ilike(pattern), Job.company.ilike(pattern), Job.description.ilike(pattern))
            )
        if filters.location:
            conditions.append(Job.location.ilike(f"%{filters.location}%"))
        if filters.location_type is not None:
            conditions.append(Job.location_type == filters.location_type)
        if filters.employment_type is not None:
            conditions.append(Job.employment_type == filters.employment_type)
        if filters.experience_level is not None:
            conditions.append(Job.experience_level == filters.experience_level)
        if filters.salary_min:
            conditions.append(Job.salary_min >= filters.salary_min)
        if filters.salary_max:
            conditions.append(Job.salary_max <= filters.salary_max)

        where_clause = and_(*conditions)
        total = await session.scalar(select(func.count(Job.id)).where(where_clause))

        stmt = (
            select(Job)
            .where(where_clause)
            .order_by(Job.posted_at.desc(), Job.id.desc())
            .limit(filters.limit)
            .offset(filters.offset)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all()), int(total or 0)

    async def get_job(self, session: AsyncSession, job_id: int) -> Job:
        result = await session.execute(select(Job).where(Job.id == job_id))
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError("Job not found")
        return job

    async def create_job(self, session: AsyncSession, payload: dict[str, Any]) -> Job:
        job = self._job_from_payload(payload, posted_at=datetime.utcnow())
        session.add(job)
        await session.commit()
        await session.refresh(job)
        return job

    async def seed_jobs(self, session: AsyncSession) -> int:
        samples = self._load_job_samples() or SAMPLE_JOBS
        posted_at = datetime.utcnow()
        for payload in samples:
            session.add(self._job_from_payload(payload, posted_at=posted_at))
        await session.commit()
        LOGGER.info("Seeded %d sample jobs", len(samples))
        return len(samples)

    def _load_job_samples(self) -> list[dict[str, Any]]:
        path = Path(self.settings.sample_job_file)
        if not path.exists():
            return []
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)

    @staticmethod
    def _job_from_payload(payload: dict[str, Any], *, posted_at: datetime) -> Job:
        columns = set(Job.__table__.columns.keys()) - {"id", "created_at", "updated_at"}
        values = {key: value for key, value in payload.items() if key in columns}
        for field, enum_cls in _ENUM_FIELDS.items():
            if values.get(field) is not None:
                values[field] = enum_cls(values[field])
        for field in ("posted_at", "expires_at"):
            if isinstance(values.get(field), str):
                values[field] = datetime.fromisoformat(values[field])
        values.setdefault("posted_at", posted_at)
        values.setdefault("is_active", True)
        return Job(**values)
