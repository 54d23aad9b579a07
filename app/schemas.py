"""Pydantic schemas shared across routes and services."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.enums import (
    ApplicationStatus,
    CoverLetterTone,
    EmploymentType,
    ExperienceLevel,
    LocationType,
    OutcomeError,
    TargetKind,
    TemplateType,
    UserRole,
)


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class ExperienceEntry(BaseModel):
    title: str
    company: str
    location: str | None = None
    start_date: str
    end_date: str | None = None
    current: bool = False
    description: str | None = None


class EducationEntry(BaseModel):
    degree: str
    school: str
    field: str | None = None
    start_date: str
    end_date: str | None = None
    gpa: str | None = None


class ProfileRead(ORMModel):
    id: str
    name: str | None = None
    email: str | None = None
    role: UserRole
    phone: str | None = None
    location: str | None = None
    headline: str | None = None
    summary: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    github_url: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    target_companies: list[str] = Field(default_factory=list)
    target_roles: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    name: str | None = None
    email: str | None = Field(default=None, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    phone: str | None = None
    location: str | None = None
    headline: str | None = None
    summary: str | None = None
    linkedin_url: str | None = None
    portfolio_url: str | None = None
    github_url: str | None = None
    skills: list[str] | None = None
    experience: list[ExperienceEntry] | None = None
    education: list[EducationEntry] | None = None


class ValueInput(BaseModel):
    value: str = Field(..., min_length=1)


class TargetList(BaseModel):
    kind: TargetKind
    items: list[str]


class SkillList(BaseModel):
    skills: list[str]


class ResumeUpload(BaseModel):
    name: str = Field(..., min_length=1)
    file_data: str = Field(..., description="Base64 encoded résumé file")
    mime_type: str
    file_size: int | None = Field(default=None, ge=0)
    is_default: bool = False


class ResumeRead(ORMModel):
    id: int
    name: str
    mime_type: str | None = None
    file_size: int | None = None
    is_default: bool
    created_at: datetime


class JobRead(ORMModel):
    id: int
    external_id: str | None = None
    job_board_id: int | None = None
    title: str
    company: str
    company_logo: str | None = None
    location: str | None = None
    location_type: LocationType
    salary: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    description: str | None = None
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    employment_type: EmploymentType
    experience_level: ExperienceLevel | None = None
    application_url: str | None = None
    posted_at: datetime | None = None
    expires_at: datetime | None = None
    is_active: bool


class JobCreate(BaseModel):
    title: str
    company: str
    external_id: str | None = None
    job_board_id: int | None = None
    company_logo: str | None = None
    location: str | None = None
    location_type: LocationType = LocationType.ONSITE
    salary: str | None = None
    salary_min: int | None = None
    salary_max: int | None = None
    description: str | None = None
    requirements: list[str] | None = None
    benefits: list[str] | None = None
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    experience_level: ExperienceLevel | None = None
    application_url: str | None = None
    expires_at: datetime | None = None


class JobListResponse(BaseModel):
    jobs: list[JobRead]
    total: int


class ApplicationRead(ORMModel):
    id: int
    job_id: int
    resume_id: int | None = None
    template_id: int | None = None
    status: ApplicationStatus
    cover_letter: str | None = None
    custom_answers: dict[str, str] | None = None
    applied_at: datetime | None = None
    last_status_update: datetime | None = None
    notes: str | None = None
    created_at: datetime
    updated_at: datetime
    job: JobRead | None = None


class ApplicationCreate(BaseModel):
    job_id: int
    resume_id: int | None = None
    template_id: int | None = None
    cover_letter: str | None = None
    custom_answers: dict[str, str] | None = None


class ApplicationUpdate(BaseModel):
    cover_letter: str | None = None
    custom_answers: dict[str, str] | None = None
    notes: str | None = None
    resume_id: int | None = None
    template_id: int | None = None


class ApplicationStats(BaseModel):
    total: int
    submitted: int
    interviews: int
    offers: int
    rejected: int
    pending: int
    draft: int


class StatusUpdate(BaseModel):
    status: ApplicationStatus


class AutoApplyRequest(BaseModel):
    job_ids: list[int]
    resume_id: int
    template_id: int | None = None


class BulkApplyOutcomeRead(ORMModel):
    job_id: int
    success: bool
    error: str | None = None
    error_kind: OutcomeError | None = None


class AutoApplyResponse(BaseModel):
    results: list[BulkApplyOutcomeRead]
    succeeded: int
    failed: int


class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1)
    type: TemplateType
    content: str
    variables: list[str] | None = None
    is_default: bool = False


class TemplateUpdate(BaseModel):
    name: str | None = None
    content: str | None = None
    variables: list[str] | None = None
    is_default: bool | None = None


class TemplateRead(ORMModel):
    id: int
    name: str
    type: TemplateType
    content: str
    variables: list[str] | None = None
    is_default: bool
    created_at: datetime
    updated_at: datetime


class CoverLetterRequest(BaseModel):
    job_id: int
    tone: CoverLetterTone = CoverLetterTone.PROFESSIONAL


class CoverLetterResponse(BaseModel):
    content: str


class SuggestionResponse(BaseModel):
    query: str
    suggestions: list[str]
    open: bool


class JobBoardCreate(BaseModel):
    name: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1, pattern=r"^[a-z0-9-]+$")
    logo_url: str | None = None
    website_url: str | None = None
    api_endpoint: str | None = None
    is_active: bool = True


class JobBoardUpdate(BaseModel):
    name: str | None = None
    logo_url: str | None = None
    website_url: str | None = None
    api_endpoint: str | None = None
    is_active: bool | None = None


class JobBoardRead(ORMModel):
    id: int
    name: str
    slug: str
    logo_url: str | None = None
    website_url: str | None = None
    api_endpoint: str | None = None
    is_active: bool
    success_rate: int
    total_applications: int
    created_at: datetime


class AdminStats(BaseModel):
    total_users: int
    total_applications: int
    total_jobs: int
    avg_success_rate: int


class SeedResponse(BaseModel):
    success: bool
    count: int
