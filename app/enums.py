"""Closed value sets shared by models, schemas and services."""
from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


class LocationType(str, enum.Enum):
    REMOTE = "remote"
    HYBRID = "hybrid"
    ONSITE = "onsite"


class EmploymentType(str, enum.Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    INTERNSHIP = "internship"


class ExperienceLevel(str, enum.Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    EXECUTIVE = "executive"


class ApplicationStatus(str, enum.Enum):
    DRAFT = "draft"
    PENDING = "pending"
    SUBMITTED = "submitted"
    VIEWED = "viewed"
    INTERVIEW = "interview"
    OFFERED = "offered"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATUSES

    @property
    def is_submittable(self) -> bool:
        return self in (ApplicationStatus.DRAFT, ApplicationStatus.PENDING)


TERMINAL_STATUSES = frozenset(
    {ApplicationStatus.OFFERED, ApplicationStatus.REJECTED, ApplicationStatus.WITHDRAWN}
)

# States recorded by employers or admins rather than by the applicant.
EXTERNAL_STATUSES = frozenset(
    {
        ApplicationStatus.VIEWED,
        ApplicationStatus.INTERVIEW,
        ApplicationStatus.OFFERED,
        ApplicationStatus.REJECTED,
    }
)


class TemplateType(str, enum.Enum):
    COVER_LETTER = "cover_letter"
    APPLICATION_FORM = "application_form"


class CoverLetterTone(str, enum.Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    ENTHUSIASTIC = "enthusiastic"


class TargetKind(str, enum.Enum):
    COMPANIES = "companies"
    ROLES = "roles"


class OutcomeError(str, enum.Enum):
    ALREADY_APPLIED = "already_applied"
    JOB_NOT_FOUND = "job_not_found"
    PERSISTENCE_FAILURE = "persistence_failure"
