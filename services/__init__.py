"""Service layer for profiles, résumés, jobs, applications and suggestions."""

from .admin import AdminService
from .application import ApplicationSubmitter, BulkApplyOutcome
from .cover_letters import CoverLetterGenerator
from .ingestion import ResumeProcessor
from .jobs import JobCatalog, JobFilters
from .profiles import ProfileService
from .suggestions import CompanyLookup, SuggestionService
from .templates import TemplateService

__all__ = [
    "AdminService",
    "ApplicationSubmitter",
    "BulkApplyOutcome",
    "CompanyLookup",
    "CoverLetterGenerator",
    "JobCatalog",
    "JobFilters",
    "ProfileService",
    "ResumeProcessor",
    "SuggestionService",
    "TemplateService",
]
