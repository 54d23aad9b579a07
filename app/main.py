"""FastAPI entrypoint wiring services together."""
from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Query, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import init_models
from app.dependencies import admin_user, company_lookup_provider, db_session, settings_provider
from app.enums import EmploymentType, ExperienceLevel, LocationType, TargetKind, TemplateType
from app.log import configure_logging
from app.models import User
from app.schemas import (
    AdminStats,
    ApplicationCreate,
    ApplicationRead,
    ApplicationStats,
    ApplicationUpdate,
    AutoApplyRequest,
    AutoApplyResponse,
    BulkApplyOutcomeRead,
    CoverLetterRequest,
    CoverLetterResponse,
    JobBoardCreate,
    JobBoardRead,
    JobBoardUpdate,
    JobCreate,
    JobListResponse,
    JobRead,
    ProfileRead,
    ProfileUpdate,
    ResumeRead,
    ResumeUpload,
    SeedResponse,
    SkillList,
    StatusUpdate,
    SuggestionResponse,
    TargetList,
    TemplateCreate,
    TemplateRead,
    TemplateUpdate,
    ValueInput,
)
from services import (
    AdminService,
    ApplicationSubmitter,
    CoverLetterGenerator,
    JobCatalog,
    JobFilters,
    ProfileService,
    ResumeProcessor,
    SuggestionService,
    TemplateService,
)
from services.errors import ServiceError
from services.suggestions import RemoteLookup


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:  # pragma: no cover - framework hook
    configure_logging(get_settings().log_level)
    await init_models()
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="JobFlow", version="0.1.0", lifespan=lifespan)

    @app.exception_handler(ServiceError)
    async def _service_error(_: Request, exc: ServiceError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    # Suggestions

    @app.get("/suggestions/companies", response_model=SuggestionResponse)
    async def suggest_companies(
        q: str = Query(default=""),
        settings: Settings = Depends(settings_provider),
        company_lookup: RemoteLookup | None = Depends(company_lookup_provider),
    ) -> SuggestionResponse:
        suggestions = await SuggestionService(settings, company_lookup).companies(q)
        return SuggestionResponse(query=q, suggestions=suggestions, open=bool(suggestions))

    @app.get("/suggestions/roles", response_model=SuggestionResponse)
    async def suggest_roles(
        q: str = Query(default=""),
        settings: Settings = Depends(settings_provider),
    ) -> SuggestionResponse:
        suggestions = await SuggestionService(settings).roles(q)
        return SuggestionResponse(query=q, suggestions=suggestions, open=bool(suggestions))

    # Profile

    @app.get("/users/{user_id}/profile", response_model=ProfileRead)
    async def get_profile(
        user_id: str,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> User:
        return await ProfileService(settings).get_profile(session, user_id)

    @app.patch("/users/{user_id}/profile", response_model=ProfileRead)
    async def update_profile(
        user_id: str,
        payload: ProfileUpdate,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> User:
        changes = payload.model_dump(exclude_unset=True)
        return await ProfileService(settings).update_profile(session, user_id, changes)

    @app.post("/users/{user_id}/targets/{kind}", response_model=TargetList)
    async def add_target(
        user_id: str,
        kind: TargetKind,
        payload: ValueInput,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> TargetList:
        items = await ProfileService(settings).add_target(session, user_id, kind, payload.value)
        return TargetList(kind=kind, items=items)

    @app.delete("/users/{user_id}/targets/{kind}", response_model=TargetList)
    async def remove_target(
        user_id: str,
        kind: TargetKind,
        value: str = Query(...),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> TargetList:
        items = await ProfileService(settings).remove_target(session, user_id, kind, value)
        return TargetList(kind=kind, items=items)

    @app.post("/users/{user_id}/skills", response_model=SkillList)
    async def add_skill(
        user_id: str,
        payload: ValueInput,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> SkillList:
        return SkillList(skills=await ProfileService(settings).add_skill(session, user_id, payload.value))

    @app.delete("/users/{user_id}/skills", response_model=SkillList)
    async def remove_skill(
        user_id: str,
        value: str = Query(...),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> SkillList:
        return SkillList(skills=await ProfileService(settings).remove_skill(session, user_id, value))

    # Résumés

    @app.get("/users/{user_id}/resumes", response_model=list[ResumeRead])
    async def list_resumes(
        user_id: str,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> list[Any]:
        return await ResumeProcessor(settings).list_resumes(session, user_id)

    @app.post("/users/{user_id}/resumes", response_model=ResumeRead, status_code=status.HTTP_201_CREATED)
    async def upload_resume(
        user_id: str,
        payload: ResumeUpload,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ResumeProcessor(settings).store_resume(
            session,
            user_id=user_id,
            name=payload.name,
            file_data=payload.file_data,
            mime_type=payload.mime_type,
            file_size=payload.file_size,
            is_default=payload.is_default,
        )

    @app.delete("/users/{user_id}/resumes/{resume_id}")
    async def delete_resume(
        user_id: str,
        resume_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> dict[str, bool]:
        await ResumeProcessor(settings).delete_resume(session, user_id=user_id, resume_id=resume_id)
        return {"success": True}

    @app.post("/users/{user_id}/resumes/{resume_id}/default", response_model=ResumeRead)
    async def set_default_resume(
        user_id: str,
        resume_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ResumeProcessor(settings).set_default(session, user_id=user_id, resume_id=resume_id)

    # Jobs

    @app.get("/jobs", response_model=JobListResponse)
    async def list_jobs(
        search: str | None = None,
        location: str | None = None,
        location_type: LocationType | None = None,
        employment_type: EmploymentType | None = None,
        experience_level: ExperienceLevel | None = None,
        salary_min: int | None = None,
        salary_max: int | None = None,
        limit: int = Query(default=20, ge=1, le=100),
        offset: int = Query(default=0, ge=0),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> JobListResponse:
        filters = JobFilters(
            search=search,
            location=location,
            location_type=location_type,
            employment_type=employment_type,
            experience_level=experience_level,
            salary_min=salary_min,
            salary_max=salary_max,
            limit=limit,
            offset=offset,
        )
        jobs, total = await JobCatalog(settings).list_jobs(session, filters)
        return JobListResponse(jobs=[JobRead.model_validate(job) for job in jobs], total=total)

    @app.get("/jobs/{job_id}", response_model=JobRead)
    async def get_job(
        job_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await JobCatalog(settings).get_job(session, job_id)

    # Applications

    @app.get("/users/{user_id}/applications", response_model=list[ApplicationRead])
    async def list_applications(
        user_id: str,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> list[Any]:
        return await ApplicationSubmitter(settings).list_applications(session, user_id)

    @app.get("/users/{user_id}/applications/stats", response_model=ApplicationStats)
    async def application_stats(
        user_id: str,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> dict[str, int]:
        return await ApplicationSubmitter(settings).stats(session, user_id)

    @app.post("/users/{user_id}/applications/auto-apply", response_model=AutoApplyResponse)
    async def auto_apply(
        user_id: str,
        payload: AutoApplyRequest,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> AutoApplyResponse:
        outcomes = await ApplicationSubmitter(settings).bulk_apply(
            session,
            user_id,
            payload.job_ids,
            resume_id=payload.resume_id,
            template_id=payload.template_id,
        )
        succeeded = sum(1 for outcome in outcomes if outcome.success)
        return AutoApplyResponse(
            results=[BulkApplyOutcomeRead.model_validate(outcome) for outcome in outcomes],
            succeeded=succeeded,
            failed=len(outcomes) - succeeded,
        )

    @app.get("/users/{user_id}/applications/{application_id}", response_model=ApplicationRead)
    async def get_application(
        user_id: str,
        application_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ApplicationSubmitter(settings).get(session, user_id, application_id)

    @app.post(
        "/users/{user_id}/applications",
        response_model=ApplicationRead,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_application(
        user_id: str,
        payload: ApplicationCreate,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ApplicationSubmitter(settings).create(session, user_id, **payload.model_dump())

    @app.patch("/users/{user_id}/applications/{application_id}", response_model=ApplicationRead)
    async def update_application(
        user_id: str,
        application_id: int,
        payload: ApplicationUpdate,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        changes = payload.model_dump(exclude_unset=True)
        return await ApplicationSubmitter(settings).update(session, user_id, application_id, changes)

    @app.post("/users/{user_id}/applications/{application_id}/submit", response_model=ApplicationRead)
    async def submit_application(
        user_id: str,
        application_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ApplicationSubmitter(settings).submit(session, user_id, application_id)

    @app.post("/users/{user_id}/applications/{application_id}/withdraw", response_model=ApplicationRead)
    async def withdraw_application(
        user_id: str,
        application_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ApplicationSubmitter(settings).withdraw(session, user_id, application_id)

    # Templates

    @app.get("/users/{user_id}/templates", response_model=list[TemplateRead])
    async def list_templates(
        user_id: str,
        template_type: TemplateType | None = Query(default=None, alias="type"),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> list[Any]:
        return await TemplateService(settings).list_templates(session, user_id, template_type)

    @app.get("/users/{user_id}/templates/{template_id}", response_model=TemplateRead)
    async def get_template(
        user_id: str,
        template_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await TemplateService(settings).get(session, user_id, template_id)

    @app.post("/users/{user_id}/templates", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
    async def create_template(
        user_id: str,
        payload: TemplateCreate,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await TemplateService(settings).create(
            session,
            user_id,
            name=payload.name,
            template_type=payload.type,
            content=payload.content,
            variables=payload.variables,
            is_default=payload.is_default,
        )

    @app.patch("/users/{user_id}/templates/{template_id}", response_model=TemplateRead)
    async def update_template(
        user_id: str,
        template_id: int,
        payload: TemplateUpdate,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        changes = payload.model_dump(exclude_unset=True)
        return await TemplateService(settings).update(session, user_id, template_id, changes)

    @app.delete("/users/{user_id}/templates/{template_id}")
    async def delete_template(
        user_id: str,
        template_id: int,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> dict[str, bool]:
        await TemplateService(settings).delete(session, user_id, template_id)
        return {"success": True}

    @app.post("/users/{user_id}/cover-letters", response_model=CoverLetterResponse)
    async def generate_cover_letter(
        user_id: str,
        payload: CoverLetterRequest,
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> CoverLetterResponse:
        content = await CoverLetterGenerator(settings).generate(
            session, user_id=user_id, job_id=payload.job_id, tone=payload.tone
        )
        return CoverLetterResponse(content=content)

    # Admin

    @app.get("/admin/stats", response_model=AdminStats)
    async def admin_stats(
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> dict[str, int]:
        return await AdminService(settings).stats(session)

    @app.get("/admin/job-boards", response_model=list[JobBoardRead])
    async def list_job_boards(
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> list[Any]:
        return await AdminService(settings).list_boards(session)

    @app.post("/admin/job-boards", response_model=JobBoardRead, status_code=status.HTTP_201_CREATED)
    async def create_job_board(
        payload: JobBoardCreate,
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await AdminService(settings).create_board(session, payload.model_dump())

    @app.patch("/admin/job-boards/{board_id}", response_model=JobBoardRead)
    async def update_job_board(
        board_id: int,
        payload: JobBoardUpdate,
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await AdminService(settings).update_board(session, board_id, payload.model_dump(exclude_unset=True))

    @app.delete("/admin/job-boards/{board_id}")
    async def delete_job_board(
        board_id: int,
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> dict[str, bool]:
        await AdminService(settings).delete_board(session, board_id)
        return {"success": True}

    @app.post("/admin/jobs", response_model=JobRead, status_code=status.HTTP_201_CREATED)
    async def create_job(
        payload: JobCreate,
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await JobCatalog(settings).create_job(session, payload.model_dump())

    @app.post("/admin/seed-jobs", response_model=SeedResponse)
    async def seed_jobs(
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> SeedResponse:
        count = await JobCatalog(settings).seed_jobs(session)
        return SeedResponse(success=True, count=count)

    @app.patch("/admin/applications/{application_id}/status", response_model=ApplicationRead)
    async def set_application_status(
        application_id: int,
        payload: StatusUpdate,
        _: User = Depends(admin_user),
        session: AsyncSession = Depends(db_session),
        settings: Settings = Depends(settings_provider),
    ) -> Any:
        return await ApplicationSubmitter(settings).set_status(session, application_id, payload.status)

    return app


app = create_app()
