"""LLM-backed cover letter drafting."""
from __future__ import annotations

import json
from typing import Any

import openai
from openai import AsyncOpenAI
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.enums import CoverLetterTone
from app.log import get_logger
from app.models import Job, User
from services.errors import NotFoundError, ServiceUnavailableError
from services.profiles import ensure_user

LOGGER = get_logger("cover_letters")

SYSTEM_PROMPT = "You are a professional career coach helping write compelling cover letters."


def build_prompt(job: Job, user: User, tone: CoverLetterTone) -> str:
    skills = ", ".join(user.skills or []) or "Not specified"
    return (
        "Generate a professional cover letter for the following job application:\n\n"
        f"Job Title: {job.title}\n"
        f"Company: {job.company}\n"
        f"Job Description: {job.description or 'Not provided'}\n\n"
        "Applicant Information:\n"
        f"Name: {user.name or 'Applicant'}\n"
        f"Skills: {skills}\n"
        f"Experience: {json.dumps(user.experience or [])}\n"
        f"Summary: {user.summary or 'Not provided'}\n\n"
        f"Tone: {tone.value}\n\n"
        "Please write a compelling cover letter that highlights relevant experience and enthusiasm "
        "for the role. Keep it concise (3-4 paragraphs)."
    )


class CoverLetterGenerator:
    """Ask an OpenAI-compatible chat completions endpoint for a draft letter."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def generate(
        self,
        session: AsyncSession,
        *,
        user_id: str,
        job_id: int,
        tone: CoverLetterTone = CoverLetterTone.PROFESSIONAL,
    ) -> str:
        result = await session.execute(select(Job).where(Job.id == job_id))
        job = result.scalar_one_or_none()
        if job is None:
            raise NotFoundError("Job not found")
        if not self.settings.llm_api_key:
            raise ServiceUnavailableError("Cover letter generation is not configured")

        user = await ensure_user(session, user_id)
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_prompt(job, user, tone)},
        ]
        return await self._complete(messages)

    async def _complete(self, messages: list[dict[str, str]]) -> str:
        try:
            async with AsyncOpenAI(
                api_key=self.settings.llm_api_key,
                base_url=self.settings.llm_api_base,
                timeout=self.settings.llm_timeout_seconds,
            ) as client:
                completion = await client.chat.completions.create(
                    model=self.settings.llm_model,
                    messages=messages,
                )
        except (openai.APIError, ValueError) as exc:
            LOGGER.warning("Cover letter generation failed: %s", exc)
            raise ServiceUnavailableError("Cover letter service is unavailable") from exc

        return _message_content(completion)


def _message_content(completion: Any) -> str:
    """First choice text of a chat completion; anything else is an upstream failure."""

    choices = getattr(completion, "choices", None)
    if not isinstance(choices, list):
        LOGGER.warning("Cover letter service returned an unexpected payload: %r", completion)
        raise ServiceUnavailableError("Cover letter service returned an invalid response")
    if not choices:
        return ""
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content.strip() if isinstance(content, str) else ""
