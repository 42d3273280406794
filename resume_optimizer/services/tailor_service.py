from __future__ import annotations

import logging

from pydantic import ValidationError

from resume_optimizer.heuristics.ats_score import get_default_ats_estimator
from resume_optimizer.heuristics.bullet_impact import select_relevant_bullets
from resume_optimizer.schemas.api import TailorRequest, TailorResponse
from resume_optimizer.schemas.job import ParsedJobDescription
from resume_optimizer.schemas.tailoring import MemoryBullet, TailoringSuggestions

from .llm import LLMError, json_completion_required
from .prompts import tailor_system_prompt, tailor_user_prompt

logger = logging.getLogger(__name__)


def target_skills(job: ParsedJobDescription) -> list[str]:
    return [
        *job.requirements.required_skills,
        *job.requirements.preferred_skills,
        *job.tech_stack,
    ]


def retrieve_relevant_bullets(job: ParsedJobDescription, bullets: list[MemoryBullet]) -> list[MemoryBullet]:
    return select_relevant_bullets(bullets, target_skills(job))


def estimate_new_score(job: ParsedJobDescription, suggestions: TailoringSuggestions) -> int:
    return get_default_ats_estimator().estimate_tailored(
        job,
        suggestions.suggested_texts(),
        change_count=len(suggestions.changes),
    )


def tailor_resume(payload: TailorRequest) -> TailorResponse:
    retrieved = retrieve_relevant_bullets(payload.job, payload.memory_bullets)
    job_text = payload.job_text or payload.job.summary_text()
    raw = json_completion_required(
        system_prompt=tailor_system_prompt(payload.job, payload.mode, retrieved),
        user_prompt=tailor_user_prompt(payload.resume, job_text),
        temperature=0.3,
        max_output_tokens=2000,
        operation="resume_tailoring",
    )
    try:
        suggestions = TailoringSuggestions.model_validate(raw)
    except ValidationError as exc:
        logger.warning("resume_tailoring_invalid_payload errors=%s", exc.error_count())
        raise LLMError("The AI service returned malformed tailoring suggestions. Try again.", code="llm_invalid") from exc

    new_score = estimate_new_score(payload.job, suggestions)
    logger.info(
        "resume_tailored mode=%s changes=%s retrieved_bullets=%s new_score=%s",
        payload.mode,
        len(suggestions.changes),
        len(retrieved),
        new_score,
    )
    return TailorResponse(
        suggestions=suggestions,
        new_ats_score=new_score,
        mode=payload.mode,
        retrieved_bullets=retrieved,
        retrieved_bullets_count=len(retrieved),
    )
