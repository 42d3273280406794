from __future__ import annotations

import logging

from resume_optimizer.heuristics.ats_score import get_default_ats_estimator
from resume_optimizer.schemas.job import ParsedJobDescription
from resume_optimizer.schemas.resume import ParsedResume
from resume_optimizer.schemas.scoring import ATSScoreResult

from .llm import json_completion
from .outcome import Outcome, run_with_fallback
from .prompts import JOB_ATS_SYSTEM, job_ats_user_prompt
from .resume_service import coerce_score, string_list

logger = logging.getLogger(__name__)


def _ai_job_score(resume: ParsedResume, job: ParsedJobDescription, resume_text: str) -> ATSScoreResult | None:
    payload = json_completion(
        system_prompt=JOB_ATS_SYSTEM,
        user_prompt=job_ats_user_prompt(resume, job, resume_text),
        temperature=0.1,
        max_output_tokens=700,
        operation="job_ats_score",
    )
    if payload is None:
        return None
    score = coerce_score(payload.get("score"))
    if score is None:
        logger.warning("job_ats_score_out_of_range value=%r", payload.get("score"))
        return None
    return ATSScoreResult(
        score=score,
        mode="job",
        source="ai",
        matching_keywords=string_list(payload.get("matching_keywords")),
        missing_keywords=string_list(payload.get("missing_keywords")),
        strengths=string_list(payload.get("strengths")),
        improvements=string_list(payload.get("improvements")),
    )


def score_against_job(
    resume: ParsedResume,
    job: ParsedJobDescription,
    *,
    resume_text: str = "",
    job_text: str = "",
) -> Outcome[ATSScoreResult]:
    return run_with_fallback(
        lambda: _ai_job_score(resume, job, resume_text),
        lambda: get_default_ats_estimator().score_for_job(
            resume,
            job,
            raw_text=resume_text,
            job_text=job_text,
        ),
        operation="job_ats_score",
    )
