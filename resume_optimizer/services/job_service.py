from __future__ import annotations

import logging

from pydantic import ValidationError

from resume_optimizer.heuristics.job_analyzer import analyze_job_heuristically
from resume_optimizer.heuristics.tech_equivalence import map_tech_equivalents
from resume_optimizer.schemas.api import JobAnalysisResponse
from resume_optimizer.schemas.job import ParsedJobDescription

from .llm import json_completion
from .outcome import Outcome, run_with_fallback
from .prompts import JOB_ANALYSIS_SYSTEM, job_analysis_user_prompt
from .resume_service import prepare_text

logger = logging.getLogger(__name__)


def _ai_analyze(job_text: str) -> ParsedJobDescription | None:
    payload = json_completion(
        system_prompt=JOB_ANALYSIS_SYSTEM,
        user_prompt=job_analysis_user_prompt(job_text),
        temperature=0.2,
        max_output_tokens=1500,
        operation="job_analysis",
    )
    if payload is None:
        return None
    try:
        return ParsedJobDescription.model_validate(payload)
    except ValidationError as exc:
        logger.warning("job_analysis_invalid_payload errors=%s", exc.error_count())
        return None


def analyze_job(job_text: str) -> Outcome[ParsedJobDescription]:
    return run_with_fallback(
        lambda: _ai_analyze(job_text),
        lambda: analyze_job_heuristically(job_text),
        operation="job_analysis",
    )


def analyze_job_posting(job_text: str, *, source_url: str | None = None) -> JobAnalysisResponse:
    prepared = prepare_text(job_text)
    outcome = analyze_job(prepared)
    parsed = outcome.value
    keywords = parsed.all_keywords()
    logger.info(
        "job_analyzed source=%s keywords=%s tech_stack=%s",
        outcome.source,
        len(keywords),
        len(parsed.tech_stack),
    )
    return JobAnalysisResponse(
        parsed_content=parsed,
        source=outcome.source,
        tech_equivalents=map_tech_equivalents(parsed.tech_stack),
        keywords=keywords,
        keyword_count=len(keywords),
        source_url=source_url,
    )
