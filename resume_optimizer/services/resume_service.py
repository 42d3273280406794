from __future__ import annotations

import logging
import math
from typing import Any

from pydantic import ValidationError

from resume_optimizer.core.config import settings
from resume_optimizer.heuristics.ats_score import get_default_ats_estimator
from resume_optimizer.heuristics.bullet_impact import collect_memory_bullets
from resume_optimizer.heuristics.resume_classifier import classify_resume
from resume_optimizer.heuristics.resume_parser import parse_resume_heuristically
from resume_optimizer.heuristics.text import sanitize_text, truncate_text
from resume_optimizer.parsing.parse import extract_document_text
from resume_optimizer.schemas.api import ResumeAnalysisResponse
from resume_optimizer.schemas.resume import ParsedResume
from resume_optimizer.schemas.scoring import ATSScoreResult
from resume_optimizer.schemas.validation import ResumeValidationVerdict

from .llm import json_completion
from .outcome import Outcome, run_with_fallback
from .prompts import (
    GENERAL_ATS_SYSTEM,
    RESUME_PARSE_SYSTEM,
    RESUME_VALIDATION_SYSTEM,
    general_ats_user_prompt,
    parse_user_prompt,
    validation_user_prompt,
)

logger = logging.getLogger(__name__)

PARSE_MAX_ATTEMPTS = 3
REJECTION_MESSAGE = (
    "This doesn't look like a resume. Please upload a document with your work experience, "
    "education and contact information."
)


class DocumentRejectedError(RuntimeError):
    def __init__(self, message: str, *, status_code: int = 422, reason: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


def prepare_text(text: str | None) -> str:
    return truncate_text(sanitize_text(text), settings.max_document_chars)


def coerce_score(value: Any) -> int | None:
    """Return the value as an int score when it is a number in [0, 100], else None."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or not 0 <= number <= 100:
        return None
    return int(math.floor(number + 0.5))


def string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def _ai_resume_verdict(text: str) -> tuple[bool, str] | None:
    payload = json_completion(
        system_prompt=RESUME_VALIDATION_SYSTEM,
        user_prompt=validation_user_prompt(text),
        temperature=0.1,
        max_output_tokens=200,
        operation="resume_validation",
    )
    if payload is None:
        return None
    raw = payload.get("is_resume", payload.get("isResume"))
    if not isinstance(raw, bool):
        return None
    return raw, str(payload.get("reason") or "").strip()


def validate_resume_text(text: str) -> ResumeValidationVerdict:
    """AI verdict first; the heuristic classifier decides when the AI says no or is unavailable."""
    ai_verdict = _ai_resume_verdict(text)
    if ai_verdict is not None and ai_verdict[0]:
        return ResumeValidationVerdict(
            is_resume=True,
            reason=ai_verdict[1] or "AI validation accepted the document as a resume.",
            ai_is_resume=True,
            heuristic_guess=True,
            low_confidence=False,
            source="ai",
        )

    classification = classify_resume(text)
    ai_is_resume = ai_verdict[0] if ai_verdict is not None else None
    reason = classification.reason
    if not classification.is_resume and ai_verdict is not None and ai_verdict[1]:
        reason = ai_verdict[1]
    logger.info(
        "resume_validation_heuristic ai_is_resume=%s heuristic_guess=%s",
        ai_is_resume,
        classification.is_resume,
    )
    return ResumeValidationVerdict(
        is_resume=classification.is_resume,
        reason=reason,
        ai_is_resume=ai_is_resume,
        heuristic_guess=classification.is_resume,
        low_confidence=not classification.is_resume,
        source="heuristic",
    )


def _ai_parse(text: str) -> ParsedResume | None:
    payload = json_completion(
        system_prompt=RESUME_PARSE_SYSTEM,
        user_prompt=parse_user_prompt(text),
        temperature=0.2,
        max_output_tokens=1500,
        max_attempts=PARSE_MAX_ATTEMPTS,
        operation="resume_parse",
    )
    if payload is None:
        return None
    try:
        return ParsedResume.model_validate(payload)
    except ValidationError as exc:
        logger.warning("resume_parse_invalid_payload errors=%s", exc.error_count())
        return None


def parse_resume(text: str) -> Outcome[ParsedResume]:
    return run_with_fallback(
        lambda: _ai_parse(text),
        lambda: parse_resume_heuristically(text),
        operation="resume_parse",
    )


def _ai_general_score(resume: ParsedResume, raw_text: str) -> ATSScoreResult | None:
    payload = json_completion(
        system_prompt=GENERAL_ATS_SYSTEM,
        user_prompt=general_ats_user_prompt(resume, raw_text),
        temperature=0.1,
        max_output_tokens=500,
        operation="resume_ats_score",
    )
    if payload is None:
        return None
    score = coerce_score(payload.get("score"))
    if score is None:
        logger.warning("resume_ats_score_out_of_range value=%r", payload.get("score"))
        return None
    return ATSScoreResult(
        score=score,
        mode="general",
        source="ai",
        strengths=string_list(payload.get("strengths")),
        improvements=string_list(payload.get("improvements")),
    )


def score_resume(resume: ParsedResume, raw_text: str = "") -> ATSScoreResult:
    outcome = run_with_fallback(
        lambda: _ai_general_score(resume, raw_text),
        lambda: get_default_ats_estimator().score_general(resume, raw_text),
        operation="resume_ats_score",
    )
    return outcome.value


def analyze_resume_text(
    text: str,
    *,
    filename: str | None = None,
    parsing_warnings: list[str] | None = None,
) -> ResumeAnalysisResponse:
    prepared = prepare_text(text)
    if not prepared:
        raise DocumentRejectedError(
            "No readable text was found in the document. Please upload a text-based PDF, DOCX or TXT file.",
            reason="empty_document",
        )

    validation = validate_resume_text(prepared)
    if not validation.is_resume and settings.resume_strict_validation:
        logger.info("resume_rejected filename=%s reason=%s", filename, validation.reason)
        raise DocumentRejectedError(REJECTION_MESSAGE, reason=validation.reason)

    parsed = parse_resume(prepared)
    resume = parsed.value
    ats_score = score_resume(resume, prepared)
    memory_bullets = collect_memory_bullets(resume, prepared)
    logger.info(
        "resume_analyzed filename=%s parse_source=%s score_source=%s score=%s bullets=%s",
        filename,
        parsed.source,
        ats_score.source,
        ats_score.score,
        len(memory_bullets),
    )
    return ResumeAnalysisResponse(
        parsed_content=resume,
        parse_source=parsed.source,
        ats_score=ats_score,
        validation=validation,
        memory_bullets=memory_bullets,
        original_filename=filename,
        parsing_warnings=list(parsing_warnings or []),
    )


def analyze_resume_upload(filename: str, content: bytes) -> ResumeAnalysisResponse:
    document = extract_document_text(filename, content)
    return analyze_resume_text(
        document.text,
        filename=document.filename,
        parsing_warnings=document.parsing_warnings,
    )
