from __future__ import annotations

import logging

from resume_optimizer.schemas.api import ContentRequest, ContentResponse

from .llm import text_completion
from .prompts import (
    COVER_LETTER_SYSTEM,
    LINKEDIN_SUMMARY_SYSTEM,
    cover_letter_user_prompt,
    linkedin_summary_user_prompt,
)

logger = logging.getLogger(__name__)


def generate_content(payload: ContentRequest) -> ContentResponse:
    job_text = payload.job_text or payload.job.summary_text()
    if payload.content_type == "linkedin_summary":
        system_prompt = LINKEDIN_SUMMARY_SYSTEM
        user_prompt = linkedin_summary_user_prompt(payload.resume, job_text)
    else:
        system_prompt = COVER_LETTER_SYSTEM
        user_prompt = cover_letter_user_prompt(payload.resume, payload.job, job_text)

    content = text_completion(
        system_prompt=system_prompt,
        user_prompt=user_prompt,
        temperature=0.7,
        max_output_tokens=1000,
        operation=f"content_{payload.content_type}",
    )
    logger.info("content_generated type=%s chars=%s", payload.content_type, len(content))
    return ContentResponse(content_type=payload.content_type, content=content)
