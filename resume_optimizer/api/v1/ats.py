import asyncio

from fastapi import APIRouter, Request

from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.schemas.api import JobScoreRequest
from resume_optimizer.schemas.scoring import ATSScoreResult
from resume_optimizer.services.ats_service import score_against_job
from resume_optimizer.services.resume_service import prepare_text

router = APIRouter()


@router.post("/ats/score", response_model=ATSScoreResult)
@rate_limit()
async def ats_score(request: Request, payload: JobScoreRequest):
    outcome = await asyncio.to_thread(
        score_against_job,
        payload.resume,
        payload.job,
        resume_text=prepare_text(payload.resume_text),
        job_text=prepare_text(payload.job_text),
    )
    return outcome.value
