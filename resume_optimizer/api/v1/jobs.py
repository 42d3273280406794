import asyncio

from fastapi import APIRouter, Request

from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.schemas.api import JobAnalysisResponse, JobAnalyzeRequest
from resume_optimizer.services.job_service import analyze_job_posting

router = APIRouter()


@router.post("/jobs/analyze", response_model=JobAnalysisResponse)
@rate_limit()
async def jobs_analyze(request: Request, payload: JobAnalyzeRequest):
    return await asyncio.to_thread(analyze_job_posting, payload.job_text, source_url=payload.source_url)
