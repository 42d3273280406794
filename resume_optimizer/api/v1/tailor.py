import asyncio

from fastapi import APIRouter, Request

from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.schemas.api import TailorRequest, TailorResponse
from resume_optimizer.services.llm import LLMError
from resume_optimizer.services.tailor_service import tailor_resume

from .errors import raise_service_http_error

router = APIRouter()


@router.post("/tailor", response_model=TailorResponse)
@rate_limit()
async def tailor(request: Request, payload: TailorRequest):
    try:
        return await asyncio.to_thread(tailor_resume, payload)
    except LLMError as exc:
        raise_service_http_error(exc)
