import asyncio

from fastapi import APIRouter, Request

from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.schemas.api import ContentRequest, ContentResponse
from resume_optimizer.services.content_service import generate_content
from resume_optimizer.services.llm import LLMError

from .errors import raise_service_http_error

router = APIRouter()


@router.post("/content", response_model=ContentResponse)
@rate_limit()
async def content(request: Request, payload: ContentRequest):
    try:
        return await asyncio.to_thread(generate_content, payload)
    except LLMError as exc:
        raise_service_http_error(exc)
