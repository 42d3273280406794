import asyncio

from fastapi import APIRouter, File, HTTPException, Request, UploadFile, status

from resume_optimizer.core.config import settings
from resume_optimizer.core.rate_limit import rate_limit
from resume_optimizer.parsing.parse import UnsupportedDocumentError, source_type_for
from resume_optimizer.schemas.api import ResumeAnalysisResponse, ResumeScoreRequest, ResumeTextRequest
from resume_optimizer.schemas.scoring import ATSScoreResult
from resume_optimizer.schemas.validation import ResumeValidationVerdict
from resume_optimizer.services.resume_service import (
    DocumentRejectedError,
    analyze_resume_text,
    analyze_resume_upload,
    prepare_text,
    score_resume,
    validate_resume_text,
)

from .errors import raise_service_http_error

router = APIRouter()

_READ_CHUNK_BYTES = 64 * 1024


async def _read_upload(file: UploadFile) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail=f"File too large. Maximum allowed size is {settings.max_upload_bytes // (1024 * 1024)} MB.",
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/resume/parse", response_model=ResumeAnalysisResponse)
@rate_limit()
async def resume_parse(request: Request, file: UploadFile = File(...)):
    filename = file.filename or "uploaded-resume"
    try:
        source_type_for(filename)
    except UnsupportedDocumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    content = await _read_upload(file)
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty.")

    try:
        return await asyncio.to_thread(analyze_resume_upload, filename, content)
    except DocumentRejectedError as exc:
        raise_service_http_error(exc)


@router.post("/resume/parse-text", response_model=ResumeAnalysisResponse)
@rate_limit()
async def resume_parse_text(request: Request, payload: ResumeTextRequest):
    try:
        return await asyncio.to_thread(analyze_resume_text, payload.text, filename=payload.filename)
    except DocumentRejectedError as exc:
        raise_service_http_error(exc)


@router.post("/resume/validate", response_model=ResumeValidationVerdict)
@rate_limit()
async def resume_validate(request: Request, payload: ResumeTextRequest):
    return await asyncio.to_thread(validate_resume_text, prepare_text(payload.text))


@router.post("/resume/score", response_model=ATSScoreResult)
@rate_limit()
async def resume_score(request: Request, payload: ResumeScoreRequest):
    return await asyncio.to_thread(score_resume, payload.parsed_resume, prepare_text(payload.raw_text))
