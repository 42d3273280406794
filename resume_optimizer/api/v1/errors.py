from __future__ import annotations

from fastapi import HTTPException, status

from resume_optimizer.services.llm import LLMError
from resume_optimizer.services.resume_service import DocumentRejectedError


def raise_service_http_error(exc: Exception) -> None:
    if isinstance(exc, DocumentRejectedError):
        raise HTTPException(
            status_code=exc.status_code,
            detail={"message": str(exc), "reason": exc.reason},
        ) from exc
    if isinstance(exc, LLMError):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": str(exc), "code": exc.code},
        ) from exc
    raise exc
