from fastapi import APIRouter

from resume_optimizer.services.llm import llm_enabled

router = APIRouter()


@router.get("/health", summary="Health Check", description="Check the health status of the application.")
async def health_check():
    return {"status": "healthy", "ai_enabled": llm_enabled()}
