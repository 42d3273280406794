from contextlib import asynccontextmanager
import logging

from resume_optimizer.core.config.scoring import get_scoring_config, scoring_config_path
from resume_optimizer.heuristics.ats_score import get_default_ats_estimator
from resume_optimizer.heuristics.job_analyzer import get_default_job_analyzer
from resume_optimizer.heuristics.resume_classifier import get_default_resume_classifier
from resume_optimizer.heuristics.resume_parser import get_default_resume_parser
from resume_optimizer.services.llm import llm_enabled

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    get_default_resume_classifier()
    get_default_resume_parser()
    get_default_ats_estimator()
    get_default_job_analyzer()
    logger.info("startup scoring_config=%s ai_enabled=%s", scoring_config_path(), llm_enabled())
    yield
