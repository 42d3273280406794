from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .job import ParsedJobDescription
from .resume import ParsedResume
from .scoring import AnalysisSource, ATSScoreResult
from .tailoring import MemoryBullet, TailoringMode, TailoringSuggestions
from .validation import ResumeValidationVerdict

ContentType = Literal["cover_letter", "linkedin_summary"]


class ResumeTextRequest(BaseModel):
    text: str = Field(min_length=1, max_length=200000)
    filename: str | None = Field(default=None, max_length=255)


class ResumeAnalysisResponse(BaseModel):
    parsed_content: ParsedResume
    parse_source: AnalysisSource
    ats_score: ATSScoreResult
    validation: ResumeValidationVerdict
    memory_bullets: list[MemoryBullet] = Field(default_factory=list)
    original_filename: str | None = None
    parsing_warnings: list[str] = Field(default_factory=list)


class ResumeScoreRequest(BaseModel):
    parsed_resume: ParsedResume
    raw_text: str = Field(default="", max_length=200000)


class JobAnalyzeRequest(BaseModel):
    job_text: str = Field(min_length=1, max_length=50000)
    source_url: str | None = Field(default=None, max_length=2000)


class JobAnalysisResponse(BaseModel):
    parsed_content: ParsedJobDescription
    source: AnalysisSource
    tech_equivalents: dict[str, list[str]] = Field(default_factory=dict)
    keywords: list[str] = Field(default_factory=list)
    keyword_count: int = 0
    source_url: str | None = None


class JobScoreRequest(BaseModel):
    resume: ParsedResume
    job: ParsedJobDescription
    resume_text: str = Field(default="", max_length=200000)
    job_text: str = Field(default="", max_length=50000)


class TailorRequest(BaseModel):
    resume: ParsedResume
    job: ParsedJobDescription
    job_text: str = Field(default="", max_length=50000)
    mode: TailoringMode = "fast"
    memory_bullets: list[MemoryBullet] = Field(default_factory=list, max_length=200)


class TailorResponse(BaseModel):
    suggestions: TailoringSuggestions
    new_ats_score: int = Field(ge=0, le=100)
    mode: TailoringMode
    retrieved_bullets: list[MemoryBullet] = Field(default_factory=list)
    retrieved_bullets_count: int = 0


class ContentRequest(BaseModel):
    content_type: ContentType = "cover_letter"
    resume: ParsedResume
    job: ParsedJobDescription
    job_text: str = Field(default="", max_length=50000)


class ContentResponse(BaseModel):
    content_type: ContentType
    content: str
