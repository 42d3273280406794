from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from .common import empty_list_if_none, empty_str_if_none

TailoringMode = Literal["fast", "assistive"]


class MemoryBullet(BaseModel):
    text: str
    skills: list[str] = Field(default_factory=list)
    impact_score: int = Field(default=0, ge=0, le=10)

    @field_validator("skills", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)


class TailoringChange(BaseModel):
    section: str = ""
    index: int = 0
    field: str = ""
    original: str = ""
    suggested: str = ""
    reasoning: str = ""
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    is_external: bool = False

    @field_validator("section", "field", "original", "suggested", "reasoning", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)

    @field_validator("index", mode="before")
    @classmethod
    def _coerce_index(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> Any:
        if value is None:
            return 0.0
        try:
            return max(0.0, min(1.0, float(value)))
        except (TypeError, ValueError):
            return 0.0


class ATSImprovementEstimate(BaseModel):
    keyword_matches: int = 0
    estimated_score_increase: int = 0
    missing_keywords: list[str] = Field(default_factory=list)

    @field_validator("keyword_matches", "estimated_score_increase", mode="before")
    @classmethod
    def _coerce_int(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("missing_keywords", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)


class TailoringSuggestions(BaseModel):
    changes: list[TailoringChange] = Field(default_factory=list)
    ats_improvements: ATSImprovementEstimate = Field(default_factory=ATSImprovementEstimate)
    questions: list[str] = Field(default_factory=list)

    @field_validator("changes", "questions", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)

    @field_validator("ats_improvements", mode="before")
    @classmethod
    def _coerce_estimate(cls, value: Any) -> Any:
        return {} if value is None else value

    def suggested_texts(self) -> list[str]:
        return [change.suggested for change in self.changes if change.suggested]
