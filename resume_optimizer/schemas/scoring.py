from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

AnalysisSource = Literal["ai", "heuristic", "unavailable"]
ScoreMode = Literal["general", "job"]


class RuleContribution(BaseModel):
    rule: str
    points: int
    max_points: int = Field(ge=0)
    strength: str | None = None
    improvement: str | None = None


class ATSScoreResult(BaseModel):
    score: int = Field(ge=0, le=100)
    mode: ScoreMode = "general"
    source: AnalysisSource = "heuristic"
    matching_keywords: list[str] = Field(default_factory=list)
    missing_keywords: list[str] = Field(default_factory=list)
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)
    contributions: list[RuleContribution] = Field(default_factory=list)
