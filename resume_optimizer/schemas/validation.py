from __future__ import annotations

from pydantic import BaseModel

from .scoring import AnalysisSource


class ResumeSignals(BaseModel):
    has_email: bool = False
    has_phone: bool = False
    has_experience: bool = False
    has_education: bool = False
    has_skills: bool = False
    has_resume_phrase: bool = False
    has_action_words: bool = False
    has_date_ranges: bool = False
    bullet_count: int = 0
    word_count: int = 0
    form_field_hits: int = 0
    technical_term_hits: int = 0
    disqualifier: str | None = None

    @property
    def has_contact(self) -> bool:
        return self.has_email or self.has_phone

    @property
    def has_work(self) -> bool:
        return self.has_experience or self.has_action_words or self.has_date_ranges

    @property
    def has_education_or_skills(self) -> bool:
        return self.has_education or self.has_skills

    @property
    def has_strong_resume_signals(self) -> bool:
        return self.has_resume_phrase or (self.has_experience and self.has_education and self.has_skills)


class ResumeClassification(BaseModel):
    is_resume: bool
    reason: str
    signals: ResumeSignals


class ResumeValidationVerdict(BaseModel):
    is_resume: bool
    reason: str
    ai_is_resume: bool | None = None
    heuristic_guess: bool = False
    low_confidence: bool = False
    source: AnalysisSource = "heuristic"
