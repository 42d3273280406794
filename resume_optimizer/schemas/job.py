from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .common import empty_list_if_none, empty_str_if_none


class JobRequirements(BaseModel):
    required_skills: list[str] = Field(default_factory=list)
    preferred_skills: list[str] = Field(default_factory=list)
    experience_years: str = ""
    education: str = ""
    certifications: list[str] = Field(default_factory=list)

    @field_validator("required_skills", "preferred_skills", "certifications", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)

    @field_validator("experience_years", "education", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)

    def listed_skills(self) -> list[str]:
        seen: set[str] = set()
        skills: list[str] = []
        for skill in [*self.required_skills, *self.preferred_skills]:
            cleaned = skill.strip()
            key = cleaned.lower()
            if not cleaned or key in seen:
                continue
            seen.add(key)
            skills.append(cleaned)
        return skills


class ParsedJobDescription(BaseModel):
    title: str = ""
    company: str = ""
    location: str = ""
    employment_type: str = ""
    salary_range: str = ""
    industry: str = ""
    requirements: JobRequirements = Field(default_factory=JobRequirements)
    responsibilities: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    tech_stack: list[str] = Field(default_factory=list)

    @field_validator(
        "title", "company", "location", "employment_type", "salary_range", "industry", mode="before"
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)

    @field_validator("requirements", mode="before")
    @classmethod
    def _coerce_requirements(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("responsibilities", "keywords", "tech_stack", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)

    def all_keywords(self) -> list[str]:
        return [
            *self.requirements.required_skills,
            *self.requirements.preferred_skills,
            *self.tech_stack,
            *self.keywords,
        ]

    def summary_text(self) -> str:
        parts = [
            self.title,
            *self.responsibilities,
            *self.requirements.listed_skills(),
            *self.keywords,
            *self.tech_stack,
        ]
        return "\n".join(part for part in parts if part)
