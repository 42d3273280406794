from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .common import empty_list_if_none, empty_str_if_none


class ResumeProfile(BaseModel):
    name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    summary: str = ""

    @field_validator("name", "email", "phone", "location", "summary", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)


class ExperienceEntry(BaseModel):
    company: str = ""
    title: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    bullets: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)

    @field_validator("company", "title", "location", "start_date", "end_date", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)

    @field_validator("bullets", "skills", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)

    def combined_text(self) -> str:
        return " ".join([self.title, self.company, *self.bullets, *self.skills]).strip()


class EducationEntry(BaseModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    graduation_date: str = ""
    gpa: str = ""

    @field_validator("institution", "degree", "field", "graduation_date", "gpa", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)

    def combined_text(self) -> str:
        return " ".join([self.degree, self.field, self.institution]).strip()


class ProjectEntry(BaseModel):
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    bullets: list[str] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return empty_str_if_none(value)

    @field_validator("technologies", "bullets", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)


class ParsedResume(BaseModel):
    profile: ResumeProfile = Field(default_factory=ResumeProfile)
    experience: list[ExperienceEntry] = Field(default_factory=list)
    education: list[EducationEntry] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)

    @field_validator("profile", mode="before")
    @classmethod
    def _coerce_profile(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("experience", "education", "skills", "projects", mode="before")
    @classmethod
    def _coerce_list(cls, value: Any) -> Any:
        return empty_list_if_none(value)

    def all_bullets(self) -> list[str]:
        bullets = [bullet for entry in self.experience for bullet in entry.bullets]
        bullets.extend(bullet for project in self.projects for bullet in project.bullets)
        return [bullet for bullet in bullets if bullet]

    def as_text(self) -> str:
        """Render the structured resume as plain text for scorers that need raw text."""
        lines: list[str] = [
            value
            for value in (
                self.profile.name,
                self.profile.email,
                self.profile.phone,
                self.profile.location,
                self.profile.summary,
            )
            if value
        ]
        if self.experience:
            lines.append("Experience")
            for entry in self.experience:
                heading = " | ".join(part for part in (entry.title, entry.company) if part)
                if heading:
                    lines.append(heading)
                lines.extend(f"- {bullet}" for bullet in entry.bullets)
        if self.education:
            lines.append("Education")
            lines.extend(entry.combined_text() for entry in self.education if entry.combined_text())
        if self.skills:
            lines.append("Skills")
            lines.append(", ".join(self.skills))
        if self.projects:
            lines.append("Projects")
            for project in self.projects:
                heading = " - ".join(part for part in (project.name, project.description) if part)
                if heading:
                    lines.append(heading)
                lines.extend(f"- {bullet}" for bullet in project.bullets)
        return "\n".join(lines)
