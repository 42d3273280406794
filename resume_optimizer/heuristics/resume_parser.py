from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from resume_optimizer.core.config.scoring import get_scoring_terms, get_scoring_value
from resume_optimizer.schemas.resume import (
    EducationEntry,
    ExperienceEntry,
    ParsedResume,
    ProjectEntry,
    ResumeProfile,
)

from .text import (
    contains_any_term,
    contains_term,
    find_email,
    find_phone,
    is_bullet_like,
    is_contact_or_url,
    non_empty_lines,
    strip_bullet_prefix,
)

_SECTIONS = ("experience", "education", "skills", "projects")
_SKILL_SPLIT_RE = re.compile(r"[,|•·;]")
_LABEL_PREFIX_RE = re.compile(r"^[^:,|]{1,30}:\s*")


@dataclass(frozen=True)
class ParserLexicon:
    section_headers: dict[str, tuple[str, ...]]
    company_markers: tuple[str, ...]
    title_markers: tuple[str, ...]
    education_markers: tuple[str, ...]
    header_max_words: int = 4
    header_max_chars: int = 40
    bullet_min_chars: int = 20
    bullet_max_chars: int = 200
    bullet_keep_min_chars: int = 10
    max_bullets: int = 8
    skills_max_lines: int = 5
    skill_min_chars: int = 2
    skill_max_chars: int = 30
    max_skills: int = 25

    @classmethod
    def from_scoring_config(cls) -> "ParserLexicon":
        return cls(
            section_headers={
                section: get_scoring_terms(f"parser.section_headers.{section}") for section in _SECTIONS
            },
            company_markers=get_scoring_terms("parser.company_markers"),
            title_markers=get_scoring_terms("parser.title_markers"),
            education_markers=get_scoring_terms("parser.education_markers"),
            header_max_words=int(get_scoring_value("parser.header_max_words", 4)),
            header_max_chars=int(get_scoring_value("parser.header_max_chars", 40)),
            bullet_min_chars=int(get_scoring_value("parser.bullet_min_chars", 20)),
            bullet_max_chars=int(get_scoring_value("parser.bullet_max_chars", 200)),
            bullet_keep_min_chars=int(get_scoring_value("parser.bullet_keep_min_chars", 10)),
            max_bullets=int(get_scoring_value("parser.max_bullets", 8)),
            skills_max_lines=int(get_scoring_value("parser.skills_max_lines", 5)),
            skill_min_chars=int(get_scoring_value("parser.skill_min_chars", 2)),
            skill_max_chars=int(get_scoring_value("parser.skill_max_chars", 30)),
            max_skills=int(get_scoring_value("parser.max_skills", 25)),
        )


class HeuristicResumeParser:
    """Line-based best-effort resume parser used when no AI parse is available.

    All experience bullets land in one aggregated entry; the parser does not try
    to split jobs by employer or date, and it never guesses the candidate's name.
    """

    def __init__(self, lexicon: ParserLexicon) -> None:
        self._lexicon = lexicon

    def parse(self, text: str) -> ParsedResume:
        source = text or ""
        sections = self.split_sections(non_empty_lines(source))
        return ParsedResume(
            profile=ResumeProfile(email=find_email(source), phone=find_phone(source)),
            experience=self._experience(sections.get("experience", [])),
            education=self._education(sections.get("education", [])),
            skills=self._skills(sections.get("skills", [])),
            projects=self._projects(sections.get("projects", [])),
        )

    def header_section(self, line: str) -> tuple[str, str] | None:
        """Return (section, inline body) when the line is a recognised section header."""
        if is_bullet_like(line):
            return None
        label, _, remainder = line.partition(":")
        candidate = label.strip().lower()
        if not candidate:
            return None
        if len(candidate) > self._lexicon.header_max_chars:
            return None
        if len(candidate.split()) > self._lexicon.header_max_words:
            return None
        for section, keywords in self._lexicon.section_headers.items():
            for keyword in keywords:
                if not contains_term(candidate, keyword):
                    continue
                if candidate.startswith(keyword) or candidate.endswith(keyword):
                    return section, remainder.strip()
        return None

    def split_sections(self, lines: list[str]) -> dict[str, list[str]]:
        sections: dict[str, list[str]] = {}
        current: str | None = None
        for line in lines:
            header = self.header_section(line)
            if header is not None:
                current, inline = header
                body = sections.setdefault(current, [])
                if inline:
                    body.append(inline)
                continue
            if current is not None:
                sections[current].append(line)
        return sections

    def _is_bullet_candidate(self, line: str) -> bool:
        if is_bullet_like(line):
            return True
        lexicon = self._lexicon
        if not lexicon.bullet_min_chars < len(line) < lexicon.bullet_max_chars:
            return False
        return not is_contact_or_url(line) and self.header_section(line) is None

    def _bullets(self, lines: list[str]) -> list[str]:
        bullets: list[str] = []
        for line in lines:
            if not self._is_bullet_candidate(line):
                continue
            cleaned = strip_bullet_prefix(line)
            if len(cleaned) <= self._lexicon.bullet_keep_min_chars:
                continue
            bullets.append(cleaned)
            if len(bullets) >= self._lexicon.max_bullets:
                break
        return bullets

    @staticmethod
    def _first_marked(lines: list[str], markers: tuple[str, ...]) -> str:
        for line in lines:
            if contains_any_term(line, markers):
                return line.split("|", 1)[0].strip()[:50]
        return ""

    def _experience(self, lines: list[str]) -> list[ExperienceEntry]:
        bullets = self._bullets(lines)
        if not bullets:
            return []
        return [
            ExperienceEntry(
                company=self._first_marked(lines, self._lexicon.company_markers),
                title=self._first_marked(lines, self._lexicon.title_markers),
                bullets=bullets,
            )
        ]

    def _education(self, lines: list[str]) -> list[EducationEntry]:
        for line in lines:
            if contains_any_term(line, self._lexicon.education_markers):
                return [EducationEntry(institution=line[:100])]
        return []

    def _skills(self, lines: list[str]) -> list[str]:
        lexicon = self._lexicon
        tokens: list[str] = []
        for line in lines[: lexicon.skills_max_lines]:
            body = _LABEL_PREFIX_RE.sub("", strip_bullet_prefix(line))
            tokens.extend(_SKILL_SPLIT_RE.split(body))

        skills: list[str] = []
        seen: set[str] = set()
        for token in tokens:
            skill = token.strip()
            if not lexicon.skill_min_chars <= len(skill) <= lexicon.skill_max_chars:
                continue
            if skill.lower() in seen:
                continue
            seen.add(skill.lower())
            skills.append(skill)
            if len(skills) >= lexicon.max_skills:
                break
        return skills

    def _projects(self, lines: list[str]) -> list[ProjectEntry]:
        bullets = self._bullets(lines)
        return [ProjectEntry(bullets=bullets)] if bullets else []


@lru_cache(maxsize=1)
def get_default_resume_parser() -> HeuristicResumeParser:
    return HeuristicResumeParser(ParserLexicon.from_scoring_config())


def parse_resume_heuristically(text: str) -> ParsedResume:
    return get_default_resume_parser().parse(text)
