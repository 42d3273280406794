from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache

from resume_optimizer.core.config.scoring import get_scoring_terms, get_scoring_value
from resume_optimizer.schemas.job import JobRequirements, ParsedJobDescription

from .text import contains_any, contains_any_term, contains_term, non_empty_lines

logger = logging.getLogger(__name__)

_EXPERIENCE_YEARS_RE = re.compile(
    r"(?<!\d)(\d+)\+?[\s-]*(?:years?|yrs?)\+?\s*(?:of\s+)?experience",
    re.IGNORECASE,
)
_CATEGORY_ORDER = ("languages", "frameworks", "databases", "tools", "methodologies")


@dataclass(frozen=True)
class JobLexicon:
    categories: dict[str, tuple[str, ...]]
    tech_stack_categories: tuple[str, ...]
    education_terms: tuple[str, ...]
    responsibility_stems: tuple[str, ...]
    contract_terms: tuple[str, ...]
    placeholders: dict[str, str] = field(default_factory=dict)
    education_requirement: str = "Bachelor's degree or equivalent"
    required_skill_limit: int = 8
    preferred_skill_limit: int = 4
    keyword_limit: int = 10
    responsibility_min_chars: int = 20
    max_responsibilities: int = 5

    @classmethod
    def from_scoring_config(cls) -> "JobLexicon":
        raw_categories = get_scoring_value("job_analyzer.categories", {}) or {}
        ordered = [name for name in _CATEGORY_ORDER if name in raw_categories]
        ordered.extend(name for name in raw_categories if name not in ordered)
        raw_placeholders = get_scoring_value("job_analyzer.placeholders", {}) or {}
        return cls(
            categories={name: get_scoring_terms(f"job_analyzer.categories.{name}") for name in ordered},
            tech_stack_categories=get_scoring_terms("job_analyzer.tech_stack_categories"),
            education_terms=get_scoring_terms("job_analyzer.education_terms"),
            responsibility_stems=get_scoring_terms("job_analyzer.responsibility_stems"),
            contract_terms=get_scoring_terms("job_analyzer.contract_terms"),
            placeholders={str(key): str(value) for key, value in raw_placeholders.items()},
            education_requirement=str(
                get_scoring_value("job_analyzer.education_requirement", "Bachelor's degree or equivalent")
            ),
            required_skill_limit=int(get_scoring_value("job_analyzer.required_skill_limit", 8)),
            preferred_skill_limit=int(get_scoring_value("job_analyzer.preferred_skill_limit", 4)),
            keyword_limit=int(get_scoring_value("job_analyzer.keyword_limit", 10)),
            responsibility_min_chars=int(get_scoring_value("job_analyzer.responsibility_min_chars", 20)),
            max_responsibilities=int(get_scoring_value("job_analyzer.max_responsibilities", 5)),
        )

    def placeholder(self, key: str, default: str) -> str:
        return self.placeholders.get(key) or default


class JobHeuristicAnalyzer:
    """Dictionary-driven job posting analysis.

    Company, location and salary cannot be recovered reliably from free text,
    so they are returned as fixed placeholders.
    """

    def __init__(self, lexicon: JobLexicon) -> None:
        self._lexicon = lexicon

    def find_skills(self, text: str) -> tuple[list[str], list[str]]:
        """Return (all dictionary hits, hits that belong to the tech stack) in dictionary order."""
        hits: list[str] = []
        tech_stack: list[str] = []
        for category, terms in self._lexicon.categories.items():
            in_stack = category in self._lexicon.tech_stack_categories
            for term in terms:
                if term in hits or not contains_term(text, term):
                    continue
                hits.append(term)
                if in_stack:
                    tech_stack.append(term)
        return hits, tech_stack

    def experience_years(self, text: str) -> str:
        match = _EXPERIENCE_YEARS_RE.search(text)
        if match:
            return f"{match.group(1)} years"
        return self._lexicon.placeholder("experience_years", "Not specified")

    def education(self, text: str) -> str:
        if contains_any(text, self._lexicon.education_terms):
            return self._lexicon.education_requirement
        return self._lexicon.placeholder("education", "Not specified")

    def responsibilities(self, lines: list[str]) -> list[str]:
        lexicon = self._lexicon
        picked = [
            line
            for line in lines
            if len(line) > lexicon.responsibility_min_chars and contains_any(line, lexicon.responsibility_stems)
        ]
        return picked[: lexicon.max_responsibilities]

    def analyze(self, job_text: str) -> ParsedJobDescription:
        lexicon = self._lexicon
        text = job_text or ""
        lines = non_empty_lines(text)
        hits, tech_stack = self.find_skills(text)
        required_limit = lexicon.required_skill_limit
        employment_type = (
            lexicon.placeholder("contract_employment_type", "Contract")
            if contains_any_term(text, lexicon.contract_terms)
            else lexicon.placeholder("employment_type", "Full-time")
        )

        parsed = ParsedJobDescription(
            title=lines[0] if lines else lexicon.placeholder("title", "Job Position"),
            company=lexicon.placeholder("company", "Company Name"),
            location=lexicon.placeholder("location", "Location"),
            employment_type=employment_type,
            salary_range=lexicon.placeholder("salary_range", "Not specified"),
            industry=lexicon.placeholder("industry", "Technology"),
            requirements=JobRequirements(
                required_skills=hits[:required_limit],
                preferred_skills=hits[required_limit : required_limit + lexicon.preferred_skill_limit],
                experience_years=self.experience_years(text),
                education=self.education(text),
            ),
            responsibilities=self.responsibilities(lines),
            keywords=hits[: lexicon.keyword_limit],
            tech_stack=tech_stack,
        )
        logger.debug(
            "job_heuristic_analysis skills=%s tech_stack=%s responsibilities=%s",
            len(hits),
            len(tech_stack),
            len(parsed.responsibilities),
        )
        return parsed


@lru_cache(maxsize=1)
def get_default_job_analyzer() -> JobHeuristicAnalyzer:
    return JobHeuristicAnalyzer(JobLexicon.from_scoring_config())


def analyze_job_heuristically(job_text: str) -> ParsedJobDescription:
    return get_default_job_analyzer().analyze(job_text)
