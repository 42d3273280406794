from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable

from resume_optimizer.core.config.scoring import get_scoring_terms, get_scoring_value
from resume_optimizer.schemas.job import ParsedJobDescription
from resume_optimizer.schemas.resume import ParsedResume
from resume_optimizer.schemas.scoring import ATSScoreResult, RuleContribution

from .text import (
    contains_any_term,
    count_bullet_lines,
    count_term_occurrences,
    count_words,
    distinct_numeric_tokens,
    distinct_terms,
    has_email,
    has_phone,
    strip_contact_details,
    words_of,
)

logger = logging.getLogger(__name__)

_UNKNOWN_EDUCATION = {"", "not specified", "n/a", "none"}


def _cfg_int(path: str, default: int) -> int:
    return int(get_scoring_value(path, default))


@dataclass(frozen=True)
class GeneralWeights:
    section_terms: dict[str, tuple[str, ...]]
    section_points: dict[str, int]
    action_verbs: tuple[str, ...]
    tech_keywords: tuple[str, ...]
    base: int = 20
    floor: int = 20
    ceiling: int = 100
    bullet_points_each: int = 2
    bullet_cap: int = 15
    metric_points_each: int = 2
    metric_cap: int = 12
    action_points_each: int = 1
    action_cap: int = 12
    tech_points_each: int = 2
    tech_cap: int = 16
    email_points: int = 5
    phone_points: int = 5
    structured_bullet_min: int = 6
    structured_bullet_points: int = 5
    length_min_words: int = 180
    length_max_words: int = 1500
    length_bonus: int = 10
    short_words: int = 120
    short_penalty: int = 10

    @classmethod
    def from_scoring_config(cls) -> "GeneralWeights":
        prefix = "ats.general"
        sections = ("experience", "education", "skills")
        return cls(
            section_terms={name: get_scoring_terms(f"{prefix}.sections.{name}.terms") for name in sections},
            section_points={name: _cfg_int(f"{prefix}.sections.{name}.points", 0) for name in sections},
            action_verbs=get_scoring_terms(f"{prefix}.action_verbs.terms"),
            tech_keywords=get_scoring_terms(f"{prefix}.tech_keywords.terms"),
            base=_cfg_int(f"{prefix}.base", 20),
            floor=_cfg_int(f"{prefix}.floor", 20),
            ceiling=_cfg_int(f"{prefix}.ceiling", 100),
            bullet_points_each=_cfg_int(f"{prefix}.bullets.points_each", 2),
            bullet_cap=_cfg_int(f"{prefix}.bullets.cap", 15),
            metric_points_each=_cfg_int(f"{prefix}.metrics.points_each", 2),
            metric_cap=_cfg_int(f"{prefix}.metrics.cap", 12),
            action_points_each=_cfg_int(f"{prefix}.action_verbs.points_each", 1),
            action_cap=_cfg_int(f"{prefix}.action_verbs.cap", 12),
            tech_points_each=_cfg_int(f"{prefix}.tech_keywords.points_each", 2),
            tech_cap=_cfg_int(f"{prefix}.tech_keywords.cap", 16),
            email_points=_cfg_int(f"{prefix}.contact.email", 5),
            phone_points=_cfg_int(f"{prefix}.contact.phone", 5),
            structured_bullet_min=_cfg_int(f"{prefix}.structured_bullets.min_count", 6),
            structured_bullet_points=_cfg_int(f"{prefix}.structured_bullets.points", 5),
            length_min_words=_cfg_int(f"{prefix}.length.min_words", 180),
            length_max_words=_cfg_int(f"{prefix}.length.max_words", 1500),
            length_bonus=_cfg_int(f"{prefix}.length.bonus", 10),
            short_words=_cfg_int(f"{prefix}.length.short_words", 120),
            short_penalty=_cfg_int(f"{prefix}.length.penalty", 10),
        )


@dataclass(frozen=True)
class JobWeights:
    base: int = 40
    floor: int = 0
    ceiling: int = 100
    skills_max_points: int = 30
    no_skills_points: int = 15
    experience_match_points: int = 20
    experience_fallback_points: int = 5
    experience_min_word_length: int = 4
    education_match_points: int = 10
    education_mismatch_points: int = 3
    education_unknown_points: int = 5
    education_min_word_length: int = 4

    @classmethod
    def from_scoring_config(cls) -> "JobWeights":
        prefix = "ats.job"
        return cls(
            base=_cfg_int(f"{prefix}.base", 40),
            floor=_cfg_int(f"{prefix}.floor", 0),
            ceiling=_cfg_int(f"{prefix}.ceiling", 100),
            skills_max_points=_cfg_int(f"{prefix}.skills.max_points", 30),
            no_skills_points=_cfg_int(f"{prefix}.skills.no_skills_points", 15),
            experience_match_points=_cfg_int(f"{prefix}.experience.match_points", 20),
            experience_fallback_points=_cfg_int(f"{prefix}.experience.fallback_points", 5),
            experience_min_word_length=_cfg_int(f"{prefix}.experience.min_word_length", 4),
            education_match_points=_cfg_int(f"{prefix}.education.match_points", 10),
            education_mismatch_points=_cfg_int(f"{prefix}.education.mismatch_points", 3),
            education_unknown_points=_cfg_int(f"{prefix}.education.unknown_points", 5),
            education_min_word_length=_cfg_int(f"{prefix}.education.min_word_length", 4),
        )


@dataclass(frozen=True)
class TailoredWeights:
    base: int = 60
    keyword_points_each: int = 2
    keyword_cap: int = 30
    change_points_each: int = 2

    @classmethod
    def from_scoring_config(cls) -> "TailoredWeights":
        prefix = "ats.tailored"
        return cls(
            base=_cfg_int(f"{prefix}.base", 60),
            keyword_points_each=_cfg_int(f"{prefix}.keyword_points_each", 2),
            keyword_cap=_cfg_int(f"{prefix}.keyword_cap", 30),
            change_points_each=_cfg_int(f"{prefix}.change_points_each", 2),
        )


@dataclass(frozen=True)
class ResumeEvidence:
    text: str
    word_count: int
    bullet_lines: int
    structured_bullets: int
    metric_tokens: frozenset[str]
    action_hits: int
    tech_terms: tuple[str, ...]
    has_email: bool
    has_phone: bool


@dataclass(frozen=True)
class JobEvidence:
    resume: ParsedResume
    resume_text: str
    job: ParsedJobDescription
    job_text: str
    matched_skills: tuple[str, ...]
    missing_skills: tuple[str, ...]


GeneralRule = Callable[[ResumeEvidence, GeneralWeights], RuleContribution]
JobRule = Callable[[JobEvidence, JobWeights], RuleContribution]


def bounded(
    rule: str,
    points: int,
    max_points: int,
    *,
    min_points: int = 0,
    strength: str | None = None,
    improvement: str | None = None,
) -> RuleContribution:
    return RuleContribution(
        rule=rule,
        points=max(min_points, min(max_points, int(points))),
        max_points=max_points,
        strength=strength,
        improvement=improvement,
    )


def clamp_score(value: float, floor: int, ceiling: int) -> int:
    return max(floor, min(ceiling, int(math.floor(value + 0.5))))


def _section_rule(section: str, label: str) -> GeneralRule:
    def rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
        max_points = weights.section_points.get(section, 0)
        present = contains_any_term(evidence.text, weights.section_terms.get(section, ()))
        return bounded(
            f"{section}_section",
            max_points if present else 0,
            max_points,
            strength=f"{label} section detected." if present else None,
            improvement=None if present else f"Add a clearly labelled {label} section.",
        )

    return rule


def _bullets_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    points = evidence.bullet_lines * weights.bullet_points_each
    return bounded(
        "bullet_lines",
        points,
        weights.bullet_cap,
        strength="Achievements are written as bullet points." if evidence.bullet_lines >= 3 else None,
        improvement=None if evidence.bullet_lines >= 3 else "Use bullet points to list achievements.",
    )


def _metrics_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    count = len(evidence.metric_tokens)
    return bounded(
        "metrics",
        count * weights.metric_points_each,
        weights.metric_cap,
        strength="Quantified results found." if count else None,
        improvement=None if count >= 3 else "Quantify impact with numbers, percentages or amounts.",
    )


def _action_verbs_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    return bounded(
        "action_verbs",
        evidence.action_hits * weights.action_points_each,
        weights.action_cap,
        strength="Strong action verbs used." if evidence.action_hits >= 3 else None,
        improvement=None if evidence.action_hits >= 3 else "Start bullets with strong action verbs.",
    )


def _tech_keywords_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    count = len(evidence.tech_terms)
    return bounded(
        "tech_keywords",
        count * weights.tech_points_each,
        weights.tech_cap,
        strength=f"Technical keywords found: {', '.join(evidence.tech_terms)}." if count else None,
        improvement=None if count >= 3 else "Mention the tools and technologies you work with.",
    )


def _email_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    return bounded(
        "email",
        weights.email_points if evidence.has_email else 0,
        weights.email_points,
        improvement=None if evidence.has_email else "Add an email address.",
    )


def _phone_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    return bounded(
        "phone",
        weights.phone_points if evidence.has_phone else 0,
        weights.phone_points,
        improvement=None if evidence.has_phone else "Add a phone number.",
    )


def _structured_bullets_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    enough = evidence.structured_bullets >= weights.structured_bullet_min
    return bounded(
        "structured_bullets",
        weights.structured_bullet_points if enough else 0,
        weights.structured_bullet_points,
    )


def _length_rule(evidence: ResumeEvidence, weights: GeneralWeights) -> RuleContribution:
    words = evidence.word_count
    if weights.length_min_words <= words <= weights.length_max_words:
        points = weights.length_bonus
    elif words < weights.short_words:
        points = -weights.short_penalty
    else:
        points = 0
    return bounded(
        "length",
        points,
        weights.length_bonus,
        min_points=-weights.short_penalty,
        strength="Resume length is in the readable range." if points > 0 else None,
        improvement=None if points > 0 else (
            "Resume is too short; add detail to experience and skills."
            if points < 0
            else f"Keep the resume under {weights.length_max_words} words."
        ),
    )


GENERAL_RULES: tuple[GeneralRule, ...] = (
    _section_rule("experience", "Experience"),
    _section_rule("education", "Education"),
    _section_rule("skills", "Skills"),
    _bullets_rule,
    _metrics_rule,
    _action_verbs_rule,
    _tech_keywords_rule,
    _email_rule,
    _phone_rule,
    _structured_bullets_rule,
    _length_rule,
)


def _skills_rule(evidence: JobEvidence, weights: JobWeights) -> RuleContribution:
    total = len(evidence.matched_skills) + len(evidence.missing_skills)
    if total == 0:
        return bounded("skill_match", weights.no_skills_points, weights.skills_max_points)
    fraction = len(evidence.matched_skills) / total
    points = int(math.floor(fraction * weights.skills_max_points + 0.5))
    return bounded(
        "skill_match",
        points,
        weights.skills_max_points,
        strength=f"Matches {len(evidence.matched_skills)}/{total} listed skills." if evidence.matched_skills else None,
        improvement=(
            f"Add evidence for missing skills: {', '.join(evidence.missing_skills)}."
            if evidence.missing_skills
            else None
        ),
    )


def _experience_relevance_rule(evidence: JobEvidence, weights: JobWeights) -> RuleContribution:
    job_words = words_of(evidence.job_text, min_length=weights.experience_min_word_length)
    relevant = any(
        word in entry.combined_text().lower()
        for entry in evidence.resume.experience
        for word in job_words
    )
    return bounded(
        "experience_relevance",
        weights.experience_match_points if relevant else weights.experience_fallback_points,
        weights.experience_match_points,
        strength="Experience mentions terms from the job description." if relevant else None,
        improvement=None if relevant else "Describe experience using the job description's language.",
    )


def _education_rule(evidence: JobEvidence, weights: JobWeights) -> RuleContribution:
    job_education = evidence.job.requirements.education.strip().lower()
    resume_education = " ".join(entry.combined_text() for entry in evidence.resume.education).lower()
    if job_education in _UNKNOWN_EDUCATION or not resume_education.strip():
        return bounded("education_match", weights.education_unknown_points, weights.education_match_points)
    job_words = words_of(job_education, min_length=weights.education_min_word_length)
    matched = any(word in resume_education for word in job_words)
    return bounded(
        "education_match",
        weights.education_match_points if matched else weights.education_mismatch_points,
        weights.education_match_points,
        strength="Education matches the stated requirement." if matched else None,
        improvement=None if matched else "Clarify how your education meets the stated requirement.",
    )


JOB_RULES: tuple[JobRule, ...] = (_skills_rule, _experience_relevance_rule, _education_rule)


def _has_skill(skill: str, resume_skills: list[str], resume_text: str) -> bool:
    needle = skill.strip().lower()
    if not needle:
        return False
    for candidate in resume_skills:
        if len(candidate) < 2:
            continue
        if needle in candidate or candidate in needle:
            return True
    return needle in resume_text


def _summarize(contributions: list[RuleContribution]) -> tuple[list[str], list[str]]:
    strengths = [item.strength for item in contributions if item.strength]
    improvements = [item.improvement for item in contributions if item.improvement]
    return strengths, improvements


class ATSScoreEstimator:
    """Deterministic ATS score: a base plus independently bounded rule contributions, clamped once."""

    def __init__(
        self,
        general: GeneralWeights,
        job: JobWeights,
        tailored: TailoredWeights | None = None,
    ) -> None:
        self._general = general
        self._job = job
        self._tailored = tailored or TailoredWeights()

    def score(
        self,
        resume: ParsedResume,
        raw_text: str = "",
        job: ParsedJobDescription | None = None,
        job_text: str = "",
    ) -> ATSScoreResult:
        if job is None:
            return self.score_general(resume, raw_text)
        return self.score_for_job(resume, job, raw_text=raw_text, job_text=job_text)

    def general_evidence(self, resume: ParsedResume, raw_text: str) -> ResumeEvidence:
        weights = self._general
        text = raw_text or resume.as_text()
        return ResumeEvidence(
            text=text,
            word_count=count_words(text),
            bullet_lines=count_bullet_lines(text),
            structured_bullets=len(resume.all_bullets()),
            metric_tokens=frozenset(distinct_numeric_tokens(strip_contact_details(text))),
            action_hits=count_term_occurrences(text, weights.action_verbs),
            tech_terms=tuple(distinct_terms(text, weights.tech_keywords)),
            has_email=has_email(text),
            has_phone=has_phone(text),
        )

    def score_general(self, resume: ParsedResume, raw_text: str = "") -> ATSScoreResult:
        weights = self._general
        evidence = self.general_evidence(resume, raw_text)
        contributions = [rule(evidence, weights) for rule in GENERAL_RULES]
        total = weights.base + sum(item.points for item in contributions)
        strengths, improvements = _summarize(contributions)
        score = clamp_score(total, weights.floor, weights.ceiling)
        logger.debug("ats_general_score raw=%s clamped=%s", total, score)
        return ATSScoreResult(
            score=score,
            mode="general",
            source="heuristic",
            matching_keywords=list(evidence.tech_terms),
            strengths=strengths,
            improvements=improvements,
            contributions=contributions,
        )

    def job_evidence(
        self,
        resume: ParsedResume,
        job: ParsedJobDescription,
        raw_text: str = "",
        job_text: str = "",
    ) -> JobEvidence:
        resume_text = (raw_text or resume.as_text()).lower()
        resume_skills = [skill.strip().lower() for skill in resume.skills if skill and skill.strip()]
        matched: list[str] = []
        missing: list[str] = []
        for skill in job.requirements.listed_skills():
            if _has_skill(skill, resume_skills, resume_text):
                matched.append(skill)
            else:
                missing.append(skill)
        return JobEvidence(
            resume=resume,
            resume_text=resume_text,
            job=job,
            job_text=job_text or job.summary_text(),
            matched_skills=tuple(matched),
            missing_skills=tuple(missing),
        )

    def score_for_job(
        self,
        resume: ParsedResume,
        job: ParsedJobDescription,
        *,
        raw_text: str = "",
        job_text: str = "",
    ) -> ATSScoreResult:
        weights = self._job
        evidence = self.job_evidence(resume, job, raw_text=raw_text, job_text=job_text)
        contributions = [rule(evidence, weights) for rule in JOB_RULES]
        total = weights.base + sum(item.points for item in contributions)
        strengths, improvements = _summarize(contributions)
        score = clamp_score(total, weights.floor, weights.ceiling)
        logger.debug(
            "ats_job_score raw=%s clamped=%s matched=%s missing=%s",
            total,
            score,
            len(evidence.matched_skills),
            len(evidence.missing_skills),
        )
        return ATSScoreResult(
            score=score,
            mode="job",
            source="heuristic",
            matching_keywords=list(evidence.matched_skills),
            missing_keywords=list(evidence.missing_skills),
            strengths=strengths,
            improvements=improvements,
            contributions=contributions,
        )

    def estimate_tailored(
        self,
        job: ParsedJobDescription,
        suggested_texts: list[str],
        change_count: int | None = None,
    ) -> int:
        """Projected score after applying tailoring suggestions."""
        weights = self._tailored
        keywords = [keyword.strip().lower() for keyword in job.all_keywords() if keyword and keyword.strip()]
        keyword_hits = 0
        for text in suggested_texts:
            lowered = (text or "").lower()
            keyword_hits += sum(1 for keyword in keywords if keyword in lowered)
        total = (
            weights.base
            + min(weights.keyword_cap, keyword_hits * weights.keyword_points_each)
            + (len(suggested_texts) if change_count is None else change_count) * weights.change_points_each
        )
        return clamp_score(total, 0, 100)


@lru_cache(maxsize=1)
def get_default_ats_estimator() -> ATSScoreEstimator:
    return ATSScoreEstimator(
        GeneralWeights.from_scoring_config(),
        JobWeights.from_scoring_config(),
        TailoredWeights.from_scoring_config(),
    )
