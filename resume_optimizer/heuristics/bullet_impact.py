from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache

from resume_optimizer.core.config.scoring import get_scoring_terms, get_scoring_value
from resume_optimizer.schemas.resume import ParsedResume
from resume_optimizer.schemas.tailoring import MemoryBullet

from .text import contains_any, sanitize_text

_DIGIT_RE = re.compile(r"\d")
_FRAGMENT_SPLIT_RE = re.compile(r"[\n.;]")


@dataclass(frozen=True)
class ImpactWeights:
    action_verbs: tuple[str, ...]
    technical_terms: tuple[str, ...]
    digit_points: int = 3
    action_points: int = 2
    technical_points: int = 2
    long_bullet_points: int = 1
    long_bullet_chars: int = 80
    cap: int = 10
    relevant_threshold: int = 7
    max_selected: int = 5
    fallback_min_chars: int = 30
    fallback_max_bullets: int = 10

    @classmethod
    def from_scoring_config(cls) -> "ImpactWeights":
        return cls(
            action_verbs=get_scoring_terms("impact.action_verbs"),
            technical_terms=get_scoring_terms("impact.technical_terms"),
            digit_points=int(get_scoring_value("impact.digit_points", 3)),
            action_points=int(get_scoring_value("impact.action_points", 2)),
            technical_points=int(get_scoring_value("impact.technical_points", 2)),
            long_bullet_points=int(get_scoring_value("impact.long_bullet_points", 1)),
            long_bullet_chars=int(get_scoring_value("impact.long_bullet_chars", 80)),
            cap=int(get_scoring_value("impact.cap", 10)),
            relevant_threshold=int(get_scoring_value("impact.relevant_threshold", 7)),
            max_selected=int(get_scoring_value("impact.max_selected", 5)),
            fallback_min_chars=int(get_scoring_value("impact.fallback_min_chars", 30)),
            fallback_max_bullets=int(get_scoring_value("impact.fallback_max_bullets", 10)),
        )


class BulletImpactScorer:
    def __init__(self, weights: ImpactWeights) -> None:
        self._weights = weights

    def impact_score(self, bullet: str) -> int:
        weights = self._weights
        text = (bullet or "").strip()
        score = 0
        if _DIGIT_RE.search(text):
            score += weights.digit_points
        if text.lower().startswith(weights.action_verbs):
            score += weights.action_points
        if contains_any(text, weights.technical_terms):
            score += weights.technical_points
        if len(text) > weights.long_bullet_chars:
            score += weights.long_bullet_points
        return max(0, min(weights.cap, score))

    def collect_memory_bullets(self, resume: ParsedResume, raw_text: str = "") -> list[MemoryBullet]:
        """Bullets worth remembering for later tailoring, with skills and impact attached."""
        weights = self._weights
        bullets = resume.all_bullets()
        if not bullets:
            fragments = (fragment.strip() for fragment in _FRAGMENT_SPLIT_RE.split(raw_text or ""))
            bullets = [fragment for fragment in fragments if len(fragment) > weights.fallback_min_chars]
            bullets = bullets[: weights.fallback_max_bullets]

        collected: list[MemoryBullet] = []
        for bullet in bullets:
            cleaned = sanitize_text(bullet)
            if not cleaned:
                continue
            collected.append(
                MemoryBullet(
                    text=cleaned,
                    skills=skills_in_bullet(cleaned, resume.skills),
                    impact_score=self.impact_score(cleaned),
                )
            )
        return collected

    def select_relevant_bullets(self, bullets: list[MemoryBullet], target_skills: list[str]) -> list[MemoryBullet]:
        """Bullets sharing a skill with the target (either direction) or with high impact, best first."""
        weights = self._weights
        targets = [skill.strip().lower() for skill in target_skills if skill and skill.strip()]
        ranked = sorted(bullets, key=lambda bullet: bullet.impact_score, reverse=True)
        relevant = []
        for bullet in ranked:
            bullet_skills = [skill.lower() for skill in bullet.skills if skill]
            shares_skill = any(
                target in skill or skill in target for target in targets for skill in bullet_skills
            )
            if shares_skill or bullet.impact_score >= weights.relevant_threshold:
                relevant.append(bullet)
        return relevant[: weights.max_selected]


def skills_in_bullet(bullet: str, skills: list[str]) -> list[str]:
    lowered = (bullet or "").lower()
    return [skill for skill in skills if skill and skill.strip() and skill.strip().lower() in lowered]


@lru_cache(maxsize=1)
def get_default_impact_scorer() -> BulletImpactScorer:
    return BulletImpactScorer(ImpactWeights.from_scoring_config())


def impact_score(bullet: str) -> int:
    return get_default_impact_scorer().impact_score(bullet)


def collect_memory_bullets(resume: ParsedResume, raw_text: str = "") -> list[MemoryBullet]:
    return get_default_impact_scorer().collect_memory_bullets(resume, raw_text)


def select_relevant_bullets(bullets: list[MemoryBullet], target_skills: list[str]) -> list[MemoryBullet]:
    return get_default_impact_scorer().select_relevant_bullets(bullets, target_skills)
