from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from resume_optimizer.core.config import settings
from resume_optimizer.core.config.scoring import get_scoring_terms, get_scoring_value
from resume_optimizer.schemas.validation import ResumeClassification, ResumeSignals

from .text import (
    contains_any_term,
    count_bullet_lines,
    count_term_occurrences,
    count_words,
    first_term,
    has_date_range,
    has_email,
    has_phone,
    truncate_text,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassifierLexicon:
    experience_terms: tuple[str, ...]
    education_terms: tuple[str, ...]
    skills_terms: tuple[str, ...]
    resume_phrases: tuple[str, ...]
    action_terms: tuple[str, ...]
    disqualifiers: tuple[str, ...]
    form_field_terms: tuple[str, ...]
    technical_terms: tuple[str, ...]
    min_words: int = 50
    max_words: int = 10000
    form_field_threshold: int = 5
    technical_term_threshold: int = 10
    max_chars: int = 20000

    @classmethod
    def from_scoring_config(cls) -> "ClassifierLexicon":
        return cls(
            experience_terms=get_scoring_terms("classifier.experience_terms"),
            education_terms=get_scoring_terms("classifier.education_terms"),
            skills_terms=get_scoring_terms("classifier.skills_terms"),
            resume_phrases=get_scoring_terms("classifier.resume_phrases"),
            action_terms=get_scoring_terms("classifier.action_terms"),
            disqualifiers=get_scoring_terms("classifier.disqualifiers"),
            form_field_terms=get_scoring_terms("classifier.form_field_terms"),
            technical_terms=get_scoring_terms("classifier.technical_terms"),
            min_words=int(get_scoring_value("classifier.min_words", 50)),
            max_words=int(get_scoring_value("classifier.max_words", 10000)),
            form_field_threshold=int(get_scoring_value("classifier.form_field_threshold", 5)),
            technical_term_threshold=int(get_scoring_value("classifier.technical_term_threshold", 10)),
            max_chars=settings.max_document_chars,
        )


class ResumeLikelihoodClassifier:
    """Rule-based guess at whether a document is a resume.

    Hard disqualifiers act as a veto that only strong resume signals (an explicit
    resume phrase, or experience + education + skills together) can lift.
    """

    def __init__(self, lexicon: ClassifierLexicon) -> None:
        self._lexicon = lexicon

    def signals(self, text: str) -> ResumeSignals:
        lexicon = self._lexicon
        bounded = truncate_text(text or "", lexicon.max_chars)
        return ResumeSignals(
            has_email=has_email(bounded),
            has_phone=has_phone(bounded),
            has_experience=contains_any_term(bounded, lexicon.experience_terms),
            has_education=contains_any_term(bounded, lexicon.education_terms),
            has_skills=contains_any_term(bounded, lexicon.skills_terms),
            has_resume_phrase=contains_any_term(bounded, lexicon.resume_phrases),
            has_action_words=contains_any_term(bounded, lexicon.action_terms),
            has_date_ranges=has_date_range(bounded),
            bullet_count=count_bullet_lines(bounded),
            word_count=count_words(bounded),
            form_field_hits=count_term_occurrences(bounded, lexicon.form_field_terms),
            technical_term_hits=count_term_occurrences(bounded, lexicon.technical_terms),
            disqualifier=first_term(bounded, lexicon.disqualifiers),
        )

    def classify(self, text: str) -> ResumeClassification:
        signals = self.signals(text)
        is_resume, reason = self._decide(signals)
        logger.debug(
            "resume_classifier_verdict is_resume=%s words=%s bullets=%s reason=%s",
            is_resume,
            signals.word_count,
            signals.bullet_count,
            reason,
        )
        return ResumeClassification(is_resume=is_resume, reason=reason, signals=signals)

    def _decide(self, signals: ResumeSignals) -> tuple[bool, str]:
        lexicon = self._lexicon

        if signals.word_count == 0:
            return False, "Document is empty."

        if signals.disqualifier and not signals.has_strong_resume_signals:
            return False, f"Document looks like a form or non-resume document ('{signals.disqualifier}')."

        if signals.form_field_hits > lexicon.form_field_threshold:
            return False, f"Document reads like a fillable form ({signals.form_field_hits} form-field terms)."

        if signals.technical_term_hits > lexicon.technical_term_threshold and not signals.has_experience:
            return False, (
                f"Document reads like technical documentation ({signals.technical_term_hits} API terms, "
                "no work experience)."
            )

        if signals.has_resume_phrase:
            return True, "Document explicitly identifies itself as a resume or CV."

        if signals.has_strong_resume_signals:
            return True, "Document has experience, education and skills content."

        if not lexicon.min_words <= signals.word_count <= lexicon.max_words:
            return False, (
                f"Document length ({signals.word_count} words) is outside the expected resume range "
                f"of {lexicon.min_words}-{lexicon.max_words} words."
            )

        if signals.has_contact and (signals.has_work or signals.has_education_or_skills):
            return True, "Document has contact details alongside work or education/skills content."

        if signals.has_work and signals.has_education_or_skills:
            return True, "Document has work history alongside education or skills content."

        if signals.has_contact and signals.bullet_count >= 1:
            return True, "Document has contact details and bullet-point structure."

        return False, "Document lacks a second independent resume signal such as work history or education."


@lru_cache(maxsize=1)
def get_default_resume_classifier() -> ResumeLikelihoodClassifier:
    return ResumeLikelihoodClassifier(ClassifierLexicon.from_scoring_config())


def classify_resume(text: str) -> ResumeClassification:
    return get_default_resume_classifier().classify(text)
