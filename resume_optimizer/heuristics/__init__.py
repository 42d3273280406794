from .ats_score import ATSScoreEstimator, GeneralWeights, JobWeights, TailoredWeights, get_default_ats_estimator
from .bullet_impact import (
    BulletImpactScorer,
    collect_memory_bullets,
    impact_score,
    select_relevant_bullets,
    skills_in_bullet,
)
from .job_analyzer import JobHeuristicAnalyzer, analyze_job_heuristically
from .resume_classifier import ResumeLikelihoodClassifier, classify_resume
from .resume_parser import HeuristicResumeParser, parse_resume_heuristically
from .tech_equivalence import TechStackEquivalenceMapper, map_tech_equivalents

__all__ = [
    "ATSScoreEstimator",
    "GeneralWeights",
    "JobWeights",
    "TailoredWeights",
    "get_default_ats_estimator",
    "BulletImpactScorer",
    "collect_memory_bullets",
    "impact_score",
    "select_relevant_bullets",
    "skills_in_bullet",
    "JobHeuristicAnalyzer",
    "analyze_job_heuristically",
    "ResumeLikelihoodClassifier",
    "classify_resume",
    "HeuristicResumeParser",
    "parse_resume_heuristically",
    "TechStackEquivalenceMapper",
    "map_tech_equivalents",
]
