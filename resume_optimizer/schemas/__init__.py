from .job import JobRequirements, ParsedJobDescription
from .resume import EducationEntry, ExperienceEntry, ParsedResume, ProjectEntry, ResumeProfile
from .scoring import AnalysisSource, ATSScoreResult, RuleContribution, ScoreMode
from .tailoring import MemoryBullet, TailoringChange, TailoringSuggestions
from .validation import ResumeClassification, ResumeSignals, ResumeValidationVerdict

__all__ = [
    "JobRequirements",
    "ParsedJobDescription",
    "EducationEntry",
    "ExperienceEntry",
    "ParsedResume",
    "ProjectEntry",
    "ResumeProfile",
    "AnalysisSource",
    "ATSScoreResult",
    "RuleContribution",
    "ScoreMode",
    "MemoryBullet",
    "TailoringChange",
    "TailoringSuggestions",
    "ResumeClassification",
    "ResumeSignals",
    "ResumeValidationVerdict",
]
