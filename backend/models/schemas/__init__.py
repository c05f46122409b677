"""Value objects passed between the parsing, scoring and matching services."""

from models.schemas.analysis_result import (
    AnalysisResult,
    FormatIssue,
    Improvement,
    KeywordAnalysis,
    ScoreBreakdown,
    SectionFeedback,
)
from models.schemas.enhanced_analysis import ATSApprovalTip, ATSFlaw, EnhancedAnalysis
from models.schemas.job_match import JobMatchResult, KeywordMatch, SkillGap
from models.schemas.parsed_sections import (
    ContactInfo,
    EducationItem,
    ExperienceItem,
    ParsedSections,
    ProjectItem,
)

__all__ = [
    "ATSApprovalTip",
    "ATSFlaw",
    "AnalysisResult",
    "ContactInfo",
    "EducationItem",
    "EnhancedAnalysis",
    "ExperienceItem",
    "FormatIssue",
    "Improvement",
    "JobMatchResult",
    "KeywordAnalysis",
    "KeywordMatch",
    "ParsedSections",
    "ProjectItem",
    "ScoreBreakdown",
    "SectionFeedback",
    "SkillGap",
]
