"""ATS scorer output: sub-scores, feedback, keywords and improvements."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FeedbackStatus = Literal["good", "warning", "error"]
ImprovementType = Literal["critical", "major", "minor"]
Severity = Literal["high", "medium", "low"]


class ScoreBreakdown(BaseModel):
    """Six independent sub-scores, each clamped to 0-100."""
    model_config = ConfigDict(frozen=True)

    keyword_relevance: int = Field(0, ge=0, le=100)
    section_structure: int = Field(0, ge=0, le=100)
    formatting: int = Field(0, ge=0, le=100)
    experience_quality: int = Field(0, ge=0, le=100)
    skills_match: int = Field(0, ge=0, le=100)
    file_structure: int = Field(0, ge=0, le=100)


class SectionFeedback(BaseModel):
    model_config = ConfigDict(frozen=True)

    section: str
    score: int = Field(ge=0, le=100)
    status: FeedbackStatus
    issues: list[str] = []
    suggestions: list[str] = []


class KeywordAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    found: list[str] = []
    missing: list[str] = []  # top 10 only
    relevance_score: int = 0
    industry_keywords: list[str] = []
    industry: str = "general"


class Improvement(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ImprovementType
    section: str
    issue: str
    suggestion: str
    example: str | None = None


class FormatIssue(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: str
    description: str
    severity: Severity


class AnalysisResult(BaseModel):
    """Complete ATS analysis for one resume.

    Computed fresh on every analyze call; never merged with a previous result.
    """
    model_config = ConfigDict(frozen=True)

    overall_score: int = Field(0, ge=0, le=100)
    scores: ScoreBreakdown = ScoreBreakdown()
    feedback: list[SectionFeedback] = []
    keywords: KeywordAnalysis = KeywordAnalysis()
    improvements: list[Improvement] = []
    format_issues: list[FormatIssue] = []
