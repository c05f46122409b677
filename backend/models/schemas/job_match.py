"""Job matcher output: keyword match, skill gap and recommendations."""

from pydantic import BaseModel, ConfigDict, Field


class KeywordMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    matched: list[str] = []
    missing: list[str] = []
    percentage: int = Field(0, ge=0, le=100)


class SkillGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    required_skills: list[str] = []
    matched_skills: list[str] = []
    missing_skills: list[str] = []
    additional_skills: list[str] = []


class JobMatchResult(BaseModel):
    """Resume vs job description comparison.

    improvement_potential is the headroom left if every gap were closed,
    so match_score + improvement_potential never exceeds 100.
    """
    model_config = ConfigDict(frozen=True)

    match_score: int = Field(0, ge=0, le=100)
    keyword_match: KeywordMatch = KeywordMatch()
    skill_gap: SkillGap = SkillGap()
    recommendations: list[str] = []
    improvement_potential: int = Field(0, ge=0, le=100)
