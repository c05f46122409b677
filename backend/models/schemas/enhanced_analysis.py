"""Flaw analyzer output: categorized flaws, approval tips and readiness."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

FlawCategory = Literal["critical", "major", "minor"]
TipPriority = Literal["high", "medium", "low"]
Readiness = Literal["ready", "needs_work", "not_ready"]


class ATSFlaw(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: FlawCategory
    title: str
    description: str
    impact: str
    how_to_fix: str
    examples: list[str] = []


class ATSApprovalTip(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: str
    title: str
    description: str
    priority: TipPriority
    implemented: bool = False


class EnhancedAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    flaws: list[ATSFlaw] = []
    approval_tips: list[ATSApprovalTip] = []
    overall_readiness: Readiness = "not_ready"
    readiness_score: int = Field(0, ge=0, le=100)
    summary: str = ""

    def flaws_by_category(self, category: FlawCategory) -> list[ATSFlaw]:
        return [flaw for flaw in self.flaws if flaw.category == category]
