from pydantic import BaseModel, Field

from config import settings
from models.schemas import ParsedSections


class AnalyzeRequest(BaseModel):
    resume_text: str = Field(
        ..., max_length=settings.max_resume_chars, description="Plain text resume content"
    )
    sections: ParsedSections | None = Field(
        None, description="Previously extracted sections; parsed from resume_text when omitted"
    )


class MatchJobRequest(AnalyzeRequest):
    job_description: str = Field(
        ...,
        min_length=settings.min_job_description_chars,
        max_length=settings.max_job_description_chars,
        description="Job description text",
    )
