from pydantic import BaseModel

from models.schemas import AnalysisResult, EnhancedAnalysis, JobMatchResult, ParsedSections


class UploadResponse(BaseModel):
    file_name: str
    parsed_text: str
    parsed_text_preview: str
    sections: ParsedSections


class ResumeAnalysis(BaseModel):
    ats_score: int = 0
    analysis: AnalysisResult = AnalysisResult()
    enhanced_analysis: EnhancedAnalysis = EnhancedAnalysis()


class UploadAnalysisResponse(ResumeAnalysis):
    file_name: str = ""
    sections: ParsedSections = ParsedSections()


class MatchJobResponse(BaseModel):
    current_ats_score: int = 0
    match_result: JobMatchResult = JobMatchResult()
