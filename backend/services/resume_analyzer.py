"""Orchestrator: resume analysis and job matching pipelines.

Analysis pipeline:
1. Section extraction (skipped when the caller already has sections)
2. ATS scoring: six sub-scores, feedback, keywords, improvements
3. Flaw analysis: flaws, approval checklist, readiness

Job matching pipeline:
1. Section extraction (as above)
2. Keyword + required-skill comparison against the job description
"""

import logging

from models.responses import ResumeAnalysis
from models.schemas import JobMatchResult, ParsedSections
from services import ats_scorer, flaw_analyzer, job_matcher
from services.section_parser import extract_sections

logger = logging.getLogger(__name__)


def parse_resume(resume_text: str) -> ParsedSections:
    sections = extract_sections(resume_text)
    if sections.is_empty:
        logger.warning("No sections recognized in %d characters of resume text", len(resume_text))
    return sections


def analyze(resume_text: str, sections: ParsedSections | None = None) -> ResumeAnalysis:
    """Score a resume and run flaw analysis on top of the score."""
    if sections is None:
        sections = parse_resume(resume_text)

    analysis = ats_scorer.calculate_score(resume_text, sections)
    enhanced = flaw_analyzer.analyze(resume_text, sections, analysis)

    logger.info(
        "Analysis complete: ats_score=%d readiness=%s (%d) flaws=%d",
        analysis.overall_score,
        enhanced.overall_readiness,
        enhanced.readiness_score,
        len(enhanced.flaws),
    )
    return ResumeAnalysis(
        ats_score=analysis.overall_score,
        analysis=analysis,
        enhanced_analysis=enhanced,
    )


def match_job(
    resume_text: str, job_description: str, sections: ParsedSections | None = None
) -> JobMatchResult:
    """Compare a resume against a job description."""
    if sections is None:
        sections = parse_resume(resume_text)

    result = job_matcher.match_job_description(resume_text, sections, job_description)
    logger.info(
        "Job match complete: match_score=%d keywords=%d%% missing_skills=%d",
        result.match_score,
        result.keyword_match.percentage,
        len(result.skill_gap.missing_skills),
    )
    return result
