"""Resume vs job description matching.

Keyword match (60%) plus required-skill coverage (40%), a skill gap
breakdown, ordered recommendations and the score headroom left if every
gap were closed.
"""

import logging

from models.schemas import JobMatchResult, KeywordMatch, ParsedSections, SkillGap
from services.keyword_extractor import (
    EXPERIENCE_YEARS_RE,
    extract_job_keywords,
    extract_resume_keywords,
    is_matched,
    match_keywords,
)
from services.skill_extractor import extract_required_skills

logger = logging.getLogger(__name__)

KEYWORD_WEIGHT = 0.6
SKILL_POINTS = 40
MISSING_KEYWORD_GAIN = 2
MISSING_SKILL_GAIN = 3
TOP_MISSING = 5
LOW_MATCH_PERCENTAGE = 50
MANY_ADDITIONAL_SKILLS = 5


def analyze_skill_gap(job_description: str, sections: ParsedSections) -> SkillGap:
    required = extract_required_skills(job_description)
    resume_skills = [skill.lower() for skill in sections.skills if skill.strip()]

    matched = [s for s in required if any(is_matched(s, rs) for rs in resume_skills)]
    missing = [s for s in required if s not in matched]
    additional = [rs for rs in resume_skills if not any(is_matched(rs, s) for s in required)]

    return SkillGap(
        required_skills=required,
        matched_skills=matched,
        missing_skills=missing,
        additional_skills=additional,
    )


def calculate_match_score(keyword_match: KeywordMatch, skill_gap: SkillGap) -> int:
    skill_ratio = 0.0
    if skill_gap.required_skills:
        skill_ratio = len(skill_gap.matched_skills) / len(skill_gap.required_skills)
    score = round(keyword_match.percentage * KEYWORD_WEIGHT + skill_ratio * SKILL_POINTS)
    return max(0, min(100, score))


def calculate_improvement_potential(
    score: int, keyword_match: KeywordMatch, skill_gap: SkillGap
) -> int:
    """Headroom if every missing keyword and skill were added, capped at 100."""
    potential = min(
        100,
        score
        + len(keyword_match.missing) * MISSING_KEYWORD_GAIN
        + len(skill_gap.missing_skills) * MISSING_SKILL_GAIN,
    )
    return max(0, potential - score)


def generate_recommendations(
    keyword_match: KeywordMatch, skill_gap: SkillGap, job_description: str
) -> list[str]:
    recommendations: list[str] = []

    if keyword_match.missing:
        top_missing = ", ".join(keyword_match.missing[:TOP_MISSING])
        recommendations.append(f"Add these missing keywords to your resume: {top_missing}")

    if skill_gap.missing_skills:
        top_skills = ", ".join(skill_gap.missing_skills[:TOP_MISSING])
        recommendations.append(f"Consider adding these skills to your resume: {top_skills}")

    years_match = EXPERIENCE_YEARS_RE.search(job_description)
    if years_match:
        recommendations.append(
            f"This role requires {years_match.group(1)}+ years of experience. "
            "Ensure your resume clearly shows relevant experience duration."
        )

    if keyword_match.percentage < LOW_MATCH_PERCENTAGE:
        recommendations.append(
            "Your resume has less than 50% keyword match. "
            "Tailor your resume more closely to this job description."
        )

    if len(skill_gap.additional_skills) > MANY_ADDITIONAL_SKILLS:
        recommendations.append(
            "You have many additional skills not mentioned in the job description. "
            "Consider highlighting the most relevant ones."
        )

    if not recommendations:
        recommendations.append(
            "Your resume is a good match! Consider adding specific achievements "
            "that align with the job responsibilities."
        )
    return recommendations


def match_job_description(
    resume_text: str, sections: ParsedSections, job_description: str
) -> JobMatchResult:
    """Compare a parsed resume against a job description. Never raises."""
    job_keywords = extract_job_keywords(job_description)
    resume_keywords = extract_resume_keywords(resume_text, sections)

    keyword_match = match_keywords(job_keywords, resume_keywords)
    skill_gap = analyze_skill_gap(job_description, sections)
    score = calculate_match_score(keyword_match, skill_gap)

    logger.debug(
        "Job match: %d/%d keywords, %d/%d required skills",
        len(keyword_match.matched), len(job_keywords),
        len(skill_gap.matched_skills), len(skill_gap.required_skills),
    )
    return JobMatchResult(
        match_score=score,
        keyword_match=keyword_match,
        skill_gap=skill_gap,
        recommendations=generate_recommendations(keyword_match, skill_gap, job_description),
        improvement_potential=calculate_improvement_potential(score, keyword_match, skill_gap),
    )
