"""ATS compatibility scoring.

Six independent sub-scores (0-100) combined with fixed weights into an
overall score, plus per-section feedback, industry keyword analysis, an
ordered improvement checklist and format issue detection. Deterministic:
the same (text, sections) always produces the same AnalysisResult.
"""

import logging
import re
from datetime import datetime

from models.schemas import (
    AnalysisResult,
    ContactInfo,
    EducationItem,
    ExperienceItem,
    FormatIssue,
    Improvement,
    KeywordAnalysis,
    ParsedSections,
    ScoreBreakdown,
    SectionFeedback,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

INDUSTRY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "general": (
        "leadership", "management", "communication", "teamwork", "problem-solving",
        "analytical", "strategic", "organized", "detail-oriented", "results-driven",
        "innovative", "collaborative", "adaptable", "proactive", "motivated",
    ),
    "tech": (
        "software development", "agile", "scrum", "devops", "cloud computing",
        "microservices", "api", "database", "testing", "deployment",
        "scalability", "performance", "security", "automation", "integration",
        "full-stack", "frontend", "backend", "mobile development", "web development",
    ),
    "business": (
        "project management", "stakeholder", "roi", "kpi", "budget",
        "strategy", "operations", "process improvement", "client relations",
        "business development", "account management", "revenue growth",
    ),
    "marketing": (
        "seo", "sem", "social media", "content marketing", "brand management",
        "analytics", "campaign", "lead generation", "digital marketing",
        "email marketing", "conversion", "engagement",
    ),
    "data": (
        "data analysis", "machine learning", "statistics", "visualization",
        "python", "sql", "tableau", "power bi", "big data", "predictive modeling",
        "data mining", "etl", "reporting", "insights",
    ),
}

ACTION_VERBS: tuple[str, ...] = (
    "achieved", "accomplished", "accelerated", "administered", "analyzed",
    "built", "created", "coordinated", "delivered", "designed", "developed",
    "directed", "enhanced", "established", "exceeded", "executed", "expanded",
    "generated", "implemented", "improved", "increased", "initiated", "innovated",
    "launched", "led", "managed", "negotiated", "optimized", "orchestrated",
    "pioneered", "produced", "reduced", "resolved", "revamped", "spearheaded",
    "streamlined", "strengthened", "transformed",
)
_ACTION_VERB_SET = frozenset(ACTION_VERBS)

SCORE_WEIGHTS: dict[str, float] = {
    "keyword_relevance": 0.25,
    "section_structure": 0.20,
    "formatting": 0.15,
    "experience_quality": 0.15,
    "skills_match": 0.15,
    "file_structure": 0.10,
}

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_NON_ASCII_RE = re.compile(r"[^\x00-\x7F]")

# (pattern, penalty) applied when the pattern occurs more than 3 times
_FORMATTING_PENALTIES: list[tuple[re.Pattern, int]] = [
    (_NON_ASCII_RE, 5),
    (re.compile(r"\t{2,}"), 10),
    (re.compile(r"\n{4,}"), 10),
    (re.compile(r"<[^>]+>"), 15),
    (re.compile(r"[│├└┤┬┴┼]"), 20),
    (re.compile(r"\|{2,}"), 10),
]
_FORMATTING_THRESHOLD = 3
_BULLET_RE = re.compile(r"[•\-*]\s+\w")

QUANTIFIED_RE = re.compile(
    r"\d+%|\$\d+|\d+\s*(?:users?|customers?|clients?|projects?|team)", re.IGNORECASE
)
_FEEDBACK_QUANTIFIED_RE = re.compile(
    r"\d+%|\$\d+|\d+\s*(?:users?|customers?|projects?)", re.IGNORECASE
)

_HARD_SKILL_PATTERNS = [
    re.compile(
        r"javascript|python|java|c\+\+|typescript|react|angular|vue|node|sql|aws|azure|docker|kubernetes",
        re.IGNORECASE,
    ),
    re.compile(r"excel|powerpoint|photoshop|figma|tableau|salesforce|sap|oracle", re.IGNORECASE),
]
_SOFT_SKILL_PATTERNS = [
    re.compile(
        r"leadership|communication|teamwork|problem.?solving|management|analytical|creative",
        re.IGNORECASE,
    ),
]

_STRUCTURE_HEADER_PATTERNS = [
    re.compile(r"\b(?:SUMMARY|PROFILE|OBJECTIVE)\b", re.IGNORECASE),
    re.compile(r"\b(?:EXPERIENCE|WORK|EMPLOYMENT)\b", re.IGNORECASE),
    re.compile(r"\b(?:EDUCATION|ACADEMIC)\b", re.IGNORECASE),
    re.compile(r"\b(?:SKILLS|COMPETENCIES|EXPERTISE)\b", re.IGNORECASE),
]
EMAIL_TOP_CHARS = 500

# Industry detection: (industry, pattern, points)
_INDUSTRY_INDICATORS: list[tuple[str, re.Pattern, int]] = [
    ("tech", re.compile(r"software|developer|engineer|programming|code|api|database"), 5),
    ("tech", re.compile(r"javascript|python|java|react|node|aws|docker"), 3),
    ("business", re.compile(r"manager|director|executive|strategy|operations|business"), 5),
    ("marketing", re.compile(r"marketing|brand|campaign|seo|social media|content"), 5),
    ("data", re.compile(r"data|analyst|machine learning|statistics|visualization|python|sql"), 5),
]

_TABLE_RE = re.compile(r"[│├└┤┬┴┼|]{2,}")
_HEADER_FOOTER_RE = re.compile(r"page \d|^\d+$|confidential")
_YEAR_RE = re.compile(r"\d{4}")


def word_count(text: str) -> int:
    return len(text.split())


def _clamp(score: float) -> int:
    return max(0, min(100, round(score)))


def _status(score: int) -> str:
    if score >= 80:
        return "good"
    if score >= 50:
        return "warning"
    return "error"


def _contact(sections: ParsedSections) -> ContactInfo:
    return sections.contact or ContactInfo()


# ---------------------------------------------------------------------------
# Sub-scores
# ---------------------------------------------------------------------------


def score_keyword_relevance(text: str) -> int:
    """Up to 60 points for industry keywords, up to 40 for action verbs."""
    lower_text = text.lower()
    all_keywords = [kw for keywords in INDUSTRY_KEYWORDS.values() for kw in keywords]
    found = sum(1 for kw in all_keywords if kw in lower_text)
    verbs = sum(1 for verb in ACTION_VERBS if verb in lower_text)

    keyword_points = min(found / min(len(all_keywords), 50) * 100, 60)
    verb_points = min(verbs / 15 * 40, 40)
    return _clamp(min(keyword_points + verb_points, 100))


def score_section_structure(sections: ParsedSections) -> int:
    contact = _contact(sections)
    points_per_section = 100 / 5
    score = 0.0
    if contact.email or contact.phone:
        score += points_per_section
    if sections.summary and len(sections.summary) > 50:
        score += points_per_section
    if sections.experience:
        score += points_per_section
    if sections.education:
        score += points_per_section
    if sections.skills:
        score += points_per_section
    if sections.projects:
        score += 5
    if sections.certifications:
        score += 5
    return _clamp(score)


def score_formatting(text: str) -> int:
    score = 100
    for pattern, penalty in _FORMATTING_PENALTIES:
        if len(pattern.findall(text)) > _FORMATTING_THRESHOLD:
            score -= penalty

    words = word_count(text)
    if words < 200:
        score -= 15
    if words > 1500:
        score -= 10

    bullets = len(_BULLET_RE.findall(text))
    if bullets >= 5:
        score += 5
    if bullets >= 10:
        score += 5
    return _clamp(score)


def _first_word(bullet: str) -> str:
    words = bullet.split()
    if not words:
        return ""
    return re.sub(r"[^\w-]", "", words[0].lower())


def _score_experience_entry(item: ExperienceItem) -> int:
    score = 0
    if len(item.title) > 2:
        score += 5
    if len(item.company) > 2:
        score += 5
    if item.start_date:
        score += 3
    if item.effective_end_date:
        score += 2
    score += min(len(item.description) * 3, 15)
    for bullet in item.description:
        if QUANTIFIED_RE.search(bullet):
            score += 5
        if _first_word(bullet) in _ACTION_VERB_SET:
            score += 2
    return score


def score_experience_quality(sections: ParsedSections) -> int:
    if not sections.experience:
        return 20
    score = min(len(sections.experience) * 15, 30)
    score += sum(_score_experience_entry(item) for item in sections.experience)
    return _clamp(score)


def _skill_hits(skills: list[str], patterns: list[re.Pattern]) -> int:
    return sum(1 for skill in skills for pattern in patterns if pattern.search(skill))


def score_skills_match(sections: ParsedSections) -> int:
    skills = sections.skills
    if not skills:
        return 20

    score = min(len(skills) * 5, 40)
    hard = _skill_hits(skills, _HARD_SKILL_PATTERNS)
    soft = _skill_hits(skills, _SOFT_SKILL_PATTERNS)
    if hard >= 5:
        score += 20
    if soft >= 2:
        score += 10
    if hard >= 3 and soft >= 2:
        score += 10
    if len({skill[0].lower() for skill in skills if skill}) >= 5:
        score += 10
    return _clamp(score)


def email_near_top(text: str, email: str | None) -> bool:
    if not email:
        return False
    index = text.lower().find(email.lower())
    return 0 <= index < EMAIL_TOP_CHARS


def score_file_structure(text: str, sections: ParsedSections) -> int:
    contact = _contact(sections)
    score = 70
    score += 5 * sum(1 for pattern in _STRUCTURE_HEADER_PATTERNS if pattern.search(text))
    if email_near_top(text, contact.email):
        score += 10
    if not contact.email:
        score -= 10
    if not contact.phone:
        score -= 5
    return _clamp(score)


def calculate_overall_score(scores: ScoreBreakdown) -> int:
    total = sum(getattr(scores, key) * weight for key, weight in SCORE_WEIGHTS.items())
    return _clamp(total)


def calculate_score_breakdown(text: str, sections: ParsedSections) -> ScoreBreakdown:
    return ScoreBreakdown(
        keyword_relevance=score_keyword_relevance(text),
        section_structure=score_section_structure(sections),
        formatting=score_formatting(text),
        experience_quality=score_experience_quality(sections),
        skills_match=score_skills_match(sections),
        file_structure=score_file_structure(text, sections),
    )


# ---------------------------------------------------------------------------
# Keyword analysis
# ---------------------------------------------------------------------------


def detect_industry(sections: ParsedSections) -> str:
    """Guess the resume's industry from skills and experience.

    The first industry with the highest positive score wins; "general"
    when nothing scores.
    """
    skills = " ".join(sections.skills).lower()
    experience = " ".join(
        f"{item.title} {' '.join(item.description)}" for item in sections.experience
    ).lower()
    combined = f"{skills} {experience}"

    scores = {"tech": 0, "business": 0, "marketing": 0, "data": 0, "general": 0}
    for industry, pattern, points in _INDUSTRY_INDICATORS:
        if pattern.search(combined):
            scores[industry] += points

    best, best_score = "general", 0
    for industry, score in scores.items():
        if score > best_score:
            best, best_score = industry, score
    return best


def analyze_keywords(text: str, sections: ParsedSections) -> KeywordAnalysis:
    lower_text = text.lower()
    industry = detect_industry(sections)
    keywords = INDUSTRY_KEYWORDS[industry]
    found = [kw for kw in keywords if kw in lower_text]
    missing = [kw for kw in keywords if kw not in lower_text]
    return KeywordAnalysis(
        found=found,
        missing=missing[:10],
        relevance_score=round(len(found) / len(keywords) * 100),
        industry_keywords=list(keywords[:20]),
        industry=industry,
    )


# ---------------------------------------------------------------------------
# Section feedback
# ---------------------------------------------------------------------------


def _contact_feedback(contact: ContactInfo) -> SectionFeedback:
    issues: list[str] = []
    suggestions: list[str] = []
    score = 100

    if not contact.email:
        issues.append("Email address is missing")
        suggestions.append("Add a professional email address")
        score -= 30
    if not contact.phone:
        issues.append("Phone number is missing")
        suggestions.append("Include a contact phone number")
        score -= 20
    if not contact.linkedin:
        suggestions.append("Add your LinkedIn profile URL")
        score -= 10
    if not contact.name:
        issues.append("Name not clearly identified")
        suggestions.append("Ensure your full name is prominently displayed at the top")
        score -= 20

    score = max(0, score)
    return SectionFeedback(
        section="Contact Information", score=score, status=_status(score),
        issues=issues, suggestions=suggestions,
    )


def _summary_feedback(summary: str | None) -> SectionFeedback:
    issues: list[str] = []
    suggestions: list[str] = []

    if not summary:
        issues.append("Professional summary is missing")
        suggestions.append(
            "Add a 2-4 sentence professional summary highlighting your key qualifications"
        )
        score = 20
    else:
        score = 100
        if len(summary) < 100:
            issues.append("Summary is too short")
            suggestions.append("Expand your summary to 100-300 words")
            score -= 20
        if len(summary) > 500:
            issues.append("Summary is too long")
            suggestions.append("Condense your summary to 100-300 words for better ATS parsing")
            score -= 15
        if not re.search(r"\d", summary):
            suggestions.append(
                'Add quantifiable achievements (e.g., "10+ years experience", "managed $1M budget")'
            )
            score -= 10

    score = max(0, score)
    return SectionFeedback(
        section="Professional Summary", score=score, status=_status(score),
        issues=issues, suggestions=suggestions,
    )


def _experience_feedback(experience: list[ExperienceItem], quality: int) -> SectionFeedback:
    if not experience:
        return SectionFeedback(
            section="Work Experience", score=20, status="error",
            issues=["Work experience section is missing"],
            suggestions=[
                "Add your work experience with clear job titles, companies, dates, and achievements"
            ],
        )

    issues: list[str] = []
    suggestions: list[str] = []
    total_bullets = 0
    has_quantified = False
    for item in experience:
        if not item.title:
            issues.append("Job title missing for an experience entry")
        if not item.company:
            issues.append("Company name missing for an experience entry")
        if not item.start_date and not item.end_date:
            issues.append("Dates missing for an experience entry")
        total_bullets += len(item.description)
        if any(_FEEDBACK_QUANTIFIED_RE.search(bullet) for bullet in item.description):
            has_quantified = True

    if total_bullets < len(experience) * 3:
        suggestions.append("Add more bullet points (3-5 per position) describing your achievements")
    if not has_quantified:
        suggestions.append("Quantify your achievements with numbers, percentages, or dollar amounts")
    suggestions.append("Start each bullet point with a strong action verb")

    return SectionFeedback(
        section="Work Experience", score=quality, status=_status(quality),
        issues=issues, suggestions=suggestions,
    )


def _graduation_year(item: EducationItem) -> int | None:
    if not item.graduation_date:
        return None
    match = _YEAR_RE.search(item.graduation_date)
    return int(match.group()) if match else None


def _education_feedback(education: list[EducationItem], reference_year: int) -> SectionFeedback:
    if not education:
        return SectionFeedback(
            section="Education", score=30, status="error",
            issues=["Education section is missing"],
            suggestions=[
                "Add your educational background including degree, institution, and graduation date"
            ],
        )

    issues: list[str] = []
    suggestions: list[str] = []
    score = 100
    for item in education:
        if not item.degree:
            issues.append("Degree name is missing")
            score -= 15
        if not item.institution:
            issues.append("Institution name is missing")
            score -= 15
        if not item.graduation_date:
            suggestions.append("Add graduation date or expected graduation date")
            score -= 5

    grad_year = _graduation_year(education[0])
    if not education[0].gpa and grad_year and reference_year - grad_year < 3:
        suggestions.append("Consider adding your GPA if it's 3.5 or higher (for recent graduates)")

    score = max(0, score)
    return SectionFeedback(
        section="Education", score=score, status=_status(score),
        issues=issues, suggestions=suggestions,
    )


def _skills_feedback(skills: list[str], skills_score: int) -> SectionFeedback:
    if not skills:
        return SectionFeedback(
            section="Skills", score=20, status="error",
            issues=["Skills section is missing"],
            suggestions=["Add a skills section with relevant technical and soft skills"],
        )

    issues: list[str] = []
    suggestions: list[str] = []
    score = skills_score
    if len(skills) < 5:
        issues.append("Skills section is too short")
        suggestions.append("Add more relevant skills (aim for 10-15 key skills)")
        score -= 10
    if len(skills) > 30:
        issues.append("Too many skills listed")
        suggestions.append("Focus on your top 15-20 most relevant skills")
        score -= 5
    suggestions.append("Organize skills by category (e.g., Programming Languages, Tools, Soft Skills)")

    score = _clamp(score)
    return SectionFeedback(
        section="Skills", score=score, status=_status(score),
        issues=issues, suggestions=suggestions,
    )


def generate_feedback(
    sections: ParsedSections, scores: ScoreBreakdown, reference_year: int | None = None
) -> list[SectionFeedback]:
    """Per-section feedback. reference_year defaults to the current year and
    decides whether a graduate counts as recent.
    """
    if reference_year is None:
        reference_year = datetime.now().year
    return [
        _contact_feedback(_contact(sections)),
        _summary_feedback(sections.summary),
        _experience_feedback(sections.experience, scores.experience_quality),
        _education_feedback(sections.education, reference_year),
        _skills_feedback(sections.skills, scores.skills_match),
    ]


# ---------------------------------------------------------------------------
# Improvements and format issues
# ---------------------------------------------------------------------------


def generate_improvements(sections: ParsedSections, scores: ScoreBreakdown) -> list[Improvement]:
    """Ordered checklist; each condition adds at most one improvement."""
    improvements: list[Improvement] = []

    if not _contact(sections).email:
        improvements.append(Improvement(
            type="critical", section="Contact",
            issue="Missing email address",
            suggestion="Add your professional email address at the top of your resume",
            example="john.doe@email.com",
        ))
    if not sections.experience:
        improvements.append(Improvement(
            type="critical", section="Experience",
            issue="No work experience listed",
            suggestion="Add your professional experience with job titles, companies, and achievements",
        ))
    if scores.keyword_relevance < 50:
        improvements.append(Improvement(
            type="major", section="Keywords",
            issue="Low keyword relevance score",
            suggestion="Include more industry-specific keywords and action verbs throughout your resume",
            example='Use terms like "managed", "developed", "implemented", "increased", "reduced"',
        ))
    if scores.experience_quality < 60:
        improvements.append(Improvement(
            type="major", section="Experience",
            issue="Weak experience descriptions",
            suggestion="Quantify your achievements with specific numbers and metrics",
            example='Changed "Improved sales" to "Increased sales by 35% within 6 months"',
        ))
    if not sections.summary or len(sections.summary) < 100:
        improvements.append(Improvement(
            type="minor", section="Summary",
            issue="Missing or weak professional summary",
            suggestion="Add a compelling 2-4 sentence summary of your qualifications",
        ))
    if not sections.projects:
        improvements.append(Improvement(
            type="minor", section="Projects",
            issue="No projects section",
            suggestion="Consider adding relevant projects to showcase your skills",
        ))
    if scores.formatting < 70:
        improvements.append(Improvement(
            type="minor", section="Formatting",
            issue="Formatting issues detected",
            suggestion="Use consistent bullet points, avoid tables/graphics, use standard fonts",
        ))
    return improvements


def check_formatting(text: str) -> list[FormatIssue]:
    issues: list[FormatIssue] = []

    if len(_NON_ASCII_RE.findall(text)) > 10:
        issues.append(FormatIssue(
            type="special_characters",
            description="Resume contains special characters that may not parse correctly in ATS systems",
            severity="medium",
        ))
    if _TABLE_RE.search(text):
        issues.append(FormatIssue(
            type="tables",
            description="Tables detected. ATS systems may not parse tabular data correctly",
            severity="high",
        ))

    lines = text.split("\n")
    if len(lines) > 3:
        first, last = lines[0].lower(), lines[-1].lower()
        if _HEADER_FOOTER_RE.search(first) or _HEADER_FOOTER_RE.search(last):
            issues.append(FormatIssue(
                type="headers_footers",
                description="Headers/footers detected. These may interfere with ATS parsing",
                severity="low",
            ))

    words = word_count(text)
    if words < 200:
        issues.append(FormatIssue(
            type="too_short",
            description="Resume appears too short. Aim for 400-800 words for a strong resume",
            severity="high",
        ))
    elif words > 1500:
        issues.append(FormatIssue(
            type="too_long",
            description="Resume may be too long. Consider condensing to 1-2 pages",
            severity="medium",
        ))

    caps_lines = [line for line in lines if len(line) > 20 and line.isupper()]
    if len(caps_lines) > 5:
        issues.append(FormatIssue(
            type="excessive_caps",
            description="Excessive use of all caps. Use title case for better readability",
            severity="low",
        ))
    return issues


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def calculate_score(
    text: str, sections: ParsedSections, reference_year: int | None = None
) -> AnalysisResult:
    """Score a resume. Total: any text, including "", yields a full result.

    Deterministic for a fixed reference_year; the wall clock is only read
    when it is omitted.
    """
    scores = calculate_score_breakdown(text, sections)
    result = AnalysisResult(
        overall_score=calculate_overall_score(scores),
        scores=scores,
        feedback=generate_feedback(sections, scores, reference_year),
        keywords=analyze_keywords(text, sections),
        improvements=generate_improvements(sections, scores),
        format_issues=check_formatting(text),
    )
    logger.debug("ATS sub-scores: %s", scores.model_dump())
    return result
