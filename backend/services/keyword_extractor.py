"""Keyword extraction and matching for resume vs job description comparison.

Job keywords come from a fixed set of technical pattern groups plus soft
skills, role terms, experience requirements and quoted phrases. Resume
keywords come from the parsed sections plus a common technology list.
Matching is a bidirectional substring test so "react" matches "react.js".
"""

import logging
import re

from models.schemas import KeywordMatch, ParsedSections
from services.skill_extractor import contains_term

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Job description vocabulary
# ---------------------------------------------------------------------------

_TECHNICAL_GROUPS = [
    # Languages
    r"javascript|typescript|python|java|c\+\+|c#|ruby|go|rust|php|swift|kotlin",
    # Frameworks
    r"react|angular|vue|node\.?js|express|django|flask|spring|rails|\.net",
    # Cloud & DevOps
    r"aws|azure|gcp|docker|kubernetes|jenkins|ci/cd|git|github|gitlab",
    # Data stores & APIs
    r"mongodb|postgresql|mysql|redis|elasticsearch|graphql|rest\s*apis?",
    # Markup & styling
    r"html|css|sass|tailwind|bootstrap|material\s*ui",
    # ML
    r"machine\s*learning|deep\s*learning|tensorflow|pytorch|data\s*science",
    # Process
    r"agile|scrum|kanban|jira|confluence",
]

TECHNICAL_PATTERNS: list[re.Pattern] = [
    re.compile(rf"(?<!\w)(?:{group})(?!\w)", re.IGNORECASE)
    for group in _TECHNICAL_GROUPS
]

# "5+ years of experience", "3 years experience"
EXPERIENCE_YEARS_RE = re.compile(
    r"(\d+)\+?\s*years?\s*(?:of\s*)?experience", re.IGNORECASE
)

SOFT_SKILLS: tuple[str, ...] = (
    "leadership", "communication", "teamwork", "problem-solving", "analytical",
    "management", "collaboration", "creative", "detail-oriented", "self-motivated",
)

ROLE_TERMS: tuple[str, ...] = (
    "full-stack", "frontend", "backend", "devops", "data engineer", "ml engineer",
    "product manager", "project manager", "business analyst", "qa engineer",
    "senior", "lead", "principal", "architect", "manager", "director",
)

_QUOTED_RE = re.compile(r"\"([^\"\n]+)\"|“([^”\n]+)”")

# ---------------------------------------------------------------------------
# Resume vocabulary
# ---------------------------------------------------------------------------

RESUME_COMMON_TERMS: tuple[str, ...] = (
    "javascript", "typescript", "python", "java", "react", "angular", "vue",
    "node", "express", "mongodb", "postgresql", "aws", "azure", "docker",
    "kubernetes", "agile", "scrum", "ci/cd", "git",
)

# Capitalized words in bullets, keeping dotted names like "Node.js"
_CAPITALIZED_TOKEN_RE = re.compile(r"\b[A-Z][a-z]*(?:\.[a-z]+)*\b")

_WHITESPACE_RE = re.compile(r"\s+")


def is_matched(a: str, b: str) -> bool:
    """Bidirectional, case-insensitive substring test. Symmetric in a and b."""
    a, b = a.lower(), b.lower()
    return a in b or b in a


def _normalize_keyword(keyword: str) -> str:
    return _WHITESPACE_RE.sub(" ", keyword.strip().lower())


def extract_job_keywords(job_description: str) -> list[str]:
    """Extract lowercased, deduplicated keywords from a job description.

    Order: technical terms, experience requirements, soft skills, role
    terms, quoted phrases.
    """
    keywords: list[str] = []
    lower_text = job_description.lower()

    for pattern in TECHNICAL_PATTERNS:
        keywords.extend(_normalize_keyword(m.group()) for m in pattern.finditer(job_description))

    keywords.extend(
        _normalize_keyword(m.group()) for m in EXPERIENCE_YEARS_RE.finditer(job_description)
    )

    keywords.extend(skill for skill in SOFT_SKILLS if skill in lower_text)
    keywords.extend(term for term in ROLE_TERMS if term in lower_text)

    for match in _QUOTED_RE.finditer(job_description):
        quoted = _normalize_keyword(match.group(1) or match.group(2))
        if 3 <= len(quoted) < 50:
            keywords.append(quoted)

    unique = [kw for kw in dict.fromkeys(keywords) if kw]
    logger.debug("Extracted %d job keywords", len(unique))
    return unique


def extract_resume_keywords(text: str, sections: ParsedSections) -> list[str]:
    """Extract lowercased, deduplicated keywords from a resume."""
    keywords: list[str] = [skill.lower() for skill in sections.skills]

    for item in sections.experience:
        if item.title:
            keywords.append(item.title.lower())
        for bullet in item.description:
            keywords.extend(
                token.lower()
                for token in _CAPITALIZED_TOKEN_RE.findall(bullet)
                if len(token) >= 3
            )

    keywords.extend(term for term in RESUME_COMMON_TERMS if contains_term(text, term))

    return [kw for kw in dict.fromkeys(k.strip() for k in keywords) if kw]


def match_keywords(job_keywords: list[str], resume_keywords: list[str]) -> KeywordMatch:
    """Split job keywords into matched and missing against the resume keywords.

    A job keyword is matched when any resume keyword is a substring of it
    or contains it. The percentage is 0 when there are no job keywords.
    """
    matched: list[str] = []
    missing: list[str] = []
    for keyword in job_keywords:
        if any(is_matched(keyword, rk) for rk in resume_keywords):
            matched.append(keyword)
        else:
            missing.append(keyword)

    percentage = round(len(matched) / len(job_keywords) * 100) if job_keywords else 0
    return KeywordMatch(matched=matched, missing=missing, percentage=percentage)
