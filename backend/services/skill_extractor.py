"""Skill extraction for resumes and job descriptions.

Combines:
1. Token-split parsing of a resume's skills section ("Python, SQL | Docker")
2. Vocabulary matching of well-known technology names across the whole text
3. Requirement-section parsing of job descriptions (bullets + capitalized phrases)
"""

import logging
import re

logger = logging.getLogger(__name__)

# Known technologies and methods looked up anywhere in a resume.
COMMON_SKILLS: tuple[str, ...] = (
    # Languages
    "JavaScript", "TypeScript", "Python", "Java", "C++", "C#", "Ruby", "Go",
    "Rust", "PHP", "Swift",
    # Frameworks
    "React", "Angular", "Vue", "Node.js", "Express", "Django", "Flask",
    "Spring", "Rails",
    # Cloud & DevOps
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "CI/CD", "Git", "GitHub",
    "GitLab",
    # Data stores & APIs
    "MongoDB", "PostgreSQL", "MySQL", "Redis", "Elasticsearch", "GraphQL",
    "REST API",
    # Frontend
    "HTML", "CSS", "SASS", "Tailwind", "Bootstrap", "Material UI",
    # Process & tools
    "Agile", "Scrum", "Jira", "Confluence", "Figma", "Photoshop",
    # Data & ML
    "Machine Learning", "Deep Learning", "TensorFlow", "PyTorch",
    "Data Analysis",
    # Platforms
    "SQL", "NoSQL", "Linux", "Windows", "macOS",
)

# Skills a job description is checked for even without a requirements section.
JOB_COMMON_SKILLS: tuple[str, ...] = (
    "JavaScript", "TypeScript", "Python", "Java", "C++", "Go", "Rust",
    "React", "Angular", "Vue", "Node.js", "Express", "Django", "Spring",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Git",
    "SQL", "MongoDB", "PostgreSQL", "Redis",
    "Agile", "Scrum", "CI/CD",
)

MAX_REQUIRED_SKILLS = 30

# Skills-section tokens: "Python, SQL; Docker | Git • Linux - Bash"
_SKILL_SPLIT_RE = re.compile(r"[,;|•\-\n]")

# Requirement sub-sections of a job description, tried in order.
_REQUIREMENT_SECTION_PATTERNS = [
    re.compile(
        r"requirements?:?\s*\n(.*?)(?=\n\s*(?:responsibilities|qualifications|benefits|about)|\Z)",
        re.IGNORECASE | re.DOTALL,
    ),
    re.compile(
        r"qualifications?:?\s*\n(.*?)(?=\n\s*(?:responsibilities|requirements|benefits|about)|\Z)",
        re.IGNORECASE | re.DOTALL,
    ),
    re.compile(
        r"must\s*have:?\s*\n(.*?)(?=\n\s*(?:nice|good|responsibilities)|\Z)",
        re.IGNORECASE | re.DOTALL,
    ),
]

_BULLET_ITEM_RE = re.compile(r"^\s*[•\-*]\s*(.+)$", re.MULTILINE)

# One or two capitalized words: "Kubernetes", "Node.js", "Google Cloud", "C++"
_CAPITALIZED_PHRASE_RE = re.compile(
    r"(?<![\w+#.])([A-Z][a-zA-Z+#.]*[a-zA-Z+#](?:\s+[A-Z][a-zA-Z+#.]*[a-zA-Z+#])?)"
)

# Sentence starters that precede the actual skill in requirement bullets.
REQUIREMENT_FILLER: frozenset[str] = frozenset({
    "a", "ability", "advanced", "an", "and", "any", "at", "background",
    "bachelor", "basic", "comfortable", "deep", "degree", "demonstrated",
    "excellent", "experience", "experienced", "expert", "exposure",
    "familiar", "familiarity", "good", "great", "hands", "in", "knowledge",
    "master", "minimum", "must", "nice", "of", "or", "our", "plus",
    "preferred", "proficiency", "proficient", "proven", "required", "solid",
    "some", "strong", "the", "understanding", "we", "with", "working", "you",
})


def contains_term(text: str, term: str) -> bool:
    """Case-insensitive whole-token search for a technology name.

    Uses token boundaries instead of plain substring search so that
    "Go" does not match inside "good" and "Java" not inside "JavaScript".
    A trailing plural "s" is tolerated ("REST APIs").
    """
    escaped = re.escape(term.lower())
    return re.search(
        rf"(?<![a-z0-9.#]){escaped}s?(?![a-z0-9])", text.lower()
    ) is not None


def _dedupe(items: list[str]) -> list[str]:
    """Drop case-insensitive duplicates, keeping the first spelling seen."""
    seen: set[str] = set()
    unique: list[str] = []
    for item in items:
        key = item.lower()
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


def split_skill_tokens(section_text: str) -> list[str]:
    """Split a skills section into individual skill tokens.

    "Languages: Python, Go" yields "Python" and "Go"; the category label
    before the colon is dropped. Tokens must be 2-40 chars and start with
    a letter.
    """
    tokens: list[str] = []
    for line in section_text.split("\n"):
        for item in _SKILL_SPLIT_RE.split(line):
            cleaned = item.strip()
            if ":" in cleaned:
                cleaned = cleaned.split(":", 1)[1].strip()
            if 2 <= len(cleaned) <= 40 and cleaned[0].isascii() and cleaned[0].isalpha():
                tokens.append(cleaned)
    return tokens


def extract_vocabulary_skills(text: str) -> list[str]:
    """COMMON_SKILLS entries mentioned anywhere in the text."""
    return [skill for skill in COMMON_SKILLS if contains_term(text, skill)]


def extract_skills(text: str, skills_section: str | None = None) -> list[str]:
    """Union of skills-section tokens and vocabulary hits, deduplicated."""
    skills: list[str] = []
    if skills_section:
        skills.extend(split_skill_tokens(skills_section))
    skills.extend(extract_vocabulary_skills(text))
    return _dedupe(skills)


def _requirements_text(job_description: str) -> str:
    for pattern in _REQUIREMENT_SECTION_PATTERNS:
        match = pattern.search(job_description)
        if match:
            return match.group(1)
    return job_description


def _strip_filler(phrase: str) -> str:
    words = [w for w in phrase.split() if w.lower() not in REQUIREMENT_FILLER]
    return " ".join(words)


def extract_required_skills(job_description: str) -> list[str]:
    """Extract the skills a job description asks for.

    Bullet items of the requirements sub-section (or the whole description
    when there is none) contribute their capitalized phrases; the common
    job-skill vocabulary is then checked across the whole description.
    Returns at most MAX_REQUIRED_SKILLS entries.
    """
    candidates: list[str] = []
    for item in _BULLET_ITEM_RE.findall(_requirements_text(job_description)):
        for phrase in _CAPITALIZED_PHRASE_RE.findall(item):
            phrase = _strip_filler(phrase)
            if 2 <= len(phrase) <= 30:
                candidates.append(phrase)

    for skill in JOB_COMMON_SKILLS:
        if contains_term(job_description, skill):
            candidates.append(skill)

    skills = _dedupe(candidates)[:MAX_REQUIRED_SKILLS]
    logger.debug("Extracted %d required skills from job description", len(skills))
    return skills
