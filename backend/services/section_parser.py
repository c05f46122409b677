"""Resume section segmentation and structured field extraction.

Line-oriented heuristics: a section starts at a header line ("EXPERIENCE",
"Technical Skills:") and runs until the next known header. Each section
body is then split into entries with pattern rules. Every function here is
total: missing or malformed input yields empty results, never an error.
"""

import logging
import re

from models.schemas import (
    ContactInfo,
    EducationItem,
    ExperienceItem,
    ParsedSections,
    ProjectItem,
)
from services.document_parser import BULLET_MARKERS, normalize_text
from services.skill_extractor import extract_skills

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Section headers
# ---------------------------------------------------------------------------

SUMMARY_HEADERS = ("PROFESSIONAL SUMMARY", "SUMMARY", "PROFILE", "OBJECTIVE", "ABOUT ME")
EXPERIENCE_HEADERS = (
    "EXPERIENCE",
    "WORK EXPERIENCE",
    "PROFESSIONAL EXPERIENCE",
    "EMPLOYMENT HISTORY",
    "WORK HISTORY",
)
EDUCATION_HEADERS = ("EDUCATION", "ACADEMIC BACKGROUND", "QUALIFICATIONS")
SKILLS_HEADERS = (
    "SKILLS",
    "TECHNICAL SKILLS",
    "CORE COMPETENCIES",
    "KEY SKILLS",
    "TECHNOLOGIES",
    "EXPERTISE",
)
PROJECT_HEADERS = ("PROJECTS", "PERSONAL PROJECTS", "KEY PROJECTS", "SELECTED PROJECTS")
CERTIFICATION_HEADERS = ("CERTIFICATIONS", "CERTIFICATES", "LICENSES", "CREDENTIALS")

# Every header that ends a section. Anything a caller can search for is
# listed too, so one section never swallows the next.
SECTION_HEADERS: tuple[str, ...] = tuple(dict.fromkeys((
    "SUMMARY", "PROFILE", "OBJECTIVE", "ABOUT",
    "EXPERIENCE", "WORK EXPERIENCE", "EMPLOYMENT",
    "EDUCATION", "ACADEMIC",
    "SKILLS", "TECHNICAL SKILLS", "COMPETENCIES",
    "PROJECTS", "PERSONAL PROJECTS",
    "CERTIFICATIONS", "CERTIFICATES",
    "AWARDS", "ACHIEVEMENTS",
    "LANGUAGES", "INTERESTS", "HOBBIES",
    "REFERENCES", "PUBLICATIONS", "VOLUNTEER",
    *SUMMARY_HEADERS,
    *EXPERIENCE_HEADERS,
    *EDUCATION_HEADERS,
    *SKILLS_HEADERS,
    *PROJECT_HEADERS,
    *CERTIFICATION_HEADERS,
)))


def _keyword_alternation(keywords: tuple[str, ...]) -> str:
    return "|".join(
        r"\s+".join(re.escape(word) for word in keyword.split()) for keyword in keywords
    )


def _header_pattern(keywords: tuple[str, ...]) -> re.Pattern:
    return re.compile(
        rf"^\s*(?:{_keyword_alternation(keywords)})[\s:]*$", re.IGNORECASE
    )


_ANY_HEADER_RE = _header_pattern(SECTION_HEADERS)
_KEYWORD_PATTERNS: dict[str, re.Pattern] = {
    keyword: _header_pattern((keyword,)) for keyword in SECTION_HEADERS
}

# Summary headers may carry the text inline: "Summary: Backend engineer..."
_SUMMARY_HEADER_RE = re.compile(
    rf"^\s*(?:{_keyword_alternation(SUMMARY_HEADERS)})\s*(?::\s*(.*))?$",
    re.IGNORECASE,
)
SUMMARY_MIN_CHARS = 20
SUMMARY_MAX_CHARS = 2000

# ---------------------------------------------------------------------------
# Contact info patterns
# ---------------------------------------------------------------------------

CONTACT_LINES = 10
CONTACT_CHARS = 2000

EMAIL_RE = re.compile(r"(?<![\w.+-])[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
PHONE_RE = re.compile(r"(?<!\w)\+?(?:\(?\d{1,4}\)?[-\s.]?){2,4}\d{1,9}(?!\w)")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/[\w-]+", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/[\w-]+", re.IGNORECASE)
WEBSITE_RE = re.compile(
    r"(?<![\w@./-])(?:https?://\S+|www\.\S+|[\w-]+(?:\.[\w-]+)*\."
    r"(?:com|org|net|io|dev|me|co|ai|app|tech|info|xyz|site|page|blog)(?!\w)(?:/[\w./-]*)?)",
    re.IGNORECASE,
)
NAME_RE = re.compile(r"^([A-Z][a-z]+(?:\s+(?:[A-Z]\.\s+)?[A-Z][a-z]+)+)")

_US_STATES = frozenset(
    "AL AK AZ AR CA CO CT DE DC FL GA HI ID IL IN IA KS KY LA ME MD MA MI MN MS "
    "MO MT NE NV NH NJ NM NY NC ND OH OK OR PA RI SC SD TN TX UT VT VA WA WV WI WY".split()
)
LOCATION_RE = re.compile(r"\b([A-Z][a-zA-Z]+(?: [A-Z][a-zA-Z]+)*),\s?([A-Z]{2})\b")
REMOTE_RE = re.compile(r"\bRemote\b")

MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|"
    r"Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_DATE_TOKEN = rf"(?:\b{_MONTHS}\.?\s*\d{{4}}|\b\d{{1,2}}/\d{{4}}|\b\d{{4}})"

# "Jan 2019 - Present", "03/2018 to 11/2022", "2020 – 2023"
DATE_RANGE_RE = re.compile(
    rf"({_DATE_TOKEN})\s*(?:[-–—]+|\bto\b)\s*({_DATE_TOKEN}|Present|Current|Now)\b",
    re.IGNORECASE,
)
_CURRENT_RE = re.compile(r"present|current|now", re.IGNORECASE)
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

# ---------------------------------------------------------------------------
# Entry-level patterns
# ---------------------------------------------------------------------------

# A capitalized line that mentions a year or an ongoing marker opens a job.
_ENTRY_START_RE = re.compile(r"^[A-Z][a-z]+.*?\b(?:\d{4}|Present|Current)\b")

# Heading separators in priority order: "Title | Company", "Title at Company",
# "Title - Company", "Title, Company".
_HEADING_SEPARATORS = [
    re.compile(r"\s*\|\s*"),
    re.compile(r"\s+(?:at|@)\s+"),
    re.compile(r"\s+[-–—]\s+|\s*[–—]\s*"),
    re.compile(r"\s*,\s*"),
]
_TITLE_FALLBACK_RE = re.compile(r"^([A-Z][^|@\d]*?)(?:\s*[-–|@]|\s*\d{4}|$)")
_COMPANY_SPLIT_RE = re.compile(r"\s*(?:\||•|\s[-–—]\s|,)\s*")
_NUMBERED_RE = re.compile(r"^\d{1,2}[.)]\s+")

MIN_ENTRY_CHARS = 20
MIN_BULLET_CHARS = 10
MAX_CARRIED_HEADING_LINES = 2

_DEGREE_RE = re.compile(
    r"\b(?:(?i:Bachelor|Master|Doctor(?:ate)?|Associate)|"
    r"Ph\.?D|MBA|B\.?Tech|M\.?Tech|B\.?Sc?\.?|M\.?Sc?\.?|B\.A\.|M\.A\.|B\.E\.|M\.E\.)"
    r"(?![A-Za-z])[^,\n|]*"
)
_INSTITUTION_RE = re.compile(r"university|college|institute|school", re.IGNORECASE)
GPA_RE = re.compile(r"(?:GPA|CGPA)[\s:]*(\d+\.?\d*)", re.IGNORECASE)

_PROJECT_META_RE = re.compile(r"^(?:Technologies?|Stack|Built with|https?://)", re.IGNORECASE)
_PROJECT_TECH_RE = re.compile(r"(?:Technologies?|Stack|Built with)[\s:]+([^\n]+)", re.IGNORECASE)
_PROJECT_NAME_TAIL_RE = re.compile(r"\s+[-–—]\s.*$|\s*[|:].*$")
_LINK_RE = re.compile(r"https?://\S+")

MIN_CERTIFICATION_CHARS = 5
MAX_CERTIFICATION_CHARS = 200


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_section_header(line: str) -> bool:
    return _ANY_HEADER_RE.match(line) is not None


def _is_bullet(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and (stripped[0] in BULLET_MARKERS or bool(_NUMBERED_RE.match(stripped)))


def _strip_bullet(line: str) -> str:
    stripped = line.strip()
    stripped = _NUMBERED_RE.sub("", stripped)
    return stripped.lstrip("".join(BULLET_MARKERS)).strip()


def _non_empty_lines(block: str) -> list[str]:
    return [line.strip() for line in block.split("\n") if line.strip()]


def extract_section(text: str, keywords: tuple[str, ...] | list[str]) -> str | None:
    """Return the body of the first section whose header matches a keyword.

    Keywords are tried in the caller's priority order; the body runs until
    the next known header or the end of the text. None when no keyword
    header with a non-empty body exists.
    """
    lines = text.split("\n")
    for keyword in keywords:
        pattern = _KEYWORD_PATTERNS.get(keyword) or _header_pattern((keyword,))
        for index, line in enumerate(lines):
            if not pattern.match(line):
                continue
            body: list[str] = []
            for following in lines[index + 1:]:
                if is_section_header(following):
                    break
                body.append(following)
            content = "\n".join(body).strip()
            if content:
                return content
    return None


# ---------------------------------------------------------------------------
# Contact
# ---------------------------------------------------------------------------


def _find_phone(block: str) -> str | None:
    for match in PHONE_RE.finditer(block):
        candidate = match.group().strip()
        if DATE_RANGE_RE.fullmatch(candidate):
            continue
        digits = sum(ch.isdigit() for ch in candidate)
        if MIN_PHONE_DIGITS <= digits <= MAX_PHONE_DIGITS:
            return candidate
    return None


def _find_location(block: str) -> str | None:
    for match in LOCATION_RE.finditer(block):
        if match.group(2) in _US_STATES:
            return f"{match.group(1)}, {match.group(2)}"
    if REMOTE_RE.search(block):
        return "Remote"
    return None


def _find_website(block: str) -> str | None:
    without_emails = EMAIL_RE.sub(" ", block)
    for match in WEBSITE_RE.finditer(without_emails):
        url = match.group().rstrip(".,;)")
        lowered = url.lower()
        if "linkedin" in lowered or "github" in lowered or "@" in url:
            continue
        return url
    return None


def extract_contact_info(text: str) -> ContactInfo | None:
    """Extract contact details from the first lines of the resume.

    Each field is found independently; None when nothing was found at all.
    """
    lines = text.split("\n")[:CONTACT_LINES]
    block = " ".join(lines)[:CONTACT_CHARS]

    email_match = EMAIL_RE.search(block)
    linkedin_match = LINKEDIN_RE.search(block)
    github_match = GITHUB_RE.search(block)
    first_line = next((line.strip() for line in lines if line.strip()), "")
    name_match = NAME_RE.match(first_line)

    contact = ContactInfo(
        name=name_match.group(1) if name_match else None,
        email=email_match.group().lower() if email_match else None,
        phone=_find_phone(block),
        linkedin=f"https://{linkedin_match.group()}" if linkedin_match else None,
        github=f"https://{github_match.group()}" if github_match else None,
        website=_find_website(block),
        location=_find_location(block),
    )
    if not any(contact.model_dump().values()):
        return None
    return contact


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def extract_summary(text: str) -> str | None:
    """Text under the first summary-style header, if 20-2000 chars long.

    Capture stops at the next known header or at two consecutive blank lines.
    """
    lines = text.split("\n")
    for index, line in enumerate(lines):
        match = _SUMMARY_HEADER_RE.match(line)
        if not match:
            continue

        collected = [match.group(1) or ""]
        blank_run = 0
        for following in lines[index + 1:]:
            if is_section_header(following):
                break
            if not following.strip():
                blank_run += 1
                if blank_run >= 2:
                    break
            else:
                blank_run = 0
            collected.append(following)

        summary = "\n".join(collected).strip()
        if SUMMARY_MIN_CHARS <= len(summary) <= SUMMARY_MAX_CHARS:
            return summary
        return None
    return None


# ---------------------------------------------------------------------------
# Experience
# ---------------------------------------------------------------------------


def _starts_with_date(line: str) -> bool:
    match = DATE_RANGE_RE.search(line)
    return match is not None and match.start() == 0


def _is_heading_candidate(line: str) -> bool:
    """Short non-bullet line without dates, e.g. a job title printed above its dates."""
    return (
        not _is_bullet(line)
        and DATE_RANGE_RE.search(line) is None
        and len(line) <= 80
        and not line.endswith(".")
    )


def _split_experience_blocks(section: str) -> list[list[str]]:
    blocks: list[list[str]] = []
    current: list[str] = []
    current_has_date = False
    after_blank = False

    for raw_line in section.split("\n"):
        line = raw_line.strip()
        if not line:
            after_blank = True
            continue

        starts_entry = not _is_bullet(line) and (
            _ENTRY_START_RE.match(line) is not None
            or (after_blank and current_has_date)
        )
        after_blank = False

        if starts_entry and current:
            if _starts_with_date(line) and not current_has_date:
                # Date printed under its title: same entry
                current.append(line)
                current_has_date = True
                continue

            carried: list[str] = []
            if _starts_with_date(line):
                # The title lines of this entry were appended to the previous one
                while (
                    len(current) > 1
                    and len(carried) < MAX_CARRIED_HEADING_LINES
                    and _is_heading_candidate(current[-1])
                ):
                    carried.insert(0, current.pop())
            blocks.append(current)
            current = carried

        current.append(line)
        if DATE_RANGE_RE.search(line):
            current_has_date = True
        elif len(current) == 1:
            current_has_date = False

    if current:
        blocks.append(current)
    return blocks


def _split_heading(heading: str) -> tuple[str, str]:
    """Split "Title | Company" style headings into (title, company)."""
    cleaned = DATE_RANGE_RE.sub("", heading)
    cleaned = YEAR_RE.sub("", cleaned).strip(" -–—|,@")
    for separator in _HEADING_SEPARATORS:
        parts = [part.strip(" -–—|,@") for part in separator.split(cleaned)]
        parts = [part for part in parts if part]
        if len(parts) >= 2:
            return parts[0], parts[1]

    match = _TITLE_FALLBACK_RE.match(cleaned)
    title = match.group(1).strip() if match else ""
    return title, ""


def _company_from_line(line: str) -> str:
    if _is_bullet(line):
        return ""
    cleaned = DATE_RANGE_RE.sub("", line).strip()
    company = _COMPANY_SPLIT_RE.split(cleaned, maxsplit=1)[0].strip(" -–—|,@")
    if not any(ch.isalpha() for ch in company):
        return ""
    return company


def _parse_experience_entry(lines: list[str]) -> ExperienceItem | None:
    date_index = None
    date_match = None
    for index, line in enumerate(lines[:3]):
        if index > 0 and _is_bullet(line):
            break
        date_match = DATE_RANGE_RE.search(line)
        if date_match:
            date_index = index
            break

    title, company = _split_heading(lines[0])
    consumed = {0}
    if date_index is not None:
        consumed.add(date_index)

    if not company and len(lines) > 1:
        company = _company_from_line(lines[1])
        if company:
            consumed.add(1)

    location = None
    for line in lines[:3]:
        if _is_bullet(line):
            break
        location = _find_location(line)
        if location:
            break

    description = []
    for index, line in enumerate(lines[1:], start=1):
        if index in consumed or len(line) <= MIN_BULLET_CHARS or line == location:
            continue
        if _is_bullet(line) or line[0].isupper():
            description.append(_strip_bullet(line))

    if not title and not company:
        return None

    return ExperienceItem(
        title=title,
        company=company,
        location=location,
        start_date=date_match.group(1) if date_match else None,
        end_date=date_match.group(2) if date_match else None,
        current=bool(date_match and _CURRENT_RE.fullmatch(date_match.group(2))),
        description=description,
    )


def extract_experience(text: str) -> list[ExperienceItem]:
    section = extract_section(text, EXPERIENCE_HEADERS)
    if not section:
        return []

    items = []
    for block in _split_experience_blocks(section):
        if len("\n".join(block)) < MIN_ENTRY_CHARS:
            continue
        item = _parse_experience_entry(block)
        if item is not None:
            items.append(item)

    if not items:
        logger.debug("Experience section present but no entries could be parsed")
    return items


# ---------------------------------------------------------------------------
# Education
# ---------------------------------------------------------------------------


def _split_education_blocks(section: str) -> list[list[str]]:
    blocks: list[list[str]] = []
    current: list[str] = []
    has_degree = False
    has_institution = False

    for line in _non_empty_lines(section):
        line_degree = _DEGREE_RE.search(line) is not None
        line_institution = _INSTITUTION_RE.search(line) is not None
        if current and ((line_degree and has_degree) or (line_institution and has_institution)):
            blocks.append(current)
            current = []
            has_degree = has_institution = False
        current.append(line)
        has_degree = has_degree or line_degree
        has_institution = has_institution or line_institution

    if current:
        blocks.append(current)
    return blocks


def _parse_education_entry(lines: list[str]) -> EducationItem | None:
    block = "\n".join(lines)
    degree = ""
    institution = ""
    details = []

    for line in lines:
        degree_match = _DEGREE_RE.search(line) if not degree else None
        if degree_match:
            degree = DATE_RANGE_RE.sub("", degree_match.group()).strip(" -–—")
            degree = YEAR_RE.sub("", degree).strip(" -–—()")

        used = bool(degree_match)
        if not institution and _INSTITUTION_RE.search(line):
            for segment in re.split(r"\s*[,|]\s*|\s+[-–—]\s+", line):
                if _INSTITUTION_RE.search(segment) and not _DEGREE_RE.search(segment):
                    institution = YEAR_RE.sub("", DATE_RANGE_RE.sub("", segment)).strip(" -–—()")
                    used = True
                    break
        if not used and not GPA_RE.search(line) and not DATE_RANGE_RE.fullmatch(line):
            details.append(_strip_bullet(line))

    if not degree and not institution:
        return None

    date_match = DATE_RANGE_RE.search(block)
    if date_match:
        graduation_date = date_match.group(2)
    else:
        year_match = YEAR_RE.search(block)
        graduation_date = year_match.group() if year_match else None

    gpa_match = GPA_RE.search(block)
    return EducationItem(
        degree=degree,
        institution=institution,
        location=_find_location(block),
        graduation_date=graduation_date,
        gpa=gpa_match.group(1) if gpa_match else None,
        details=[d for d in details if d],
    )


def extract_education(text: str) -> list[EducationItem]:
    section = extract_section(text, EDUCATION_HEADERS)
    if not section:
        return []
    items = (_parse_education_entry(block) for block in _split_education_blocks(section))
    return [item for item in items if item is not None]


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------


def _split_project_blocks(section: str) -> list[list[str]]:
    """Group project lines. A new project starts at a capitalised heading line
    that follows a blank line, carries a name separator, or is only a few words."""
    blocks: list[list[str]] = []
    current: list[str] = []
    after_blank = False
    for raw in section.split("\n"):
        line = raw.strip()
        if not line:
            after_blank = True
            continue
        is_heading = (
            line[0].isupper()
            and not _is_bullet(line)
            and not _PROJECT_META_RE.match(line)
        )
        starts_project = is_heading and (
            after_blank
            or _PROJECT_NAME_TAIL_RE.search(line) is not None
            or len(line.split()) <= 4
        )
        if starts_project and current:
            blocks.append(current)
            current = []
        current.append(line)
        after_blank = False
    if current:
        blocks.append(current)
    return blocks


def extract_projects(text: str) -> list[ProjectItem]:
    section = extract_section(text, PROJECT_HEADERS)
    if not section:
        return []

    projects = []
    for lines in _split_project_blocks(section):
        block = "\n".join(lines)
        if len(block) < MIN_ENTRY_CHARS:
            continue

        name = _PROJECT_NAME_TAIL_RE.sub("", lines[0]).strip()
        if not name:
            continue

        tech_match = _PROJECT_TECH_RE.search(block)
        technologies = []
        if tech_match:
            technologies = [t.strip() for t in re.split(r"[,;|]", tech_match.group(1)) if t.strip()]
        link_match = _LINK_RE.search(block)

        projects.append(ProjectItem(
            name=name,
            description=" ".join(
                _strip_bullet(line) for line in lines[1:] if not _PROJECT_META_RE.match(line)
            ).strip(),
            technologies=technologies,
            link=link_match.group() if link_match else None,
        ))
    return projects


# ---------------------------------------------------------------------------
# Certifications
# ---------------------------------------------------------------------------


def extract_certifications(text: str) -> list[str]:
    section = extract_section(text, CERTIFICATION_HEADERS)
    if not section:
        return []
    certifications = []
    for line in section.split("\n"):
        cleaned = re.sub(r"^[•\-*]\s*", "", line.strip()).strip()
        if MIN_CERTIFICATION_CHARS <= len(cleaned) <= MAX_CERTIFICATION_CHARS:
            certifications.append(cleaned)
    return certifications


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def extract_sections(text: str) -> ParsedSections:
    """Parse resume text into structured sections. Never raises."""
    text = normalize_text(text)
    sections = ParsedSections(
        contact=extract_contact_info(text),
        summary=extract_summary(text),
        experience=extract_experience(text),
        education=extract_education(text),
        skills=extract_skills(text, extract_section(text, SKILLS_HEADERS)),
        projects=extract_projects(text),
        certifications=extract_certifications(text),
    )
    logger.debug(
        "Parsed sections: %d experience, %d education, %d skills, %d projects",
        len(sections.experience),
        len(sections.education),
        len(sections.skills),
        len(sections.projects),
    )
    return sections
