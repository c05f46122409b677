"""ATS flaw detection, approval checklist and readiness scoring.

Builds on an AnalysisResult from the ATS scorer (never recomputes it):
flags concrete flaws in three tiers, evaluates a fixed checklist of 14
approval tips and combines both into a readiness score and tier.
"""

import logging
import re

from models.schemas import (
    AnalysisResult,
    ATSApprovalTip,
    ATSFlaw,
    ContactInfo,
    EnhancedAnalysis,
    ParsedSections,
)
from services.ats_scorer import word_count

logger = logging.getLogger(__name__)

FLAW_PENALTIES = {"critical": 15, "major": 10, "minor": 5}
FLAW_WEIGHT = 0.7
TIP_WEIGHT = 0.3
READY_THRESHOLD = 80
NEEDS_WORK_THRESHOLD = 50
SIGNIFICANT_WORK_THRESHOLD = 40

STRONG_VERBS: tuple[str, ...] = (
    "led", "developed", "implemented", "achieved", "increased",
    "reduced", "designed", "built", "managed", "created",
)
MIN_STRONG_VERBS = 3
MIN_CONTENT_WORDS = 100

_QUANTIFIED_RE = re.compile(
    r"\d+%|\$\d+|\d+\s*(?:users?|customers?|clients?|projects?|team members?)",
    re.IGNORECASE,
)


def readiness_tier(score: int) -> str:
    if score >= READY_THRESHOLD:
        return "ready"
    if score >= NEEDS_WORK_THRESHOLD:
        return "needs_work"
    return "not_ready"


def _content_word_count(text: str) -> int:
    """Words longer than one character; stray OCR glyphs don't count."""
    return sum(1 for word in text.split() if len(word) > 1)


# ---------------------------------------------------------------------------
# Flaws
# ---------------------------------------------------------------------------


def _critical_flaws(contact: ContactInfo, sections: ParsedSections) -> list[ATSFlaw]:
    flaws = []
    if not contact.email:
        flaws.append(ATSFlaw(
            category="critical",
            title="Missing Email Address",
            description="Your resume does not contain a visible email address.",
            impact="Recruiters cannot contact you, and ATS systems may reject your application.",
            how_to_fix="Add your professional email address prominently at the top of your resume.",
            examples=["john.smith@email.com", "jane.doe@gmail.com"],
        ))
    if not contact.phone:
        flaws.append(ATSFlaw(
            category="critical",
            title="Missing Phone Number",
            description="No phone number detected in your resume.",
            impact="Limits recruiter's ability to reach you quickly.",
            how_to_fix="Include your phone number in the contact section.",
            examples=["+1 (555) 123-4567", "555-123-4567"],
        ))
    if not sections.experience:
        flaws.append(ATSFlaw(
            category="critical",
            title="No Work Experience Section",
            description="Your resume lacks a work experience section.",
            impact="ATS systems prioritize work experience. Without it, your resume may score very low.",
            how_to_fix=(
                'Add a clear "Work Experience" or "Professional Experience" section '
                "with your job history."
            ),
            examples=[
                "SOFTWARE ENGINEER | ABC Company | Jan 2020 - Present",
                "• Developed RESTful APIs serving 10,000+ daily users",
                "• Reduced deployment time by 40% through CI/CD implementation",
            ],
        ))
    if not sections.skills:
        flaws.append(ATSFlaw(
            category="critical",
            title="No Skills Section",
            description="Skills section is missing from your resume.",
            impact="ATS systems match job keywords against skills. Missing skills = missing matches.",
            how_to_fix='Create a dedicated "Skills" or "Technical Skills" section.',
            examples=["Programming: JavaScript, Python, Java", "Tools: Docker, AWS, Git"],
        ))
    return flaws


def _major_flaws(text: str, sections: ParsedSections, analysis: AnalysisResult) -> list[ATSFlaw]:
    flaws = []
    if _content_word_count(text) < MIN_CONTENT_WORDS:
        flaws.append(ATSFlaw(
            category="major",
            title="Insufficient Text Content Detected",
            description=(
                "Your resume has very little extractable text. This may indicate "
                "an image-heavy or graphical resume."
            ),
            impact=(
                "ATS systems cannot read images or graphics. Your resume may appear "
                "blank to automated systems."
            ),
            how_to_fix="Use a text-based resume format. Avoid graphics, images, logos, and complex layouts.",
            examples=[
                "Use simple, clean layouts",
                "Stick to standard fonts like Arial, Calibri, or Times New Roman",
            ],
        ))

    bullets = [bullet for item in sections.experience for bullet in item.description]
    if sections.experience and not any(_QUANTIFIED_RE.search(b) for b in bullets):
        flaws.append(ATSFlaw(
            category="major",
            title="No Quantified Achievements",
            description="Your experience bullets lack specific numbers and metrics.",
            impact="Quantified achievements are 40% more likely to catch recruiter attention.",
            how_to_fix="Add specific numbers, percentages, and metrics to your accomplishments.",
            examples=[
                'Before: "Improved sales performance"',
                'After: "Increased sales by 35% within 6 months, generating $500K in new revenue"',
                'Before: "Managed a team"',
                'After: "Led a team of 8 engineers to deliver 3 major product releases"',
            ],
        ))

    if not sections.summary or len(sections.summary) < 50:
        flaws.append(ATSFlaw(
            category="major",
            title="Missing or Weak Professional Summary",
            description="Your resume lacks a compelling professional summary.",
            impact="A strong summary helps both ATS and recruiters quickly understand your value.",
            how_to_fix=(
                "Add a 2-4 sentence summary highlighting your experience, key skills, "
                "and career goals."
            ),
            examples=[
                "Results-driven software engineer with 5+ years of experience in full-stack "
                "development. Proven track record of building scalable applications serving "
                "1M+ users. Expertise in React, Node.js, and AWS.",
            ],
        ))

    experience_text = " ".join(bullets).lower()
    strong_verbs = sum(1 for verb in STRONG_VERBS if verb in experience_text)
    if sections.experience and strong_verbs < MIN_STRONG_VERBS:
        flaws.append(ATSFlaw(
            category="major",
            title="Weak Action Verbs",
            description="Your resume lacks strong action verbs that demonstrate impact.",
            impact="Strong verbs improve ATS matching and make your achievements more compelling.",
            how_to_fix="Start each bullet point with a powerful action verb.",
            examples=[
                "Strong verbs: Led, Developed, Implemented, Achieved, Increased, Reduced, "
                "Designed, Optimized, Spearheaded",
                'Before: "Was responsible for managing..."',
                'After: "Managed a portfolio of 20+ client accounts..."',
            ],
        ))

    high_severity = [issue for issue in analysis.format_issues if issue.severity == "high"]
    if high_severity:
        flaws.append(ATSFlaw(
            category="major",
            title="Formatting Issues Detected",
            description="; ".join(issue.description for issue in high_severity),
            impact="Poor formatting can cause ATS parsing errors.",
            how_to_fix="Use a clean, single-column layout with standard fonts and no tables or graphics.",
        ))
    return flaws


def _minor_flaws(contact: ContactInfo, sections: ParsedSections) -> list[ATSFlaw]:
    flaws = []
    if not contact.linkedin:
        flaws.append(ATSFlaw(
            category="minor",
            title="No LinkedIn Profile",
            description="LinkedIn URL is not included in your resume.",
            impact="Many recruiters check LinkedIn for additional information.",
            how_to_fix="Add your LinkedIn profile URL to your contact information.",
            examples=["linkedin.com/in/yourname"],
        ))
    if not sections.education:
        flaws.append(ATSFlaw(
            category="minor",
            title="Missing Education Section",
            description="No education information found.",
            impact="Some ATS systems and jobs require education verification.",
            how_to_fix="Add your educational background with degree, institution, and graduation date.",
            examples=["Bachelor of Science in Computer Science | MIT | May 2020"],
        ))
    if len(sections.skills) < 5:
        flaws.append(ATSFlaw(
            category="minor",
            title="Insufficient Skills Listed",
            description=(
                f"Only {len(sections.skills)} skills detected. "
                "This is below the recommended 10-15."
            ),
            impact="Fewer skills mean fewer keyword matches with job descriptions.",
            how_to_fix="Add more relevant technical and soft skills.",
            examples=[
                "Aim for 10-15 key skills",
                "Include both hard skills (Python, SQL) and soft skills (Leadership, Communication)",
            ],
        ))
    return flaws


def detect_flaws(text: str, sections: ParsedSections, analysis: AnalysisResult) -> list[ATSFlaw]:
    """Flaws ordered critical, then major, then minor."""
    contact = sections.contact or ContactInfo()
    return (
        _critical_flaws(contact, sections)
        + _major_flaws(text, sections, analysis)
        + _minor_flaws(contact, sections)
    )


# ---------------------------------------------------------------------------
# Approval tips
# ---------------------------------------------------------------------------


def generate_approval_tips(
    text: str, sections: ParsedSections, analysis: AnalysisResult
) -> list[ATSApprovalTip]:
    """The fixed 14-item checklist; only `implemented` varies between resumes."""
    contact = sections.contact or ContactInfo()
    scores = analysis.scores
    words = word_count(text)
    has_tables = any(issue.type == "tables" for issue in analysis.format_issues)

    return [
        ATSApprovalTip(
            category="Contact Information",
            title="Include Complete Contact Details",
            description="Full name, email, phone number, LinkedIn, and location (city, state)",
            priority="high",
            implemented=bool(contact.email and contact.phone),
        ),
        ATSApprovalTip(
            category="Format",
            title="Use ATS-Friendly File Format",
            description="Save your resume as PDF or DOCX. Avoid images or scanned documents.",
            priority="high",
            implemented=_content_word_count(text) >= MIN_CONTENT_WORDS,
        ),
        ATSApprovalTip(
            category="Format",
            title="Use Standard Section Headers",
            description=(
                'Use clear headers like "Work Experience", "Education", "Skills" '
                "instead of creative alternatives."
            ),
            priority="high",
            implemented=scores.section_structure >= 70,
        ),
        ATSApprovalTip(
            category="Format",
            title="Avoid Tables, Graphics, and Images",
            description="ATS cannot read images. Use plain text and simple bullet points.",
            priority="high",
            implemented=not has_tables,
        ),
        ATSApprovalTip(
            category="Format",
            title="Use Standard Fonts",
            description="Stick to Arial, Calibri, Times New Roman, or similar readable fonts.",
            priority="medium",
            implemented=True,
        ),
        ATSApprovalTip(
            category="Keywords",
            title="Include Industry Keywords",
            description="Mirror keywords from the job description naturally throughout your resume.",
            priority="high",
            implemented=scores.keyword_relevance >= 60,
        ),
        ATSApprovalTip(
            category="Keywords",
            title="Use Both Acronyms and Full Terms",
            description=(
                'Include both "SEO" and "Search Engine Optimization" to match '
                "various ATS searches."
            ),
            priority="medium",
            implemented=len(analysis.keywords.found) >= 10,
        ),
        ATSApprovalTip(
            category="Experience",
            title="Quantify Your Achievements",
            description="Use numbers, percentages, and dollar amounts to demonstrate impact.",
            priority="high",
            implemented=scores.experience_quality >= 70,
        ),
        ATSApprovalTip(
            category="Experience",
            title="Use Strong Action Verbs",
            description="Start bullets with verbs like Developed, Led, Implemented, Achieved, Increased.",
            priority="high",
            implemented=scores.experience_quality >= 60,
        ),
        ATSApprovalTip(
            category="Experience",
            title="Include Relevant Job Titles",
            description="Use industry-standard job titles that match what recruiters search for.",
            priority="medium",
            implemented=bool(sections.experience and sections.experience[0].title),
        ),
        ATSApprovalTip(
            category="Skills",
            title="Create a Dedicated Skills Section",
            description="List 10-15 relevant skills in a separate, clearly labeled section.",
            priority="high",
            implemented=len(sections.skills) >= 5,
        ),
        ATSApprovalTip(
            category="Skills",
            title="Include Both Hard and Soft Skills",
            description="Technical skills + soft skills like Leadership, Communication, Problem-solving.",
            priority="medium",
            implemented=len(sections.skills) >= 8,
        ),
        ATSApprovalTip(
            category="Summary",
            title="Write a Targeted Professional Summary",
            description=(
                "2-4 sentences highlighting your experience level, key skills, "
                "and career objective."
            ),
            priority="medium",
            implemented=bool(sections.summary and len(sections.summary) >= 100),
        ),
        ATSApprovalTip(
            category="Length",
            title="Keep Resume to 1-2 Pages",
            description="Entry-level: 1 page. Experienced: 1-2 pages. Executives: up to 3 pages.",
            priority="medium",
            implemented=300 <= words <= 1200,
        ),
    ]


# ---------------------------------------------------------------------------
# Readiness
# ---------------------------------------------------------------------------


def calculate_readiness_score(flaws: list[ATSFlaw], tips: list[ATSApprovalTip]) -> int:
    """Flaw deductions weighted 70%, share of implemented tips weighted 30%."""
    raw = 100 - sum(FLAW_PENALTIES[flaw.category] for flaw in flaws)
    implemented_ratio = sum(1 for tip in tips if tip.implemented) / len(tips) if tips else 0
    score = round(raw * FLAW_WEIGHT + implemented_ratio * 100 * TIP_WEIGHT)
    return max(0, min(100, score))


def build_summary(flaws: list[ATSFlaw], score: int) -> str:
    critical = sum(1 for flaw in flaws if flaw.category == "critical")
    major = sum(1 for flaw in flaws if flaw.category == "major")

    if score >= READY_THRESHOLD:
        return (
            "Your resume is well-optimized for ATS systems. "
            "Focus on minor tweaks to achieve a perfect score."
        )
    if score >= NEEDS_WORK_THRESHOLD:
        return (
            "Your resume has potential but needs improvements. "
            f"Found {critical} critical and {major} major issues to address."
        )
    if score >= SIGNIFICANT_WORK_THRESHOLD:
        return (
            "Your resume needs significant work to pass ATS systems. "
            f"Address the {critical} critical issues first."
        )
    return (
        "Your resume is not ATS-ready. It may be rejected by automated systems. "
        "Please address all critical issues immediately."
    )


def analyze(text: str, sections: ParsedSections, analysis: AnalysisResult) -> EnhancedAnalysis:
    """Detailed flaw analysis on top of an existing ATS score. Never raises."""
    flaws = detect_flaws(text, sections, analysis)
    tips = generate_approval_tips(text, sections, analysis)
    score = calculate_readiness_score(flaws, tips)
    logger.debug(
        "Readiness %d with %d flaws, %d/%d tips implemented",
        score, len(flaws), sum(1 for t in tips if t.implemented), len(tips),
    )
    return EnhancedAnalysis(
        flaws=flaws,
        approval_tips=tips,
        overall_readiness=readiness_tier(score),
        readiness_score=score,
        summary=build_summary(flaws, score),
    )
