"""Plain-text rendering of an ATS analysis, suitable for download or e-mail bodies."""

from models.schemas import AnalysisResult, EnhancedAnalysis

STATUS_MARKERS = {"good": "[OK]", "warning": "[!]", "error": "[X]"}
FLAW_CATEGORIES = ("critical", "major", "minor")

SCORE_LABELS = [
    ("keyword_relevance", "Keyword Relevance"),
    ("section_structure", "Section Structure"),
    ("formatting", "Formatting"),
    ("experience_quality", "Experience Quality"),
    ("skills_match", "Skills Match"),
    ("file_structure", "File Structure"),
]


def verdict(score: int) -> str:
    if score >= 70:
        return "Great job! Your resume is well-optimized."
    if score >= 50:
        return "Good start, but there's room for improvement."
    return "Your resume needs significant improvements."


def _heading(title: str) -> list[str]:
    return ["", title, "-" * len(title)]


def build_report(
    analysis: AnalysisResult,
    enhanced: EnhancedAnalysis | None = None,
    file_name: str | None = None,
) -> str:
    """Render the analysis as a sectioned plain-text report."""
    title = f"ATS Analysis Report - Score: {analysis.overall_score}/100"
    lines = [title, "=" * len(title)]
    if file_name:
        lines.append(f"Resume: {file_name}")
    lines.append(verdict(analysis.overall_score))

    lines += _heading("Score Breakdown")
    for field, label in SCORE_LABELS:
        lines.append(f"- {label}: {getattr(analysis.scores, field)}/100")

    lines += _heading("Section Feedback")
    for feedback in analysis.feedback:
        marker = STATUS_MARKERS[feedback.status]
        lines.append(f"{marker} {feedback.section} ({feedback.score}/100)")
        if feedback.issues:
            lines.append(f"    Issues: {', '.join(feedback.issues)}")
        if feedback.suggestions:
            lines.append(f"    Suggestions: {' '.join(feedback.suggestions)}")

    keywords = analysis.keywords
    lines += _heading("Keywords Analysis")
    lines.append(f"Industry: {keywords.industry}")
    lines.append(f"Keywords Found: {', '.join(keywords.found[:10]) or 'none'}")
    lines.append(f"Missing Keywords: {', '.join(keywords.missing[:10]) or 'none'}")
    lines.append(f"Keyword Score: {keywords.relevance_score}/100")

    lines += _heading("Recommended Improvements")
    if not analysis.improvements:
        lines.append("No improvements needed.")
    for improvement in analysis.improvements:
        lines.append(
            f"[{improvement.type.upper()}] {improvement.issue} - {improvement.suggestion}"
        )
        if improvement.example:
            lines.append(f"    Example: {improvement.example}")

    if enhanced is not None:
        lines += _heading("ATS Readiness")
        readiness = enhanced.overall_readiness.replace("_", " ")
        lines.append(f"Readiness: {readiness} ({enhanced.readiness_score}/100)")
        lines.append(enhanced.summary)
        counts = ", ".join(
            f"{len(enhanced.flaws_by_category(category))} {category}"
            for category in FLAW_CATEGORIES
        )
        lines.append(f"Flaws: {counts}")
        for flaw in enhanced.flaws:
            lines.append(f"[{flaw.category.upper()}] {flaw.title}: {flaw.how_to_fix}")
        implemented = sum(1 for tip in enhanced.approval_tips if tip.implemented)
        lines.append(f"Approval checklist: {implemented}/{len(enhanced.approval_tips)} implemented")

    return "\n".join(lines) + "\n"
