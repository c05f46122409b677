"""Tests for flaw detection, the approval checklist and readiness scoring."""

from models.schemas import ATSApprovalTip, ATSFlaw
from services import flaw_analyzer
from services.ats_scorer import calculate_score
from services.flaw_analyzer import (
    build_summary,
    calculate_readiness_score,
    detect_flaws,
    generate_approval_tips,
    readiness_tier,
)
from services.section_parser import extract_sections

CATEGORY_ORDER = {"critical": 0, "major": 1, "minor": 2}


def _run(text: str):
    sections = extract_sections(text)
    analysis = calculate_score(text, sections)
    return sections, analysis, flaw_analyzer.analyze(text, sections, analysis)


def _flaw(category: str) -> ATSFlaw:
    return ATSFlaw(category=category, title="t", description="d", impact="i", how_to_fix="f")


def _tip(implemented: bool) -> ATSApprovalTip:
    return ATSApprovalTip(
        category="c", title="t", description="d", priority="high", implemented=implemented
    )


def test_readiness_tier_boundaries():
    assert readiness_tier(100) == "ready"
    assert readiness_tier(80) == "ready"
    assert readiness_tier(79) == "needs_work"
    assert readiness_tier(50) == "needs_work"
    assert readiness_tier(49) == "not_ready"
    assert readiness_tier(0) == "not_ready"


def test_readiness_score_weights():
    assert calculate_readiness_score([], [_tip(True)] * 14) == 100
    assert calculate_readiness_score([], [_tip(False)] * 14) == 70
    assert calculate_readiness_score([], []) == 70
    # 100 - 15 - 10 - 5 = 70 -> 49 + 15
    assert calculate_readiness_score(
        [_flaw("critical"), _flaw("major"), _flaw("minor")], [_tip(True), _tip(False)]
    ) == 64


def test_readiness_score_clamped_at_zero():
    assert calculate_readiness_score([_flaw("critical")] * 10, []) == 0


def test_summary_thresholds():
    flaws = [_flaw("critical"), _flaw("major"), _flaw("major")]
    assert build_summary([], 80).startswith("Your resume is well-optimized")
    assert "1 critical and 2 major" in build_summary(flaws, 60)
    assert build_summary(flaws, 45).startswith("Your resume needs significant work")
    assert build_summary(flaws, 39).startswith("Your resume is not ATS-ready")


def test_empty_resume_flaws():
    _, _, enhanced = _run("")
    assert [flaw.title for flaw in enhanced.flaws] == [
        "Missing Email Address",
        "Missing Phone Number",
        "No Work Experience Section",
        "No Skills Section",
        "Insufficient Text Content Detected",
        "Missing or Weak Professional Summary",
        "Formatting Issues Detected",
        "No LinkedIn Profile",
        "Missing Education Section",
        "Insufficient Skills Listed",
    ]
    assert enhanced.readiness_score == 1
    assert enhanced.overall_readiness == "not_ready"
    assert enhanced.summary.startswith("Your resume is not ATS-ready")


def test_minimal_resume_has_no_critical_flaws(minimal_resume):
    _, _, enhanced = _run(minimal_resume)
    assert enhanced.flaws_by_category("critical") == []
    titles = [flaw.title for flaw in enhanced.flaws]
    assert "No Quantified Achievements" not in titles
    assert "Weak Action Verbs" in titles


def test_flaws_are_ordered_by_category(full_resume):
    _, _, enhanced = _run(full_resume)
    order = [CATEGORY_ORDER[flaw.category] for flaw in enhanced.flaws]
    assert order == sorted(order)
    assert enhanced.flaws_by_category("critical") == []


def test_approval_checklist_is_fixed(minimal_resume, full_resume):
    for text in ("", minimal_resume, full_resume):
        sections, analysis, _ = _run(text)
        tips = generate_approval_tips(text, sections, analysis)
        assert len(tips) == 14
        assert tips[0].title == "Include Complete Contact Details"
        assert tips[-1].title == "Keep Resume to 1-2 Pages"


def test_full_resume_checklist(full_resume):
    sections, analysis, _ = _run(full_resume)
    tips = {tip.title: tip.implemented for tip in generate_approval_tips(full_resume, sections, analysis)}
    assert tips["Include Complete Contact Details"]
    assert tips["Use ATS-Friendly File Format"]
    assert tips["Use Standard Section Headers"]
    assert tips["Create a Dedicated Skills Section"]
    assert tips["Write a Targeted Professional Summary"]


def test_image_like_text_flags_insufficient_content():
    text = "a b c d e\n" * 30
    sections = extract_sections(text)
    flaws = detect_flaws(text, sections, calculate_score(text, sections))
    assert "Insufficient Text Content Detected" in [flaw.title for flaw in flaws]


def test_readiness_in_bounds(minimal_resume, full_resume):
    for text in ("", "x", minimal_resume, full_resume):
        _, _, enhanced = _run(text)
        assert 0 <= enhanced.readiness_score <= 100
        assert enhanced.overall_readiness == readiness_tier(enhanced.readiness_score)
