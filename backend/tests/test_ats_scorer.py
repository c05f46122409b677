import math
from datetime import datetime

from models.schemas import (
    ContactInfo,
    EducationItem,
    ExperienceItem,
    ParsedSections,
    ScoreBreakdown,
)
from services.ats_scorer import (
    SCORE_WEIGHTS,
    analyze_keywords,
    calculate_overall_score,
    calculate_score,
    calculate_score_breakdown,
    check_formatting,
    detect_industry,
    email_near_top,
    generate_feedback,
    generate_improvements,
    score_experience_quality,
    score_file_structure,
    score_section_structure,
    score_skills_match,
)
from services.section_parser import extract_sections

SUB_SCORES = list(SCORE_WEIGHTS)


# --- Weights and overall score ---


def test_weights_sum_to_one():
    assert math.isclose(sum(SCORE_WEIGHTS.values()), 1.0)


def test_uniform_sub_scores_give_same_overall():
    assert calculate_overall_score(ScoreBreakdown(**{k: 80 for k in SUB_SCORES})) == 80
    assert calculate_overall_score(ScoreBreakdown(**{k: 100 for k in SUB_SCORES})) == 100
    assert calculate_overall_score(ScoreBreakdown()) == 0


def test_empty_resume_scores():
    sections = extract_sections("")
    scores = calculate_score_breakdown("", sections)
    assert scores == ScoreBreakdown(
        keyword_relevance=0,
        section_structure=0,
        formatting=85,
        experience_quality=20,
        skills_match=20,
        file_structure=55,
    )
    assert calculate_overall_score(scores) == 24


def test_full_resume_scores(full_resume):
    sections = extract_sections(full_resume)
    scores = calculate_score_breakdown(full_resume, sections)
    assert scores.section_structure == 100
    assert scores.file_structure == 100
    assert scores.experience_quality == 98
    assert scores.skills_match == 90
    assert calculate_overall_score(scores) >= 70


def test_scores_stay_in_bounds():
    texts = ["", "x", "SKILLS\n" + ", ".join(f"Skill{i}" for i in range(200)), "<b>" * 50]
    for text in texts:
        result = calculate_score(text, extract_sections(text))
        assert 0 <= result.overall_score <= 100
        for key in SUB_SCORES:
            assert 0 <= getattr(result.scores, key) <= 100


def test_calculate_score_is_deterministic(full_resume):
    sections = extract_sections(full_resume)
    assert calculate_score(full_resume, sections) == calculate_score(full_resume, sections)


# --- Sub-scores ---


def test_adding_sections_never_lowers_structure(minimal_resume):
    sections = extract_sections(minimal_resume)
    before = score_section_structure(sections)
    richer = sections.model_copy(update={
        "summary": "Engineer with a decade of experience shipping data-heavy products to millions.",
        "education": [EducationItem(degree="BS Computer Science", institution="State University")],
        "certifications": ["AWS Certified Developer"],
    })
    assert score_section_structure(richer) >= before
    assert score_section_structure(richer) == 100


def test_adding_email_never_lowers_scores(minimal_resume):
    without = extract_sections(minimal_resume).model_copy(
        update={"contact": ContactInfo(name="John Smith", phone="555-123-4567")}
    )
    with_email = without.model_copy(
        update={"contact": without.contact.model_copy(update={"email": "john@x.com"})}
    )
    assert score_section_structure(with_email) >= score_section_structure(without)
    assert score_file_structure(minimal_resume, with_email) >= score_file_structure(
        minimal_resume, without
    )


def test_extra_quantified_bullet_never_lowers_experience_quality():
    item = ExperienceItem(title="Engineer", company="Acme", description=["Reduced costs by 10%"] * 6)
    richer = item.model_copy(update={"description": [*item.description, "Served 300 customers"]})
    assert score_experience_quality(ParsedSections(experience=[richer])) >= score_experience_quality(
        ParsedSections(experience=[item])
    )


def test_current_role_counts_as_having_end_date():
    past = ExperienceItem(title="Engineer", company="Acme", start_date="2019")
    current = past.model_copy(update={"current": True})
    assert score_experience_quality(ParsedSections(experience=[current])) > score_experience_quality(
        ParsedSections(experience=[past])
    )


def test_experience_quality_defaults():
    assert score_experience_quality(ParsedSections()) == 20


def test_experience_quality_rewards_quantified_bullets():
    plain = ExperienceItem(title="Engineer", company="Acme", description=["Worked on things"])
    quantified = plain.model_copy(update={"description": ["Increased revenue by 20%"]})
    assert score_experience_quality(ParsedSections(experience=[quantified])) > score_experience_quality(
        ParsedSections(experience=[plain])
    )


def test_skills_match_defaults_and_bonuses():
    assert score_skills_match(ParsedSections()) == 20
    few = ParsedSections(skills=["Python", "SQL"])
    assert score_skills_match(few) == 10
    balanced = ParsedSections(
        skills=["Python", "SQL", "Docker", "AWS", "React", "Leadership", "Communication"]
    )
    # 35 for count + 20 hard + 10 soft + 10 balance + 10 variety
    assert score_skills_match(balanced) == 85


def test_email_near_top():
    assert email_near_top("Jane\nJane@Mail.com", "jane@mail.com")
    assert not email_near_top("x" * 600 + " jane@mail.com", "jane@mail.com")
    assert not email_near_top("jane@mail.com", None)


# --- Industry and keywords ---


def test_detect_industry():
    assert detect_industry(ParsedSections()) == "general"
    assert detect_industry(ParsedSections(skills=["Python", "SQL"])) == "data"
    assert detect_industry(ParsedSections(skills=["React", "Docker"])) == "tech"


def test_detect_industry_tie_keeps_first():
    sections = ParsedSections(experience=[ExperienceItem(title="Marketing Manager")])
    assert detect_industry(sections) == "business"


def test_analyze_keywords_general():
    result = analyze_keywords("Strong leadership and communication", ParsedSections())
    assert result.industry == "general"
    assert result.found == ["leadership", "communication"]
    assert len(result.missing) == 10
    assert result.relevance_score == 13


# --- Feedback and improvements ---


def test_feedback_for_minimal_resume(minimal_resume):
    sections = extract_sections(minimal_resume)
    feedback = generate_feedback(sections, calculate_score_breakdown(minimal_resume, sections))
    by_section = {item.section: item for item in feedback}

    assert [item.section for item in feedback] == [
        "Contact Information",
        "Professional Summary",
        "Work Experience",
        "Education",
        "Skills",
    ]
    assert by_section["Contact Information"].score == 90
    assert by_section["Contact Information"].status == "good"
    assert by_section["Professional Summary"].status == "error"
    assert by_section["Education"].score == 30


def test_recent_graduate_gets_gpa_hint():
    education = [EducationItem(
        degree="BS Biology",
        institution="State University",
        graduation_date=str(datetime.now().year),
    )]
    feedback = generate_feedback(ParsedSections(education=education), ScoreBreakdown())
    suggestions = feedback[3].suggestions
    assert any("GPA" in s for s in suggestions)


def test_gpa_hint_follows_reference_year():
    sections = ParsedSections(education=[EducationItem(
        degree="BS Biology", institution="State University", graduation_date="May 2020",
    )])

    def hinted(year):
        result = calculate_score("", sections, reference_year=year)
        return any("GPA" in s for s in result.feedback[3].suggestions)

    assert hinted(2022)
    assert not hinted(2023)
    assert calculate_score("", sections, 2022) == calculate_score("", sections, 2022)


def test_improvements_order_for_empty_resume():
    sections = ParsedSections()
    scores = calculate_score_breakdown("", sections)
    improvements = generate_improvements(sections, scores)
    assert [i.type for i in improvements] == [
        "critical", "critical", "major", "major", "minor", "minor",
    ]
    assert improvements[0].issue == "Missing email address"
    assert improvements[1].issue == "No work experience listed"


# --- Format issues ---


def test_check_formatting_flags():
    caps = "\n".join(["THIS IS A VERY LOUD HEADER LINE"] * 6)
    text = f"Page 1 of 2\nName || Role\n{caps}\nend"
    types = {issue.type: issue.severity for issue in check_formatting(text)}
    assert types["tables"] == "high"
    assert types["headers_footers"] == "low"
    assert types["too_short"] == "high"
    assert types["excessive_caps"] == "low"


def test_check_formatting_long_resume():
    types = [issue.type for issue in check_formatting("word " * 1600)]
    assert "too_long" in types
    assert "too_short" not in types
