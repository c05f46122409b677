import time

from services.ats_scorer import calculate_score
from services.section_parser import (
    extract_certifications,
    extract_contact_info,
    extract_education,
    extract_experience,
    extract_projects,
    extract_section,
    extract_sections,
    extract_summary,
    is_section_header,
)


# --- Headers and section bodies ---


def test_is_section_header_variants():
    assert is_section_header("EXPERIENCE")
    assert is_section_header("Work Experience:")
    assert is_section_header("  technical skills  ")
    assert not is_section_header("Experienced engineer with Python")


def test_extract_section_stops_at_next_header():
    text = "SKILLS\nPython, SQL\nEDUCATION\nBS Computer Science"
    assert extract_section(text, ("SKILLS",)) == "Python, SQL"


def test_extract_section_missing_returns_none():
    assert extract_section("Just some text\nwithout headers", ("SKILLS",)) is None


def test_extract_section_empty_body_returns_none():
    assert extract_section("SKILLS\nEDUCATION\nBS", ("SKILLS",)) is None


# --- Contact ---


def test_contact_info_minimal(minimal_resume):
    contact = extract_contact_info(minimal_resume)
    assert contact is not None
    assert contact.name == "John Smith"
    assert contact.email == "john@x.com"
    assert contact.phone == "555-123-4567"
    assert contact.website is None


def test_contact_info_full(full_resume):
    contact = extract_contact_info(full_resume)
    assert contact.name == "Jane Doe"
    assert contact.email == "jane.doe@example.com"
    assert contact.phone == "(555) 123-4567"
    assert contact.linkedin == "https://linkedin.com/in/janedoe"
    assert contact.github == "https://github.com/janedoe"
    assert contact.location == "San Francisco, CA"
    assert contact.website is None


def test_contact_info_personal_website():
    contact = extract_contact_info("Ana Lopez\nana@mail.com | anadev.io")
    assert contact.website == "anadev.io"


def test_contact_info_remote_location():
    contact = extract_contact_info("Ana Lopez\nana@mail.com\nRemote")
    assert contact.location == "Remote"


def test_contact_info_none_when_nothing_found():
    assert extract_contact_info("") is None
    assert extract_contact_info("lorem ipsum dolor") is None


def test_date_range_not_taken_as_phone():
    contact = extract_contact_info("jo@mail.com\n2019 - 2021")
    assert contact.phone is None


def test_email_starts_at_token_boundary():
    contact = extract_contact_info("Ana Lopez\ncontact:ana.lopez+jobs@mail.com")
    assert contact.email == "ana.lopez+jobs@mail.com"


def test_long_single_line_is_fast():
    for text in ("a" * 50000, "a." * 25000, "1-" * 25000):
        started = time.perf_counter()
        calculate_score(text, extract_sections(text))
        assert time.perf_counter() - started < 5


# --- Summary ---


def test_summary_extracted(full_resume):
    summary = extract_summary(full_resume)
    assert summary.startswith("Backend engineer with 6 years")
    assert summary.endswith("2M users.")


def test_summary_inline_after_header():
    text = "Summary: Product designer focused on accessible interfaces.\nEXPERIENCE\nx"
    assert extract_summary(text) == "Product designer focused on accessible interfaces."


def test_summary_too_short_is_none():
    assert extract_summary("SUMMARY\nShort.\nSKILLS\nPython") is None


# --- Experience ---


def test_experience_minimal(minimal_resume):
    experience = extract_experience(minimal_resume)
    assert len(experience) == 1
    item = experience[0]
    assert item.title == "Engineer"
    assert item.company == "Acme"
    assert item.start_date == "Jan 2020"
    assert item.end_date == "Present"
    assert item.current is True
    assert item.description == ["Increased throughput by 30%"]


def test_experience_full(full_resume):
    experience = extract_experience(full_resume)
    assert len(experience) == 2

    first, second = experience
    assert first.title == "Senior Software Engineer"
    assert first.company == "TechCorp"
    assert first.current is True
    assert len(first.description) == 3
    assert first.description[0].startswith("Led migration")

    assert second.title == "Software Engineer"
    assert second.company == "DataWorks"
    assert second.start_date == "Jun 2018"
    assert second.end_date == "Dec 2020"
    assert second.current is False
    assert second.description == [
        "Developed ETL pipelines in Python processing 3TB daily",
        "Implemented monitoring that reduced incidents by 25%",
    ]


def test_current_role_effective_end_date():
    item = extract_experience("EXPERIENCE\nAnalyst | Initech | 2019 - Current\n- Built reports weekly")[0]
    assert item.current is True
    assert item.effective_end_date == "Present"


def test_experience_missing_section():
    assert extract_experience("SKILLS\nPython") == []


# --- Education ---


def test_education_full(full_resume):
    education = extract_education(full_resume)
    assert len(education) == 1
    item = education[0]
    assert item.degree == "Bachelor of Science in Computer Science"
    assert item.institution == "Stanford University"
    assert item.graduation_date == "2018"
    assert item.gpa == "3.8"
    assert item.location == "Stanford, CA"
    assert item.details == []


# --- Projects and certifications ---


def test_projects_full(full_resume):
    projects = extract_projects(full_resume)
    assert len(projects) == 1
    project = projects[0]
    assert project.name == "Resume Parser"
    assert project.description == "Parses resumes into structured JSON for recruiters"
    assert project.technologies == ["Python", "FastAPI"]
    assert project.link == "https://github.com/janedoe/resume-parser"


def test_projects_split_on_blank_line():
    text = (
        "PROJECTS\n"
        "Weather Dashboard\n"
        "Shows forecasts for saved cities\n"
        "\n"
        "Budget Tracker\n"
        "Tracks monthly spending by category\n"
    )
    names = [p.name for p in extract_projects(text)]
    assert names == ["Weather Dashboard", "Budget Tracker"]


def test_certifications_full(full_resume):
    assert extract_certifications(full_resume) == [
        "AWS Certified Solutions Architect",
        "Certified Kubernetes Administrator",
    ]


# --- Whole document ---


def test_extract_sections_minimal(minimal_resume):
    sections = extract_sections(minimal_resume)
    assert sections.contact.email == "john@x.com"
    assert sections.summary is None
    assert len(sections.experience) == 1
    assert sections.skills == ["Python", "SQL", "Leadership", "Communication", "Docker"]


def test_extract_sections_empty_text():
    sections = extract_sections("")
    assert sections.contact is None
    assert sections.summary is None
    assert sections.experience == []
    assert sections.education == []
    assert sections.skills == []
    assert sections.projects == []
    assert sections.certifications == []
    assert sections.is_empty


def test_extract_sections_is_idempotent(full_resume):
    assert extract_sections(full_resume) == extract_sections(full_resume)


def test_extract_sections_normalizes_whitespace():
    messy = "John Smith\r\njohn@x.com\r\n\r\n\r\n\r\nSKILLS\r\nPython,\tSQL"
    sections = extract_sections(messy)
    assert sections.contact.email == "john@x.com"
    assert sections.skills == ["Python", "SQL"]
