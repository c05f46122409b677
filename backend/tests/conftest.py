"""Shared test configuration and sample resumes."""

import pytest

MINIMAL_RESUME = (
    "John Smith\n"
    "john@x.com\n"
    "555-123-4567\n"
    "EXPERIENCE\n"
    "Engineer at Acme\n"
    "Jan 2020 - Present\n"
    "• Increased throughput by 30%\n"
    "SKILLS\n"
    "Python, SQL, Leadership, Communication, Docker"
)

FULL_RESUME = """Jane Doe
jane.doe@example.com | (555) 123-4567 | linkedin.com/in/janedoe | github.com/janedoe
San Francisco, CA

PROFESSIONAL SUMMARY
Backend engineer with 6 years of experience building scalable APIs and data pipelines for products serving 2M users.

EXPERIENCE
Senior Software Engineer | TechCorp | Jan 2021 - Present
• Led migration of 12 services to Kubernetes, reducing deployment time by 40%
• Designed REST APIs serving 500 customers
• Mentored 4 engineers on testing practices

Software Engineer, DataWorks
Jun 2018 - Dec 2020
- Developed ETL pipelines in Python processing 3TB daily
- Implemented monitoring that reduced incidents by 25%

EDUCATION
Bachelor of Science in Computer Science
Stanford University, Stanford, CA
2014 - 2018
GPA: 3.8

SKILLS
Languages: Python, Go, SQL
Tools: Docker, Kubernetes, AWS, Git
Leadership, Communication

PROJECTS
Resume Parser - open source CLI
Parses resumes into structured JSON for recruiters
Technologies: Python, FastAPI
https://github.com/janedoe/resume-parser

CERTIFICATIONS
AWS Certified Solutions Architect
- Certified Kubernetes Administrator
"""


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "ocr: needs the tesseract binary on PATH"
    )


@pytest.fixture
def minimal_resume() -> str:
    return MINIMAL_RESUME


@pytest.fixture
def full_resume() -> str:
    return FULL_RESUME
