import io

from docx import Document
from fastapi.testclient import TestClient

from config import settings
from main import app

client = TestClient(app)

DOCX_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
JOB_DESCRIPTION = (
    "Backend Engineer\n\n"
    "Requirements:\n"
    "- 3+ years of experience with Python\n"
    "- Docker and Kubernetes\n"
)


def _docx(text: str) -> bytes:
    doc = Document()
    for line in text.split("\n"):
        doc.add_paragraph(line)
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["ocr_enabled"] is True


def test_upload_docx(minimal_resume):
    response = client.post(
        "/resume/upload",
        files={"resume_file": ("resume.docx", _docx(minimal_resume), DOCX_TYPE)},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["file_name"] == "resume.docx"
    assert data["parsed_text"].startswith("John Smith\njohn@x.com")
    assert data["sections"]["contact"]["email"] == "john@x.com"
    assert data["sections"]["experience"][0]["company"] == "Acme"


def test_upload_rejects_unknown_type():
    response = client.post(
        "/resume/upload",
        files={"resume_file": ("resume.txt", b"John Smith", "text/plain")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == (
        "Invalid file type. Please upload PDF, DOCX, JPG, JPEG, or PNG."
    )


def test_upload_corrupt_pdf():
    response = client.post(
        "/resume/upload",
        files={"resume_file": ("resume.pdf", b"not a pdf", "application/pdf")},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Could not parse resume file"


def test_upload_empty_document():
    response = client.post(
        "/resume/upload",
        files={"resume_file": ("resume.docx", _docx(""), DOCX_TYPE)},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "No text could be extracted from the resume"


def test_upload_rejects_oversized_text(monkeypatch, minimal_resume):
    monkeypatch.setattr(settings, "max_resume_chars", 20)
    response = client.post(
        "/resume/upload",
        files={"resume_file": ("resume.docx", _docx(minimal_resume), DOCX_TYPE)},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Resume text too long. Max length: 20 characters"


def test_analyze_upload(full_resume):
    response = client.post(
        "/resume/analyze/upload",
        files={"resume_file": ("jane.docx", _docx(full_resume), DOCX_TYPE)},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["file_name"] == "jane.docx"
    assert data["ats_score"] == data["analysis"]["overall_score"]
    assert data["sections"]["contact"]["name"] == "Jane Doe"
    assert len(data["enhanced_analysis"]["approval_tips"]) == 14


def test_analyze_text(minimal_resume):
    response = client.post("/resume/analyze", json={"resume_text": minimal_resume})
    assert response.status_code == 200
    data = response.json()
    assert 0 <= data["ats_score"] <= 100
    assert set(data["analysis"]["scores"]) == {
        "keyword_relevance",
        "section_structure",
        "formatting",
        "experience_quality",
        "skills_match",
        "file_structure",
    }
    assert data["enhanced_analysis"]["overall_readiness"] in ("ready", "needs_work", "not_ready")


def test_analyze_with_sections():
    response = client.post(
        "/resume/analyze",
        json={"resume_text": "", "sections": {"skills": ["Python"]}},
    )
    assert response.status_code == 200
    titles = [flaw["title"] for flaw in response.json()["enhanced_analysis"]["flaws"]]
    assert "No Skills Section" not in titles
    assert "Insufficient Skills Listed" in titles


def test_match_job(full_resume):
    response = client.post(
        "/resume/match-job",
        json={"resume_text": full_resume, "job_description": JOB_DESCRIPTION},
    )
    assert response.status_code == 200
    data = response.json()
    assert 0 <= data["current_ats_score"] <= 100
    match = data["match_result"]
    assert match["skill_gap"]["missing_skills"] == []
    assert match["match_score"] + match["improvement_potential"] <= 100
    assert match["recommendations"]


def test_match_job_rejects_short_description(full_resume):
    response = client.post(
        "/resume/match-job",
        json={"resume_text": full_resume, "job_description": "Python dev"},
    )
    assert response.status_code == 422


def test_report(minimal_resume):
    response = client.post("/resume/report", json={"resume_text": minimal_resume})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.startswith("ATS Analysis Report - Score: ")
    assert "ATS Readiness" in response.text
