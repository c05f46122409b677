import logging

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from models.requests import AnalyzeRequest, MatchJobRequest
from models.responses import (
    MatchJobResponse,
    ResumeAnalysis,
    UploadAnalysisResponse,
    UploadResponse,
)
from services import document_parser, report_builder, resume_analyzer

logger = logging.getLogger(__name__)

router = APIRouter()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

PREVIEW_CHARS = 500


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "ocr_enabled": settings.ocr_enabled,
    }


async def _read_resume(resume_file: UploadFile) -> tuple[str, str]:
    """Validate an uploaded resume and decode it. Returns (file_name, text)."""
    file_name = resume_file.filename or ""
    ext = document_parser.file_extension(file_name)

    if not document_parser.is_supported(file_name):
        logger.warning("Rejected upload with extension %r", ext)
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Please upload PDF, DOCX, JPG, JPEG, or PNG.",
        )
    if ext in document_parser.IMAGE_EXTENSIONS and not settings.ocr_enabled:
        raise HTTPException(status_code=400, detail="Image uploads are disabled on this server")

    content = await resume_file.read()
    max_bytes = settings.max_upload_size_mb * 1024 * 1024
    if len(content) > max_bytes:
        logger.warning("Rejected upload of %d bytes", len(content))
        raise HTTPException(
            status_code=400,
            detail=f"File too large. Max size: {settings.max_upload_size_mb}MB",
        )

    try:
        text = await run_in_threadpool(
            document_parser.extract_text, content, file_name, settings.ocr_language
        )
    except document_parser.DocumentParseError:
        logger.exception("Could not decode uploaded %s resume", ext)
        raise HTTPException(status_code=400, detail="Could not parse resume file")

    if not text:
        raise HTTPException(status_code=400, detail="No text could be extracted from the resume")
    if len(text) > settings.max_resume_chars:
        logger.warning("Rejected upload with %d characters of text", len(text))
        raise HTTPException(
            status_code=400,
            detail=f"Resume text too long. Max length: {settings.max_resume_chars} characters",
        )

    return file_name, text


@router.post("/resume/upload", response_model=UploadResponse)
@limiter.limit(settings.upload_rate_limit)
async def upload_resume(request: Request, resume_file: UploadFile = File(...)):
    file_name, text = await _read_resume(resume_file)
    sections = await run_in_threadpool(resume_analyzer.parse_resume, text)
    return UploadResponse(
        file_name=file_name,
        parsed_text=text,
        parsed_text_preview=text[:PREVIEW_CHARS],
        sections=sections,
    )


@router.post("/resume/analyze", response_model=ResumeAnalysis)
@limiter.limit(settings.analysis_rate_limit)
async def analyze_resume(request: Request, body: AnalyzeRequest):
    return await run_in_threadpool(resume_analyzer.analyze, body.resume_text, body.sections)


@router.post("/resume/analyze/upload", response_model=UploadAnalysisResponse)
@limiter.limit(settings.upload_rate_limit)
async def analyze_upload(request: Request, resume_file: UploadFile = File(...)):
    file_name, text = await _read_resume(resume_file)
    sections = await run_in_threadpool(resume_analyzer.parse_resume, text)
    result = await run_in_threadpool(resume_analyzer.analyze, text, sections)
    return UploadAnalysisResponse(
        **result.model_dump(),
        file_name=file_name,
        sections=sections,
    )


@router.post("/resume/match-job", response_model=MatchJobResponse)
@limiter.limit(settings.analysis_rate_limit)
async def match_job(request: Request, body: MatchJobRequest):
    sections = body.sections
    if sections is None:
        sections = await run_in_threadpool(resume_analyzer.parse_resume, body.resume_text)

    analysis = await run_in_threadpool(resume_analyzer.analyze, body.resume_text, sections)
    match_result = await run_in_threadpool(
        resume_analyzer.match_job, body.resume_text, body.job_description, sections
    )
    return MatchJobResponse(current_ats_score=analysis.ats_score, match_result=match_result)


@router.post("/resume/report", response_class=PlainTextResponse)
@limiter.limit(settings.analysis_rate_limit)
async def resume_report(request: Request, body: AnalyzeRequest):
    result = await run_in_threadpool(resume_analyzer.analyze, body.resume_text, body.sections)
    return report_builder.build_report(result.analysis, result.enhanced_analysis)
