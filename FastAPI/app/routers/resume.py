import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile, status
from sqlalchemy.orm import Session

from resume_text import extract_text_from_pdf, looks_like_pdf

from app.config import settings
from app.database import get_db
from app.dependencies import get_current_active_user
from app.models.user import User
from app.repos.resume_repo import get_latest_by_user, list_for_user
from app.schemas.resume import ExtractedTextResponse, ResumeAnalysisResponse, ResumeAnalyzeRequest
from app.services.resume_analysis_service import analyze_resume

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/resumes", tags=["resumes"])


@router.post("/extract-text", response_model=ExtractedTextResponse)
async def extract_text(
    file: UploadFile = File(..., description="Resume PDF file"),
    user: User = Depends(get_current_active_user),
):
    """Upload a resume PDF and get its plain text back."""
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must be a PDF (.pdf)")

    content = await file.read()
    max_bytes = settings.max_resume_upload_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Max allowed is {settings.max_resume_upload_mb}MB.",
        )
    # Basic PDF magic bytes check to reject disguised uploads.
    if not looks_like_pdf(content):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid PDF file content.")

    try:
        text = extract_text_from_pdf(content)
    except Exception as e:
        logger.exception("PDF text extraction failed for user=%s file=%s", user.id, file.filename)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to extract text from PDF"
        ) from e
    logger.info("Extracted %d characters from %s", len(text), file.filename)
    return ExtractedTextResponse(text=text, file_name=file.filename)


@router.post("/analyze")
def analyze(
    data: ResumeAnalyzeRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    try:
        return analyze_resume(
            db,
            user.id,
            data.resume_text,
            target_role=data.target_role,
            career_stage=data.career_stage,
            industry_focus=data.industry_focus,
            file_name=data.file_name,
        )
    except Exception as e:
        logger.exception("Resume analysis failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to analyze resume") from e


@router.get("/latest", response_model=ResumeAnalysisResponse)
def get_latest_analysis(
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    record = get_latest_by_user(db, user.id)
    if not record:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No resume analysis found")
    return record


@router.get("", response_model=list[ResumeAnalysisResponse])
def list_analyses(
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    return list_for_user(db, user.id, limit=limit)
