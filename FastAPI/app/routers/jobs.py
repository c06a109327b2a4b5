import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_active_user
from app.models.user import User
from app.repos import job_interaction_repo
from app.schemas.job import JobInteractionRequest, JobSearchRequest, JobSearchResponse
from app.services.job_interaction_service import (
    analysis_body_of,
    analyze_saved_job,
    interaction_summary,
    match_score_of,
    serialize_interaction,
)
from app.services.job_search_service import run_job_search

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("/search", response_model=JobSearchResponse)
def search_jobs(
    data: JobSearchRequest,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    filters = data.filters.model_dump()
    try:
        result = run_job_search(
            db,
            user.id,
            filters,
            generate_ai_matching=data.generate_ai_matching,
            save_search_session=data.save_search_session,
        )
    except Exception as e:
        logger.exception("Job search failed for user=%s: %s", user.id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to search jobs") from e
    logger.info("Job search for user=%s returned %d jobs", user.id, result["total_results"])
    return result


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _create_interaction(db: Session, user: User, data: JobInteractionRequest) -> dict:
    if not data.job_id or not data.job_data or not data.interaction_type:
        raise _bad_request("job_id, job_data and interaction_type are required")
    if job_interaction_repo.get_existing(db, user.id, data.job_id, data.interaction_type):
        raise _bad_request("Interaction already exists")

    ai_analysis = None
    if data.generate_ai_analysis and data.interaction_type == "saved":
        ai_analysis = analyze_saved_job(db, user.id, data.job_data)

    row = job_interaction_repo.create(
        db,
        user.id,
        data.job_id,
        data.job_data,
        data.interaction_type,
        notes=data.notes,
        ai_match_score=match_score_of(ai_analysis),
        match_analysis=analysis_body_of(ai_analysis),
    )
    logger.info("Job interaction created: user=%s job=%s type=%s", user.id, data.job_id, data.interaction_type)
    return {"success": True, "interaction": serialize_interaction(row), "ai_analysis": ai_analysis}


def _update_interaction(db: Session, user: User, data: JobInteractionRequest) -> dict:
    if not data.job_id:
        raise _bad_request("job_id is required")
    if data.interaction_type and job_interaction_repo.get_existing(db, user.id, data.job_id, data.interaction_type):
        raise _bad_request("Interaction already exists")
    rows = job_interaction_repo.update_for_job(
        db,
        user.id,
        data.job_id,
        interaction_type=data.interaction_type,
        notes=data.notes,
        set_notes="notes" in data.model_fields_set,
    )
    if not rows:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Interaction not found")
    return {"success": True, "interactions": [serialize_interaction(r) for r in rows]}


def _delete_interaction(db: Session, user: User, data: JobInteractionRequest) -> dict:
    if not data.job_id:
        raise _bad_request("job_id is required")
    deleted = job_interaction_repo.delete_for_job(db, user.id, data.job_id, data.interaction_type)
    logger.info("Deleted %d interactions: user=%s job=%s", deleted, user.id, data.job_id)
    return {"success": True, "deleted": deleted}


def _list_interactions(db: Session, user: User, data: JobInteractionRequest) -> dict:
    items, total = job_interaction_repo.list_for_user(
        db, user.id, data.interaction_type, limit=data.limit, offset=data.offset
    )
    return {
        "success": True,
        "interactions": [serialize_interaction(r, data.include_ai_analysis) for r in items],
        "summary": interaction_summary(db, user.id),
        "pagination": {"total": total, "limit": data.limit, "offset": data.offset},
    }


_ACTIONS = {
    "update": _update_interaction,
    "delete": _delete_interaction,
    "list": _list_interactions,
}


@router.post("/interactions")
def job_interactions(
    data: JobInteractionRequest,
    response: Response,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_active_user),
):
    """Create, update, delete or list the user's saved/viewed/applied/dismissed jobs."""
    if data.action != "create" and data.action not in _ACTIONS:
        raise _bad_request("Invalid action")
    try:
        if data.action == "create":
            result = _create_interaction(db, user, data)
            response.status_code = status.HTTP_201_CREATED
            return result
        return _ACTIONS[data.action](db, user, data)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Job interaction %s failed for user=%s: %s", data.action, user.id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process job interaction"
        ) from e
