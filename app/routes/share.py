"""
Short-link sharing routes.
"""
from fastapi import APIRouter, HTTPException, Depends, Request

from app.models.schemas import ShareResponse, SharedWorkoutResponse
from app.models.workout import WorkoutPlan
from app.services import share_service
from app.core.logger import log_request, log_error
from app.core.auth import verify_internal_secret
from app.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])


@router.post("/share", response_model=ShareResponse)
@limiter.limit("20/minute")
async def create_share_link(request: Request, plan: WorkoutPlan):
    """Store a plan and return its short id."""
    log_request("/share")

    try:
        short_id = await share_service.create_short_link(plan)
    except Exception as e:
        log_error("Short link creation", e)
        raise HTTPException(status_code=500, detail="Failed to create short link")

    return {"shortId": short_id}


@router.get("/share/{short_id}", response_model=SharedWorkoutResponse)
async def get_shared_workout(short_id: str):
    """Resolve a short id to its plan."""
    log_request("/share", "GET")

    try:
        plan = await share_service.resolve_short_link(short_id)
    except Exception as e:
        log_error("Short link lookup", e)
        raise HTTPException(status_code=500, detail="Failed to retrieve workout")

    if plan is None:
        raise HTTPException(status_code=404, detail="Workout not found")

    return {"workout": plan}
