"""
Saved workout routes.
"""
from typing import Annotated

from fastapi import APIRouter, HTTPException, Depends, Request
from sqlalchemy.orm import Session

from app.models.schemas import SaveWorkoutRequest, SavedWorkoutOut, SuccessResponse
from app.services import storage
from app.core.database import get_db
from app.core.logger import log_request, log_error
from app.core.auth import verify_internal_secret, get_current_user_id
from app.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])

UserId = Annotated[str, Depends(get_current_user_id)]
DB = Annotated[Session, Depends(get_db)]


@router.get("/workouts")
def list_saved_workouts(user_id: UserId, db: DB) -> dict[str, list[SavedWorkoutOut]]:
    """All workouts saved by the user, newest first."""
    log_request("/workouts", "GET")
    try:
        return {"workouts": storage.list_workouts(db, user_id)}
    except Exception as e:
        log_error("Fetching workouts", e)
        raise HTTPException(status_code=500, detail="Failed to fetch workouts")


@router.post("/workouts")
@limiter.limit("30/minute")
def save_workout(request: Request, req: SaveWorkoutRequest, user_id: UserId, db: DB) -> dict[str, SavedWorkoutOut]:
    """Save a plan to the user's account."""
    log_request("/workouts")
    try:
        return {"workout": storage.save_workout(db, user_id, req.name, req.plan)}
    except Exception as e:
        log_error("Saving workout", e)
        raise HTTPException(status_code=500, detail="Failed to save workout")


@router.delete("/workouts", response_model=SuccessResponse)
def delete_workout(id: str, user_id: UserId, db: DB):
    """Delete one of the user's saved workouts."""
    log_request("/workouts", "DELETE")
    try:
        storage.delete_workout(db, id, user_id)
    except storage.RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Workout not found")
    except storage.OwnershipError:
        raise HTTPException(status_code=403, detail="Forbidden")
    except Exception as e:
        log_error("Deleting workout", e)
        raise HTTPException(status_code=500, detail="Failed to delete workout")
    return {"success": True}
