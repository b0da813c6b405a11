"""
Exercise performance log routes.
"""
from typing import Annotated

from fastapi import APIRouter, HTTPException, Depends, Query, Request
from sqlalchemy.orm import Session

from app.models.schemas import ExerciseHistory, PerformanceLogRequest, PerformanceOut, SuccessResponse
from app.services import storage
from app.core.database import get_db
from app.core.logger import log_request, log_error
from app.core.auth import verify_internal_secret, get_current_user_id
from app.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])

UserId = Annotated[str, Depends(get_current_user_id)]
DB = Annotated[Session, Depends(get_db)]


@router.get("/performance", response_model=ExerciseHistory)
def get_performance(exerciseName: Annotated[str, Query(min_length=1)], user_id: UserId, db: DB):
    """
    History for one exercise.

    Returns the top distinct weights, the personal record and the number
    of distinct days the exercise was logged.
    """
    log_request("/performance", "GET")
    try:
        return storage.exercise_history(db, user_id, exerciseName)
    except Exception as e:
        log_error("Fetching performance", e)
        raise HTTPException(status_code=500, detail="Failed to fetch performance data")


@router.get("/performance/exercises")
def get_logged_exercises(user_id: UserId, db: DB) -> dict[str, list[str]]:
    """Names of every exercise the user has logged."""
    return {"exercises": storage.list_logged_exercises(db, user_id)}


@router.post("/performance")
@limiter.limit("60/minute")
def log_performance(request: Request, req: PerformanceLogRequest, user_id: UserId, db: DB) -> dict[str, PerformanceOut]:
    """Log weight, reps and sets for an exercise."""
    log_request("/performance")
    try:
        return {"performance": storage.log_performance(db, user_id, req)}
    except Exception as e:
        log_error("Logging performance", e)
        raise HTTPException(status_code=500, detail="Failed to log performance")


@router.delete("/performance", response_model=SuccessResponse)
def delete_performance(id: str, user_id: UserId, db: DB):
    """Delete one of the user's performance entries."""
    log_request("/performance", "DELETE")
    try:
        storage.delete_performance(db, id, user_id)
    except storage.RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Performance entry not found")
    except storage.OwnershipError:
        raise HTTPException(status_code=403, detail="Forbidden")
    except Exception as e:
        log_error("Deleting performance", e)
        raise HTTPException(status_code=500, detail="Failed to delete performance entry")
    return {"success": True}
