"""
Saved workouts and performance log persistence.

Every function takes the request's SQLAlchemy session. Records owned by
another user are reported with OwnershipError, missing ones with
RecordNotFoundError.
"""
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import SavedWorkout, WorkoutPerformance
from app.core.logger import logger
from app.models.schemas import (
    ExerciseHistory,
    ExerciseHistoryEntry,
    PerformanceLogRequest,
    PerformanceOut,
    SavedWorkoutOut,
)
from app.models.workout import WorkoutPlan


class StorageError(Exception):
    """Base class for persistence errors."""


class RecordNotFoundError(StorageError):
    pass


class OwnershipError(StorageError):
    pass


def _workout_out(row: SavedWorkout) -> SavedWorkoutOut:
    return SavedWorkoutOut(
        id=row.id,
        userId=row.user_id,
        name=row.name,
        plan=WorkoutPlan.model_validate_json(row.plan),
        savedAt=row.saved_at,
    )


def _performance_out(row: WorkoutPerformance) -> PerformanceOut:
    return PerformanceOut(
        id=row.id,
        userId=row.user_id,
        exerciseName=row.exercise_name,
        exerciseId=row.exercise_id,
        weight=row.weight,
        reps=row.reps,
        sets=row.sets,
        date=row.date,
        workoutId=row.workout_id,
        notes=row.notes,
    )


def _get_owned(db: Session, model, record_id: str, user_id: str):
    row = db.get(model, record_id)
    if row is None:
        raise RecordNotFoundError(f"{model.__name__} {record_id} not found")
    if row.user_id != user_id:
        raise OwnershipError(f"{model.__name__} {record_id} belongs to another user")
    return row


# --- Saved Workouts ---

def save_workout(db: Session, user_id: str, name: str, plan: WorkoutPlan) -> SavedWorkoutOut:
    """Store a plan under a name for a user."""
    row = SavedWorkout(user_id=user_id, name=name, plan=plan.model_dump_json())
    db.add(row)
    db.commit()
    db.refresh(row)
    logger.info(f"Saved workout {row.id} for user {user_id}")
    return _workout_out(row)


def list_workouts(db: Session, user_id: str) -> list[SavedWorkoutOut]:
    """A user's saved workouts, newest first."""
    rows = db.scalars(
        select(SavedWorkout)
        .where(SavedWorkout.user_id == user_id)
        .order_by(SavedWorkout.saved_at.desc())
    ).all()
    return [_workout_out(row) for row in rows]


def delete_workout(db: Session, workout_id: str, user_id: str) -> None:
    """Delete a saved workout owned by `user_id`."""
    row = _get_owned(db, SavedWorkout, workout_id, user_id)
    db.delete(row)
    db.commit()
    logger.info(f"Deleted workout {workout_id}")


# --- Performance Log ---

def log_performance(db: Session, user_id: str, entry: PerformanceLogRequest) -> PerformanceOut:
    """Record one performance of an exercise."""
    row = WorkoutPerformance(
        user_id=user_id,
        exercise_name=entry.exerciseName,
        exercise_id=entry.exerciseId or None,
        weight=entry.weight,
        reps=entry.reps,
        sets=entry.sets,
        workout_id=entry.workoutId or None,
        notes=entry.notes or None,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return _performance_out(row)


def exercise_history(
    db: Session,
    user_id: str,
    exercise_name: str,
    top_n: Optional[int] = None,
) -> ExerciseHistory:
    """
    Summarize a user's history for one exercise.

    Args:
        db: Database session
        user_id: Owner of the log
        exercise_name: Exercise to summarize
        top_n: Number of distinct weights to return (HISTORY_TOP_N by default)

    Returns:
        The heaviest distinct weights (most recent entry for each), the
        personal record and the number of distinct session dates
    """
    top_n = settings.HISTORY_TOP_N if top_n is None else top_n
    rows = db.scalars(
        select(WorkoutPerformance)
        .where(
            WorkoutPerformance.user_id == user_id,
            WorkoutPerformance.exercise_name == exercise_name,
        )
        .order_by(WorkoutPerformance.weight.desc(), WorkoutPerformance.date.desc())
    ).all()

    by_weight: dict[float, WorkoutPerformance] = {}
    for row in rows:
        if len(by_weight) >= top_n:
            break
        by_weight.setdefault(row.weight, row)

    return ExerciseHistory(
        exerciseName=exercise_name,
        topWeights=[
            ExerciseHistoryEntry(id=r.id, weight=r.weight, reps=r.reps, sets=r.sets, date=r.date)
            for r in by_weight.values()
        ],
        totalSessions=len({row.date.date() for row in rows}),
        personalRecord=rows[0].weight if rows else 0,
    )


def list_logged_exercises(db: Session, user_id: str) -> list[str]:
    """Names of every exercise the user has logged, alphabetically."""
    names = db.scalars(
        select(WorkoutPerformance.exercise_name)
        .where(WorkoutPerformance.user_id == user_id)
        .distinct()
        .order_by(WorkoutPerformance.exercise_name)
    ).all()
    return list(names)


def delete_performance(db: Session, performance_id: str, user_id: str) -> None:
    """Delete a performance entry owned by `user_id`."""
    row = _get_owned(db, WorkoutPerformance, performance_id, user_id)
    db.delete(row)
    db.commit()
