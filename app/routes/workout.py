"""
Workout generation routes.
"""
import time
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Depends, Query, Request

from app.models.schemas import (
    SwapOptionsRequest,
    SwapOptionsResponse,
    SwapRequest,
    WorkoutAPIResponse,
    WorkoutRequest,
    WorkoutTextResponse,
)
from app.models.workout import Exercise, ExerciseType, MuscleGroup, WorkoutPlan
from app.services import catalog as catalog_service
from app.services import generator, swap
from app.services.formatter import plan_to_text
from app.core.logger import log_request, log_response, log_error
from app.core.auth import verify_internal_secret
from app.core.limiter import limiter

router = APIRouter(dependencies=[Depends(verify_internal_secret)])

Catalog = Annotated[tuple[Exercise, ...], Depends(catalog_service.get_catalog)]


@router.post("/generate-workout", response_model=WorkoutAPIResponse)
@limiter.limit("30/minute")
def generate_workout(request: Request, req: WorkoutRequest, catalog: Catalog):
    """
    Generate a workout plan.

    Takes muscles, equipment (or a location preset), intensity, style,
    duration and stretching time and returns a structured plan.
    """
    log_request("/generate-workout")

    preset = catalog_service.equipment_for_location(req.location) if req.location else None
    inputs = req.to_inputs(preset)

    started = time.perf_counter()
    try:
        plan = generator.generate(inputs, catalog)
    except Exception as e:
        log_error("Workout generation", e)
        raise HTTPException(status_code=500, detail="Workout generation failed")

    log_response("/generate-workout", "success", (time.perf_counter() - started) * 1000)
    return {"status": "success", "plan": plan}


@router.post("/workout-text", response_model=WorkoutTextResponse)
def workout_text(plan: WorkoutPlan):
    """Render a plan as plain text for copying."""
    return {"text": plan_to_text(plan)}


@router.get("/exercises", response_model=list[Exercise])
def list_exercises(
    catalog: Catalog,
    type: Optional[ExerciseType] = None,
    muscle: Optional[MuscleGroup] = None,
):
    """Browse the exercise library."""
    return catalog_service.list_exercises(catalog, type, muscle)


@router.get("/equipment")
def list_equipment(
    catalog: Catalog,
    muscles: Annotated[list[MuscleGroup], Query()] = [],
    location: Optional[str] = None,
):
    """
    Equipment options relevant to the chosen muscles.

    When a location is given, its preset selection is included.
    """
    options = catalog_service.relevant_equipment(catalog, muscles)
    if location:
        if location not in catalog_service.LOCATION_EQUIPMENT:
            raise HTTPException(status_code=400, detail=f"Unknown location: {location}")
        options["preset"] = catalog_service.equipment_for_location(location)
    return options


@router.post("/swap-options", response_model=SwapOptionsResponse)
def swap_options(req: SwapOptionsRequest, catalog: Catalog):
    """List exercises that could replace an item of a plan."""
    try:
        options = swap.swap_candidates(req.plan, req.section, req.index, catalog, req.equipment)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"options": options}


@router.post("/swap-exercise", response_model=WorkoutAPIResponse)
def swap_exercise(req: SwapRequest, catalog: Catalog):
    """Replace one item of a plan and return the new plan."""
    exercise = catalog_service.find_exercise(catalog, req.exerciseId)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")

    try:
        plan = swap.swap_item(req.plan, req.section, req.index, exercise)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"status": "success", "plan": plan}
