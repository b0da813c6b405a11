"""
Exercise library - loading, lookup and equipment presets.

The library is a JSON document validated into Exercise models once per
path and shared read-only by every request.
"""
import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from app.core.config import settings
from app.core.logger import logger, log_error
from app.models.workout import BODYWEIGHT, Exercise, ExerciseType, Location, MuscleGroup


WEIGHT_EQUIPMENT = [
    "Bodyweight",
    "Dumbbells",
    "Barbell",
    "Kettlebell",
    "Resistance bands",
    "Pull-up bar",
    "Bench",
    "Cable machine",
    "Smith machine",
    "Leg press machine",
    "Leg curl machine",
    "Leg extension machine",
    "Lat pulldown machine",
    "Seated row machine",
    "Chest press machine",
    "Shoulder press machine",
    "Pec deck machine",
    "Hack squat machine",
    "Calf raise machine",
    "Back extension machine",
    "Weight plate",
    "Medicine ball",
    "Battle ropes",
    "Sled",
]

CARDIO_EQUIPMENT = [
    "Treadmill",
    "Stationary bike",
    "Rowing machine",
    "Elliptical",
    "Stair climber",
    "Jump rope",
    "Assault bike",
]

# Equipment assumed available at each training location
LOCATION_EQUIPMENT: dict[str, list[str]] = {
    "home": ["Bodyweight", "Dumbbells", "Resistance bands", "Bench"],
    "gym": [
        "Bodyweight", "Dumbbells", "Barbell", "Bench", "Cable machine",
        "Leg press machine", "Lat pulldown machine", "Seated row machine",
        "Chest press machine", "Treadmill", "Stationary bike", "Rowing machine",
    ],
    "hotel": ["Bodyweight", "Dumbbells", "Treadmill", "Stationary bike"],
    "outdoors": ["Bodyweight", "Jump rope"],
}

_catalog_adapter = TypeAdapter(list[Exercise])


@lru_cache(maxsize=4)
def load_catalog(path: str) -> tuple[Exercise, ...]:
    """
    Load and validate the exercise library.

    Args:
        path: Path to the JSON library

    Returns:
        Immutable tuple of exercises

    Raises:
        ValueError: If the file is not valid JSON, fails validation,
            or contains duplicate ids
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        exercises = _catalog_adapter.validate_python(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as e:
        log_error("Exercise library loading", e)
        raise ValueError(f"Invalid exercise library: {path}") from e

    ids = [ex.id for ex in exercises]
    duplicates = sorted({i for i in ids if ids.count(i) > 1})
    if duplicates:
        raise ValueError(f"Duplicate exercise ids: {', '.join(duplicates)}")

    logger.info(f"Loaded {len(exercises)} exercises from {path}")
    return tuple(exercises)


def get_catalog() -> tuple[Exercise, ...]:
    """FastAPI dependency returning the configured exercise library."""
    return load_catalog(settings.CATALOG_PATH)


def find_exercise(catalog: Sequence[Exercise], exercise_id: str) -> Optional[Exercise]:
    """Look up an exercise by id."""
    return next((ex for ex in catalog if ex.id == exercise_id), None)


def list_exercises(
    catalog: Sequence[Exercise],
    exercise_type: Optional[ExerciseType] = None,
    muscle: Optional[MuscleGroup] = None,
) -> list[Exercise]:
    """Filter the library by type and/or targeted muscle."""
    return [
        ex for ex in catalog
        if (exercise_type is None or ex.type == exercise_type)
        and (muscle is None or muscle in ex.muscles)
    ]


def equipment_for_location(location: Location) -> list[str]:
    """Preset equipment list for a training location."""
    return list(LOCATION_EQUIPMENT.get(location, [BODYWEIGHT]))


def relevant_equipment(catalog: Sequence[Exercise], muscles: Sequence[MuscleGroup]) -> dict[str, list[str]]:
    """
    Equipment worth offering for the chosen muscles.

    Weight equipment is narrowed to what the weight exercises for those
    muscles use; bodyweight and all cardio equipment are always offered.
    With no muscles chosen everything is offered.
    """
    if not muscles:
        return {"weight": list(WEIGHT_EQUIPMENT), "cardio": list(CARDIO_EQUIPMENT)}

    chosen = set(muscles)
    used = {BODYWEIGHT}
    for ex in catalog:
        if ex.type == "weights" and chosen.intersection(ex.muscles):
            used.update(ex.equipment)

    return {
        "weight": [eq for eq in WEIGHT_EQUIPMENT if eq in used],
        "cardio": list(CARDIO_EQUIPMENT),
    }
