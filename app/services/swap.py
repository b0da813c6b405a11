"""
Exercise substitution within an existing plan.

A swap never mutates the plan: it returns a copy with one item replaced.
The replaced item keeps its slot's prescription (sets, rest, circuit);
the exercise-specific fields come from the substitute.
"""
from typing import Sequence

from app.models.workout import Exercise, SectionKey, WorkoutItem, WorkoutPlan
from app.services.generator import (
    AMRAP_CIRCUIT_ID,
    CARDIO_CIRCUIT_ID,
    CIRCUIT_CARDIO_TARGET,
    DEFAULT_HOLD,
    SUPERSET_MARKER,
    collapse_range,
    filter_by_equipment,
    is_timed_target,
    rep_target,
)


def _get_item(plan: WorkoutPlan, section: SectionKey, index: int) -> WorkoutItem:
    if section not in ("stretching", "main"):
        raise ValueError(f"Unknown section: {section}")
    items = getattr(plan.sections, section).items
    if not 0 <= index < len(items):
        raise ValueError(f"No item at index {index} in {section} section")
    return items[index]


def _source_type(item: WorkoutItem, section: SectionKey, catalog: Sequence[Exercise]) -> str:
    if section == "stretching":
        return "mobility"
    source = next((ex for ex in catalog if ex.id == item.exerciseId), None)
    return source.type if source else "weights"


def swap_candidates(
    plan: WorkoutPlan,
    section: SectionKey,
    index: int,
    catalog: Sequence[Exercise],
    equipment: Sequence[str],
) -> list[Exercise]:
    """
    Exercises that could replace an item.

    Candidates have the same type as the item's source exercise, share at
    least one muscle with it (any, when the item targets none), are
    performable with `equipment`, and are not already in the plan.

    Raises:
        ValueError: If the section or index does not exist
    """
    item = _get_item(plan, section, index)
    wanted_type = _source_type(item, section, catalog)
    muscles = set(item.muscles or [])
    in_plan = {
        i.exerciseId
        for i in [*plan.sections.stretching.items, *plan.sections.main.items]
        if i.exerciseId
    }

    return [
        ex for ex in filter_by_equipment(catalog, equipment)
        if ex.type == wanted_type
        and ex.id not in in_plan
        and (not muscles or muscles.intersection(ex.muscles))
    ]


def _swapped_target(item: WorkoutItem, section: SectionKey, exercise: Exercise) -> str:
    if section == "stretching":
        hold = exercise.defaultRepRange if is_timed_target(exercise.defaultRepRange) else DEFAULT_HOLD
        return f"{hold} ({item.sets} rounds)" if item.sets > 1 else hold
    if item.circuitId == AMRAP_CIRCUIT_ID:
        return collapse_range(exercise.defaultRepRange)
    if item.circuitId == CARDIO_CIRCUIT_ID and is_timed_target(exercise.defaultRepRange):
        return CIRCUIT_CARDIO_TARGET
    if exercise.type == "cardio":
        return exercise.defaultRepRange
    return rep_target(exercise)


def swap_item(plan: WorkoutPlan, section: SectionKey, index: int, exercise: Exercise) -> WorkoutPlan:
    """
    Return a new plan with one item replaced by `exercise`.

    Raises:
        ValueError: If the section or index does not exist
    """
    item = _get_item(plan, section, index)
    name = exercise.name
    if item.name.startswith(SUPERSET_MARKER):
        name = f"{SUPERSET_MARKER}{name}"

    replacement = item.model_copy(update={
        "name": name,
        "target": _swapped_target(item, section, exercise),
        "youtubeUrl": exercise.youtubeUrl,
        "instructions": tuple(exercise.instructions) if exercise.instructions is not None else None,
        "imageUrl": exercise.imageUrl,
        "muscles": tuple(exercise.muscles),
        "exerciseId": exercise.id,
    })

    old_section = getattr(plan.sections, section)
    items = list(old_section.items)
    items[index] = replacement
    new_section = old_section.model_copy(update={"items": tuple(items)})
    new_sections = plan.sections.model_copy(update={section: new_section})
    return plan.model_copy(update={"sections": new_sections})
