"""
Workout plan generation engine.

Pipeline: equipment filter -> exercise selection -> time/volume allocation
-> style composition. The exercise catalog and the random source are passed
in, so a call touches no global state.
"""
import math
import random
import re
from typing import Callable, Optional, Sequence

from app.core.logger import log_generation
from app.models.workout import (
    BODYWEIGHT,
    Exercise,
    ExerciseType,
    Intensity,
    MuscleGroup,
    WorkoutInputs,
    WorkoutItem,
    WorkoutPlan,
    WorkoutSection,
    WorkoutSections,
    WorkoutStyle,
    WorkoutSummary,
)
from app.services.allocation import TimeBudget, allocate, stretch_cap, stretch_rounds


# --- Intensity Tables ---

SETS_BY_INTENSITY = {"easy": 2, "moderate": 3, "hard": 4, "brutal": 5}
REST_BY_INTENSITY = {"easy": 90, "moderate": 60, "hard": 45, "brutal": 30}
CIRCUIT_REST_BY_INTENSITY = {"brutal": 15, "hard": 20}
CIRCUIT_REST_DEFAULT = 30
SUPERSET_REST_BY_INTENSITY = {"brutal": 30, "hard": 45}
SUPERSET_REST_DEFAULT = 60

TRADITIONAL_CARDIO_REST = 60
SUPERSET_CARDIO_REST = 45

# Circuit timing: seconds of work per exercise, before rest
CIRCUIT_WORK_SECONDS = 40
CIRCUIT_CARDIO_WORK_SECONDS = 60
CIRCUIT_CARDIO_TARGET = "45-60s"
MIN_CIRCUIT_ROUNDS = 2
MAX_CIRCUIT_ROUNDS = 4
MIN_CIRCUIT_SIZE = 2
MAX_CIRCUIT_SIZE = 5
PREFERRED_CIRCUIT_SIZE = 4
CARDIO_CIRCUIT_ID = "circuit-cardio"

AMRAP_CIRCUIT_ID = "amrap-round"
AMRAP_UNBOUNDED_ROUNDS = 0

SUPERSET_MARKER = "🔗 "
DEFAULT_HOLD = "30s each side"

CATEGORY_ORDER = ("push", "pull", "legs", "core")
MUSCLE_CATEGORIES = {
    "Chest": "push",
    "Shoulders": "push",
    "Triceps": "push",
    "Back": "pull",
    "Biceps": "pull",
    "Legs": "legs",
    "Glutes": "legs",
}

_TIMED_RE = re.compile(r"\d+\s*(?:s|secs?|seconds?|mins?|minutes?)\b", re.IGNORECASE)
_RANGE_RE = re.compile(r"^\s*(\d+)\s*-\s*(\d+)(.*)$")
_BARE_COUNT_RE = re.compile(r"^\s*\d+(?:\s*-\s*\d+)?\s*$")


# --- Target Text Helpers ---

def is_timed_target(text: str) -> bool:
    """True when a target is a duration ("30s each side", "20 min") rather than reps."""
    return bool(_TIMED_RE.search(text or ""))


def rep_target(exercise: Exercise) -> str:
    """Render an exercise's default target, adding "reps" to bare counts."""
    text = exercise.defaultRepRange
    if _BARE_COUNT_RE.match(text):
        return f"{text.strip()} reps"
    return text


def collapse_range(text: str) -> str:
    """
    Collapse a numeric range to its midpoint, rounded half up.

    "8-12" -> "10 reps", "8-12 reps" -> "10 reps", "30-60s" -> "45s". Text
    without a leading range is returned unchanged.
    """
    match = _RANGE_RE.match(text)
    if not match:
        return text
    low, high, rest = int(match.group(1)), int(match.group(2)), match.group(3)
    midpoint = (low + high + 1) // 2
    if is_timed_target(text) or rest.strip().lower().startswith("rep"):
        return f"{midpoint}{rest}"
    return f"{midpoint} reps{rest}"


def _shuffled(items: Sequence, rng: random.Random) -> list:
    shuffled = list(items)
    rng.shuffle(shuffled)
    return shuffled


def _item(
    exercise: Exercise,
    sets: int,
    target: str,
    rest_seconds: Optional[int] = None,
    circuit_id: Optional[str] = None,
    circuit_rounds: Optional[int] = None,
    name: Optional[str] = None,
) -> WorkoutItem:
    return WorkoutItem(
        name=name or exercise.name,
        sets=sets,
        target=target,
        restSeconds=rest_seconds,
        youtubeUrl=exercise.youtubeUrl,
        instructions=exercise.instructions,
        imageUrl=exercise.imageUrl,
        circuitId=circuit_id,
        circuitRounds=circuit_rounds,
        muscles=tuple(exercise.muscles),
        exerciseId=exercise.id,
    )


# --- Equipment Filter ---

def filter_by_equipment(catalog: Sequence[Exercise], user_equipment: Sequence[str]) -> list[Exercise]:
    """
    Reduce the catalog to exercises the user can perform.

    Args:
        catalog: Exercise library
        user_equipment: Equipment the user has available

    Returns:
        Exercises whose required equipment is covered. Exercises that need
        nothing, or list bodyweight, are always kept unless the user only
        has bodyweight, in which case they must need nothing else.
    """
    available = set(user_equipment)

    if available == {BODYWEIGHT}:
        return [
            ex for ex in catalog
            if not ex.equipment or list(ex.equipment) == [BODYWEIGHT]
        ]

    return [
        ex for ex in catalog
        if not ex.equipment
        or BODYWEIGHT in ex.equipment
        or all(eq in available for eq in ex.equipment)
    ]


# --- Muscle Classifier ---

def muscle_category(muscle: str) -> str:
    """Map a muscle group to push / pull / legs / core."""
    return MUSCLE_CATEGORIES.get(muscle, "core")


# --- Exercise Selector ---

def select_exercises(
    muscles: Sequence[MuscleGroup],
    candidates: Sequence[Exercise],
    count: int,
    exercise_type: ExerciseType,
    rng: random.Random,
) -> list[Exercise]:
    """
    Pick up to `count` exercises of one type for the requested muscles.

    First one random exercise per muscle, in the order given, so every
    muscle with a match is covered. Remaining slots are filled from a
    shuffled pool of unused exercises hitting any requested muscle.
    """
    typed = [ex for ex in candidates if ex.type == exercise_type]
    selected: list[Exercise] = []
    used_ids: set[str] = set()

    for muscle in muscles:
        matches = [ex for ex in typed if muscle in ex.muscles and ex.id not in used_ids]
        if matches:
            pick = rng.choice(matches)
            selected.append(pick)
            used_ids.add(pick.id)

    requested = set(muscles)
    pool = _shuffled(
        [ex for ex in typed if ex.id not in used_ids and requested.intersection(ex.muscles)],
        rng,
    )
    while len(selected) < count and pool:
        ex = pool.pop()
        selected.append(ex)
        used_ids.add(ex.id)

    return selected[:max(0, count)]


def select_cardio(candidates: Sequence[Exercise], count: int, rng: random.Random) -> list[Exercise]:
    """Shuffle the cardio candidates and take the first `count`."""
    cardio = _shuffled([ex for ex in candidates if ex.type == "cardio"], rng)
    return cardio[:max(0, count)]


# --- Circuit Organizer ---

def organize_for_circuits(exercises: Sequence[Exercise]) -> list[Exercise]:
    """Interleave exercises push -> pull -> legs -> core by primary muscle."""
    buckets: dict[str, list[Exercise]] = {category: [] for category in CATEGORY_ORDER}
    for ex in exercises:
        primary = ex.muscles[0] if ex.muscles else "Core"
        buckets[muscle_category(primary)].append(ex)

    organized = []
    longest = max(len(bucket) for bucket in buckets.values())
    for i in range(longest):
        for category in CATEGORY_ORDER:
            if i < len(buckets[category]):
                organized.append(buckets[category][i])
    return organized


def circuit_size(exercise_count: int) -> int:
    """Exercises per circuit, aiming for circuits of 3-4."""
    if exercise_count <= PREFERRED_CIRCUIT_SIZE:
        return max(1, exercise_count)
    num_circuits = math.ceil(exercise_count / PREFERRED_CIRCUIT_SIZE)
    size = math.ceil(exercise_count / num_circuits)
    return max(MIN_CIRCUIT_SIZE, min(MAX_CIRCUIT_SIZE, size))


# --- Stretch Session Builder ---

def _is_stretch(exercise: Exercise) -> bool:
    return "stretch" in exercise.name.lower() or is_timed_target(exercise.defaultRepRange)


def build_stretch_session(
    muscles: Sequence[MuscleGroup],
    candidates: Sequence[Exercise],
    minutes: int,
    rng: random.Random,
) -> list[WorkoutItem]:
    """
    Build a stretching block that fills `minutes`.

    Args:
        muscles: Muscle groups to stretch
        candidates: Equipment-filtered exercises
        minutes: Length of the block
        rng: Random source

    Returns:
        One item per unique stretch, with sets set to the number of rounds
        needed to fill the time. Empty when minutes is 0 or nothing matches.
    """
    if minutes <= 0:
        return []

    requested = set(muscles)
    relevant = [
        ex for ex in candidates
        if ex.type == "mobility" and _is_stretch(ex) and requested.intersection(ex.muscles)
    ]
    unique_count = min(stretch_cap(minutes), len(relevant))

    selected: list[Exercise] = []
    used_ids: set[str] = set()

    for muscle in muscles:
        matches = [ex for ex in relevant if muscle in ex.muscles and ex.id not in used_ids]
        if matches:
            pick = rng.choice(matches)
            selected.append(pick)
            used_ids.add(pick.id)

    pool = _shuffled([ex for ex in relevant if ex.id not in used_ids], rng)
    while len(selected) < unique_count and pool:
        ex = pool.pop()
        selected.append(ex)
        used_ids.add(ex.id)

    selected = selected[:unique_count]
    if not selected:
        return []

    rounds = stretch_rounds(minutes, len(selected))
    items = []
    for ex in selected:
        hold = ex.defaultRepRange if is_timed_target(ex.defaultRepRange) else DEFAULT_HOLD
        target = f"{hold} ({rounds} rounds)" if rounds > 1 else hold
        items.append(_item(ex, rounds, target))
    return items


# --- Style Composers ---

def compose_traditional(
    weights: Sequence[Exercise],
    cardio: Sequence[Exercise],
    intensity: Intensity,
    budget: TimeBudget,
) -> list[WorkoutItem]:
    """All sets of each lift, lifts first, then cardio."""
    sets = SETS_BY_INTENSITY[intensity]
    rest = REST_BY_INTENSITY[intensity]

    items = [_item(ex, sets, rep_target(ex), rest) for ex in weights]
    items += [_item(ex, 1, ex.defaultRepRange, TRADITIONAL_CARDIO_REST) for ex in cardio]
    return items


def compose_circuit(
    weights: Sequence[Exercise],
    cardio: Sequence[Exercise],
    intensity: Intensity,
    budget: TimeBudget,
) -> list[WorkoutItem]:
    """
    Group lifts into circuits of 2-5, then one cardio circuit.

    A lone leftover lift is emitted as a regular entry with full sets and
    rest and no circuit metadata.
    """
    circuit_rest = CIRCUIT_REST_BY_INTENSITY.get(intensity, CIRCUIT_REST_DEFAULT)
    items: list[WorkoutItem] = []

    if weights:
        organized = organize_for_circuits(weights)
        size = circuit_size(len(organized))
        num_circuits = math.ceil(len(organized) / size)
        seconds_per_round = size * (CIRCUIT_WORK_SECONDS + circuit_rest)
        fitted = (budget.weightsMinutes * 60) // (num_circuits * seconds_per_round)
        rounds = min(MAX_CIRCUIT_ROUNDS, max(MIN_CIRCUIT_ROUNDS, fitted))

        circuit_num = 1
        for start in range(0, len(organized), size):
            chunk = organized[start:start + size]
            if len(chunk) >= MIN_CIRCUIT_SIZE:
                circuit_id = f"circuit-{circuit_num}"
                items += [
                    _item(ex, 1, rep_target(ex), circuit_rest, circuit_id, rounds)
                    for ex in chunk
                ]
                circuit_num += 1
            else:
                ex = chunk[0]
                items.append(
                    _item(ex, SETS_BY_INTENSITY[intensity], rep_target(ex), REST_BY_INTENSITY[intensity])
                )

    if cardio:
        seconds_per_exercise = CIRCUIT_CARDIO_WORK_SECONDS + circuit_rest
        cardio_rounds = max(1, (budget.cardioMinutes * 60) // (len(cardio) * seconds_per_exercise))
        for ex in cardio:
            target = CIRCUIT_CARDIO_TARGET if is_timed_target(ex.defaultRepRange) else ex.defaultRepRange
            items.append(_item(ex, 1, target, circuit_rest, CARDIO_CIRCUIT_ID, cardio_rounds))

    return items


def compose_superset(
    weights: Sequence[Exercise],
    cardio: Sequence[Exercise],
    intensity: Intensity,
    budget: TimeBudget,
) -> list[WorkoutItem]:
    """Pair consecutive lifts; rest only after the second of each pair."""
    sets = SETS_BY_INTENSITY[intensity]
    superset_rest = SUPERSET_REST_BY_INTENSITY.get(intensity, SUPERSET_REST_DEFAULT)
    items = []

    for index, ex in enumerate(weights):
        opens_pair = index % 2 == 0
        items.append(_item(
            ex,
            sets,
            rep_target(ex),
            0 if opens_pair else superset_rest,
            name=f"{SUPERSET_MARKER}{ex.name}" if opens_pair else ex.name,
        ))

    items += [_item(ex, 1, ex.defaultRepRange, SUPERSET_CARDIO_REST) for ex in cardio]
    return items


def compose_amrap(
    weights: Sequence[Exercise],
    cardio: Sequence[Exercise],
    intensity: Intensity,
    budget: TimeBudget,
) -> list[WorkoutItem]:
    """One repeatable round of everything, single sets, no rest."""
    return [
        _item(ex, 1, collapse_range(ex.defaultRepRange), 0, AMRAP_CIRCUIT_ID, AMRAP_UNBOUNDED_ROUNDS)
        for ex in [*weights, *cardio]
    ]


Composer = Callable[[Sequence[Exercise], Sequence[Exercise], Intensity, TimeBudget], list[WorkoutItem]]

STYLE_COMPOSERS: dict[WorkoutStyle, Composer] = {
    "traditional": compose_traditional,
    "circuit": compose_circuit,
    "superset": compose_superset,
    "amrap": compose_amrap,
}


# --- Plan Assembly ---

def _stretching_only_plan(
    inputs: WorkoutInputs,
    available: Sequence[Exercise],
    rng: random.Random,
) -> WorkoutPlan:
    minutes = inputs.durationMinutes
    stretching = build_stretch_session(inputs.selectedMuscles, available, minutes, rng)

    return WorkoutPlan(
        summary=WorkoutSummary(
            title=f"{minutes}-minute Stretching Session",
            muscles=", ".join(inputs.selectedMuscles),
            equipment=BODYWEIGHT,
            intensity="Easy",
            cardioPercent=0,
            weightsPercent=0,
            workoutStyle="traditional",
            stretchingMinutes=minutes,
            stretchingOnly=True,
        ),
        sections=WorkoutSections(
            stretching=WorkoutSection(title=f"Stretching ({minutes} min)", items=stretching),
            main=WorkoutSection(title="Main Workout (0 min)", items=[]),
        ),
    )


def generate(
    inputs: WorkoutInputs,
    catalog: Sequence[Exercise],
    rng: Optional[random.Random] = None,
) -> WorkoutPlan:
    """
    Generate a workout plan.

    Args:
        inputs: Validated user selections
        catalog: Read-only exercise library
        rng: Random source; a fresh one is created per call when omitted

    Returns:
        Immutable plan with stretching and main sections
    """
    rng = rng or random.Random()
    available = filter_by_equipment(catalog, inputs.equipment)

    if inputs.stretchingOnly:
        plan = _stretching_only_plan(inputs, available, rng)
        log_generation("stretching-only", len(plan.sections.stretching.items), 0)
        return plan

    split = inputs.cardioWeightSplit
    budget = allocate(inputs.durationMinutes, inputs.stretchingMinutes, split)

    weights = select_exercises(
        inputs.selectedMuscles, available, budget.weightsExercises, "weights", rng
    )
    cardio = select_cardio(available, budget.cardioExercises, rng)
    stretching = build_stretch_session(
        inputs.selectedMuscles, available, inputs.stretchingMinutes, rng
    )

    compose = STYLE_COMPOSERS[inputs.workoutStyle]
    main_items = compose(weights, cardio, inputs.intensity, budget)

    log_generation(inputs.workoutStyle, len(stretching), len(main_items))

    return WorkoutPlan(
        summary=WorkoutSummary(
            title=f"Your {inputs.durationMinutes}-minute workout",
            muscles=", ".join(inputs.selectedMuscles),
            equipment=", ".join(inputs.equipment),
            intensity=inputs.intensity.capitalize(),
            cardioPercent=split,
            weightsPercent=100 - split,
            workoutStyle=inputs.workoutStyle,
            stretchingMinutes=inputs.stretchingMinutes,
            stretchingOnly=False,
        ),
        sections=WorkoutSections(
            stretching=WorkoutSection(
                title=f"Stretching ({inputs.stretchingMinutes} min)", items=stretching
            ),
            main=WorkoutSection(title=f"Main Workout ({budget.mainMinutes} min)", items=main_items),
        ),
    )
